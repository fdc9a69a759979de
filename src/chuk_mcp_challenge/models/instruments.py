"""
Instrument catalog models - categories, per-genre ensemble rules, mood pools.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class EnsembleRule(BaseModel):
    """Roles a genre needs filled and where instruments may come from."""

    required: tuple[str, ...] = Field(..., description="Roles, each filled exactly once")
    categories: tuple[str, ...] = Field(..., min_length=1)
    max_instruments: int = Field(..., ge=1)

    model_config = {"frozen": True}


class InstrumentCatalog(BaseModel):
    """
    Instrument reference data.

    categories: category -> role -> instruments
    rules: genre -> ensemble rule
    moods: mood -> instruments that colour the ensemble
    """

    categories: dict[str, dict[str, tuple[str, ...]]]
    rules: dict[str, EnsembleRule]
    moods: dict[str, tuple[str, ...]]

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _roles_resolvable(self) -> InstrumentCatalog:
        for genre, rule in self.rules.items():
            for category in rule.categories:
                if category not in self.categories:
                    raise ValueError(f"Rule {genre}: unknown category {category}")
            for role in rule.required:
                if not self.categories_for_role(rule, role):
                    raise ValueError(f"Rule {genre}: no category provides role {role}")
        return self

    def categories_for_role(self, rule: EnsembleRule, role: str) -> list[str]:
        """Categories allowed by a rule that actually carry the role."""
        return [c for c in rule.categories if self.categories.get(c, {}).get(role)]

    def genre_names(self) -> list[str]:
        """Genres with an ensemble rule, in declaration order."""
        return list(self.rules)

    def mood_names(self) -> list[str]:
        """Mood tags, in declaration order."""
        return list(self.moods)
