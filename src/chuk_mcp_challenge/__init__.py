"""
CHUK Challenge - practice prompts for musicians over MCP.

Turns static music-theory tables into a chord progression to play and an
instrument ensemble to play it on.
"""
