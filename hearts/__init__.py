"""Core engine package for Hearts."""

__all__ = [
    "cards",
    "deck",
    "memory",
    "trick",
    "mechanics",
    "rules_schema",
    "scoring",
    "context",
    "player",
    "events",
    "snapshot",
    "game",
    "service",
    "stats",
]
