"""Core rules engine package for coinche."""

__all__ = [
    "errors",
    "seats",
    "cards",
    "deck",
    "trick",
    "mechanics",
    "bidding",
    "state",
    "scoring",
    "game",
    "encode",
    "rules_schema",
    "service",
]
