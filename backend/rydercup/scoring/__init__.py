"""Scoring engines for Ryder Cup style golf matches."""

from . import match_play

__all__ = [
    "match_play",
]
