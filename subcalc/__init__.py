"""Caucus delegate calculator with a reproducible coin."""

from .types import ApportionmentSummary, CalcProfile, Entry, Roster, TieBreak
from .prng import SequenceGenerator, random_seed
from .engine import apportion, reset

__all__ = [
    "ApportionmentSummary",
    "CalcProfile",
    "Entry",
    "Roster",
    "TieBreak",
    "SequenceGenerator",
    "random_seed",
    "apportion",
    "reset",
]
