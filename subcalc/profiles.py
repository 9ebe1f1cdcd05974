from __future__ import annotations

from typing import Dict, List
from .types import CalcProfile


PROFILES: Dict[str, CalcProfile] = {
    "standard": CalcProfile(
        key="standard",
        name="Standard",
        description=(
            "Default caucus rules.\n"
            "- Viability number is participants / delegates, rounded up\n"
            "- Delegate divisor uses members of viable subcaucuses only\n"
            "- Leftover delegates go to the largest remainders\n"
            "- Equal remainders competing for the last delegates each draw a lot;\n"
            "  the highest lots win and the drawn rank is reported"
        ),
        tie_rule="draw_lots",
        remainder_places=3,
        sort_by="id",
        sort_order="ascending",
    ),

    "coin_toss": CalcProfile(
        key="coin_toss",
        name="Coin toss",
        description=(
            "Same allocation as the standard profile, but subcaucuses tied for the\n"
            "last delegates are put in order by an insertion sort with one coin\n"
            "toss per comparison. Each toss is reported as won or lost.\n"
            "Report is ordered by members, largest first."
        ),
        tie_rule="coin_insertion",
        remainder_places=3,
        sort_by="count",
        sort_order="descending",
    ),

    "rank_shuffle": CalcProfile(
        key="rank_shuffle",
        name="Rank shuffle",
        description=(
            "Same allocation as the standard profile, but subcaucuses tied for the\n"
            "last delegates are put in a rank order drawn by a Fisher-Yates shuffle\n"
            "of the tied group. The lowest rank wins."
        ),
        tie_rule="rank_shuffle",
        remainder_places=3,
        sort_by="id",
        sort_order="ascending",
    ),
}

DEFAULT_PROFILE = "standard"


def list_profiles() -> List[CalcProfile]:
    return [PROFILES[k] for k in sorted(PROFILES.keys())]


def get_profile(key: str) -> CalcProfile:
    if key not in PROFILES:
        raise KeyError(f"Unknown profile '{key}'. Available: {', '.join(sorted(PROFILES.keys()))}")
    return PROFILES[key]
