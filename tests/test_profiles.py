from __future__ import annotations

import pytest

from subcalc.engine import TIE_RULES
from subcalc.profiles import DEFAULT_PROFILE, PROFILES, get_profile, list_profiles


def test_default_profile_draws_lots() -> None:
    profile = get_profile(DEFAULT_PROFILE)
    assert profile.tie_rule == "draw_lots"
    assert profile.remainder_places == 3


def test_profiles_are_listed_by_key() -> None:
    assert [p.key for p in list_profiles()] == ["coin_toss", "rank_shuffle", "standard"]


def test_every_profile_names_a_known_tie_rule() -> None:
    for key, profile in PROFILES.items():
        assert profile.key == key
        assert profile.tie_rule in TIE_RULES


def test_unknown_profile() -> None:
    with pytest.raises(KeyError, match="Available: coin_toss, rank_shuffle, standard"):
        get_profile("ranked")
