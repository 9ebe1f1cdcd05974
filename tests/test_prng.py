from __future__ import annotations

import pytest

from subcalc import prng
from subcalc.prng import MOD1, MOD2, SequenceGenerator


def test_generator_constants() -> None:
    assert (prng.MOD1, prng.MUL1) == (4294967087, 65539)
    assert (prng.MOD2, prng.MUL2) == (4294965887, 65537)


def test_initial_state_from_seeds() -> None:
    assert SequenceGenerator(1, 1).state == (2, 2)
    assert SequenceGenerator(5).state == (6, 6)
    assert SequenceGenerator(MOD1 - 1, MOD1 - 1).state == (1, MOD1 - MOD2 + 1)


def test_seed_coercion_floors_and_drops_sign() -> None:
    assert SequenceGenerator("1.9", -1.5).state == (2, 3)
    assert SequenceGenerator(" 12 ", "0").state == (13, 13)


def test_missing_first_seed_uses_clock(monkeypatch) -> None:
    monkeypatch.setattr(prng, "_now_millis", lambda: 1000)
    assert SequenceGenerator(None).state == (1001, 1001)
    assert SequenceGenerator(0, 7).state == (1001, 8)
    assert SequenceGenerator("not a number").state == (1001, 1001)


def test_coin_flip_sequence_is_fixed() -> None:
    gen = SequenceGenerator(1, 1)
    assert [gen.coin_flip() for _ in range(6)] == [False] * 6
    assert gen.state == (2106747979, 2974476589)

    gen = SequenceGenerator(12345, 67890)
    assert [gen.coin_flip() for _ in range(6)] == [False, True, False, False, False, False]


def test_next_bounded_sequences() -> None:
    gen = SequenceGenerator(1, 1)
    assert [gen.next_bounded(10) for _ in range(5)] == [2, 2, 8, 0, 8]

    gen = SequenceGenerator(1, 1)
    assert [gen.next_bounded(7) for _ in range(8)] == [2, 5, 6, 4, 2, 0, 1, 2]

    assert SequenceGenerator(1, 1).next_bounded(3) == 0
    assert SequenceGenerator(1, 1).next_bounded(MOD2 - 1) == 262152


def test_small_states_are_rejected_for_wide_limits() -> None:
    gen = SequenceGenerator(1, 1)
    lots = [gen.next_bounded(1000000) for _ in range(3)]
    assert lots == [18928, 228000, 534158]
    assert gen.draws == 3
    assert gen.rejections == 2
    assert gen.summary() == {1000000: 3}


@pytest.mark.parametrize("limit,expected", [(0, 1), (-10, 10), (2.7, 2), ("5", 5), (None, 1)])
def test_limit_coercion(limit, expected) -> None:
    gen = SequenceGenerator(3, 3)
    ref = SequenceGenerator(3, 3)
    assert gen.next_bounded(limit) == ref.next_bounded(expected)


def test_values_stay_in_range() -> None:
    gen = SequenceGenerator(987, 654)
    for limit in (1, 2, 3, 7, 100, 1000000):
        for _ in range(50):
            assert 0 <= gen.next_bounded(limit) < limit


def test_same_seeds_same_stream() -> None:
    a = SequenceGenerator(2024, 11)
    b = SequenceGenerator(2024, 11)
    assert [a.next_bounded(97) for _ in range(40)] == [b.next_bounded(97) for _ in range(40)]


def test_summary_counts_by_limit() -> None:
    gen = SequenceGenerator(8, 8)
    gen.coin_flip()
    gen.coin_flip()
    gen.next_bounded(6)
    assert gen.summary() == {2: 2, 6: 1}
    assert gen.draws == 3


def test_random_seed_range() -> None:
    for _ in range(20):
        assert 1 <= prng.random_seed() <= 999999
