from __future__ import annotations

from fractions import Fraction

import pytest

from subcalc.types import Entry, Roster, TieBreak


def test_ids_are_assigned_after_the_highest() -> None:
    roster = Roster(allowed=3)
    a = roster.add_entry("North", 4)
    b = roster.add_entry("South", 2)
    assert (a.id, b.id) == (1, 2)

    roster.delete_entry(1)
    assert roster.add_entry().id == 3
    assert [e.id for e in roster] == [2, 3]
    assert 1 not in roster and 2 in roster
    assert len(roster) == 2


def test_duplicate_ids_rejected() -> None:
    with pytest.raises(ValueError, match="Duplicate"):
        Roster(entries=[Entry(id=1), Entry(id=1)])


def test_entries_in_id_order() -> None:
    roster = Roster(entries=[Entry(id=9), Entry(id=2), Entry(id=5)])
    assert [e.id for e in roster.entries()] == [2, 5, 9]
    assert roster.next_id() == 10


def test_display_name_falls_back_to_id() -> None:
    assert Entry(id=4).display_name() == "Subcaucus 4"
    assert Entry(id=4, name="Undecided").display_name() == "Undecided"


def test_remove_empty_keeps_named_or_counted() -> None:
    roster = Roster()
    roster.add_entry("", 0)
    roster.add_entry("Named", 0)
    roster.add_entry("", 3)
    assert roster.remove_empty() == [1]
    assert [e.id for e in roster] == [2, 3]


def test_clear_counts_and_total() -> None:
    roster = Roster()
    roster.add_entry("a", 4)
    roster.add_entry("b", -2)
    roster.add_entry("c", 7)
    assert roster.total_participants() == 11
    roster.get(1).delegates = 3
    roster.clear_counts()
    assert roster.total_participants() == 0
    assert roster.get(1).delegates == 0


def test_seed_pair() -> None:
    assert Roster(seed=5).seed_pair() == (5, None)
    assert Roster(seed=(5, 9)).seed_pair() == (5, 9)
    assert Roster(seed=[7]).seed_pair() == (7, None)
    assert Roster().seed_pair() == (None, None)


def test_latest_tosses_keep_last_per_opponent() -> None:
    e = Entry(id=1)
    other = Entry(id=2)
    e.record_toss(other, won=False)
    e.record_toss(Entry(id=3), won=True)
    e.record_toss(other, won=True)
    assert e.latest_tosses() == [TieBreak(against=2, won=True), TieBreak(against=3, won=True)]


def test_entry_to_dict() -> None:
    e = Entry(id=2, name="B", count=5, viable=True, base_delegates=1, delegates=2,
              remainder=Fraction(1, 2), awarded_remainder=True, rank=1)
    e.tie_breaks.append(TieBreak(against=1, won=True))
    assert e.to_dict() == {
        "id": 2,
        "name": "B",
        "count": 5,
        "viable": True,
        "base_delegates": 1,
        "delegates": 2,
        "remainder": 0.5,
        "awarded_remainder_delegate": True,
        "rank": 1,
        "tie_breaks": [{"against": 1, "won": True}],
    }


def test_roster_to_dict_seed_forms() -> None:
    assert Roster(seed=(3, 4)).to_dict()["seed"] == [3, 4]
    assert Roster(seed=3).to_dict()["seed"] == 3
