from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Dict, Iterator, List, Literal, Optional, Tuple, Union

# Tie-resolution schemes supported by the engine.
TieRule = Literal[
    "draw_lots",
    "coin_insertion",
    "rank_shuffle",
]

# Report ordering.
SortBy = Literal["id", "name", "count"]
SortOrder = Literal["ascending", "descending"]

SeedLike = Union[int, str, float, None]


@dataclass(frozen=True)
class TieBreak:
    """Outcome of one tie-break between two entries with equal remainders."""
    against: int
    won: bool

    def to_dict(self) -> dict:
        return {"against": self.against, "won": self.won}


@dataclass
class Entry:
    """
    A single subcaucus.

    id: stable identifier, unique within a roster.
    name: display label supplied by the caller (may be empty).
    count: number of members.

    The remaining fields are written by the engine and are only meaningful
    after a run against the current count.
    """
    id: int
    name: str = ""
    count: int = 0

    viable: bool = False
    base_delegates: int = 0
    delegates: int = 0
    remainder: Fraction = Fraction(0)
    awarded_remainder: bool = False
    rank: int = 0
    tie_breaks: List[TieBreak] = field(default_factory=list)

    def default_name(self) -> str:
        return f"Subcaucus {self.id}"

    def display_name(self) -> str:
        return self.name or self.default_name()

    def is_empty(self) -> bool:
        return not self.name and not self.count

    def clear_delegate_info(self) -> None:
        self.viable = False
        self.base_delegates = 0
        self.delegates = 0
        self.remainder = Fraction(0)
        self.awarded_remainder = False
        self.rank = 0
        self.tie_breaks = []

    def record_toss(self, against: "Entry", won: bool) -> None:
        self.tie_breaks.append(TieBreak(against=against.id, won=won))

    def latest_tosses(self) -> List[TieBreak]:
        # only the last toss against each opponent is reported
        last: Dict[int, TieBreak] = {}
        for tb in self.tie_breaks:
            last[tb.against] = tb
        return list(last.values())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "count": self.count,
            "viable": self.viable,
            "base_delegates": self.base_delegates,
            "delegates": self.delegates,
            "remainder": float(self.remainder),
            "awarded_remainder_delegate": self.awarded_remainder,
            "rank": self.rank,
            "tie_breaks": [tb.to_dict() for tb in self.tie_breaks],
        }


class Roster:
    """
    The subcaucuses of one meeting plus the delegate total and coin seed.

    Entries are keyed by id. Iteration order is by id; the engine never
    depends on it.
    """

    def __init__(
        self,
        allowed: int = 0,
        seed: Union[SeedLike, Tuple[SeedLike, SeedLike]] = None,
        name: str = "",
        entries: Optional[List[Entry]] = None,
    ) -> None:
        self.name = name
        self.allowed = allowed
        self.seed = seed
        self._entries: Dict[int, Entry] = {}
        for e in entries or []:
            if e.id in self._entries:
                raise ValueError(f"Duplicate subcaucus id {e.id}")
            self._entries[e.id] = e

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries())

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def entries(self) -> List[Entry]:
        return [self._entries[k] for k in sorted(self._entries.keys())]

    def get(self, entry_id: int) -> Entry:
        return self._entries[entry_id]

    def next_id(self) -> int:
        if not self._entries:
            return 1
        return max(self._entries.keys()) + 1

    def add_entry(self, name: str = "", count: int = 0) -> Entry:
        e = Entry(id=self.next_id(), name=name, count=count)
        self._entries[e.id] = e
        return e

    def delete_entry(self, entry_id: int) -> None:
        del self._entries[entry_id]

    def remove_empty(self) -> List[int]:
        """Drop entries that have neither a name nor members; return their ids."""
        dropped = [e.id for e in self.entries() if e.is_empty()]
        for eid in dropped:
            del self._entries[eid]
        return dropped

    def clear_counts(self) -> None:
        for e in self._entries.values():
            e.count = 0
            e.clear_delegate_info()

    def total_participants(self) -> int:
        return sum(max(0, int(e.count)) for e in self._entries.values())

    def seed_pair(self) -> Tuple[SeedLike, SeedLike]:
        if isinstance(self.seed, (tuple, list)):
            a = self.seed[0] if len(self.seed) > 0 else None
            b = self.seed[1] if len(self.seed) > 1 else None
            return a, b
        return self.seed, None

    def to_dict(self) -> dict:
        a, b = self.seed_pair()
        return {
            "name": self.name,
            "allowed": self.allowed,
            "seed": [a, b] if b is not None else a,
            "subcaucuses": [e.to_dict() for e in self.entries()],
        }


@dataclass(frozen=True)
class ApportionmentSummary:
    """Run-level aggregates of one apportionment, for reporting."""
    allowed: int
    total_participants: int
    viability_number: int
    viable_participants: int
    delegate_divisor: Fraction
    participants_per_delegate: Fraction
    viable_entries: int
    non_viable_entries: int
    total_delegates: int
    remaining_delegates: int
    draws: int

    def to_dict(self) -> dict:
        return {
            "allowed": self.allowed,
            "total_participants": self.total_participants,
            "viability_number": self.viability_number,
            "viable_participants": self.viable_participants,
            "delegate_divisor": float(self.delegate_divisor),
            "participants_per_delegate": float(self.participants_per_delegate),
            "viable_entries": self.viable_entries,
            "non_viable_entries": self.non_viable_entries,
            "total_delegates": self.total_delegates,
            "remaining_delegates": self.remaining_delegates,
            "draws": self.draws,
        }


@dataclass(frozen=True)
class CalcProfile:
    """
    A profile is a named bundle of settings.

    Profiles define:
      - how equal remainders are put in order (tie_rule)
      - how many decimal places remainders show in reports
      - the default report ordering

    Profiles are not the calculation engine; they only provide defaults.
    CLI flags may override the report ordering.
    """
    key: str
    name: str
    description: str

    tie_rule: TieRule
    remainder_places: int
    sort_by: SortBy
    sort_order: SortOrder
