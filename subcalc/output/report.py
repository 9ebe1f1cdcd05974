from __future__ import annotations

from functools import cmp_to_key
from typing import List, TextIO

import csv
import os

from ..formatting import comma_string, comparison_value, decimal_places, singular_plural
from ..types import ApportionmentSummary, Entry, Roster

REPORT_FIELDS = [
    "Subcaucus",
    "Members",
    "Delegates",
    "Remainder",
    "Coin Tosses",
    "Remainder Delegates",
]


# ---------------------------
# Ordering
# ---------------------------

def _by_name(a: Entry, b: Entry) -> int:
    an, bn = a.display_name().casefold(), b.display_name().casefold()
    if an != bn:
        return -1 if an < bn else 1
    return comparison_value(a.id - b.id)


def sorted_entries(roster: Roster, sort_by: str = "id", order: str = "ascending") -> List[Entry]:
    """
    Entries in display order.

    "count" sorts by members, nudged by delegates, then by name; empty
    subcaucuses always go to the bottom whichever direction is chosen.
    """
    sign = -1 if order == "descending" else 1
    entries = roster.entries()

    if sort_by == "name":
        return sorted(entries, key=cmp_to_key(lambda a, b: sign * _by_name(a, b)))

    if sort_by == "count":
        def _cmp(a: Entry, b: Entry) -> int:
            if not a.count or not b.count:
                if a.count or b.count:
                    return -1 if a.count else 1
                return _by_name(a, b)
            c = comparison_value(a.count - b.count) or comparison_value(a.delegates - b.delegates)
            if c:
                return sign * c
            return _by_name(a, b)
        return sorted(entries, key=cmp_to_key(_cmp))

    if sort_by != "id":
        raise ValueError(f"Invalid sort '{sort_by}'. Valid: ['count', 'id', 'name']")
    return sorted(entries, key=lambda e: e.id, reverse=(sign < 0))


def _toss_phrases(entry: Entry, roster: Roster) -> List[str]:
    out: List[str] = []
    for toss in entry.latest_tosses():
        other = roster.get(toss.against).display_name() if toss.against in roster else f"Subcaucus {toss.against}"
        out.append(f"{'won' if toss.won else 'lost'} vs {other}")
    return out


# ---------------------------
# Text
# ---------------------------

def entry_text(entry: Entry, roster: Roster, places: int = 3) -> str:
    if entry.is_empty():
        return ""

    text = f"{entry.display_name()}: {singular_plural(entry.count, 'member', 'members')}"

    if not entry.viable:
        return text + " in a non-viable subcaucus."

    text += " may elect " + singular_plural(entry.delegates, "delegate", "delegates")

    if entry.remainder:
        details = [f"remainder {decimal_places(entry.remainder, places)}"]
        if entry.rank:
            details.append(f"rank {entry.rank}")
        details.extend(_toss_phrases(entry, roster))
        if entry.awarded_remainder:
            details.append("awarded a remainder delegate")
        text += " (" + ", ".join(details) + ")"

    return text + "."


def roster_text(
    roster: Roster,
    summary: ApportionmentSummary,
    *,
    sort_by: str = "id",
    order: str = "ascending",
    places: int = 3,
) -> str:
    name = roster.name or "My Meeting"
    text = f"{name} was allowed {singular_plural(summary.allowed, 'delegate', 'delegates')}.\n\n"

    if summary.total_participants > 0:
        for e in sorted_entries(roster, sort_by, order):
            line = entry_text(e, roster, places)
            if line:
                text += f"- {line}\n\n"

        participants = comma_string(summary.total_participants)
        text += (
            f"{participants} {singular_plural(summary.total_participants, 'person was', 'people were', False)} "
            f"participating, the initial viability number was {summary.viability_number} "
            f"({decimal_places(summary.participants_per_delegate, places)} participants per delegate).\n\n"
        )

        if summary.total_participants > summary.viable_participants:
            non_viable_people = summary.total_participants - summary.viable_participants
            text += (
                f"{comma_string(summary.viable_participants)} "
                f"{singular_plural(summary.viable_participants, 'member was', 'members were', False)} in "
                f"{singular_plural(summary.viable_entries, 'viable subcaucus', 'viable subcaucuses')}. "
                f"The delegate divisor (number of members needed to allocate each delegate) was "
                f"{decimal_places(summary.delegate_divisor, places)}.\n\n"
            )
            text += (
                f"{comma_string(non_viable_people)} "
                f"{singular_plural(non_viable_people, 'person was', 'people were', False)} in "
                f"{singular_plural(summary.non_viable_entries, 'non-viable subcaucus', 'non-viable subcaucuses')}.\n\n"
            )
    else:
        text += "Nobody was participating.\n\n"

    text += f"The coin had a random seed of {_seed_text(roster)}.\n"
    return text


def _seed_text(roster: Roster) -> str:
    a, b = roster.seed_pair()
    return f"{a}" if b is None else f"{a}/{b}"


# ---------------------------
# CSV
# ---------------------------

def report_csv_rows(
    roster: Roster,
    summary: ApportionmentSummary,
    *,
    sort_by: str = "id",
    order: str = "ascending",
) -> List[list]:
    rows: List[list] = [list(REPORT_FIELDS)]

    for e in sorted_entries(roster, sort_by, order):
        if e.is_empty():
            continue
        details = _toss_phrases(e, roster)
        if e.rank:
            details.insert(0, f"rank {e.rank}")
        rows.append([
            e.display_name(),
            e.count,
            e.delegates,
            float(e.remainder),
            ", ".join(details),
            e.delegates - e.base_delegates,
        ])

    rows.append(["", ""])
    rows.append(["Participants", summary.total_participants])
    rows.append(["Delegates elected", "", summary.total_delegates])
    rows.append(["Participants per delegate", float(summary.participants_per_delegate)])
    rows.append(["Viability number", summary.viability_number])
    rows.append(["Members in viable subcaucuses", summary.viable_participants])
    rows.append(["Members in non-viable subcaucuses", summary.total_participants - summary.viable_participants])
    rows.append(["Delegate divisor", float(summary.delegate_divisor)])
    rows.append(["", ""])
    rows.append(["Coin random seed", _seed_text(roster)])
    rows.append(["Meeting", roster.name])
    return rows


def write_report_csv(
    path: str,
    roster: Roster,
    summary: ApportionmentSummary,
    *,
    sort_by: str = "id",
    order: str = "ascending",
) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        write_csv_stream(f, roster, summary, sort_by=sort_by, order=order)


def write_csv_stream(
    stream: TextIO,
    roster: Roster,
    summary: ApportionmentSummary,
    *,
    sort_by: str = "id",
    order: str = "ascending",
) -> None:
    w = csv.writer(stream)
    for row in report_csv_rows(roster, summary, sort_by=sort_by, order=order):
        w.writerow(row)
