from __future__ import annotations

from collections import Counter
from fractions import Fraction
from typing import Dict, List, Optional, Tuple
import logging
import math

from .parse.numeric import clamp_count
from .prng import SequenceGenerator
from .profiles import DEFAULT_PROFILE, get_profile
from .types import ApportionmentSummary, CalcProfile, Entry, Roster

logger = logging.getLogger(__name__)


def reset(roster: Roster) -> None:
    """Invalidate every computed field, e.g. after counts change."""
    for e in roster.entries():
        e.clear_delegate_info()


def viability_number(total_participants: int, allowed: int) -> int:
    return -(-total_participants // allowed)


def remaining_delegates(allowed: int, base_sum: int) -> int:
    remaining = allowed - base_sum
    if remaining < 0:
        # base delegates can only overshoot through lost precision in the divisor
        logger.error(
            "Base delegates (%d) exceed delegates allowed (%d); no remainder delegates awarded",
            base_sum, allowed,
        )
        return 0
    return remaining


def group_by_remainder(entries: List[Entry]) -> List[Tuple[Fraction, List[Entry]]]:
    """Exactly equal remainders, highest remainder first, members in id order."""
    groups: Dict[Fraction, List[Entry]] = {}
    for e in entries:
        groups.setdefault(e.remainder, []).append(e)
    return [
        (r, sorted(groups[r], key=lambda e: e.id))
        for r in sorted(groups.keys(), reverse=True)
    ]


# ---------------------------
# Tie ordering
# ---------------------------

# Lots are drawn from a range much wider than the tied group, so that the
# order does not hinge on the parity of a single early draw.
LOT_LIMIT: int = 1000000


def _record_order(ordered: List[Entry]) -> None:
    for i, ahead in enumerate(ordered):
        for behind in ordered[i + 1:]:
            ahead.record_toss(behind, won=True)
            behind.record_toss(ahead, won=False)


def order_by_lots(group: List[Entry], generator: SequenceGenerator) -> List[Entry]:
    """
    Each tied entry draws a lot, in id order; the highest lot goes first.

    Entries whose lots collide draw again (still in id order) until every lot
    is distinct. Every pair in the group records the outcome.
    """
    ordered = sorted(group, key=lambda e: e.id)
    lots: Dict[int, int] = {}
    pending = ordered
    while pending:
        for e in pending:
            lots[e.id] = generator.next_bounded(LOT_LIMIT)
        seen = Counter(lots.values())
        pending = [e for e in ordered if seen[lots[e.id]] > 1]

    ordered.sort(key=lambda e: lots[e.id], reverse=True)
    _record_order(ordered)
    return ordered


def order_by_coin_insertion(group: List[Entry], generator: SequenceGenerator) -> List[Entry]:
    """
    Insertion sort where every comparison is a coin toss.

    The entry being inserted challenges its predecessor; heads moves it ahead
    and it challenges the next one, tails leaves it in place. A pair is never
    compared twice, so the outcome cannot contradict itself.
    """
    ordered = sorted(group, key=lambda e: e.id)
    for i in range(1, len(ordered)):
        j = i
        while j > 0:
            challenger = ordered[j]
            holder = ordered[j - 1]
            heads = generator.coin_flip()
            challenger.record_toss(holder, won=heads)
            holder.record_toss(challenger, won=not heads)
            if not heads:
                break
            ordered[j - 1], ordered[j] = challenger, holder
            j -= 1
    return ordered


def order_by_shuffle(group: List[Entry], generator: SequenceGenerator) -> List[Entry]:
    """
    Fisher-Yates shuffle of the tie group, taken in id order.

    The shuffled position is the rank; the lower rank wins every pairing.
    """
    ordered = sorted(group, key=lambda e: e.id)
    m = len(ordered)
    while m:
        i = generator.next_bounded(m)
        m -= 1
        ordered[m], ordered[i] = ordered[i], ordered[m]

    _record_order(ordered)
    return ordered


TIE_RULES = {
    "draw_lots": order_by_lots,
    "coin_insertion": order_by_coin_insertion,
    "rank_shuffle": order_by_shuffle,
}


def order_tie_group(group: List[Entry], generator: SequenceGenerator, tie_rule: str) -> List[Entry]:
    if tie_rule not in TIE_RULES:
        raise ValueError(f"Invalid tie_rule '{tie_rule}'. Valid: {sorted(TIE_RULES)}")
    ordered = TIE_RULES[tie_rule](group, generator)
    for pos, e in enumerate(ordered, start=1):
        e.rank = pos
    return ordered


# ---------------------------
# Apportionment
# ---------------------------

def _award_remainder(e: Entry) -> None:
    e.delegates += 1
    e.awarded_remainder = True


def apportion(
    roster: Roster,
    generator: Optional[SequenceGenerator] = None,
    profile: Optional[CalcProfile] = None,
) -> ApportionmentSummary:
    """
    Distribute `roster.allowed` delegates among the roster's subcaucuses.

    Computed fields are written back onto the entries in place. Counts and
    the allowed total are read through a non-negative clamp; the entries'
    own counts are not modified.

    The generator must be fresh for every run. When omitted, one is built
    from `roster.seed`, which is what makes a stored roster reproducible.
    """
    profile = profile or get_profile(DEFAULT_PROFILE)
    if generator is None:
        generator = SequenceGenerator(*roster.seed_pair())

    entries = roster.entries()
    for e in entries:
        e.clear_delegate_info()

    allowed = clamp_count(roster.allowed, field="allowed")
    counts: Dict[int, int] = {e.id: clamp_count(e.count, field=f"count of subcaucus {e.id}") for e in entries}
    total = sum(counts.values())

    logger.debug("Distributing %d delegates among %d subcaucuses (%d participants)", allowed, len(entries), total)

    if allowed == 0 or total == 0:
        return ApportionmentSummary(
            allowed=allowed,
            total_participants=total,
            viability_number=0,
            viable_participants=0,
            delegate_divisor=Fraction(0),
            participants_per_delegate=Fraction(0),
            viable_entries=0,
            non_viable_entries=0,
            total_delegates=0,
            remaining_delegates=0,
            draws=0,
        )

    participants_per_delegate = Fraction(total, allowed)
    viability = viability_number(total, allowed)

    viable = [e for e in entries if counts[e.id] >= viability]
    non_viable = sum(1 for e in entries if 0 < counts[e.id] < viability)
    viable_participants = sum(counts[e.id] for e in viable)

    if viable_participants == 0:
        logger.debug("No subcaucus reached the viability number %d", viability)
        return ApportionmentSummary(
            allowed=allowed,
            total_participants=total,
            viability_number=viability,
            viable_participants=0,
            delegate_divisor=Fraction(0),
            participants_per_delegate=participants_per_delegate,
            viable_entries=0,
            non_viable_entries=non_viable,
            total_delegates=0,
            remaining_delegates=0,
            draws=0,
        )

    divisor = Fraction(viable_participants, allowed)

    for e in viable:
        quota = counts[e.id] / divisor
        e.viable = True
        e.base_delegates = math.floor(quota)
        e.delegates = e.base_delegates
        e.remainder = quota - e.base_delegates

    base_sum = sum(e.base_delegates for e in viable)
    remaining = remaining_delegates(allowed, base_sum)

    draws_before = generator.draws
    left = remaining
    for _rem, group in group_by_remainder(viable):
        if left <= 0:
            break
        if len(group) <= left:
            for e in group:
                _award_remainder(e)
            left -= len(group)
            continue
        # more equal remainders than delegates left: break the tie
        ordered = order_tie_group(group, generator, profile.tie_rule)
        for e in ordered[:left]:
            _award_remainder(e)
        left = 0

    draws = generator.draws - draws_before
    logger.debug("random summary %s", generator.summary())

    return ApportionmentSummary(
        allowed=allowed,
        total_participants=total,
        viability_number=viability,
        viable_participants=viable_participants,
        delegate_divisor=divisor,
        participants_per_delegate=participants_per_delegate,
        viable_entries=len(viable),
        non_viable_entries=non_viable,
        total_delegates=sum(e.delegates for e in entries),
        remaining_delegates=remaining,
        draws=draws,
    )
