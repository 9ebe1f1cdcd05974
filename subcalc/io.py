from __future__ import annotations

from typing import Any, Dict, List, Mapping

import json
import logging
import os

import yaml

from .parse.numeric import clamp_count
from .schema.errors import RosterError, ValidationError
from .schema.roster_schema import validate_roster_document
from .types import Entry, Roster

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


# ---------------------------
# Documents
# ---------------------------

def _entries_from_subcaucuses(raw: Any) -> List[Entry]:
    entries: List[Entry] = []
    used: set = set()

    if isinstance(raw, dict):
        items = [(int(k), v) for k, v in raw.items()]
    else:
        items = []
        for s in raw or []:
            items.append((s.get("id"), s))

    # explicit ids first so that generated ones never collide
    for eid, _s in items:
        if eid is not None:
            if eid in used:
                raise ValidationError(f"duplicate subcaucus id {eid}", path="subcaucuses")
            used.add(eid)

    next_id = max(used, default=0) + 1
    for eid, s in items:
        if eid is None:
            eid = next_id
            next_id += 1
        entries.append(Entry(
            id=int(eid),
            name=str(s.get("name") or ""),
            count=clamp_count(s.get("count", 0), field=f"count of subcaucus {eid}"),
        ))
    return entries


def _string_keys(data: Any) -> Any:
    # plain YAML keys (`1: {...}`) load as ints
    if isinstance(data, Mapping) and isinstance(data.get("subcaucuses"), Mapping):
        raw = data["subcaucuses"]
        keyed = {str(k): v for k, v in raw.items()}
        if len(keyed) != len(raw):
            raise ValidationError("duplicate subcaucus id", path="subcaucuses")
        data = dict(data)
        data["subcaucuses"] = keyed
    return data


def roster_from_dict(data: Dict[str, Any]) -> Roster:
    """Validate a roster document and build a Roster. Computed values in the document are ignored."""
    data = _string_keys(data)
    validate_roster_document(data)

    seed = data.get("seed")
    if isinstance(seed, list):
        seed = tuple(seed)

    return Roster(
        allowed=clamp_count(data["allowed"], field="allowed"),
        seed=seed,
        name=str(data.get("name") or ""),
        entries=_entries_from_subcaucuses(data["subcaucuses"]),
    )


def roster_to_dict(roster: Roster) -> Dict[str, Any]:
    """
    The storable form of a roster: inputs only.

    Delegate results are never stored; they are recomputed from the counts
    and the seed.
    """
    a, b = roster.seed_pair()
    return {
        "name": roster.name,
        "allowed": roster.allowed,
        "seed": [a, b] if b is not None else a,
        "subcaucuses": {
            str(e.id): {"name": e.name, "count": e.count}
            for e in roster.entries()
        },
    }


# ---------------------------
# Files
# ---------------------------

def _is_yaml(path: str) -> bool:
    return path.lower().endswith(YAML_SUFFIXES)


def load_roster(path: str) -> Roster:
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    try:
        data = yaml.safe_load(text) if _is_yaml(path) else json.loads(text)
    except (ValueError, yaml.YAMLError) as e:
        raise RosterError(f"Could not parse roster file {path}: {e}") from e
    logger.debug("Loaded roster document from %s", path)
    return roster_from_dict(data)


def save_roster(path: str, roster: Roster) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    doc = roster_to_dict(roster)
    with open(path, "w", encoding="utf-8") as f:
        if _is_yaml(path):
            yaml.safe_dump(doc, f, sort_keys=False, allow_unicode=True)
        else:
            json.dump(doc, f, ensure_ascii=False, indent=2)
            f.write("\n")
