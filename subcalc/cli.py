from __future__ import annotations

from typing import List, Optional

import argparse
import json
import logging
import sys

from . import io as io_mod
from .engine import apportion
from .logging_utils import configure_logging
from .output.report import roster_text, write_csv_stream, write_report_csv
from .parse.numeric import coerce_natural
from .prng import SequenceGenerator, random_seed
from .profiles import DEFAULT_PROFILE, get_profile, list_profiles
from .schema.errors import RosterError

logger = logging.getLogger(__name__)


def print_profiles() -> None:
    for p in list_profiles():
        print(f"{p.name}  [{p.key}]")
        for line in p.description.splitlines():
            print(f"     {line}")


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Caucus delegate calculator (reproducible coin tosses).")
    ap.add_argument("roster", nargs="?", help="Roster file (.json, .yaml or .yml).")
    ap.add_argument("--allowed", type=int, default=None, help="Delegates to elect. Overrides the roster.")
    ap.add_argument("--seed", nargs="+", type=int, default=None, metavar="SEED",
                    help="One or two coin seeds. Overrides the roster.")
    ap.add_argument("--new-seed", action="store_true", help="Toss a fresh coin seed before calculating.")
    ap.add_argument("--profile", default=DEFAULT_PROFILE, help="Profile key (see --list-profiles).")
    ap.add_argument("--list-profiles", action="store_true", help="List profiles and exit.")
    ap.add_argument("--format", choices=["text", "json", "csv"], default="text", help="Report format on stdout.")
    ap.add_argument("--csv", default=None, help="Also write the CSV report to this path.")
    ap.add_argument("--save", default=None, help="Write the roster inputs (after overrides) to this path.")
    ap.add_argument("--sort", choices=["id", "name", "count"], default=None,
                    help="Report ordering. Overrides profile.")
    ap.add_argument("--descending", action="store_true", help="Reverse the report ordering.")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level.")
    args = ap.parse_args(argv)

    configure_logging(getattr(logging, args.log_level))

    if args.list_profiles:
        print_profiles()
        return

    if not args.roster:
        ap.error("a roster file is required")

    try:
        profile = get_profile(args.profile)
    except KeyError as e:
        ap.error(str(e.args[0]))

    sort_by = args.sort or profile.sort_by
    order = "descending" if args.descending else ("ascending" if args.sort else profile.sort_order)

    try:
        roster = io_mod.load_roster(args.roster)
    except OSError as e:
        ap.error(f"cannot read {args.roster}: {e}")
    except (RosterError, ValueError) as e:
        ap.error(str(e))

    if args.allowed is not None:
        roster.allowed = args.allowed
    if args.seed is not None:
        if len(args.seed) > 2:
            ap.error("--seed takes one or two values")
        roster.seed = tuple(args.seed) if len(args.seed) == 2 else args.seed[0]
    if args.new_seed:
        roster.seed = random_seed()
        logger.warning("New coin seed %s; keep it to reproduce these results", roster.seed)
    elif not coerce_natural(roster.seed_pair()[0]):
        # below 1 the generator falls back to the clock
        unusable = roster.seed
        roster.seed = random_seed()
        logger.warning("Coin seed %r is not a positive number; using new seed %s", unusable, roster.seed)

    if args.save:
        try:
            io_mod.save_roster(args.save, roster)
        except OSError as e:
            ap.error(f"cannot write {args.save}: {e}")

    generator = SequenceGenerator(*roster.seed_pair())
    summary = apportion(roster, generator, profile)

    if args.csv:
        write_report_csv(args.csv, roster, summary, sort_by=sort_by, order=order)

    if args.format == "json":
        print(json.dumps({
            "profile": profile.key,
            "seed": roster.to_dict()["seed"],
            "summary": summary.to_dict(),
            "roster": roster.to_dict(),
        }, ensure_ascii=False, indent=2))
    elif args.format == "csv":
        write_csv_stream(sys.stdout, roster, summary, sort_by=sort_by, order=order)
    else:
        sys.stdout.write(roster_text(roster, summary, sort_by=sort_by, order=order,
                                     places=profile.remainder_places))


if __name__ == "__main__":
    main()
