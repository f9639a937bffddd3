# crucible/app/cli.py
#!/usr/bin/env python3
"""
Command-line driver: read a map, print the minimum heat loss.

    crucible maps/sample.txt
    crucible maps/sample.txt --policy=minimum --render out.png
    CRUCIBLE_POLICY=minimum crucible maps/sample.txt --show-path
"""

import argparse
import logging
import sys
from typing import List, Optional

from crucible.app.render import render_search
from crucible.core.config import DEFAULTS, resolve_policy
from crucible.core.errors import CrucibleError
from crucible.core.grid_io import load_map
from crucible.core.search import CrucibleSearch, format_path

log = logging.getLogger("crucible.cli")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="crucible",
                                description="Minimum-cost route with run-length limits over a digit grid.")
    p.add_argument("map", help="text file, one row of digit costs per line")
    p.add_argument("--policy", default=None,
                   help="bounded | minimum (default: $CRUCIBLE_POLICY or bounded)")
    p.add_argument("--max-run", type=int, default=None, help="override the maximum straight run")
    p.add_argument("--min-run", type=int, default=None, help="override the minimum straight run")
    p.add_argument("--render", metavar="OUT", default=None, help="write an image of the search")
    p.add_argument("--show-path", action="store_true", help="print the route as arrows on stderr")
    p.add_argument("-v", "--verbose", action="count", default=0)
    return p


def _setup_logging(verbosity: int) -> None:
    level = DEFAULTS["logging"]["level"]
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=DEFAULTS["logging"]["format"])


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    try:
        policy = resolve_policy(argv, max_run=args.max_run, min_run=args.min_run, name=args.policy)
    except ValueError as ex:
        log.error("%s", ex)
        return 2

    try:
        grid = load_map(args.map)
    except OSError as ex:
        log.error("cannot read map: %s", ex)
        return 2
    except CrucibleError as ex:
        log.error("bad map %s: %s", args.map, ex)
        return 1

    log.info("map %s: %dx%d, policy %s (min_run=%d, max_run=%d)",
             args.map, grid.height, grid.width, policy.variant.value, policy.min_run, policy.max_run)

    search = CrucibleSearch(policy=policy)
    search.init(grid)
    search.run()

    if args.render:
        render_search(search, args.render)

    try:
        cost = search.best_cost()
    except CrucibleError as ex:
        log.error("%s", ex)
        return 1

    if args.show_path:
        print(format_path(grid, search.moves()), file=sys.stderr)
    print(cost)
    return 0


if __name__ == "__main__":
    sys.exit(main())
