# crucible/core/config.py
#!/usr/bin/env python3
"""
Defaults and policy resolution.

- ENV: CRUCIBLE_POLICY=bounded|minimum
- CLI: --policy=bounded|minimum (wins over the environment)
"""

import logging
import os
import sys
from typing import Dict, Any, Optional, Sequence

from crucible.core.policy import MovePolicy, PolicyVariant

DEFAULTS: Dict[str, Any] = {
    "policy": {
        "variant": PolicyVariant.BOUNDED_RUN.value,
    },
    "logging": {
        "level": logging.WARNING,
        "format": "[%(levelname)s] %(name)s: %(message)s",
    },
    "render": {
        "cell_size": 24,
        "margin": 16,
        "max_px": 1600,  # cell_size shrinks so the image stays under this
    },
}

_ALIASES = {
    "bounded": PolicyVariant.BOUNDED_RUN,
    "bounded-run": PolicyVariant.BOUNDED_RUN,
    "part1": PolicyVariant.BOUNDED_RUN,
    "minimum": PolicyVariant.BOUNDED_RUN_WITH_MINIMUM,
    "bounded-run-with-minimum": PolicyVariant.BOUNDED_RUN_WITH_MINIMUM,
    "ultra": PolicyVariant.BOUNDED_RUN_WITH_MINIMUM,
    "part2": PolicyVariant.BOUNDED_RUN_WITH_MINIMUM,
}


def parse_variant(name: str) -> PolicyVariant:
    try:
        return _ALIASES[name.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown policy {name!r}; choose from {sorted(_ALIASES)}") from None


def resolve_policy_name(argv: Optional[Sequence[str]] = None) -> str:
    name = os.getenv("CRUCIBLE_POLICY", DEFAULTS["policy"]["variant"]).lower()
    for arg in sys.argv if argv is None else argv:
        if arg.startswith("--policy="):
            name = arg.split("=", 1)[1].lower()
    return name


def resolve_policy(argv: Optional[Sequence[str]] = None, max_run: Optional[int] = None,
                   min_run: Optional[int] = None, name: Optional[str] = None) -> MovePolicy:
    """Policy from an explicit name, else $CRUCIBLE_POLICY / --policy=, with threshold overrides."""
    variant = parse_variant(name if name is not None else resolve_policy_name(argv))
    return MovePolicy.for_variant(variant, max_run=max_run, min_run=min_run)
