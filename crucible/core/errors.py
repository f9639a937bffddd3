# crucible/core/errors.py
#!/usr/bin/env python3


class CrucibleError(Exception):
    """Base class for conditions a search reports to its caller."""


class MalformedInput(CrucibleError, ValueError):
    """Grid text has a non-digit character or ragged rows."""


class NoPathFound(CrucibleError):
    """Frontier emptied without finalizing a terminal-eligible destination state."""
