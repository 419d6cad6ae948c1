"""Probe name parsing."""

from __future__ import annotations

import re

# Vector bit: non-empty base followed by <digits> at the end of the name
VECTOR_PATTERN = re.compile(r"(.+)<([0-9]+)>", re.DOTALL)


def parse_vector_name(name: str) -> tuple[str, int] | None:
    """Split a vector bit name like ``data<3>`` into ``("data", 3)``.

    Returns None for scalar names.
    """
    match = VECTOR_PATTERN.fullmatch(name)
    if not match:
        return None
    return match.group(1), int(match.group(2))
