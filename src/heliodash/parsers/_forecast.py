"""Parser for the SWPC 3-day solar-geomagnetic predictions bulletin.

The region flare-probability section starts at a comment line mentioning
``Class C`` and lists one region per line::

    # Class C, M, X flare probabilities ...
    3576   60   15   05   ...
    3578   20   01   01   ...
"""

from __future__ import annotations

from typing import Any

from heliodash.parsers._common import parse_leading_int, split_lines
from heliodash.parsers._types import FlareProbabilities

_SECTION_MARKER = "Class C"
_MIN_TOKENS = 5


def parse_flare_probabilities(text: Any) -> FlareProbabilities:
    """Return the maximum C/M/X probability across all listed regions.

    Lines are ignored until a ``#`` line containing ``Class C``. After
    that, blank, ``:`` and ``#`` lines and lines with fewer than five
    tokens are skipped; tokens 1-3 are the C, M and X percentages.

    Args:
        text: Bulletin text.

    Returns:
        Per-class maxima, all zero when the section is absent.
    """
    max_c = max_m = max_x = 0
    in_section = False

    for line in split_lines(text):
        if line.startswith("#") and _SECTION_MARKER in line:
            in_section = True
            continue
        if not in_section:
            continue
        if not line.strip() or line.startswith((":", "#")):
            continue

        parts = line.split()
        if len(parts) < _MIN_TOKENS:
            continue

        max_c = max(max_c, parse_leading_int(parts[1]))
        max_m = max(max_m, parse_leading_int(parts[2]))
        max_x = max(max_x, parse_leading_int(parts[3]))

    return FlareProbabilities(c=max_c, m=max_m, x=max_x)
