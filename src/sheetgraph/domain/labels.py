"""Short labels — the numeric code at the start of a sheet name."""

from __future__ import annotations

import re

# "12.3 Revenue" -> "12.3"
SHORT_LABEL_PATTERN = re.compile(r"^([0-9.]+).*")


def short_label(name: str, pattern: re.Pattern[str] = SHORT_LABEL_PATTERN) -> str:
    """Return the first capture group of *pattern* in *name*, or *name* unchanged.

    A first group that is empty or did not participate (an optional group)
    counts as no match.
    """
    match = pattern.match(name)
    if match and match.re.groups and match.group(1):
        return match.group(1)
    return name
