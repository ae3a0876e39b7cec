"""Parser for the ENLIL animation directory listing.

The SWPC ENLIL directory is a plain HTML index whose anchors point at
frame images. Each filename embeds a compact timestamp
(``YYYYMMDDTHHMMSS`` or ``YYYYMMDD_HHMMSS``); everything else in the name
identifies the model run, e.g.::

    enlil_com2_1834_20240209T060000.jpg  ->  run "enlil_com2_1834"

Only the run holding the most recent frame is kept, thinned to a frame
budget.
"""

from __future__ import annotations

import re
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any
from urllib.parse import unquote, urljoin

from bs4 import BeautifulSoup

from heliodash.series import ImageFrame, ImageFrameSet, downsample

ENLIL_FRAME_BUDGET: int = 48
"""Maximum number of ENLIL frames kept for animation."""

_FRAME_SUFFIXES = (".jpg", ".png")
_STAMP = re.compile(r"(\d{8})[T_](\d{6})")


def _frame_from_href(href: str, base_url: str) -> ImageFrame | None:
    filename = unquote(href.rsplit("/", 1)[-1])
    match = _STAMP.search(filename)
    if match is None:
        return None
    try:
        timestamp = datetime.strptime(match.group(1) + match.group(2), "%Y%m%d%H%M%S")
    except ValueError:
        return None

    stem = filename.rsplit(".", 1)[0]
    run = (stem[: match.start()] + stem[match.end():]).strip("_-. ")
    return ImageFrame(
        url=urljoin(base_url, href),
        timestamp=timestamp.replace(tzinfo=timezone.utc),
        run=run,
    )


def parse_enlil_listing(
    html: Any,
    base_url: str = "",
    *,
    frame_budget: int = ENLIL_FRAME_BUDGET,
) -> ImageFrameSet:
    """Extract the frames of the most recent ENLIL run from a listing.

    Args:
        html: Directory-listing HTML.
        base_url: URL the listing was fetched from; hrefs are resolved
            against it.
        frame_budget: Maximum number of frames to keep.

    Returns:
        The newest run's frames, ascending by time and downsampled with a
        fixed stride. Empty if no frame carries a timestamp.
    """
    runs: dict[str, dict[str, ImageFrame]] = defaultdict(dict)
    soup = BeautifulSoup(html or "", "html.parser")
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href.lower().endswith(_FRAME_SUFFIXES):
            continue
        frame = _frame_from_href(href, base_url)
        if frame is not None:
            runs[frame.run][frame.url] = frame

    if not runs:
        return ImageFrameSet()

    latest_run = max(runs, key=lambda run: max(f.timestamp for f in runs[run].values()))
    frames = sorted(runs[latest_run].values(), key=lambda f: f.timestamp)
    return ImageFrameSet(run=latest_run, frames=tuple(downsample(frames, frame_budget)))
