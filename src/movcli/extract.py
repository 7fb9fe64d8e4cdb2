"""
Result extraction from the search fragment.

The fragment is a run of blocks like::

    <a class="item" href="/watch/x1">
      <span>Movie</span> <span>2020</span> <span>120m</span>
      <div class="title">Example</div>
    </a>

Each block yields one Result. Blocks missing any of the five parts are
skipped. The pattern is tied to the site's markup; a layout change upstream
shows up as zero results, not as an error.
"""

import html
import re
from typing import Iterator

from movcli.models.result import Result

# Gaps may span lines but never run into the next item block.
_GAP = r'(?:(?!<a class="item").)*?'

ITEM_PATTERN = re.compile(
    r'<a class="item" href="([^"]+)">'
    + _GAP + r"<span>([^<]+)</span>"
    + _GAP + r"<span>([^<]+)</span>"
    + _GAP + r"<span>([^<]+)</span>"
    + _GAP + r'<div class="title">([^<]+)</div>',
    re.DOTALL,
)

SUBTITLE_SEPARATOR = "  "


def _text(raw: str) -> str:
    return html.unescape(raw).strip()


def iter_results(fragment: str) -> Iterator[Result]:
    """Yield results in source order."""
    for match in ITEM_PATTERN.finditer(fragment):
        href, kind, year, length, title = match.groups()
        meta = [_text(kind), _text(year), _text(length)]
        yield Result(
            title=_text(title),
            subtitle=SUBTITLE_SEPARATOR.join(m for m in meta if m),
            target_path=html.unescape(href),
        )


def extract(fragment: str) -> list[Result]:
    return list(iter_results(fragment))
