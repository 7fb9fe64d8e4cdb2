"""
Session state machine.

One Session is owned by the app loop. Every mutation happens inside
``Session.handle``; the loop renders after each call and runs the effects
it returns. The session never does I/O itself.

    INPUT --enter--> WAITING --ok--> SHOWING --esc--> INPUT
                        |                 |
                        +--error--> FAILED --esc--> INPUT

A fetch completion is applied only while WAITING and only when its token
is the pending one. Anything else is dropped.
"""

import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from movcli.errors import MovCLIError, NoResultsError
from movcli.models.messages import (
    DispatchFetch,
    Effect,
    Exit,
    FetchCompleted,
    Key,
    Message,
    PendingFetch,
    Resize,
    ScheduleTick,
    Tick,
)
from movcli.models.result import Result
from movcli.transport.http import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

DEFAULT_CHAR_LIMIT = 100
SPINNER_FRAMES = ("|", "/", "-", "\\")

# Rows taken by the results header, dividers and hint line.
LIST_CHROME_ROWS = 7
LIST_MAX_WIDTH = 84
ITEM_ROWS = 2
ITEM_SPACING = 1


class Mode(str, Enum):
    INPUT = "input"
    WAITING = "waiting"
    SHOWING = "showing"
    FAILED = "failed"


class Viewport(BaseModel):
    width: int = 0
    height: int = 0

    @property
    def known(self) -> bool:
        return self.width > 0 and self.height > 0


def list_width(viewport: Viewport) -> int:
    return max(0, min(viewport.width - 8, LIST_MAX_WIDTH))


def list_height(viewport: Viewport) -> int:
    return max(0, viewport.height - LIST_CHROME_ROWS)


def page_size(viewport: Viewport) -> int:
    """Number of list entries that fit in the results viewport."""
    return max(1, (list_height(viewport) + ITEM_SPACING) // (ITEM_ROWS + ITEM_SPACING))


def fuzzy_score(pattern: str, text: str) -> Optional[int]:
    """Score ``pattern`` as a case-insensitive subsequence of ``text``.

    None when it is not a subsequence. Consecutive runs and matches at the
    start of a word score higher.
    """
    pattern, text = pattern.lower(), text.lower()
    score, j, last = 0, 0, -2
    for i, ch in enumerate(text):
        if j == len(pattern):
            break
        if ch != pattern[j]:
            continue
        score += 1
        if i == last + 1:
            score += 5
        if i == 0 or not text[i - 1].isalnum():
            score += 3
        last = i
        j += 1
    if j < len(pattern):
        return None
    return score


class Session:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, char_limit: int = DEFAULT_CHAR_LIMIT):
        self.base_url = base_url
        self.char_limit = char_limit

        self.mode = Mode.INPUT
        self.query_text = ""
        self.cursor = 0
        self.last_query = ""
        self.items: list[Result] = []
        self.last_error: Optional[MovCLIError] = None
        self.viewport = Viewport()

        self.highlighted = 0
        self.filter_text = ""
        self.filtering = False
        self.spinner_frame = 0

        self.pending: Optional[PendingFetch] = None
        self._generation = 0

    # -- Queries --------------------------------------------------------------

    @property
    def visible_items(self) -> list[Result]:
        if not self.filter_text:
            return self.items
        scored = []
        for i, r in enumerate(self.items):
            score = fuzzy_score(self.filter_text, r.title)
            if score is not None:
                scored.append((-score, i, r))
        return [r for _, _, r in sorted(scored, key=lambda s: s[:2])]

    @property
    def selected(self) -> Optional[Result]:
        items = self.visible_items
        if 0 <= self.highlighted < len(items):
            return items[self.highlighted]
        return None

    # -- Dispatch -------------------------------------------------------------

    def handle(self, msg: Message) -> list[Effect]:
        if isinstance(msg, Key):
            return self._on_key(msg)
        if isinstance(msg, FetchCompleted):
            return self._on_fetch_completed(msg)
        if isinstance(msg, Tick):
            return self._on_tick(msg)
        if isinstance(msg, Resize):
            self.viewport = Viewport(width=msg.width, height=msg.height)
            return []
        raise TypeError(f"unexpected message: {msg!r}")

    def submit(self, query: Optional[str] = None) -> list[Effect]:
        """Start a search for ``query`` (or the text field) from INPUT."""
        if self.mode is not Mode.INPUT:
            return []
        if query is not None:
            self.query_text = query[: self.char_limit]
            self.cursor = len(self.query_text)
        text = self.query_text
        if text == "":
            return []
        self._generation += 1
        token = PendingFetch(query=text, generation=self._generation)
        self.pending = token
        self.last_query = text
        self.items = []
        self.last_error = None
        self.spinner_frame = 0
        self.mode = Mode.WAITING
        logger.info("dispatching fetch %d for %r", token.generation, text)
        return [DispatchFetch(token=token), ScheduleTick(generation=token.generation)]

    # -- Messages -------------------------------------------------------------

    def _on_fetch_completed(self, msg: FetchCompleted) -> list[Effect]:
        if self.mode is not Mode.WAITING or msg.token != self.pending:
            logger.info("discarding stale completion for %r (generation %d)",
                        msg.token.query, msg.token.generation)
            return []
        self.pending = None
        if msg.error is None and not msg.results:
            msg = FetchCompleted(token=msg.token, error=NoResultsError(msg.token.query))
        if msg.error is not None:
            logger.info("fetch %d failed: %s", msg.token.generation, msg.error)
            self.items = []
            self.last_error = msg.error
            self.mode = Mode.FAILED
            return []
        self.items = list(msg.results)
        self.highlighted = 0
        self.filter_text = ""
        self.filtering = False
        self.mode = Mode.SHOWING
        return []

    def _on_tick(self, tick: Tick) -> list[Effect]:
        # Each search runs its own tick chain; leftovers from earlier ones stop here.
        if self.mode is not Mode.WAITING or self.pending is None:
            return []
        if tick.generation != self.pending.generation:
            return []
        self.spinner_frame = (self.spinner_frame + 1) % len(SPINNER_FRAMES)
        return [ScheduleTick(generation=tick.generation)]

    def _on_key(self, key: Key) -> list[Effect]:
        if key.name == "ctrl+c":
            return self._quit()
        if self.mode is Mode.INPUT:
            return self._input_key(key)
        if self.mode is Mode.SHOWING:
            return self._showing_key(key)
        if key.name == "rune" and key.char == "q":
            return self._quit()
        if self.mode is Mode.FAILED and key.name == "esc":
            self.last_error = None
            self._enter_input()
        return []

    def _quit(self) -> list[Effect]:
        # Abandon whatever is in flight; its completion will not match.
        self.pending = None
        return [Exit()]

    def _enter_input(self) -> None:
        self.mode = Mode.INPUT
        self.cursor = len(self.query_text)

    # -- INPUT ----------------------------------------------------------------

    def _input_key(self, key: Key) -> list[Effect]:
        text, pos = self.query_text, self.cursor
        if key.name == "enter":
            return self.submit()
        if key.name == "rune":
            if len(text) < self.char_limit:
                self.query_text = text[:pos] + key.char + text[pos:]
                self.cursor = pos + 1
        elif key.name == "backspace":
            if pos > 0:
                self.query_text = text[: pos - 1] + text[pos:]
                self.cursor = pos - 1
        elif key.name == "delete":
            self.query_text = text[:pos] + text[pos + 1:]
        elif key.name == "left":
            self.cursor = max(0, pos - 1)
        elif key.name == "right":
            self.cursor = min(len(text), pos + 1)
        elif key.name in ("home", "ctrl+a"):
            self.cursor = 0
        elif key.name in ("end", "ctrl+e"):
            self.cursor = len(text)
        elif key.name == "ctrl+u":
            self.query_text = ""
            self.cursor = 0
        return []

    # -- SHOWING --------------------------------------------------------------

    def _showing_key(self, key: Key) -> list[Effect]:
        name, char = key.name, key.char
        if name == "esc":
            self.items = []
            self.filter_text = ""
            self.filtering = False
            self.highlighted = 0
            self.last_error = None
            self._enter_input()
            return []
        if name == "enter":
            if self.filtering:
                self.filtering = False
                return []
            return self._select()
        if self.filtering:
            if name == "rune":
                self.filter_text += char
                self.highlighted = 0
                return []
            if name == "backspace":
                self.filter_text = self.filter_text[:-1]
                self.highlighted = 0
                return []
        elif name == "rune":
            if char == "q":
                return self._quit()
            if char == "/":
                self.filtering = True
                return []
            name = {"k": "up", "j": "down", "g": "home", "G": "end"}.get(char, name)
        self._move(name)
        return []

    def _move(self, name: str) -> None:
        count = len(self.visible_items)
        if count == 0:
            return
        step = page_size(self.viewport)
        if name == "up":
            self.highlighted = (self.highlighted - 1) % count
        elif name == "down":
            self.highlighted = (self.highlighted + 1) % count
        elif name == "pgup":
            self.highlighted = max(0, self.highlighted - step)
        elif name == "pgdown":
            self.highlighted = min(count - 1, self.highlighted + step)
        elif name == "home":
            self.highlighted = 0
        elif name == "end":
            self.highlighted = count - 1

    def _select(self) -> list[Effect]:
        item = self.selected
        if item is None:
            return []
        return [Exit(url=item.url(self.base_url))]
