"""
App loop — the single consumer of the message queue.

Keyboard input, resize signals, spinner ticks and fetch completions all
arrive as messages on one asyncio.Queue. Each message goes through
``Session.handle``, then the frame is re-rendered, then the returned
effects are run. Fetches run as detached tasks and report back by posting
a FetchCompleted message; they never touch the session.
"""

import asyncio
import logging
import signal
from typing import Callable, Iterable, Optional

from rich.console import Console, RenderableType
from rich.live import Live

from movcli.browser import open_url
from movcli.errors import MovCLIError
from movcli.fetcher import Fetcher
from movcli.models.messages import (
    DispatchFetch,
    Effect,
    Exit,
    FetchCompleted,
    Message,
    PendingFetch,
    Resize,
    ScheduleTick,
    Tick,
)
from movcli.render import render
from movcli.session import Session
from movcli.terminal import decode_keys, input_decoder, raw_mode, read_input, stdin_fd
from movcli.theme import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)


class App:
    def __init__(
        self,
        fetcher: Fetcher,
        session: Optional[Session] = None,
        theme: Theme = DEFAULT_THEME,
        console: Optional[Console] = None,
    ):
        self.fetcher = fetcher
        self.session = session or Session(base_url=fetcher.base_url)
        self.theme = theme
        self.console = console or Console()
        self.queue: asyncio.Queue[Message] = asyncio.Queue()
        self._tasks: set[asyncio.Task] = set()
        self._decoder = input_decoder()

    def post(self, msg: Message) -> None:
        self.queue.put_nowait(msg)

    async def fetch(self, token: PendingFetch) -> None:
        """Run one fetch and post its outcome."""
        try:
            results = await self.fetcher.fetch(token.query)
        except MovCLIError as e:
            self.post(FetchCompleted(token=token, error=e))
            return
        except Exception as e:
            logger.exception("fetch %d crashed", token.generation)
            self.post(FetchCompleted(token=token, error=MovCLIError("fetch_error", str(e))))
            return
        self.post(FetchCompleted(token=token, results=tuple(results)))

    def _spawn(self, token: PendingFetch) -> None:
        task = asyncio.get_running_loop().create_task(self.fetch(token))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _run_effects(self, effects: Iterable[Effect]) -> Optional[Exit]:
        for effect in effects:
            if isinstance(effect, DispatchFetch):
                self._spawn(effect.token)
            elif isinstance(effect, ScheduleTick):
                asyncio.get_running_loop().call_later(effect.delay, self.post, Tick(generation=effect.generation))
            elif isinstance(effect, Exit):
                return effect
        return None

    async def loop(
        self,
        show: Callable[[RenderableType], None],
        initial: Iterable[Effect] = (),
    ) -> Exit:
        """Consume messages until an Exit effect comes back."""
        show(render(self.session, self.theme))
        done = self._run_effects(initial)
        while done is None:
            msg = await self.queue.get()
            effects = self.session.handle(msg)
            show(render(self.session, self.theme))
            done = self._run_effects(effects)
        return done

    # -- Terminal wiring ------------------------------------------------------

    def _on_input(self, fd: int) -> None:
        for key in decode_keys(read_input(fd, self._decoder)):
            self.post(key)

    def _on_resize(self) -> None:
        size = self.console.size
        self.post(Resize(width=size.width, height=size.height))

    async def run(self, initial_query: Optional[str] = None) -> int:
        """Take over the terminal until the user quits or picks a result.

        Raises TerminalError when the terminal cannot be set up.
        """
        loop = asyncio.get_running_loop()
        sigwinch = getattr(signal, "SIGWINCH", None)
        try:
            fd = stdin_fd()
            initial = self.session.submit(initial_query) if initial_query else []
            with raw_mode(fd), Live(console=self.console, screen=True, auto_refresh=False) as live:
                loop.add_reader(fd, self._on_input, fd)
                if sigwinch is not None:
                    loop.add_signal_handler(sigwinch, self._on_resize)
                self._on_resize()
                try:
                    done = await self.loop(lambda frame: live.update(frame, refresh=True), initial)
                finally:
                    loop.remove_reader(fd)
                    if sigwinch is not None:
                        loop.remove_signal_handler(sigwinch)
        finally:
            await self.fetcher.close()
        if done.url:
            open_url(done.url)
        return 0
