"""
Renderer — Session in, rich renderable out.

Nothing here mutates the session or touches the terminal; the app loop
hands the result to ``rich.live.Live``.
"""

from rich import box
from rich.align import Align
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from movcli.models.result import Result
from movcli.session import (
    ITEM_SPACING,
    SPINNER_FRAMES,
    Mode,
    Session,
    list_width,
    page_size,
)
from movcli.theme import DEFAULT_THEME, Theme

LOGO = "MOVCLI"
TAGLINE = "stream anything from your terminal"
PLACEHOLDER = "search title..."


def render(session: Session, theme: Theme = DEFAULT_THEME) -> RenderableType:
    if not session.viewport.known:
        return Text("")
    if session.mode is Mode.INPUT:
        return _render_input(session, theme)
    if session.mode is Mode.WAITING:
        return _render_waiting(session, theme)
    if session.mode is Mode.SHOWING:
        return _render_showing(session, theme)
    return _render_failed(session, theme)


def visible_window(count: int, index: int, per_page: int) -> tuple[int, int]:
    """Slice bounds of the page holding ``index``."""
    if count <= 0:
        return 0, 0
    index = min(max(index, 0), count - 1)
    start = (index // per_page) * per_page
    return start, min(count, start + per_page)


def _keys(theme: Theme, *pairs: tuple[str, str]) -> Text:
    hint = Text("  ", style=theme.hint)
    for i, (key, action) in enumerate(pairs):
        if i:
            hint.append("   ")
        hint.append(f" {key} ", style=theme.key)
        hint.append(f" {action}", style=theme.hint)
    return hint


def _centered(session: Session, body: RenderableType) -> RenderableType:
    vp = session.viewport
    return Align.center(body, vertical="middle", width=vp.width, height=vp.height)


def _box(theme: Theme, body: RenderableType) -> Panel:
    return Panel(
        body,
        box=box.SQUARE,
        border_style=theme.border,
        padding=(1, 3),
        width=theme.box_width,
    )


def _text_field(session: Session, theme: Theme) -> Text:
    field = Text("  ")
    field.append("> ", style=theme.prompt)
    text, pos = session.query_text, session.cursor
    if not text:
        field.append(" ", style=theme.cursor)
        field.append(PLACEHOLDER[1:], style=theme.placeholder)
        return field
    field.append(text[:pos], style=theme.input_text)
    field.append(text[pos:pos + 1] or " ", style=theme.cursor)
    field.append(text[pos + 1:], style=theme.input_text)
    return field


def _render_input(session: Session, theme: Theme) -> RenderableType:
    body = Group(
        Text(LOGO, style=theme.logo),
        Text(TAGLINE, style=theme.subtitle),
        Text(""),
        Text("-" * 50, style=theme.divider),
        Text(""),
        Text("SEARCH", style=theme.label),
        _text_field(session, theme),
        Text(""),
        _keys(theme, ("ENTER", "search"), ("CTRL+C", "quit")),
    )
    return _centered(session, _box(theme, body))


def _render_waiting(session: Session, theme: Theme) -> RenderableType:
    query = session.pending.query if session.pending else session.last_query
    line = Text("  ")
    line.append(SPINNER_FRAMES[session.spinner_frame % len(SPINNER_FRAMES)], style=theme.spinner)
    line.append(f'  searching for "{query}"', style=theme.loading)
    return _centered(session, _box(theme, Group(Text(""), line, Text(""))))


def _entry(result: Result, selected: bool, width: int, theme: Theme) -> list[Text]:
    if selected:
        title = Text("> ", style=theme.selected_title)
        title.append(result.title, style=theme.selected_title)
        desc = Text("  " + result.subtitle, style=theme.selected_desc)
    else:
        title = Text("  " + result.title, style=theme.normal_title)
        desc = Text("  " + result.subtitle, style=theme.normal_desc)
    for line in (title, desc):
        line.no_wrap = True
        line.truncate(width, overflow="ellipsis")
    return [title, desc]


def _render_showing(session: Session, theme: Theme) -> RenderableType:
    width = list_width(session.viewport)
    items = session.visible_items

    header = Text()
    header.append("  RESULTS  ", style=theme.list_header)
    if session.filter_text or session.filtering:
        header.append(f"  {len(items)}/{len(session.items)} results for \"{session.last_query}\"",
                      style=theme.count)
    else:
        header.append(f"  {len(items)} results for \"{session.last_query}\"", style=theme.count)

    if session.filtering or session.filter_text:
        header.append("   filter: ", style=theme.filter_label)
        header.append(session.filter_text, style=theme.input_text)
        if session.filtering:
            header.append(" ", style=theme.cursor)

    div = Text("-" * width, style=theme.divider)
    rows: list[RenderableType] = [header, div]

    start, end = visible_window(len(items), session.highlighted, page_size(session.viewport))
    if not items:
        rows.append(Text("  no matches", style=theme.hint))
    for i in range(start, end):
        if i > start:
            rows.extend(Text("") for _ in range(ITEM_SPACING))
        rows.extend(_entry(items[i], i == session.highlighted, width, theme))

    rows.append(div)
    rows.append(_keys(theme, ("UP/DOWN", "navigate"), ("ENTER", "open"), ("ESC", "back"), ("/", "filter")))

    vp = session.viewport
    return Align.center(Group(*rows), vertical="top", width=vp.width, height=vp.height)


def _render_failed(session: Session, theme: Theme) -> RenderableType:
    message = str(session.last_error) if session.last_error else ""
    body = Group(
        Text("ERROR", style=theme.label),
        Text(""),
        Text(message, style=theme.error_text),
        Text(""),
        Text("press ESC to go back", style=theme.hint),
    )
    panel = Panel(
        body,
        box=box.SQUARE,
        border_style=theme.error_border,
        padding=(1, 3),
        expand=False,
    )
    return _centered(session, panel)
