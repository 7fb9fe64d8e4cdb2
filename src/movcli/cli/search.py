"""CLI: movcli search, movcli find"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from movcli.app import App
from movcli.errors import MovCLIError, TerminalError
from movcli.session import Session

console = Console()


def _get_config():
    from movcli.cli.main import _get_config
    return _get_config()


def _get_fetcher():
    from movcli.cli.main import _get_fetcher
    return _get_fetcher()


def _run(coro):
    from movcli.cli.main import _run
    return _run(coro)


@click.command("search")
@click.argument("query", required=False)
def search_cmd(query: Optional[str] = None):
    """Interactive search screen."""
    cfg = _get_config()
    fetcher = _get_fetcher()
    session = Session(base_url=fetcher.base_url, char_limit=cfg.char_limit)
    app = App(fetcher, session=session, console=console)
    try:
        code = _run(app.run(initial_query=query))
    except TerminalError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)
    raise SystemExit(code)


@click.command("find")
@click.argument("query")
@click.option("--json-output", "--json", is_flag=True)
def find_cmd(query: str, json_output: bool):
    """Search once and print the results."""

    async def _find():
        fetcher = _get_fetcher()
        try:
            return await fetcher.fetch(query)
        finally:
            await fetcher.close()

    try:
        if json_output:
            results = _run(_find())
        else:
            with console.status(f'Searching for "{query}"...'):
                results = _run(_find())
    except MovCLIError as e:
        if json_output:
            click.echo(json.dumps({"error": e.code, "message": str(e)}))
        else:
            console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    base_url = _get_config().base_url
    if json_output:
        for r in results:
            click.echo(json.dumps({**r.model_dump(), "url": r.url(base_url)}))
        return
    table = Table(title=f'{len(results)} results for "{query}"')
    table.add_column("Title", style="bold")
    table.add_column("Info")
    table.add_column("URL", style="dim")
    for r in results:
        table.add_row(r.title, r.subtitle, r.url(base_url))
    console.print(table)
