"""
movcli CLI — `movcli` command.

Commands:
  movcli                     Interactive search (same as `movcli search`)
  movcli search [QUERY]      Interactive search, optionally starting with QUERY
  movcli find QUERY          One-shot search, prints a table or JSON
  movcli config <cmd>        Show or change saved settings
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from movcli import __version__
from movcli.config import CONFIG_FILE, ClientConfig, load_config, update_config
from movcli.fetcher import Fetcher

console = Console()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _setup_logging(log_file: Optional[Path], verbose: bool) -> None:
    # The interactive screen owns the terminal, so logs only ever go to a file.
    if log_file is None and not verbose:
        logging.getLogger("movcli").addHandler(logging.NullHandler())
        return
    path = log_file or CONFIG_FILE.parent / "movcli.log"
    path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(path),
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


def _get_config() -> ClientConfig:
    return click.get_current_context().find_root().obj


def _get_fetcher() -> Fetcher:
    cfg = _get_config()
    return Fetcher(
        base_url=cfg.base_url,
        search_path=cfg.search_path,
        timeout=cfg.timeout,
        user_agent=cfg.user_agent,
    )


def _run(coro):
    return asyncio.run(coro)


@click.group(invoke_without_command=True)
@click.version_option(__version__)
@click.option("--base-url", default=None, help="Site to search (default from config)")
@click.option("--timeout", default=None, type=float, help="Request timeout in seconds")
@click.option("--log-file", default=None, type=click.Path(dir_okay=False, path_type=Path),
              help="Write logs to this file")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging (to the log file)")
@click.pass_context
def main(ctx: click.Context, base_url: Optional[str], timeout: Optional[float],
         log_file: Optional[Path], verbose: bool):
    """movcli — stream anything from your terminal."""
    _setup_logging(log_file, verbose)
    cfg = load_config()
    overrides = {k: v for k, v in (("base_url", base_url), ("timeout", timeout)) if v is not None}
    if overrides:
        try:
            cfg = update_config(cfg, **overrides)
        except ValueError as e:
            raise click.BadParameter(str(e))
    ctx.obj = cfg
    if ctx.invoked_subcommand is None:
        ctx.invoke(search_cmd)


# Register subcommands from separate modules
from movcli.cli.search import search_cmd, find_cmd
from movcli.cli.config import config

main.add_command(search_cmd)
main.add_command(find_cmd)
main.add_command(config)


if __name__ == "__main__":
    main()
