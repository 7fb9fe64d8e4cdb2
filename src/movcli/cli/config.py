"""CLI: movcli config show|set|reset"""

import json

import click
from pydantic import ValidationError
from rich.console import Console

from movcli.config import CONFIG_FILE, ClientConfig, load_config, save_config, update_config

console = Console()


@click.group()
def config():
    """Saved settings."""


@config.command("show")
@click.option("--json-output", "--json", is_flag=True)
def config_show(json_output: bool):
    """Show the effective settings."""
    from movcli.cli.main import _get_config
    cfg = _get_config()
    if json_output:
        click.echo(json.dumps(cfg.model_dump(), indent=2))
        return
    for key, value in cfg.model_dump().items():
        console.print(f"[bold]{key}[/bold] = {value}")


@config.command("set")
@click.argument("key", type=click.Choice(list(ClientConfig.model_fields)))
@click.argument("value")
def config_set(key: str, value: str):
    """Change one saved setting."""
    try:
        cfg = update_config(load_config(), **{key: value})
    except ValidationError as e:
        console.print(f"[red]Invalid value for {key}: {e.errors()[0]['msg']}[/red]")
        raise SystemExit(1)
    save_config(cfg)
    console.print(f"[green]{key} = {getattr(cfg, key)}[/green]")


@config.command("reset")
def config_reset():
    """Forget saved settings."""
    save_config(ClientConfig())
    console.print(f"[green]Settings reset ({CONFIG_FILE}).[/green]")
