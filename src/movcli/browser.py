"""
Open a URL with the operating system's default handler.

Best effort: if no launcher works, the URL is printed for the user to
open by hand.
"""

import logging
import platform
import subprocess
from typing import Callable, Optional

import click

from movcli.errors import BrowserLaunchError

logger = logging.getLogger(__name__)


def launch_commands(url: str, system: str) -> list[list[str]]:
    """Candidate commands for ``system`` (a ``platform.system()`` value), in order."""
    if system == "Linux":
        return [
            ["xdg-open", url],
            # Termux / Android
            ["am", "start", "--user", "0", "-a", "android.intent.action.VIEW", "-d", url],
        ]
    if system == "Windows":
        return [["rundll32", "url.dll,FileProtocolHandler", url]]
    if system == "Darwin":
        return [["open", url]]
    return []


def launch(url: str, system: Optional[str] = None, spawn: Callable[..., object] = subprocess.Popen) -> None:
    """Start the first launcher that spawns. Raises BrowserLaunchError."""
    system = system or platform.system()
    commands = launch_commands(url, system)
    if not commands:
        raise BrowserLaunchError(f"unsupported platform: {system}")
    for cmd in commands:
        try:
            spawn(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
            logger.info("opened %s with %s", url, cmd[0])
            return
        except OSError as e:
            logger.warning("%s failed: %s", cmd[0], e)
    raise BrowserLaunchError(f"no launcher available for {url}")


def open_url(url: str, system: Optional[str] = None, spawn: Callable[..., object] = subprocess.Popen) -> bool:
    """Open ``url``; print it instead when that fails. Returns True if a launcher started."""
    try:
        launch(url, system=system, spawn=spawn)
        return True
    except BrowserLaunchError as e:
        logger.warning("browser launch failed: %s", e)
        click.echo(f"Open in browser: {url}")
        return False
