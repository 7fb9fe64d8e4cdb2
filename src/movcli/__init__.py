"""
movcli — search movhub from your terminal.

Type a title, pick a result, and it opens in your browser.
"""

from movcli.errors import (
    MovCLIError,
    NetworkError,
    DecodeError,
    NoResultsError,
    BrowserLaunchError,
    TerminalError,
)
from movcli.extract import extract
from movcli.fetcher import Fetcher
from movcli.models.result import Result
from movcli.session import Mode, Session

__version__ = "0.1.0"
__all__ = [
    "Fetcher",
    "Mode",
    "Result",
    "Session",
    "extract",
    "MovCLIError",
    "NetworkError",
    "DecodeError",
    "NoResultsError",
    "BrowserLaunchError",
    "TerminalError",
]
