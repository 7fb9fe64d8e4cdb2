"""
Messages consumed by the session loop and effects it asks the loop to run.

Inbound:  Key, Resize, Tick, FetchCompleted
Outbound: DispatchFetch, ScheduleTick, Exit
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from movcli.errors import MovCLIError
from movcli.models.result import Result


class PendingFetch(BaseModel):
    """Correlation token for the one fetch in flight."""
    model_config = ConfigDict(frozen=True)

    query: str
    generation: int


class Key(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str            # "rune", "enter", "esc", "up", "ctrl+c", ...
    char: str = ""       # set for "rune" only

    def __str__(self) -> str:
        return self.char if self.name == "rune" else self.name


class Resize(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int
    height: int


class Tick(BaseModel):
    """Spinner frame for the search with this generation."""
    model_config = ConfigDict(frozen=True)

    generation: int


class FetchCompleted(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    token: PendingFetch
    results: tuple[Result, ...] = ()
    error: Optional[MovCLIError] = None


class DispatchFetch(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: PendingFetch


class ScheduleTick(BaseModel):
    model_config = ConfigDict(frozen=True)

    generation: int
    delay: float = 0.1


class Exit(BaseModel):
    """Leave the screen; open ``url`` afterwards when set."""
    model_config = ConfigDict(frozen=True)

    url: Optional[str] = None


Message = Union[Key, Resize, Tick, FetchCompleted]
Effect = Union[DispatchFetch, ScheduleTick, Exit]
