"""
User configuration, stored as JSON in ~/.movcli/config.json.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from movcli.session import DEFAULT_CHAR_LIMIT
from movcli.transport.http import (
    DEFAULT_BASE_URL,
    DEFAULT_SEARCH_PATH,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)

logger = logging.getLogger(__name__)

CONFIG_FILE = Path.home() / ".movcli" / "config.json"


class ClientConfig(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    search_path: str = DEFAULT_SEARCH_PATH
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    char_limit: int = Field(DEFAULT_CHAR_LIMIT, gt=0)


def load_config(path: Optional[Path] = None) -> ClientConfig:
    """Read the config file. Missing or broken files give the defaults."""
    path = path or CONFIG_FILE
    try:
        return ClientConfig.model_validate(json.loads(path.read_text()))
    except FileNotFoundError:
        return ClientConfig()
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("ignoring invalid config %s: %s", path, e)
        return ClientConfig()


def save_config(cfg: ClientConfig, path: Optional[Path] = None) -> None:
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(cfg.model_dump(), indent=2))


def update_config(cfg: ClientConfig, **changes: Any) -> ClientConfig:
    """Return a validated copy of ``cfg`` with ``changes`` applied."""
    return ClientConfig.model_validate({**cfg.model_dump(), **changes})
