"""
Colors and styles for the renderer.

A Theme is an immutable record handed to ``render``; there is no module
level mutable style state.
"""

from pydantic import BaseModel, ConfigDict

YELLOW = "#F5E642"
WHITE = "#EEEEEE"
GRAY = "#888888"
DARK = "#444444"
BLACK = "#111111"


class Theme(BaseModel):
    model_config = ConfigDict(frozen=True)

    box_width: int = 58
    border: str = WHITE
    error_border: str = YELLOW

    logo: str = f"bold {YELLOW}"
    subtitle: str = GRAY
    label: str = f"bold {YELLOW}"
    divider: str = DARK
    hint: str = GRAY
    key: str = f"bold {BLACK} on {YELLOW}"
    loading: str = f"bold {WHITE}"
    spinner: str = YELLOW
    error_text: str = WHITE

    prompt: str = f"bold {YELLOW}"
    input_text: str = WHITE
    placeholder: str = DARK
    cursor: str = f"{BLACK} on {YELLOW}"

    list_header: str = f"bold {BLACK} on {YELLOW}"
    count: str = GRAY
    selected_title: str = f"bold {YELLOW}"
    normal_title: str = WHITE
    selected_desc: str = GRAY
    normal_desc: str = DARK
    filter_label: str = f"bold {YELLOW}"


DEFAULT_THEME = Theme()
