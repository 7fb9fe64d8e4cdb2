"""
Search result model — one entry of the results list.
"""

from pydantic import BaseModel, ConfigDict


class Result(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    subtitle: str        # "Movie  2020  120m"
    target_path: str     # relative, joined with the site base URL

    def url(self, base_url: str) -> str:
        return base_url.rstrip("/") + self.target_path
