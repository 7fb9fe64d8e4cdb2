"""
Search response envelope: {"status": ..., "result": {"count": ..., "html": ...}}.
"""

from pydantic import BaseModel


class SearchPayload(BaseModel):
    count: int = 0
    html: str = ""


class SearchEnvelope(BaseModel):
    status: str = ""
    result: SearchPayload
