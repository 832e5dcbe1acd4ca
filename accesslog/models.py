from typing import Any

from pydantic import BaseModel, Field


class ParsedRecord(dict[str, Any]):
    """
    Read-only dict produced for one successfully parsed line.

    Keys shared by every grammar:
    - format: str (grammar name)
    - remote_addr, host, remote_user: str | None
    - time_local: datetime | None
    - request: {"method", "uri", "protocol", "full"}
    - status, body_bytes_sent: int
    - http_referer, http_user_agent: str | None
    - raw_line: str

    The securepoint grammar adds proxy, response_time, serial, version,
    specs, not_after and remaining_days.
    """

    def _readonly(self, *args, **kwargs):
        raise TypeError("ParsedRecord is read-only")

    __setitem__ = _readonly
    __delitem__ = _readonly
    clear = _readonly
    pop = _readonly
    popitem = _readonly
    setdefault = _readonly
    update = _readonly
    __ior__ = _readonly

    def __reduce__(self):
        # copy and pickle rebuild through the constructor, not __setitem__
        return (type(self), (dict(self),))


class GrammarScore(BaseModel):
    matches: int = Field(0, ge=0)
    percentage: float = Field(0.0, ge=0, le=100)
    # 1-based sample positions of the first two matching lines
    matched_lines: list[int] = Field(default_factory=list)


class DetectionResult(BaseModel):
    sample_lines: list[str]
    pattern_results: dict[str, GrammarScore]
    recommended: str


class RunStats(BaseModel):
    """Counters for one traversal of a record stream."""

    lines_seen: int = 0
    parsed: int = 0
    failed: int = 0
