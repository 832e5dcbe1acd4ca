# NCSA common log format:
#   127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] "GET /apache_pb.gif HTTP/1.0" 200 2326
import re

from ..models import ParsedRecord
from ..timestamps import parse_timestamp
from .base import Grammar, optional, split_request

COMMON_RE = re.compile(
    r'^(?P<addr>\S+) \S+ (?P<user>\S+) \[(?P<time>[^\]]+)\] "(?P<request>[^"]*)" '
    r"(?P<status>\d+) (?P<bytes>\d+)"
)


class CommonGrammar(Grammar):
    name = "common"
    pattern = COMMON_RE

    def build(self, m: re.Match, line: str) -> ParsedRecord:
        d = m.groupdict()
        return ParsedRecord(
            format=self.name,
            remote_addr=d["addr"],
            host=None,
            remote_user=optional(d["user"]),
            time_local=parse_timestamp(d["time"]),
            request=split_request(d["request"]),
            status=int(d["status"]),
            body_bytes_sent=int(d["bytes"]),
            http_referer=optional(d.get("referer")),
            http_user_agent=optional(d.get("agent")),
            raw_line=line,
        )
