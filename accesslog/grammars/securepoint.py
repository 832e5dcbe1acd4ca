# Securepoint appliance access log:
#   1.2.3.4 update.example.com [2023-02-26T00:00:09+01:00] "GET /x HTTP/1.1" 200 512 proxy=... rt=... serial=...
import re

from ..custom_fields import decode_custom_fields, decode_specs
from ..models import ParsedRecord
from ..timestamps import parse_timestamp
from .base import Grammar, split_request

SECUREPOINT_RE = re.compile(
    r'^(?P<addr>\S+) (?P<host>\S+) \[(?P<time>[^\]]+)\] "(?P<request>[^"]*)" '
    r"(?P<status>\d+) (?P<bytes>\d+) (?P<blob>.*)$"
)

# blob key -> record field
CUSTOM_FIELDS = {
    "proxy": "proxy",
    "rt": "response_time",
    "serial": "serial",
    "version": "version",
    "not_after": "not_after",
    "remaining_days": "remaining_days",
}


class SecurepointGrammar(Grammar):
    name = "securepoint"
    pattern = SECUREPOINT_RE

    def build(self, m: re.Match, line: str) -> ParsedRecord:
        d = m.groupdict()
        fields = decode_custom_fields(d["blob"])
        record = {
            "format": self.name,
            "remote_addr": d["addr"],
            "host": d["host"],
            "remote_user": None,
            "time_local": parse_timestamp(d["time"]),
            "request": split_request(d["request"]),
            "status": int(d["status"]),
            "body_bytes_sent": int(d["bytes"]),
            "http_referer": None,
            "http_user_agent": None,
        }
        for key, field in CUSTOM_FIELDS.items():
            record[field] = fields.get(key) or None
        record["specs"] = decode_specs(fields.get("specs"))
        record["raw_line"] = line
        return ParsedRecord(record)
