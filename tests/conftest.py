import base64
import gzip
import json

import pytest

SECUREPOINT_LINE = (
    '192.168.1.10 update.example.com [2023-02-26T00:00:09+01:00] '
    '"GET /api/v1/check HTTP/1.1" 200 512 {blob}'
)
COMBINED_LINE = (
    '10.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] "GET /apache_pb.gif HTTP/1.0" '
    '200 2326 "http://www.example.com/start.html" "Mozilla/4.08 [en] (Win98; I ;Nav)"'
)
COMMON_LINE = '10.0.0.2 - - [10/Oct/2000:13:55:36 -0700] "GET /index.html HTTP/1.0" 404 0'


def encode_specs(obj) -> str:
    return base64.b64encode(gzip.compress(json.dumps(obj).encode("utf-8"))).decode("ascii")


@pytest.fixture
def specs_payload():
    return encode_specs


@pytest.fixture
def securepoint_line():
    def make(blob: str = "proxy=10.0.0.1 rt=0.042 serial=ABC123") -> str:
        return SECUREPOINT_LINE.format(blob=blob)

    return make


@pytest.fixture
def combined_line():
    return COMBINED_LINE


@pytest.fixture
def common_line():
    return COMMON_LINE
