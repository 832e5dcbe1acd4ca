import copy
import pickle
from datetime import datetime

import pytest

from accesslog.grammars import get_grammar
from accesslog.line_parser import parse_line
from accesslog.models import ParsedRecord


def test_securepoint_line(securepoint_line, specs_payload):
    specs = {"hardware": "RC200", "ram_mb": 4096}
    line = securepoint_line(
        f'proxy=10.0.0.1 rt=0.042 serial=ABC123 version="12.4.1 build 3" '
        f"specs={specs_payload(specs)} not_after=2024-01-01 remaining_days=309"
    )

    record = parse_line(line, get_grammar("securepoint"))

    assert record is not None
    assert record["format"] == "securepoint"
    assert record["remote_addr"] == "192.168.1.10"
    assert record["host"] == "update.example.com"
    assert record["remote_user"] is None
    assert isinstance(record["time_local"], datetime)
    assert record["status"] == 200
    assert record["body_bytes_sent"] == 512
    assert record["request"]["method"] == "GET"
    assert record["request"]["uri"] == "/api/v1/check"
    assert record["proxy"] == "10.0.0.1"
    assert record["response_time"] == "0.042"
    assert record["serial"] == "ABC123"
    assert record["version"] == "12.4.1 build 3"
    assert record["specs"] == specs
    assert record["not_after"] == "2024-01-01"
    assert record["remaining_days"] == "309"
    assert record["http_referer"] is None
    assert record["http_user_agent"] is None
    assert record["raw_line"] == line


def test_missing_custom_fields_are_none_not_empty(securepoint_line):
    record = parse_line(securepoint_line("serial=ABC123"), get_grammar("securepoint"))
    assert record["serial"] == "ABC123"
    for field in ("proxy", "response_time", "version", "specs", "not_after", "remaining_days"):
        assert record[field] is None


def test_empty_quoted_value_is_none(securepoint_line):
    record = parse_line(securepoint_line('version="" serial=X'), get_grammar("securepoint"))
    assert record["version"] is None


def test_bad_specs_fails_the_whole_line(securepoint_line):
    line = securepoint_line("serial=ABC123 specs=bm90LWd6aXA=")
    assert parse_line(line, get_grammar("securepoint")) is None


def test_combined_line(combined_line):
    record = parse_line(combined_line, get_grammar("combined"))

    assert record["format"] == "combined"
    assert record["remote_addr"] == "10.0.0.1"
    assert record["host"] is None
    assert record["remote_user"] == "frank"
    assert record["time_local"].year == 2000
    assert record["request"] == {
        "method": "GET",
        "uri": "/apache_pb.gif",
        "protocol": "HTTP/1.0",
        "full": "GET /apache_pb.gif HTTP/1.0",
    }
    assert record["status"] == 200
    assert record["body_bytes_sent"] == 2326
    assert record["http_referer"] == "http://www.example.com/start.html"
    assert record["http_user_agent"] == "Mozilla/4.08 [en] (Win98; I ;Nav)"


def test_combined_dash_sentinels_become_none():
    line = '10.0.0.1 - - [10/Oct/2000:13:55:36 -0700] "GET / HTTP/1.1" 200 10 "-" "-"'
    record = parse_line(line, get_grammar("combined"))
    assert record["remote_user"] is None
    assert record["http_referer"] is None
    assert record["http_user_agent"] is None


def test_common_line(common_line):
    record = parse_line(common_line, get_grammar("common"))
    assert record["format"] == "common"
    assert record["status"] == 404
    assert record["body_bytes_sent"] == 0
    assert record["remote_user"] is None
    assert record["http_referer"] is None
    assert record["http_user_agent"] is None


def test_short_request_parts_default_to_empty():
    line = '10.0.0.1 - - [10/Oct/2000:13:55:36 -0700] "GARBAGE" 400 0'
    record = parse_line(line, get_grammar("common"))
    assert record["request"] == {"method": "GARBAGE", "uri": "", "protocol": "", "full": "GARBAGE"}


def test_unparsable_timestamp_keeps_record():
    line = '10.0.0.1 - - [yesterday-ish] "GET / HTTP/1.1" 200 10'
    record = parse_line(line, get_grammar("common"))
    assert record is not None
    assert record["time_local"] is None
    assert record["status"] == 200


@pytest.mark.parametrize("line", ["", "   ", "not a log line", "1.2.3.4 - - [x] \"GET /\" abc 12"])
def test_non_matching_lines_return_none(line):
    for name in ("securepoint", "combined", "common"):
        assert parse_line(line, get_grammar(name)) is None


def test_surrounding_whitespace_is_trimmed(common_line):
    record = parse_line(f"  {common_line}\n", get_grammar("common"))
    assert record["raw_line"] == common_line


def test_records_are_read_only(common_line):
    record = parse_line(common_line, get_grammar("common"))
    with pytest.raises(TypeError):
        record["status"] = 500
    with pytest.raises(TypeError):
        record.update(status=500)


def test_records_survive_copy_and_pickle(common_line, securepoint_line, specs_payload):
    records = [
        parse_line(common_line, get_grammar("common")),
        parse_line(
            securepoint_line(f"serial=X specs={specs_payload({'a': [1, 2]})}"),
            get_grammar("securepoint"),
        ),
    ]
    for record in records:
        for clone in (copy.copy(record), copy.deepcopy(record), pickle.loads(pickle.dumps(record))):
            assert type(clone) is ParsedRecord
            assert clone == record
            with pytest.raises(TypeError):
                clone["status"] = 500
