# NCSA combined log format (common + quoted referer and user agent):
#   127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] "GET / HTTP/1.0" 200 2326 "http://ref/" "Mozilla/5.0"
import re

from .common import CommonGrammar

COMBINED_RE = re.compile(
    r'^(?P<addr>\S+) \S+ (?P<user>\S+) \[(?P<time>[^\]]+)\] "(?P<request>[^"]*)" '
    r'(?P<status>\d+) (?P<bytes>\d+) "(?P<referer>[^"]*)" "(?P<agent>[^"]*)"'
)


class CombinedGrammar(CommonGrammar):
    """Same layout as common; the referer/agent groups are filled in."""

    name = "combined"
    pattern = COMBINED_RE
