"""
accesslog: parse web-server access logs of partially known format.

    from accesslog import detect, stream, batches

    detect("access.log").recommended          # -> "combined"
    for record in stream("access.log"):
        ...

See accesslog.grammars for the supported line formats.
"""

from .custom_fields import decode_custom_fields, decode_specs
from .detector import detect
from .errors import AccessLogError, FieldDecodeError, SourceUnavailable, UnknownGrammar
from .grammars import REGISTRY, Grammar, all_grammars, get_grammar, register
from .line_parser import parse_line
from .models import DetectionResult, GrammarScore, ParsedRecord, RunStats
from .stream import RecordStream, batches, stream
from .timestamps import parse_timestamp

__version__ = "0.1.0"

__all__ = [
    "REGISTRY",
    "AccessLogError",
    "DetectionResult",
    "FieldDecodeError",
    "Grammar",
    "GrammarScore",
    "ParsedRecord",
    "RecordStream",
    "RunStats",
    "SourceUnavailable",
    "UnknownGrammar",
    "all_grammars",
    "batches",
    "decode_custom_fields",
    "decode_specs",
    "detect",
    "get_grammar",
    "parse_line",
    "parse_timestamp",
    "register",
    "stream",
]
