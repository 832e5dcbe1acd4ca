# accesslog/line_parser.py
import logging

from .errors import FieldDecodeError
from .grammars import Grammar
from .models import ParsedRecord

logger = logging.getLogger(__name__)


def parse_line(line: str, grammar: Grammar, line_no: int = 0) -> ParsedRecord | None:
    """
    Parse a single line with the given grammar.

    Returns None when the line does not match, or when it matches but its
    custom fields fail to decode. Never raises for a bad line; the caller
    counts the None.
    """
    line = line.strip()
    if not line:
        return None

    m = grammar.match(line)
    if not m:
        return None

    try:
        return grammar.build(m, line)
    except FieldDecodeError as e:
        logger.debug("Error formatting line %d with %s: %s", line_no, grammar.name, e)
        return None
