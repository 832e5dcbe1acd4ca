# accesslog/grammars/base.py
import re
from abc import ABC, abstractmethod

from ..errors import UnknownGrammar
from ..models import ParsedRecord


class Grammar(ABC):
    """
    One access-log line format: a regex plus the layout that turns its
    named groups into a ParsedRecord.
    """

    name: str
    pattern: re.Pattern

    def match(self, line: str) -> re.Match | None:
        return self.pattern.match(line)

    def matches(self, line: str) -> bool:
        """Syntactic check only, used for detection."""
        return self.pattern.match(line) is not None

    @abstractmethod
    def build(self, m: re.Match, line: str) -> ParsedRecord:
        """
        Map a successful match to a record.
        May raise FieldDecodeError; the line parser turns that into a failed line.
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


# Ordered: registration order is the tie-break order for detection.
REGISTRY: dict[str, Grammar] = {}


def register(grammar: Grammar) -> Grammar:
    """Register a grammar instance under its name."""
    REGISTRY[grammar.name] = grammar
    return grammar


def get_grammar(name: str) -> Grammar:
    try:
        return REGISTRY[name]
    except KeyError:
        raise UnknownGrammar(name) from None


def all_grammars() -> list[Grammar]:
    return list(REGISTRY.values())


def optional(value: str | None) -> str | None:
    """'-' and '' mean absent."""
    if value is None or value in ("-", ""):
        return None
    return value


def split_request(request: str) -> dict[str, str]:
    """Split 'GET /path HTTP/1.1' on the first two spaces; missing parts are ''."""
    parts = request.split(" ", 2)
    return {
        "method": parts[0] if len(parts) >= 1 else "",
        "uri": parts[1] if len(parts) >= 2 else "",
        "protocol": parts[2] if len(parts) >= 3 else "",
        "full": request,
    }
