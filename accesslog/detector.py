import logging
from collections.abc import Iterable, Iterator

from . import config
from .grammars import all_grammars, get_grammar
from .models import DetectionResult, GrammarScore
from .sources import LineSource, open_source

logger = logging.getLogger(__name__)


def resolve_sample_size(sample_size: int | None) -> int:
    """None means the configured default; anything below 1 is rejected."""
    size = config.SAMPLE_SIZE if sample_size is None else sample_size
    if size < 1:
        raise ValueError(f"sample size must be >= 1, got {size}")
    return size


def sample(lines: Iterator[str], size: int) -> tuple[list[str], list[str]]:
    """
    Read from `lines` until `size` trimmed non-empty lines are collected.

    Returns (sample, consumed) where `consumed` holds every raw line that was
    pulled off the iterator, blank ones included, so a caller can replay them.
    """
    picked: list[str] = []
    consumed: list[str] = []
    while len(picked) < size:
        line = next(lines, None)
        if line is None:
            break
        consumed.append(line)
        trimmed = line.strip()
        if trimmed:
            picked.append(trimmed)
    return picked, consumed


def score(sample_lines: list[str], default: str | None = None) -> DetectionResult:
    """
    Score every registered grammar against the sample.

    The grammar with the strictly highest match count wins; the earliest
    registered keeps a tie. With no match anywhere, `default` is recommended.
    """
    default = default or config.DEFAULT_GRAMMAR
    get_grammar(default)

    count = len(sample_lines)
    results: dict[str, GrammarScore] = {}
    for grammar in all_grammars():
        matched = [i for i, line in enumerate(sample_lines, start=1) if grammar.matches(line)]
        results[grammar.name] = GrammarScore(
            matches=len(matched),
            percentage=round(len(matched) / count * 100, 2) if count else 0.0,
            matched_lines=matched[:2],
        )

    best, best_score = default, 0
    for name, result in results.items():
        if result.matches > best_score:
            best, best_score = name, result.matches

    logger.debug(
        "Detection over %d sample lines recommends %s (%d matches)", count, best, best_score
    )
    return DetectionResult(sample_lines=sample_lines, pattern_results=results, recommended=best)


def detect(
    source: LineSource | Iterable[str],
    sample_size: int | None = None,
    default: str | None = None,
) -> DetectionResult:
    """
    Sample the head of `source` and recommend a grammar.

    `source` is a path (plain or .gz) or any iterable of lines.
    Raises SourceUnavailable if the path cannot be read, UnknownGrammar if
    `default` is not registered.
    """
    size = resolve_sample_size(sample_size)
    with open_source(source) as lines:
        picked, _ = sample(lines, size)
    return score(picked, default)
