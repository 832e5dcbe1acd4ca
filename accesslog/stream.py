"""
Lazy record streams over a line source.

    with stream("access.log") as records:
        for batch in batches(records, 500):
            sink.write(batch)
        print(records.stats)

One traversal per call: the grammar is detected (or forced) once, fixed for
the rest of that traversal, and counters live on the stream object.
"""

import itertools
import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import ExitStack

from . import config
from .detector import resolve_sample_size, sample, score
from .grammars import Grammar, get_grammar
from .line_parser import parse_line
from .models import DetectionResult, ParsedRecord, RunStats
from .sources import LineSource, open_source

logger = logging.getLogger(__name__)

FailureCallback = Callable[[int, str], None]


class RecordStream:
    """
    Pull-based iterator of ParsedRecords for one traversal of a source.

    Unparsable lines are skipped and only show up in `stats.failed` (and
    through `on_failure`, when given).
    """

    def __init__(
        self,
        source: LineSource,
        grammar: str | None = None,
        sample_size: int | None = None,
        default: str | None = None,
        on_failure: FailureCallback | None = None,
    ):
        # Hard errors surface here, before any line is read.
        self.grammar: Grammar | None = get_grammar(grammar) if grammar else None
        self._default = default or config.DEFAULT_GRAMMAR
        if self.grammar is None:
            get_grammar(self._default)
        self._sample_size = resolve_sample_size(sample_size)
        self._on_failure = on_failure

        self.stats = RunStats()
        self.detection: DetectionResult | None = None

        self._stack = ExitStack()
        self._lines: Iterator[str] = self._stack.enter_context(open_source(source))
        self._started = False
        self._closed = False

    def __iter__(self) -> "RecordStream":
        return self

    def __next__(self) -> ParsedRecord:
        if self._closed:
            raise StopIteration
        if not self._started:
            self._start()

        for line in self._lines:
            self.stats.lines_seen += 1
            line_no = self.stats.lines_seen
            if line_no % config.PROGRESS_EVERY == 0:
                logger.debug(
                    "Processed %d lines, parsed: %d, errors: %d",
                    line_no,
                    self.stats.parsed,
                    self.stats.failed,
                )

            if not line.strip():
                continue

            record = parse_line(line, self.grammar, line_no)
            if record is not None:
                self.stats.parsed += 1
                return record
            self._fail(line_no, line)

        self._finish()
        raise StopIteration

    def _start(self) -> None:
        self._started = True
        if self.grammar is None:
            picked, consumed = sample(self._lines, self._sample_size)
            self.detection = score(picked, self._default)
            self.grammar = get_grammar(self.detection.recommended)
            logger.info("Auto-detected pattern: %s", self.grammar.name)
            # replay what sampling pulled off the source
            self._lines = itertools.chain(consumed, self._lines)

    def _fail(self, line_no: int, line: str) -> None:
        self.stats.failed += 1
        if self.stats.failed <= config.MAX_LOGGED_FAILURES:
            logger.debug("Failed to parse line %d: %.120s", line_no, line.strip())
        if self._on_failure is not None:
            self._on_failure(line_no, line)

    def _finish(self) -> None:
        logger.info(
            "Final stats - Total lines: %d, Parsed: %d, Errors: %d",
            self.stats.lines_seen,
            self.stats.parsed,
            self.stats.failed,
        )
        self.close()

    def close(self) -> None:
        """Release the source. Safe to call more than once."""
        if not self._closed:
            self._closed = True
            self._stack.close()

    def __enter__(self) -> "RecordStream":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def stream(
    source: LineSource,
    grammar: str | None = None,
    *,
    sample_size: int | None = None,
    default: str | None = None,
    on_failure: FailureCallback | None = None,
) -> RecordStream:
    """
    Open `source` and return a lazy stream of parsed records.

    `grammar` forces a registered grammar; without it the grammar is
    detected from the first `sample_size` non-empty lines on the first pull.
    Raises UnknownGrammar or SourceUnavailable immediately.
    """
    return RecordStream(
        source,
        grammar=grammar,
        sample_size=sample_size,
        default=default,
        on_failure=on_failure,
    )


def batches(records: Iterable[ParsedRecord], size: int) -> Iterator[list[ParsedRecord]]:
    """Regroup records into lists of `size`; the last one may be shorter."""
    if size < 1:
        raise ValueError(f"batch size must be >= 1, got {size}")
    it = iter(records)
    while True:
        batch = list(itertools.islice(it, size))
        if not batch:
            return
        yield batch
