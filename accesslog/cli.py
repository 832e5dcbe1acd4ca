import argparse
import json
import logging
import sys
from contextlib import nullcontext
from datetime import datetime
from pathlib import Path

from . import config
from .detector import detect
from .errors import SourceUnavailable, UnknownGrammar
from .grammars import REGISTRY
from .stream import batches, stream

logger = logging.getLogger("accesslog")


def _json_default(value):
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="accesslog",
        description="Parse a web-server access log and write the records as JSON.",
    )
    parser.add_argument("file", help="Path to the log file (.gz is read transparently)")
    parser.add_argument(
        "--pattern",
        choices=list(REGISTRY),
        help="Force a grammar instead of auto-detecting it",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=config.BATCH_SIZE,
        help=f"Records pulled per batch (default: {config.BATCH_SIZE})",
    )
    parser.add_argument(
        "--limit",
        type=_non_negative_int,
        default=0,
        help="Maximum number of records to write (default: 0, no limit)",
    )
    parser.add_argument(
        "--output",
        choices=["json", "jsonl"],
        default="json",
        help="json array or one JSON object per line (default: json)",
    )
    parser.add_argument("--out", type=Path, help="Output file (default: stdout)")
    parser.add_argument(
        "--detect",
        action="store_true",
        help="Only print the format detection result",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser


def write_records(records, out, output: str, batch_size: int, limit: int | None) -> int:
    """Write records to `out`; stop pulling once `limit` is reached."""
    count = 0
    if output == "json":
        out.write("[\n")
    for batch in batches(records, batch_size):
        if limit is not None:
            batch = batch[: limit - count]
        for record in batch:
            text = json.dumps(record, default=_json_default, ensure_ascii=False)
            if output == "json":
                out.write(",\n" if count else "")
            out.write(text)
            if output == "jsonl":
                out.write("\n")
            count += 1
        if limit is not None and count >= limit:
            logger.warning("The limit of %d records has been reached.", limit)
            break
    if output == "json":
        out.write("\n]\n")
    return count


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else config.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.batch_size < 1:
        logger.error("--batch-size must be at least 1")
        return 2

    try:
        if args.detect:
            result = detect(args.file)
            print(json.dumps(result.model_dump(mode="json"), indent=2))
            return 0

        logger.info("Parsing %s...", args.file)
        with stream(args.file, args.pattern) as records:
            target = args.out.open("w", encoding="utf-8") if args.out else nullcontext(sys.stdout)
            with target as out:
                count = write_records(
                    records, out, args.output, args.batch_size, args.limit or None
                )
            stats = records.stats
    except SourceUnavailable as e:
        logger.error("%s", e)
        return 1
    except UnknownGrammar as e:
        logger.error("%s", e)
        return 2

    logger.info(
        "Processed: %d records (lines seen: %d, parsed: %d, failed: %d)",
        count,
        stats.lines_seen,
        stats.parsed,
        stats.failed,
    )
    if args.out:
        logger.info("JSON saved to: %s", args.out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
