"""Classify search terms from the command line, one JSON line per input.

    searchguard-classify "hello world" "<script>alert(1)</script>"
    printf 'a\\nb\\n' | searchguard-classify --fail-on-reject
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Iterable, Iterator, List, Optional, Sequence, TextIO

from searchguard.classifier import DEFAULT_MAX_LENGTH, ClassifierConfig, classify
from searchguard.sanitizers.markup import get_sanitizer


def _build_config(args: argparse.Namespace) -> ClassifierConfig:
    sanitizer = None if args.no_sanitizer else get_sanitizer("bleach")
    return ClassifierConfig(sanitizer=sanitizer, max_length=args.max_length)


def _inputs(terms: Sequence[str], stdin: TextIO) -> Iterator[str]:
    if terms:
        yield from terms
        return
    for line in stdin:
        yield line.rstrip("\r\n")


def _emit(terms: Iterable[str], config: ClassifierConfig, out: TextIO) -> int:
    rejected = 0
    for term in terms:
        result = classify(term, config)
        if not result.safe:
            rejected += 1
        row = {
            "input_length": len(term),
            "verdict": result.verdict.value,
            "reason": result.reason.value,
            "message": result.message,
        }
        out.write(json.dumps(row) + "\n")
    return rejected


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="searchguard-classify")
    parser.add_argument("terms", nargs="*", help="search terms; read stdin lines if omitted")
    parser.add_argument("--max-length", type=int, default=DEFAULT_MAX_LENGTH)
    parser.add_argument(
        "--no-sanitizer",
        action="store_true",
        help="skip the reference sanitizer divergence check",
    )
    parser.add_argument(
        "--fail-on-reject",
        action="store_true",
        help="exit with status 1 if any input is rejected",
    )
    args = parser.parse_args(argv)
    if args.max_length < 1:
        parser.error("--max-length must be >= 1")

    config = _build_config(args)
    rejected = _emit(_inputs(args.terms, sys.stdin), config, sys.stdout)
    if args.fail_on_reject and rejected:
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
