"""
Speller command line.

    python -m speller correct "at the hme locations"
    echo "at the hme locations" | python -m speller correct
    python -m speller evaluate [--file cases.tsv]
    python -m speller serve
"""
import argparse
import logging
import sys

from .config import get_settings
from .errors import SpellerError
from .evaluate import DEFAULT_CASES, evaluate, load_cases
from .models import get_searcher

logger = logging.getLogger("speller")


def cmd_correct(args) -> int:
    searcher = get_searcher()
    phrases = args.phrases or (line.strip() for line in sys.stdin)
    status = 0
    for phrase in phrases:
        if not phrase:
            continue
        try:
            print(f"Answer: {searcher.correct_phrase(phrase)}")
        except SpellerError as e:
            print(f"[error] {e}", file=sys.stderr)
            status = 1
    return status


def cmd_evaluate(args) -> int:
    cases = load_cases(args.file) if args.file else DEFAULT_CASES
    report = evaluate(get_searcher(), cases)
    for result in report.results:
        print(f"Input : {result.phrase}")
        if result.error:
            print(f"Error : {result.error}")
        else:
            print(f"Answer: {result.answer}")
        print()
    print(f"Grade: {report.grade}")
    return 0 if report.correct == report.total else 1


def cmd_serve(args) -> int:
    import uvicorn
    uvicorn.run("speller.api:app", host=args.host, port=args.port)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="speller", description="Noisy-channel phrase corrector")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("correct", help="Correct phrases (arguments, or one per stdin line)")
    p.add_argument("phrases", nargs="*")
    p.set_defaults(func=cmd_correct)

    p = sub.add_parser("evaluate", help="Grade corrections against references")
    p.add_argument("--file", help="TSV of input<TAB>reference lines")
    p.set_defaults(func=cmd_evaluate)

    p = sub.add_parser("serve", help="Run the HTTP API")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    logging.basicConfig(level=get_settings().LOG_LEVEL)

    try:
        return args.func(args)
    except OSError as e:
        logger.error(f"🔥 Could not load data files: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
