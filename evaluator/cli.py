"""
Command Line Interface for Batch Position Evaluation
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .batch import BatchEvaluator
from .config import load_config
from .errors import EvaluatorError
from .models import batch_to_dicts
from .results import save_batch

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None):
    """Log to stderr (stdout carries the JSON document) and optionally to a file"""
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
    )

    if quiet:
        logging.getLogger("evaluator.engine_output").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Evaluate chess positions with a UCI engine and print the top lines as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument('positions', nargs='*',
                        help="Position notations (FEN, or 'startpos'), in report order")
    parser.add_argument('--config', help='Path to evaluator config JSON (default: config/evaluator.json)')
    parser.add_argument('--engine', dest='engine_path', help='Path to the UCI engine executable')
    parser.add_argument('--depth', type=int, help='Fixed search depth')
    parser.add_argument('--multipv', type=int, help='Number of candidate lines per position')
    parser.add_argument('--threads', type=int, help='Engine worker threads')
    parser.add_argument('--hash', dest='hash_mb', type=int, help='Engine hash size (MB)')
    parser.add_argument('--lenient-diagnostics', action='store_true',
                        help='Warn on unknown engine diagnostics instead of failing')
    parser.add_argument('--save', metavar='NAME', help='Also save the result to results/NAME.json')
    parser.add_argument('--log-file', help='Also write logs to this file')
    parser.add_argument('--quiet', action='store_true', help='Do not mirror raw engine output')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    try:
        config = load_config(args.config).with_overrides(
            engine_path=args.engine_path,
            depth=args.depth,
            multipv=args.multipv,
            threads=args.threads,
            hash_mb=args.hash_mb,
            strict_diagnostics=False if args.lenient_diagnostics else None,
        )

        reports = BatchEvaluator(config).evaluate(args.positions)
    except KeyboardInterrupt:
        logger.error("Interrupted by user")
        return 1
    except (EvaluatorError, FileNotFoundError) as e:
        logger.error(f"Error: {e}")
        return 1

    json.dump(batch_to_dicts(reports), sys.stdout, indent=2)
    sys.stdout.write("\n")
    sys.stdout.flush()

    if args.save:
        save_batch(reports, args.save)

    return 0


if __name__ == '__main__':
    sys.exit(main())
