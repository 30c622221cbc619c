#!/usr/bin/env python3
"""
Quick Test Script
Evaluates the initial position with the configured engine
"""

import sys
import logging

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def main():
    """Quick test of the evaluator"""
    print("=" * 60)
    print("CHESS POSITION EVALUATOR - QUICK TEST")
    print("=" * 60)
    print()

    from evaluator import BatchEvaluator, EvaluatorError, load_config

    config = load_config()

    print("-" * 60)
    print("1. ENGINE")
    print("-" * 60)

    try:
        engine_path = config.resolve_engine_path()
    except FileNotFoundError as e:
        print(f"✗ {e}")
        print("  Set engine_path in config/evaluator.json")
        return 1

    print(f"✓ Engine: {engine_path}")
    print(f"  Depth {config.depth}, MultiPV {config.multipv}, "
          f"Threads {config.threads}, Hash {config.hash_mb} MB")

    print("\n" + "-" * 60)
    print("2. EVALUATION (startpos)")
    print("-" * 60)

    try:
        reports = BatchEvaluator(config).evaluate(["startpos"])
    except EvaluatorError as e:
        print(f"✗ Evaluation failed: {e}")
        return 1

    report = reports[0]
    for rank, variation in enumerate(report.variations, 1):
        print(f"  {rank}. {variation.san or variation.move:<8} {variation.evaluation:+.2f}")

    print("\n" + "=" * 60)
    print(f"TEST COMPLETE: {len(report.variations)}/{config.multipv} lines reported")
    print("=" * 60)
    return 0


if __name__ == '__main__':
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
