#!/usr/bin/env python
"""
Simple Test Runner for MemberTree
=================================

Runs the test suite with the options the project uses day to day.

Usage:
    python run_tests.py           # Run all tests
    python run_tests.py --cov     # Run with coverage report
"""

import subprocess
import sys
import argparse
from pathlib import Path


def run_tests(with_coverage=False, extra=None):
    """Run the test suite."""
    cmd = [
        sys.executable, "-m", "pytest",
        "--tb=short",               # Short traceback format
        "--durations=10",           # Show 10 slowest tests
        "-v"                        # Verbose output
    ]

    if with_coverage:
        cmd.extend(["--cov=membertree", "--cov-report=term-missing"])

    if extra:
        cmd.extend(extra)

    print("Running MemberTree tests...")
    print("=" * 60)

    result = subprocess.run(cmd, cwd=Path(__file__).parent)
    return result.returncode


def main():
    parser = argparse.ArgumentParser(description="Run MemberTree tests")
    parser.add_argument("--cov", action="store_true",
                        help="Report coverage (requires pytest-cov)")
    args, extra = parser.parse_known_args()

    return run_tests(with_coverage=args.cov, extra=extra)


if __name__ == "__main__":
    sys.exit(main())
