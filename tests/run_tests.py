#!/usr/bin/env python3
"""
Test runner script for the Quick Folder Launcher test suite
"""

import os
import sys
import subprocess
import argparse
from pathlib import Path

# Add parent directory to path
parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

COVERED_PACKAGES = ["services", "models", "utils", "config", "core", "commands"]


def build_command(args) -> list:
    """Translate runner options into a pytest command line"""
    target = args.test_path or os.path.dirname(__file__)
    if args.test_class and args.test_path:
        target = f"{args.test_path}::{args.test_class}"

    cmd = [sys.executable, "-m", "pytest", "-v" if args.verbose else "-q"]

    if args.coverage:
        cmd.extend(f"--cov={package}" for package in COVERED_PACKAGES)
        cmd.extend(["--cov-report=html", "--cov-report=term-missing"])
    if args.markers:
        cmd.extend(["-m", args.markers])
    if args.keyword:
        cmd.extend(["-k", args.keyword])
    if args.failed_first:
        cmd.append("--failed-first")
    if args.last_failed:
        cmd.append("--last-failed")

    cmd.append(target)
    cmd.extend(["--color=yes", "--durations=10"])
    return cmd


def list_tests():
    """List all available test files"""
    test_files = sorted(Path(__file__).parent.glob("test_*.py"))

    print("Available test files:")
    print("-" * 80)
    for test_file in test_files:
        print(f"  {test_file.name}")

    print(f"\nTotal: {len(test_files)} test files")


def main():
    parser = argparse.ArgumentParser(description="Run the Quick Folder Launcher test suite")
    parser.add_argument(
        "test_path",
        nargs="?",
        help="Specific test file or directory to run (default: all tests)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("-c", "--coverage", action="store_true", help="Enable coverage reporting")
    parser.add_argument("-l", "--list", action="store_true", help="List available test files")
    parser.add_argument(
        "-m", "--markers", help="Run tests matching given mark expression (e.g., 'not slow')"
    )
    parser.add_argument(
        "--class", dest="test_class", help="Run specific test class (use with test file)"
    )
    parser.add_argument("-k", dest="keyword", help="Run tests matching keyword expression")
    parser.add_argument("--failed-first", action="store_true", help="Run failed tests first")
    parser.add_argument(
        "--last-failed", action="store_true", help="Run only tests that failed last time"
    )

    args = parser.parse_args()

    if args.list:
        list_tests()
        return 0

    cmd = build_command(args)
    print(f"Running command: {' '.join(cmd)}")
    print("-" * 80)

    result = subprocess.run(cmd, cwd=parent_dir)

    if args.coverage and result.returncode == 0:
        print("\nCoverage report generated in htmlcov/index.html")

    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
