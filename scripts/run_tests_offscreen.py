#!/usr/bin/env python3
"""Run the Snap test suite headless.

Usage:
  python scripts/run_tests_offscreen.py [--timeout SECONDS] [--log-level LEVEL] [--] [pytest args...]

Examples:
  python scripts/run_tests_offscreen.py tests/test_mockup.py::test_output_size_is_fixed_crop
  python scripts/run_tests_offscreen.py --log-level debug -- -k jobs
"""

from __future__ import annotations

import argparse
import os
import shlex
import subprocess
import sys


def main() -> int:
    p = argparse.ArgumentParser(description="Run pytest with Qt in offscreen mode")
    p.add_argument("--timeout", type=int, default=300, help="Maximum seconds for the whole run")
    p.add_argument("--log-level", default="warning", help="SNAP_LOG_LEVEL for the app loggers")
    p.add_argument("--verbose", action="store_true", help="Don't use -q (quiet)")
    p.add_argument("pytest_args", nargs=argparse.REMAINDER, help="Extra pytest args")
    args = p.parse_args()

    env = os.environ.copy()
    env.setdefault("QT_QPA_PLATFORM", "offscreen")
    env.setdefault("SNAP_LOG_LEVEL", args.log_level)
    # Tests must never pick up a developer's custom frame
    env.pop("SNAP_FRAME_PATH", None)

    cmd = [sys.executable, "-m", "pytest"]
    if not args.verbose:
        cmd += ["-q", "--maxfail=1"]
    cmd += [a for a in args.pytest_args if a != "--"]

    print("Running:", " ".join(shlex.quote(c) for c in cmd))
    try:
        return subprocess.run(cmd, env=env, check=False, timeout=args.timeout).returncode
    except subprocess.TimeoutExpired:
        print(f"pytest run timed out after {args.timeout} seconds", file=sys.stderr)
        return 124


if __name__ == "__main__":
    raise SystemExit(main())
