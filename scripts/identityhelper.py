#!/usr/bin/env python3
"""Identityhelper CLI for fan-identity interoperability testing.

Reads command arguments as JSON from stdin and prints the result as JSON.
"""

import json
import sys

from fan_identity import available_commands, invoke


def main() -> None:
    """Main entry point."""
    if len(sys.argv) < 2:
        print("usage: identityhelper.py <command> < args.json", file=sys.stderr)
        sys.exit(1)

    command = sys.argv[1]
    if command not in available_commands():
        print(f"unknown command: {command}", file=sys.stderr)
        sys.exit(1)

    raw = sys.stdin.read().strip()
    try:
        args = json.loads(raw) if raw else {}
    except json.JSONDecodeError as e:
        print(f"arguments are not valid JSON: {e}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(args, dict):
        print("arguments must be a JSON object", file=sys.stderr)
        sys.exit(1)

    result = invoke(command, args)
    print(json.dumps(result.to_dict()))
    if not result.ok:
        sys.exit(2)


if __name__ == "__main__":
    main()
