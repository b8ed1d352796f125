#!/usr/bin/env python3
"""
Run a day planner tool from a JSON request file.

Usage: python3 optimize_day.py <request_file.json>

The request file holds {"tool": "<tool name>", "arguments": {...}}; the
tool result is printed as JSON to stdout. Tool names are listed in
planner_tools.TOOLS.

Security: This script only reads from the specified JSON file and writes
to stdout. It does not accept any code or commands as input.
"""

import json
import logging
import sys

# Assumes api/_python is in path or script is run from there
from dayplanner.types import ValidationError
from planner_tools import invoke_tool


def main() -> None:
    logging.basicConfig(level=logging.WARNING, stream=sys.stderr)

    if len(sys.argv) != 2:
        print(json.dumps({"error": "Usage: optimize_day.py <request_file.json>"}))
        sys.exit(1)

    request_file = sys.argv[1]

    try:
        with open(request_file) as f:
            data = json.load(f)

        result = invoke_tool(data["tool"], data.get("arguments", {}))

        print(json.dumps(result))

    except FileNotFoundError:
        print(json.dumps({"error": f"Request file not found: {request_file}"}))
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON in request file: {e}"}))
        sys.exit(1)
    except KeyError as e:
        print(json.dumps({"error": f"Missing required field: {e}"}))
        sys.exit(1)
    except ValidationError as e:
        print(json.dumps({"error": f"Invalid request: {e}", "activity_id": e.activity_id, "field": e.field}))
        sys.exit(1)
    except Exception as e:
        print(json.dumps({"error": f"Day planning failed: {e}"}))
        sys.exit(1)


if __name__ == "__main__":
    main()
