"""Frozen-executable entry point for the CatPoint panel."""

import sys
import traceback

from catpoint.dev.run_app import main


def run() -> int:
    try:
        return main(sys.argv[1:])
    except Exception:
        # Keep the console open so a double-clicked build shows the crash.
        traceback.print_exc()
        input("\nPress Enter to exit...")
        return 1


if __name__ == "__main__":
    sys.exit(run())
