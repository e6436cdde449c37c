from __future__ import annotations

import sys

from mdexport.app import run_app


def main() -> int:
    """Module entrypoint for `python -m mdexport.main` or `python -m mdexport` (via __main__)."""
    return run_app(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
