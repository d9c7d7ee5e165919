from __future__ import annotations
import sys
from mdtabs.app import run_app


def main() -> int:
    """Module entrypoint for `python -m mdtabs` and the `mdtabs` console script."""
    return run_app(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
