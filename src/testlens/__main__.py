"""Allow running testlens as a module: python -m testlens."""

from testlens.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
