"""Command-line entry point: ``python -m gridknot``."""
import sys

from gridknot.cli import main

if __name__ == "__main__":
    sys.exit(main())
