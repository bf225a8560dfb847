"""
bundlegen - Generates I18N helper classes from Java resource bundles.
"""

import sys

from .main import main as run_main


def main() -> None:
    """Console entry point."""
    sys.exit(run_main())


__all__ = ["main"]
