"""Version command handler for the duoload CLI."""

import sys

from ... import __version__


def handle_version(_):
    """Show version information."""
    print(f"duoload v{__version__}")
    print(f"Python: {sys.version.split()[0]}")
    print(f"Platform: {sys.platform}")
