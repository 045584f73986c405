"""
check_pages package initializer.
Defines package version and exposes the run entry points and CLI.
"""
__version__ = "0.1.0"

from check_pages.engine import check_pages, start_check  # noqa: E402
from .cli import cli  # noqa: E402

__all__ = ["__version__", "check_pages", "start_check", "cli"]
