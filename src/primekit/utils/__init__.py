"""Utility modules for primekit."""

from primekit.utils.log import setup_logger

__all__ = [
    "setup_logger",
]
