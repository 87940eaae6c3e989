"""Utility modules."""

from .logger import setup_logging
from .process import run_cmd

__all__ = ["setup_logging", "run_cmd"]
