"""Command resolution classification."""

from .command_classifier import (
    CHAIN_SEPARATOR,
    CommandClassifier,
    build_detection_chain,
    classify,
    strip_quotes,
)

__all__ = [
    "CHAIN_SEPARATOR",
    "CommandClassifier",
    "build_detection_chain",
    "classify",
    "strip_quotes",
]
