"""Mode-specific scanners for the orger lexer."""

from orger.lexer.scanners.block import BlockScannerMixin
from orger.lexer.scanners.bracketed import BracketedScannerMixin

__all__ = [
    "BlockScannerMixin",
    "BracketedScannerMixin",
]
