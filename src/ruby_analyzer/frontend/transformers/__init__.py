"""
AST Transformers
================

Lark parse tree → analyzer AST.
"""

from .base import AnalyzerTransformer
from .literals import LiteralParser

__all__ = [
    'AnalyzerTransformer',
    'LiteralParser',
]
