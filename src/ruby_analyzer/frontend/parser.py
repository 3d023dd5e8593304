"""
Parser

Source text → AST (root Sequence) using Lark.
"""

import logging
from pathlib import Path
from typing import Optional

from lark import Lark
from lark.exceptions import UnexpectedInput, VisitError

from ..shared.errors import AnalyzerSourceError
from ..shared.nodes import Sequence
from ..shared.source_location import SourceLocation
from ..utils.config import DEFAULT_PARSER_CACHE_FILE, DEFAULT_SOURCE_FILE
from .transformers.base import AnalyzerTransformer

logger = logging.getLogger("ruby_analyzer.frontend.parser")


class Parser:
    """
    Parser for the minimal language.

    - Takes source code, returns AST
    - Preserves source locations (1-based line/column)
    - Converts Lark errors into ParseError
    - Uses Lark native caching
    """

    def __init__(self, cache_file: str = DEFAULT_PARSER_CACHE_FILE):
        grammar_path = Path(__file__).parent / "grammar.lark"
        self.parser = Lark.open(
            str(grammar_path),
            start='program',
            parser='lalr',              # Required for caching
            cache=cache_file,
            propagate_positions=True,   # Locations on every node
            maybe_placeholders=False,
        )
        self.transformer = AnalyzerTransformer()

    def parse(self, source: str, source_file: str = DEFAULT_SOURCE_FILE) -> Sequence:
        """
        Parse source code to AST.

        Returns: root Sequence holding the top-level statements
        """
        self.transformer.current_file = source_file
        try:
            tree = self.parser.parse(source)
        except UnexpectedInput as e:
            location = SourceLocation(
                file=source_file,
                line=e.line,
                column=e.column,
                start=e.pos_in_stream or 0,
            ) if e.line not in (None, -1) else None
            logger.debug(f"syntax error in {source_file}: {e}")
            raise ParseError(f"Parse error: {e}", source_file, location) from e

        try:
            return self.transformer.transform(tree)
        except VisitError as e:
            raise e.orig_exc from e


class ParseError(AnalyzerSourceError):
    """Parse error with source location"""
    def __init__(self, message: str, source_file: str, location: Optional[SourceLocation] = None):
        super().__init__(message, location)
        self.source_file = source_file
