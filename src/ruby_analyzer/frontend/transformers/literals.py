"""
Literal Parser - Extracted from AnalyzerTransformer
Handles parsing of literal tokens (integers, strings)
"""

from lark.lexer import Token

from ...shared import IntegerLiteral, StringLiteral, SourceLocation
from ...utils.config import STRING_QUOTE_CHAR


class LiteralParser:
    """Dedicated parser for literal values"""

    @staticmethod
    def parse_integer(token: Token, location: SourceLocation) -> IntegerLiteral:
        return IntegerLiteral(value=int(str(token)), location=location)

    @staticmethod
    def parse_string(token: Token, location: SourceLocation) -> StringLiteral:
        """Parse string literal, removing the surrounding quotes"""
        raw = str(token)
        if len(raw) >= 2 and raw.startswith(STRING_QUOTE_CHAR) and raw.endswith(STRING_QUOTE_CHAR):
            raw = raw[1:-1]
        return StringLiteral(value=raw, location=location)
