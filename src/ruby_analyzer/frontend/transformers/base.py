"""
AST Transformer
Converts the Lark parse tree to analyzer AST nodes
"""

import logging
from typing import Any, Optional

from lark import Transformer, v_args
from lark.lexer import Token
from typing_extensions import TypeAlias

from ...shared import (
    ASTNode, Assignment, Expression, MethodDefinition, Parameter, Parameters,
    Sequence, SourceLocation, Variable, AnalyzerImplementationError,
)
from .literals import LiteralParser

# Lark's Meta object carries line/column when propagate_positions=True
LarkMeta: TypeAlias = Any

logger: logging.Logger = logging.getLogger(__name__)


@v_args(inline=True, meta=True)
class AnalyzerTransformer(Transformer):
    """
    Lark tree → AST.

    Every grammar rule has a method here; a rule without one is a bug in the
    grammar/transformer pair and fails loudly instead of leaking a Tree.
    """

    def __init__(self) -> None:
        super().__init__()
        self.current_file: str = ""  # Must be set by parser before use

    def __default__(self, data, children, meta):
        raise AnalyzerImplementationError(
            f"Missing transformer method for grammar rule '{data}'"
        )

    def _extract_location(self, meta: LarkMeta) -> Optional[SourceLocation]:
        """Extract location from Lark meta object (None for empty rules)"""
        if not self.current_file:
            raise AnalyzerImplementationError(
                "Parser bug: current_file not set before transforming"
            )
        if meta is None or getattr(meta, "empty", True):
            return None
        return SourceLocation(
            file=self.current_file,
            line=meta.line,
            column=meta.column,
            start=meta.start_pos,
            end=meta.end_pos,
            end_line=meta.end_line,
            end_column=meta.end_column,
        )

    def _token_location(self, token: Token) -> SourceLocation:
        return SourceLocation(
            file=self.current_file,
            line=token.line,
            column=token.column,
            start=token.start_pos,
            end=token.end_pos,
            end_line=token.end_line,
            end_column=token.end_column,
        )

    # =========================================================================
    # PROGRAM STRUCTURE
    # =========================================================================

    def program(self, meta: LarkMeta, *statements: ASTNode) -> Sequence:
        location = self._extract_location(meta)
        if location is None:
            location = SourceLocation(file=self.current_file, line=1, column=1)
        return Sequence(statements=list(statements), location=location)

    def body(self, meta: LarkMeta, *statements: ASTNode) -> Optional[Sequence]:
        """Empty body → None (method without a body)"""
        if not statements:
            return None
        return Sequence(statements=list(statements), location=self._extract_location(meta))

    # =========================================================================
    # METHOD DEFINITIONS
    # =========================================================================

    def method_def(self, meta: LarkMeta, name: Token, parameters: Parameters,
                   body: Optional[Sequence]) -> MethodDefinition:
        """Grammar: 'def' NAME parameters _SEP+ body 'end' - keywords filtered"""
        location = self._extract_location(meta)
        if parameters.location is None:
            parameters.location = self._token_location(name)
        return MethodDefinition(
            name=str(name),
            parameters=parameters,
            body=body,
            location=location,
        )

    def parameters(self, meta: LarkMeta, *names: Token) -> Parameters:
        params = [Parameter(name=str(n), location=self._token_location(n)) for n in names]
        return Parameters(parameters=params, location=self._extract_location(meta))

    # =========================================================================
    # EXPRESSIONS
    # =========================================================================

    def assignment(self, meta: LarkMeta, name: Token, value: Expression) -> Assignment:
        """Grammar: NAME '=' expression - '=' filtered"""
        return Assignment(name=str(name), value=value, location=self._extract_location(meta))

    def variable(self, meta: LarkMeta, name: Token) -> Variable:
        return Variable(name=str(name), location=self._extract_location(meta))

    def integer(self, meta: LarkMeta, token: Token):
        return LiteralParser.parse_integer(token, self._extract_location(meta))

    def string(self, meta: LarkMeta, token: Token):
        return LiteralParser.parse_string(token, self._extract_location(meta))
