"""
AST Visitor Pattern

Abstract visitor with one visit_* method per NodeType. Every handler is
abstract: the node variant set is closed, so a visitor that forgets a
variant cannot be instantiated at all.

Usage:
    class MyAnalyzer(ASTVisitor[Result]):
        def visit_integer_literal(self, node) -> Result:
            return Result(node.value)
        ...

    result = MyAnalyzer().visit(tree)
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar, TYPE_CHECKING

from .errors import AnalyzerImplementationError
from .nodes import ASTNode

if TYPE_CHECKING:
    from .nodes import (
        IntegerLiteral, StringLiteral, Variable, Assignment, Sequence,
        MethodDefinition, Parameters, Parameter,
    )

T = TypeVar('T')


class ASTVisitor(ABC, Generic[T]):
    """
    Base AST visitor.

    visit() is the single dispatch entry point; it fails fast on anything
    that is not an ASTNode instead of skipping it.
    """

    def visit(self, node: Any) -> T:
        if not isinstance(node, ASTNode):
            raise AnalyzerImplementationError(
                f"{self.__class__.__name__} cannot visit {type(node).__name__!s} "
                f"value {node!r}: not an AST node"
            )
        return node.accept(self)

    # Leaves
    @abstractmethod
    def visit_integer_literal(self, node: 'IntegerLiteral') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_string_literal(self, node: 'StringLiteral') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_variable(self, node: 'Variable') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_parameter(self, node: 'Parameter') -> T:
        raise NotImplementedError

    # Nodes with children
    @abstractmethod
    def visit_assignment(self, node: 'Assignment') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_sequence(self, node: 'Sequence') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_method_definition(self, node: 'MethodDefinition') -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_parameters(self, node: 'Parameters') -> T:
        raise NotImplementedError
