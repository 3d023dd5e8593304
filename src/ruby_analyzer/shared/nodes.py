"""
AST (Abstract Syntax Tree) Definitions

Closed set of node variants consumed by the inference engine. Any front end
(the bundled Lark parser or an external full-language parser) hands the
engine a tree built from these classes.

Visitor Pattern Support:
- Every node has an accept() method that calls the matching visit_* method
- Every node reports its variant (node_type), its children in evaluation
  order (children()) and its source location
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, TYPE_CHECKING, TypeVar

from .source_location import SourceLocation
from .errors import AnalyzerImplementationError

if TYPE_CHECKING:
    from .ast_visitor import ASTVisitor

T = TypeVar('T')


class NodeType(Enum):
    """AST node types"""
    INTEGER = "integer"
    STRING = "string"
    VARIABLE = "variable"          # local variable read
    ASSIGNMENT = "assignment"      # local variable write
    SEQUENCE = "sequence"          # statement sequence (also the program root)
    METHOD_DEF = "method_def"
    PARAMETERS = "parameters"
    PARAMETER = "parameter"


class ASTNode:
    """
    Base class for all AST nodes

    __slots__ for memory efficiency and attribute checking.
    """
    __slots__ = ('node_type', 'location')

    def __init__(self, node_type: NodeType, location: Optional[SourceLocation]):
        self.node_type = node_type
        self.location = location

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        raise AnalyzerImplementationError(
            f"accept() not implemented for {self.__class__.__name__}", self.location
        )

    def children(self) -> List[ASTNode]:
        """Child nodes in evaluation order."""
        return []

    def _fields(self) -> tuple:
        return ()

    def __eq__(self, other):
        # Structural equality including location, like the front end tests expect
        if type(self) is not type(other):
            return NotImplemented
        return self.location == other.location and self._fields() == other._fields()

    __hash__ = None

    def __repr__(self) -> str:
        fields = ", ".join(repr(f) for f in self._fields())
        return f"{self.__class__.__name__}({fields}, location={self.location!r})"


class Expression(ASTNode):
    """Base class for nodes that produce exactly one value type"""
    __slots__ = ()


class IntegerLiteral(Expression):
    """Integer literal"""
    __slots__ = ('value',)

    def __init__(self, value: int, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.INTEGER, location)
        self.value = value

    def _fields(self) -> tuple:
        return (self.value,)

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_integer_literal(self)


class StringLiteral(Expression):
    """String literal (quotes removed)"""
    __slots__ = ('value',)

    def __init__(self, value: str, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.STRING, location)
        self.value = value

    def _fields(self) -> tuple:
        return (self.value,)

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_string_literal(self)


class Variable(Expression):
    """Local variable read"""
    __slots__ = ('name',)

    def __init__(self, name: str, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.VARIABLE, location)
        self.name = name

    def _fields(self) -> tuple:
        return (self.name,)

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_variable(self)


class Assignment(Expression):
    """
    Local variable write: name = value.

    An expression: its value is the assigned value, so `x = y = 5` nests.
    """
    __slots__ = ('name', 'value')

    def __init__(self, name: str, value: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.ASSIGNMENT, location)
        self.name = name
        self.value = value

    def children(self) -> List[ASTNode]:
        return [self.value]

    def _fields(self) -> tuple:
        return (self.name, self.value)

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_assignment(self)


class Sequence(Expression):
    """Statements in source order; the value of the last one is the sequence's value"""
    __slots__ = ('statements',)

    def __init__(self, statements: List[ASTNode], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.SEQUENCE, location)
        self.statements = list(statements)

    def children(self) -> List[ASTNode]:
        return list(self.statements)

    def _fields(self) -> tuple:
        return (tuple(self.statements),)

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_sequence(self)


class Parameter(ASTNode):
    """Single method parameter"""
    __slots__ = ('name',)

    def __init__(self, name: str, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.PARAMETER, location)
        self.name = name

    def _fields(self) -> tuple:
        return (self.name,)

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_parameter(self)


class Parameters(ASTNode):
    """Method parameter list"""
    __slots__ = ('parameters',)

    def __init__(self, parameters: List[Parameter], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.PARAMETERS, location)
        self.parameters = list(parameters)

    def children(self) -> List[ASTNode]:
        return list(self.parameters)

    def _fields(self) -> tuple:
        return (tuple(self.parameters),)

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_parameters(self)


class MethodDefinition(Expression):
    """
    def name(parameters) body end

    `body` is None for an empty method. Evaluation order of the children is
    body first, then parameters.
    """
    __slots__ = ('name', 'parameters', 'body')

    def __init__(self, name: str, parameters: Optional[Parameters], body: Optional[ASTNode],
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.METHOD_DEF, location)
        self.name = name
        self.parameters = parameters if parameters is not None else Parameters([], location)
        self.body = body

    def children(self) -> List[ASTNode]:
        nodes: List[ASTNode] = []
        if self.body is not None:
            nodes.append(self.body)
        nodes.append(self.parameters)
        return nodes

    def _fields(self) -> tuple:
        return (self.name, self.parameters, self.body)

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_method_definition(self)
