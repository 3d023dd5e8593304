"""
Shared components: source locations, nodes, types, bindings, errors.
"""

from .source_location import SourceLocation
from .errors import (
    UndefinedVariable, TypecheckError, ErrorReporter,
    AnalyzerError, AnalyzerSourceError, AnalyzerImplementationError,
)
from .types import (
    Type, TypeKind, AliasType, MethodType, SignatureType,
    INTEGER, STRING, NIL, SYMBOL, UNKNOWN,
)
from .nodes import (
    ASTNode, Expression, NodeType,
    IntegerLiteral, StringLiteral, Variable, Assignment, Sequence,
    MethodDefinition, Parameters, Parameter,
)
from .scope import Binding, Bindings, InstanceTable, LocalScope, ScopeStack
from .builtins import default_classes, default_objects
from .ast_visitor import ASTVisitor
