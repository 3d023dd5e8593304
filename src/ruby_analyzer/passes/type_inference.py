"""
Type Inference Pass

Walks one tree bottom-up. Every expression handler pushes exactly one type
onto the environment's value stack, on every exit path: a failed lookup
pushes UNKNOWN. Parents pop what their children pushed.

Traversal order is post-order for expressions and source order for
sequences.
"""

import logging

from .base import BasePass
from ..analysis.environment import Environment
from ..shared.ast_visitor import ASTVisitor
from ..shared.errors import AnalyzerImplementationError
from ..shared.nodes import (
    ASTNode, Assignment, IntegerLiteral, MethodDefinition, Parameter,
    Parameters, Sequence, StringLiteral, Variable,
)
from ..shared.types import INTEGER, NIL, STRING, SYMBOL, UNKNOWN, MethodType, Type

logger = logging.getLogger("ruby_analyzer.passes.type_inference")


class TypeInferencePass(BasePass):
    """
    Infer types for one tree.

    Fills env with instance bindings, method signatures and errors, and
    returns the inferred type of the root.
    """

    def run(self, tree: ASTNode, env: Environment) -> Type:
        inferencer = TypeInferencer(env)
        root_type = inferencer.infer(tree)
        logger.debug(
            f"inferred {root_type} for root; {len(env.instances)} binding(s), "
            f"{len(env.errors)} error(s)"
        )
        return root_type


class TypeInferencer(ASTVisitor[None]):
    """
    Value-stack type inferencer.

    Handlers return nothing: results travel on env.value_stack.
    """

    def __init__(self, env: Environment):
        self.env = env

    def infer(self, node: ASTNode) -> Type:
        """Visit `node` and pop the single type it pushed."""
        depth = self.env.value_depth
        self.visit(node)
        ty = self.env.pop_value()
        if self.env.value_depth != depth:
            raise AnalyzerImplementationError(
                f"value stack depth {self.env.value_depth} after visiting {node.node_type}, expected {depth}",
                node.location,
            )
        return ty

    # =========================================================================
    # Leaves
    # =========================================================================

    def visit_integer_literal(self, node: IntegerLiteral) -> None:
        self.env.push_value(INTEGER)

    def visit_string_literal(self, node: StringLiteral) -> None:
        self.env.push_value(STRING)

    def visit_variable(self, node: Variable) -> None:
        ty = self.env.lookup(node.name)
        if ty is None:
            self.env.reporter.report_undefined_variable(node.name, node.location)
            ty = UNKNOWN
        self.env.push_value(ty)

    # =========================================================================
    # Expressions with children
    # =========================================================================

    def visit_assignment(self, node: Assignment) -> None:
        self.visit(node.value)
        ty = self.env.pop_value()
        self.env.bind(node.name, ty, node.location)
        logger.debug(f"bound {node.name} : {ty} (scope depth {self.env.scope_depth})")
        # The assignment's own value is the assigned value
        self.env.push_value(ty)

    def visit_sequence(self, node: Sequence) -> None:
        if not node.statements:
            self.env.push_value(NIL)
            return
        last = len(node.statements) - 1
        for index, statement in enumerate(node.statements):
            self.visit(statement)
            if index != last:
                self.env.pop_value()

    def visit_method_definition(self, node: MethodDefinition) -> None:
        with self.env.scope(node.name):
            if node.body is not None:
                self.visit(node.body)
            else:
                self.env.push_value(NIL)
            return_type = self.env.pop_value()

        # Parameters are visited after the body and do not reach the signature
        self.visit(node.parameters)

        self.env.define_method(node.name, MethodType((), return_type))
        logger.debug(f"defined {self.env.current_object}#{node.name}: () -> {return_type}")
        self.env.push_value(SYMBOL)

    # =========================================================================
    # Parameters (side effects only, push nothing)
    # =========================================================================

    def visit_parameters(self, node: Parameters) -> None:
        for parameter in node.parameters:
            self.visit(parameter)

    def visit_parameter(self, node: Parameter) -> None:
        logger.debug(f"parameter {node.name} (untyped)")
