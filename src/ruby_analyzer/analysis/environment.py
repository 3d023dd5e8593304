"""
Analysis Environment

All mutable state of one analysis run:
- objects:     object name → signature table (root object pre-seeded)
- classes:     built-in class name → signature table
- instances:   flat top-level bindings (last write wins)
- scopes:      stack of local frames, one per callable body being visited
- value_stack: carries each expression's inferred type up to its parent
- reporter:    append-only error log

Writes and reads go to the top scope frame while a body is being visited,
and to the flat instance table otherwise.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..shared.builtins import default_classes, default_objects
from ..shared.errors import AnalyzerImplementationError, ErrorReporter, TypecheckError
from ..shared.scope import Binding, Bindings, InstanceTable, LocalScope, ScopeStack
from ..shared.source_location import SourceLocation
from ..shared.types import AliasType, MethodType, SignatureType, Type
from ..utils.config import ROOT_OBJECT_NAME

logger = logging.getLogger(__name__)

# Table-builder shorthand for one method: ((arg, ...), "Ret")
_MethodSpec = Tuple[Sequence[str], str]


class Environment:
    """
    Analysis state owned by exactly one run.

    Build a fresh one per analysis; the default tables are constructed anew
    for each instance.
    """

    def __init__(
        self,
        objects: Optional[Dict[str, SignatureType]] = None,
        classes: Optional[Dict[str, SignatureType]] = None,
        source_files: Optional[Dict[str, str]] = None,
    ):
        self.objects: Dict[str, SignatureType] = objects if objects is not None else default_objects()
        self.classes: Dict[str, SignatureType] = classes if classes is not None else default_classes()
        self.instances: InstanceTable = InstanceTable()
        self.scopes: ScopeStack = ScopeStack()
        self.value_stack: List[Type] = []
        self.reporter: ErrorReporter = ErrorReporter(source_files)
        self.current_object: str = ROOT_OBJECT_NAME

    @classmethod
    def from_tables(
        cls,
        instances: Optional[Mapping[str, str]] = None,
        classes: Optional[Mapping[str, Mapping[str, _MethodSpec]]] = None,
        objects: Optional[Mapping[str, Mapping[str, _MethodSpec]]] = None,
    ) -> "Environment":
        """
        Build an environment from plain tables, e.g.

            Environment.from_tables(
                instances={"x": "Integer"},
                classes={"Integer": {"to_s": ((), "String")}},
            )

        Omitted tables fall back to the defaults.
        """
        env = cls(
            objects=_signature_tables(objects) if objects is not None else None,
            classes=_signature_tables(classes) if classes is not None else None,
        )
        for name, type_name in (instances or {}).items():
            env.instances.bind(name, AliasType(type_name))
        return env

    # =========================================================================
    # Scopes
    # =========================================================================

    def enter_scope(self, owner: Optional[str] = None) -> LocalScope:
        """Push an empty local frame (callable body entry)."""
        logger.debug(f"enter scope for {owner!r} at depth {self.scopes.depth}")
        return self.scopes.enter_scope(owner)

    def exit_scope(self) -> LocalScope:
        """Pop the current local frame (callable body exit)."""
        frame = self.scopes.exit_scope()
        logger.debug(f"exit scope for {frame.owner!r}, {len(frame)} local(s)")
        return frame

    @contextmanager
    def scope(self, owner: Optional[str] = None) -> Iterator[LocalScope]:
        """Context manager: enter scope on enter, exit scope on exit (always, including on exception)."""
        frame = self.enter_scope(owner)
        try:
            yield frame
        finally:
            self.exit_scope()

    @property
    def scope_depth(self) -> int:
        return self.scopes.depth

    @property
    def active_bindings(self) -> Bindings:
        """Top scope frame inside a body, the instance table at top level."""
        frame = self.scopes.current_scope()
        return frame if frame is not None else self.instances

    def bind(self, name: str, ty: Type, location: Optional[SourceLocation] = None) -> Binding:
        return self.active_bindings.bind(name, ty, location)

    def lookup(self, name: str) -> Optional[Type]:
        """Active bindings only; no enclosing-scope fallback."""
        return self.active_bindings.lookup(name)

    # =========================================================================
    # Value stack
    # =========================================================================

    def push_value(self, ty: Type) -> None:
        self.value_stack.append(ty)

    def pop_value(self) -> Type:
        if not self.value_stack:
            raise AnalyzerImplementationError("Cannot pop value: value stack is empty")
        return self.value_stack.pop()

    @property
    def value_depth(self) -> int:
        return len(self.value_stack)

    # =========================================================================
    # Instances (flat model)
    # =========================================================================

    def get_instance(self, name: str) -> Optional[Binding]:
        return self.instances.lookup_binding(name)

    def get_instance_type(self, name: str) -> Optional[Type]:
        return self.instances.lookup(name)

    # =========================================================================
    # Objects and classes
    # =========================================================================

    def get_object(self, name: str) -> Optional[SignatureType]:
        return self.objects.get(name)

    def get_class(self, name: str) -> Optional[SignatureType]:
        return self.classes.get(name)

    def get_method(self, owner: str, method: str) -> Optional[MethodType]:
        """Method of a known object or class (objects first)."""
        table = self.objects.get(owner)
        if table is None:
            table = self.classes.get(owner)
        return table.get(method) if table is not None else None

    def define_method(self, name: str, method: MethodType, owner: Optional[str] = None) -> None:
        """Insert or replace `name` in the owner's signature table (the current object by default)."""
        owner_name = owner if owner is not None else self.current_object
        table = self.objects.setdefault(owner_name, SignatureType())
        if name in table:
            logger.debug(f"redefining {owner_name}#{name}")
        table.define(name, method)

    # =========================================================================
    # Errors
    # =========================================================================

    @property
    def errors(self) -> List[TypecheckError]:
        return self.reporter.errors

    def has_errors(self) -> bool:
        return self.reporter.has_errors()


def _signature_tables(tables: Mapping[str, Mapping[str, _MethodSpec]]) -> Dict[str, SignatureType]:
    result: Dict[str, SignatureType] = {}
    for owner, methods in tables.items():
        result[owner] = SignatureType({
            name: MethodType(tuple(AliasType(a) for a in args), AliasType(ret))
            for name, (args, ret) in methods.items()
        })
    return result
