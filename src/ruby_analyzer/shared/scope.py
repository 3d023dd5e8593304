"""
Bindings: "name resolves to an inferred type".

Two shapes of the same idea:
    InstanceTable  flat ordered list, lookup newest → oldest (last write wins)
    LocalScope     one callable body's locals, held on a ScopeStack

Lookup never walks outward: a body sees only its own frame.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from .errors import AnalyzerImplementationError
from .source_location import SourceLocation
from .types import Type


# -----------------------------------------------------------------------------
# Binding
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Binding:
    """One name binding."""
    name: str
    ty: Type
    location: Optional[SourceLocation] = None


# -----------------------------------------------------------------------------
# Bindings (common interface)
# -----------------------------------------------------------------------------


class Bindings(ABC):
    """Anything a variable write can go into and a variable read can come from."""

    @abstractmethod
    def bind(self, name: str, ty: Type, location: Optional[SourceLocation] = None) -> Binding:
        raise NotImplementedError

    @abstractmethod
    def lookup_binding(self, name: str) -> Optional[Binding]:
        raise NotImplementedError

    @abstractmethod
    def __iter__(self) -> Iterator[Binding]:
        raise NotImplementedError

    def lookup(self, name: str) -> Optional[Type]:
        binding = self.lookup_binding(name)
        return binding.ty if binding is not None else None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup_binding(name) is not None

    def names(self) -> List[str]:
        """Distinct bound names, first-binding order."""
        seen: Dict[str, None] = {}
        for binding in self:
            seen.setdefault(binding.name, None)
        return list(seen)

    def as_dict(self) -> Dict[str, Type]:
        """name → currently resolved type."""
        return {name: self.lookup(name) for name in self.names()}


# -----------------------------------------------------------------------------
# InstanceTable (flat model)
# -----------------------------------------------------------------------------


class InstanceTable(Bindings):
    """
    Flat, append-only list of bindings.

    Rebinding a name appends; lookup scans from the most recent entry so the
    last write wins. Nothing is ever removed.
    """

    def __init__(self, bindings: Optional[List[Binding]] = None) -> None:
        self._bindings: List[Binding] = list(bindings) if bindings else []

    def bind(self, name: str, ty: Type, location: Optional[SourceLocation] = None) -> Binding:
        binding = Binding(name, ty, location)
        self._bindings.append(binding)
        return binding

    def lookup_binding(self, name: str) -> Optional[Binding]:
        for binding in reversed(self._bindings):
            if binding.name == name:
                return binding
        return None

    def __iter__(self) -> Iterator[Binding]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __eq__(self, other):
        if not isinstance(other, InstanceTable):
            return NotImplemented
        return self._bindings == other._bindings

    __hash__ = None


# -----------------------------------------------------------------------------
# LocalScope (one callable body)
# -----------------------------------------------------------------------------


class LocalScope(Bindings):
    """One frame of locals. bind() overwrites (set_var)."""

    def __init__(self, owner: Optional[str] = None) -> None:
        self.owner = owner
        self._bindings: Dict[str, Binding] = {}

    def bind(self, name: str, ty: Type, location: Optional[SourceLocation] = None) -> Binding:
        binding = Binding(name, ty, location)
        self._bindings[name] = binding
        return binding

    def lookup_binding(self, name: str) -> Optional[Binding]:
        return self._bindings.get(name)

    def __iter__(self) -> Iterator[Binding]:
        return iter(self._bindings.values())

    def __len__(self) -> int:
        return len(self._bindings)


# -----------------------------------------------------------------------------
# Scope stack (push on body entry, pop on body exit)
# -----------------------------------------------------------------------------


class ScopeStack:
    """
    Stack of LocalScope frames. enter_scope = push, exit_scope = pop.
    """

    def __init__(self) -> None:
        self._stack: List[LocalScope] = []

    def enter_scope(self, owner: Optional[str] = None) -> LocalScope:
        frame = LocalScope(owner)
        self._stack.append(frame)
        return frame

    def exit_scope(self) -> LocalScope:
        if not self._stack:
            raise AnalyzerImplementationError("Cannot exit scope: no active scope")
        return self._stack.pop()

    def current_scope(self) -> Optional[LocalScope]:
        return self._stack[-1] if self._stack else None

    @property
    def depth(self) -> int:
        return len(self._stack)

    def __bool__(self) -> bool:
        return bool(self._stack)

    def __len__(self) -> int:
        return len(self._stack)
