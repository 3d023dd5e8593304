"""
Type System

The value domain of the inference engine: a named alias to a class, a method
shape, or a signature table mapping method names to method shapes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

from ..utils.config import (
    INTEGER_CLASS, STRING_CLASS, NIL_CLASS, SYMBOL_CLASS, UNKNOWN_CLASS,
)


class TypeKind(Enum):
    """Type kind (discriminant of the Type union)."""
    ALIAS = "alias"          # Integer, String, ...
    METHOD = "method"        # (A, B) -> R
    SIGNATURE = "signature"  # { name: method, ... }


@dataclass(frozen=True)
class Type:
    """
    Base of all types.

    Concrete types set `kind` themselves; callers match on `kind` or on the
    concrete class.
    """
    kind: TypeKind


@dataclass(frozen=True)
class AliasType(Type):
    """Named reference to a primitive or class type"""
    name: str

    def __init__(self, name: str):
        super().__init__(kind=TypeKind.ALIAS)
        object.__setattr__(self, 'name', name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"AliasType({self.name!r})"

    def __eq__(self, other):
        if not isinstance(other, AliasType):
            return False
        return self.name == other.name

    def __hash__(self):
        return hash(('AliasType', self.name))


@dataclass(frozen=True)
class MethodType(Type):
    """
    Method shape: ordered argument types plus a return type.

    The length of `param_types` is the arity. There are no variadics.
    """
    param_types: Tuple[Type, ...]
    return_type: Type

    def __init__(self, param_types: Tuple[Type, ...], return_type: Type):
        super().__init__(kind=TypeKind.METHOD)
        object.__setattr__(self, 'param_types', tuple(param_types))
        object.__setattr__(self, 'return_type', return_type)

    @property
    def arity(self) -> int:
        return len(self.param_types)

    def __str__(self) -> str:
        """Format as arrow type: (T1, T2) -> T3"""
        params = ", ".join(str(t) for t in self.param_types)
        return f"({params}) -> {self.return_type}"


class SignatureType(Type):
    """
    Signature table: method name -> MethodType.

    The mapping itself is mutable: an object's table grows while method
    definitions are discovered during a run. Unhashable for that reason.
    """
    methods: Dict[str, MethodType]

    def __init__(self, methods: Optional[Dict[str, MethodType]] = None):
        super().__init__(kind=TypeKind.SIGNATURE)
        object.__setattr__(self, 'methods', dict(methods) if methods else {})

    def define(self, name: str, method: MethodType) -> None:
        """Insert or replace the entry for `name`."""
        self.methods[name] = method

    def get(self, name: str) -> Optional[MethodType]:
        return self.methods.get(name)

    def names(self) -> Iterator[str]:
        return iter(self.methods)

    def __contains__(self, name: object) -> bool:
        return name in self.methods

    def __len__(self) -> int:
        return len(self.methods)

    def __eq__(self, other):
        if not isinstance(other, SignatureType):
            return NotImplemented
        return self.methods == other.methods

    __hash__ = None

    def __repr__(self) -> str:
        return f"SignatureType({self.methods!r})"

    def __str__(self) -> str:
        entries = ", ".join(f"{name}: {method}" for name, method in self.methods.items())
        return f"{{{entries}}}"


# Built-in aliases
INTEGER = AliasType(INTEGER_CLASS)
STRING = AliasType(STRING_CLASS)
NIL = AliasType(NIL_CLASS)
SYMBOL = AliasType(SYMBOL_CLASS)
UNKNOWN = AliasType(UNKNOWN_CLASS)
