"""
Built-in classes and objects.

Tables are built fresh on every call: the root object's signature table
grows during a run, so no run may share one with another.
"""

from typing import Dict

from .types import MethodType, SignatureType, STRING
from ..utils.config import INTEGER_CLASS, ROOT_OBJECT_NAME, STRING_CLASS, TO_S_METHOD


def default_classes() -> Dict[str, SignatureType]:
    """Integer and String, each exposing to_s() -> String."""
    return {
        INTEGER_CLASS: SignatureType({TO_S_METHOD: MethodType((), STRING)}),
        STRING_CLASS: SignatureType({TO_S_METHOD: MethodType((), STRING)}),
    }


def default_objects() -> Dict[str, SignatureType]:
    """The root object, with an empty signature table."""
    return {ROOT_OBJECT_NAME: SignatureType()}
