"""
Base Pass System

A pass takes one tree and the Environment that owns all analysis state for
the run, mutates the Environment, and returns the root's result.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ..shared.nodes import ASTNode

if TYPE_CHECKING:
    from ..analysis.environment import Environment


class BasePass(ABC):
    """
    Base class for analysis passes.

    - Passes hold no state between runs
    - Results live in the Environment, not in the pass
    """

    @abstractmethod
    def run(self, tree: ASTNode, env: 'Environment') -> Any:
        """Run pass on a tree."""
        raise NotImplementedError
