"""
Source Location (Span)

Every node and every diagnostic carries one of these.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Position of a construct in its source file.

    - File, 1-based line and column of the first character
    - Optional byte offsets (start/end) and end line/column for spans
    - Immutable (frozen) so nodes and errors can be hashed and compared
    """
    file: str
    line: int
    column: int
    start: int = 0
    end: int = 0
    end_line: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        """Format as file:line:column"""
        return f"{self.file}:{self.line}:{self.column}"
