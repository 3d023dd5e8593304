"""
Error Reporting

Type errors are analysis facts: they are collected by ErrorReporter in the
order they are found and never unwind the traversal. Exceptions are kept for
problems in the source text (syntax) and for broken contracts between the
front end and the engine.
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from .source_location import SourceLocation
from ..utils.config import (
    COLOR_DISABLED_VALUES, COLOR_ENV_VAR, ERROR_POINTER_CHAR,
    INTERNAL_ERROR_CODE, SYNTAX_ERROR_CODE, UNDEFINED_VARIABLE_CODE,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get(COLOR_ENV_VAR, "").lower()
    if explicit in COLOR_DISABLED_VALUES:
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_CYAN   = "\033[36m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ---------------------------------------------------------------------------
# Error kinds
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UndefinedVariable:
    """Read of a local variable with no binding in the active scope."""
    name: str

    code = UNDEFINED_VARIABLE_CODE

    @property
    def message(self) -> str:
        return f"undefined local variable `{self.name}`"

    @property
    def label(self) -> str:
        return "not found in this scope"

    @property
    def help(self) -> Optional[str]:
        return f"assign `{self.name}` before reading it in this method body"


# Closed set of error kinds; extend the Union when a new kind is added
ErrorKind = Union[UndefinedVariable]


@dataclass(frozen=True)
class TypecheckError:
    """
    One collected type error: what went wrong and where.
    """
    kind: ErrorKind
    location: Optional[SourceLocation]

    @property
    def message(self) -> str:
        return self.kind.message

    @property
    def code(self) -> str:
        return self.kind.code

    def __str__(self) -> str:
        where = str(self.location) if self.location else "<unknown location>"
        return f"{where}: error[{self.code}]: {self.message}"


# ---------------------------------------------------------------------------
# Formatting engine
# ---------------------------------------------------------------------------

def _format_diagnostic(
    error: TypecheckError,
    source_files: Dict[str, str],
    color: bool = False,
) -> str:
    """
    Render a single diagnostic in rustc style.

    Example output (plain, no color)::

        error[E0425]: undefined local variable `y`
         --> main.rb:2:7
          |
        2 |   x = y
          |       ^ not found in this scope
          |
          = help: assign `y` before reading it in this method body
    """
    out: List[str] = []

    out.append(
        _style(f"error[{error.code}]", _BOLD, _RED, color=color)
        + _style(f": {error.message}", _BOLD, color=color)
    )

    if error.location is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + "<unknown location>")
        _append_help(out, error, 1, color)
        return "\n".join(out)

    loc = error.location
    source = source_files.get(loc.file)
    if source is None:
        out.append(
            _style(" --> ", _BOLD, _BLUE, color=color)
            + f"{loc.file}:{loc.line}:{loc.column}"
        )
        _append_help(out, error, 1, color)
        return "\n".join(out)

    src_lines = source.split("\n")
    gw = max(len(str(loc.line)), 1)

    out.append(_style(" " * gw + "--> ", _BOLD, _BLUE, color=color) + f"{loc.file}:{loc.line}:{loc.column}")
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))

    idx = loc.line - 1
    code_line = src_lines[idx] if 0 <= idx < len(src_lines) else ""
    out.append(_style(str(loc.line).rjust(gw) + " | ", _BOLD, _BLUE, color=color) + code_line)

    col_start = max(loc.column, 1) - 1
    if loc.end_line == loc.line and loc.end_column > loc.column:
        span_len = loc.end_column - loc.column
    else:
        span_len = _guess_span(code_line, col_start)
    carets = " " * col_start + ERROR_POINTER_CHAR * max(1, span_len)
    label = getattr(error.kind, "label", "")
    label_suffix = f" {label}" if label else ""
    out.append(
        _style(" " * (gw + 1) + "| ", _BOLD, _BLUE, color=color)
        + _style(carets + label_suffix, _BOLD, _RED, color=color)
    )

    _append_help(out, error, gw, color)
    return "\n".join(out)


def _guess_span(code_line: str, col_start: int) -> int:
    """Guess token length when end_column is unavailable."""
    if col_start >= len(code_line):
        return 1
    length = 0
    for ch in code_line[col_start:]:
        if ch in (" ", "\t", ";", ",", ")", "#"):
            break
        length += 1
    return max(1, length)


def _append_help(out: List[str], error: TypecheckError, gw: int, color: bool) -> None:
    help_text = getattr(error.kind, "help", None)
    if not help_text:
        return
    pad = " " * (gw + 1)
    out.append(_style(pad + "|", _BOLD, _BLUE, color=color))
    out.append(
        _style(f"{pad}= ", _BOLD, _CYAN, color=color)
        + _style("help: ", _BOLD, color=color)
        + help_text
    )


# ---------------------------------------------------------------------------
# ErrorReporter
# ---------------------------------------------------------------------------

class ErrorReporter:
    """
    Append-only error log with rustc-style formatting.
    """

    def __init__(self, source_files: Optional[Dict[str, str]] = None):
        self.source_files: Dict[str, str] = source_files if source_files is not None else {}
        self.errors: List[TypecheckError] = []

    def report(self, kind: ErrorKind, location: Optional[SourceLocation]) -> TypecheckError:
        error = TypecheckError(kind=kind, location=location)
        self.errors.append(error)
        logger.debug(f"reported {error}")
        return error

    def report_undefined_variable(self, name: str, location: Optional[SourceLocation]) -> TypecheckError:
        return self.report(UndefinedVariable(name), location)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def format_error(self, error: TypecheckError, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        return _format_diagnostic(error, self.source_files, color=use_color)

    def format_all_errors(self, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        parts = [self.format_error(e, color=use_color) for e in self.errors]
        count = len(self.errors)
        summary = f"found {count} type error{'s' if count != 1 else ''}"
        parts.append(
            _style("error", _BOLD, _RED, color=use_color)
            + _style(f": {summary}", _BOLD, color=use_color)
        )
        return "\n\n".join(parts)

    def print_errors(self) -> None:
        if not self.errors:
            return
        print(self.format_all_errors(), file=sys.stderr)


# ============================================================================
# Exception Classes
# ============================================================================

class AnalyzerError(Exception):
    """Base exception for all analyzer errors"""
    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self):
        if self.location:
            return f"{self.message}\n --> {self.location}"
        return self.message


class AnalyzerSourceError(AnalyzerError):
    """
    Error in the analyzed source text (syntax errors and the like).

    Never use this for broken internal invariants, use
    AnalyzerImplementationError instead.
    """
    def __init__(self,
                 message: str,
                 location: Optional[SourceLocation] = None,
                 error_code: str = SYNTAX_ERROR_CODE):
        super().__init__(message, location)
        self.error_code = error_code

    def __str__(self):
        if self.location:
            return f"error[{self.error_code}]: {self.message}\n --> {self.location}"
        return f"error[{self.error_code}]: {self.message}"


class AnalyzerImplementationError(AnalyzerError):
    """
    Broken contract between a front end and the engine, or a broken engine
    invariant: a value that is not a node, value stack or scope underflow.
    """
    def __init__(self, message: str, location: Optional[SourceLocation] = None,
                 error_code: str = INTERNAL_ERROR_CODE):
        super().__init__(message, location)
        self.error_code = error_code

    def __str__(self):
        return f"[{self.error_code}] {super().__str__()}"
