"""
Configuration constants to replace magic names and numbers throughout the analyzer
"""

import os
import tempfile

# Built-in class names
INTEGER_CLASS = "Integer"
STRING_CLASS = "String"
NIL_CLASS = "NilClass"
SYMBOL_CLASS = "Symbol"
UNKNOWN_CLASS = "Unknown"  # Sentinel pushed when inference fails

# Stringify method exposed by the built-in classes
TO_S_METHOD = "to_s"

# Root object that owns top-level method definitions
ROOT_OBJECT_NAME = "main"

# Parser configuration constants (cache under temp dir to avoid cluttering project root)
DEFAULT_PARSER_CACHE_FILE = os.path.join(tempfile.gettempdir(), "ruby_analyzer_parser.cache")
DEFAULT_SOURCE_FILE = "<input>"

# String literal constants
STRING_QUOTE_CHAR = '"'

# Error codes
UNDEFINED_VARIABLE_CODE = "E0425"
SYNTAX_ERROR_CODE = "E0001"
INTERNAL_ERROR_CODE = "E9999"

# Diagnostics colouring (NO_COLOR is honoured as well)
COLOR_ENV_VAR = "RUBY_ANALYZER_COLOR"
COLOR_DISABLED_VALUES = ("0", "false", "no", "never")

# File encoding constants
DEFAULT_FILE_ENCODING = "utf-8"

# Error reporting constants
ERROR_POINTER_CHAR = "^"
