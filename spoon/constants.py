"""Named constants — eliminates magic strings across the codebase."""

from __future__ import annotations

DEFAULT_SOURCE_PATH = "main"
INDENT_UNIT = "  "

TEMP_PREFIX = "__assign"

VAR_KEYWORD = "var"
STATIC_VAR_KEYWORD = "static var"
THIS_PREFIX = "this."
MEMBER_SEPARATOR = "."
CONCAT_OPERATOR = " + "
ARG_SEPARATOR = ", "
STATEMENT_TERMINATOR = ";\n"

ENTRY_POINT_SIGNATURE = "static public function main()"

QUOTE_CHARS: tuple[str, ...] = ("'", '"')

OPT_IS_ARRAY = "is_array"
OPT_IS_HASH = "is_hash"
OPT_IS_SELF = "is_self"
OPT_IS_THIS = "is_this"
OPT_OPERATION = "operation"

SELF_OUTSIDE_CLASS = "Self call cannot be used outside of class"
