"""Named constants — eliminates magic strings across the codebase."""

from __future__ import annotations

LANGUAGE = "javascript"

PROTOTYPE_PROPERTY = "prototype"
EXPORTS_IDENTIFIER = "exports"
CONSTRUCTOR_NAME = "constructor"

DEFINE_PROPERTY_OBJECT = "Object"
DEFINE_PROPERTY_METHOD = "defineProperty"

ACCESSOR_KEYS: frozenset[str] = frozenset({"get", "set"})

# tree-sitter-javascript node types
FUNCTION_DECLARATION = "function_declaration"
# older grammars name function expressions "function"
FUNCTION_VALUE_TYPES: frozenset[str] = frozenset({"function_expression", "function"})
LITERAL_TYPES: frozenset[str] = frozenset({"string", "number", "true", "false", "null"})
PROPERTY_NAME_TYPES: frozenset[str] = frozenset({"string", "number"})
COMMENT_TYPES: frozenset[str] = frozenset({"comment"})
# parents whose children form a statement list; a statement anywhere else
# (braceless if/else, loop or label body) cannot simply be deleted
STATEMENT_LIST_TYPES: frozenset[str] = frozenset(
    {"program", "statement_block", "switch_case", "switch_default"}
)
EMPTY_STATEMENT = "{}"

DEFAULT_INDENT_WIDTH = 2
DEFAULT_EXTENSIONS: tuple[str, ...] = (".js", ".mjs", ".cjs")
SKIPPED_DIRECTORIES: frozenset[str] = frozenset({"node_modules", ".git"})
