"""Composable API functions for converting JavaScript source text.

Each function corresponds to a CLI workflow but is callable programmatically
without argparse.
"""

from __future__ import annotations

import logging

from .parser import Parser, TreeSitterParserFactory
from .syntax_tree import SyntaxTree
from .transform import transform_tree
from .transform_types import TransformConfig, TransformResult

logger = logging.getLogger(__name__)


def parse_source(source: str, *, allow_errors: bool = True) -> SyntaxTree:
    """Parse JavaScript source text into a SyntaxTree.

    Args:
        source: The source code text.
        allow_errors: When False, raise ``UnparseableSourceError`` if the
            parse tree contains syntax errors.

    Returns:
        A SyntaxTree with no pending edits.
    """
    return Parser(TreeSitterParserFactory()).parse(source, allow_errors=allow_errors)


def transform_source(
    source: str,
    config: TransformConfig | None = None,
    *,
    allow_errors: bool = True,
) -> TransformResult:
    """Convert prototype-style constructors in *source* to class declarations.

    Args:
        source: The source code text.
        config: Transform configuration; defaults to ``TransformConfig()``.
        allow_errors: Forwarded to :func:`parse_source`.

    Returns:
        A TransformResult with the rewritten text, diagnostics and stats.
    """
    tree = parse_source(source, allow_errors=allow_errors)
    return transform_tree(tree, config)


def convert_source(source: str, config: TransformConfig | None = None) -> str:
    """Return *source* with prototype-style constructors converted to classes."""
    return transform_source(source, config).output
