"""Class Synthesizer — turns constructor functions into class declarations."""

from __future__ import annotations

import logging

from tree_sitter import Node

from ..class_nodes import ClassDeclarationNode
from ..patterns import ClassCandidate
from ..syntax_tree import SyntaxTree
from ..transform_types import TransformContext
from ._base import Phase
from .. import constants

logger = logging.getLogger(__name__)


def _leading_comment_start(function: Node, tree: SyntaxTree) -> int:
    """Start of the run of comments directly preceding *function*.

    Only whitespace may separate the comments from each other and from the
    declaration. Returns the declaration's own start when there are none.
    """
    start = function.start_byte
    sibling = function.prev_sibling
    while sibling is not None and sibling.type in constants.COMMENT_TYPES:
        if tree.source[sibling.end_byte : start].strip():
            break
        start = sibling.start_byte
        sibling = sibling.prev_sibling
    return start


class ClassSynthesizer(Phase):
    name = "synthesize"

    def run(self, context: TransformContext) -> None:
        tree = context.tree
        for match in self._matches(context, ClassCandidate):
            function = match.function
            start = _leading_comment_start(function, tree)
            node = ClassDeclarationNode.from_function(
                tree,
                function,
                match.class_name,
                context.config.indent_unit,
                leading_comments=tree.source[start : function.start_byte].decode("utf-8"),
            )
            tree.replace(start, function.end_byte, node)
            context.registry.register(node)
            context.stats.classes_created += 1
            logger.info("Converted function %s to a class", match.class_name)
