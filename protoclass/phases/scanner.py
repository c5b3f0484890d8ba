"""Scanner — read-only collection of names used in prototype-style code.

The collected set is diagnostic only: it is logged and returned with the
transform result, and no later phase consults it.
"""

from __future__ import annotations

import logging

from tree_sitter import Node

from ..patterns import (
    define_property_arguments,
    define_property_target,
    is_function_value,
    prototype_owner,
)
from ..syntax_tree import SyntaxTree, iter_nodes
from ..transform_types import TransformContext
from ._base import Phase

logger = logging.getLogger(__name__)


def scan_prototype_names(tree: SyntaxTree) -> frozenset[str]:
    names: set[str] = set()
    for node in iter_nodes(tree.root):
        name = _participating_name(node, tree)
        if name:
            names.add(name)
    return frozenset(names)


def _participating_name(node: Node, tree: SyntaxTree) -> str | None:
    if node.type == "member_expression":
        return prototype_owner(node, tree)
    if node.type == "assignment_expression":
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        if left is None or left.type != "member_expression":
            return None
        prop = left.child_by_field_name("property")
        obj = left.child_by_field_name("object")
        if prop is None or prop.type != "property_identifier":
            return None
        if obj is None or obj.type != "identifier" or not is_function_value(right):
            return None
        return tree.text(obj)
    if node.type == "call_expression":
        args = define_property_arguments(node, tree)
        if not args:
            return None
        return define_property_target(args[0], tree)
    return None


class Scanner(Phase):
    name = "scan"

    def run(self, context: TransformContext) -> None:
        names = scan_prototype_names(context.tree)
        context.prototype_names = names
        context.stats.prototype_names = len(names)
        logger.debug("Names with prototype-style usage: %s", sorted(names))
