"""Phase — shared infrastructure for the transform phases."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from tree_sitter import Node

from ..class_nodes import ClassDeclarationNode
from ..diagnostics import Diagnostic, DiagnosticKind, Severity
from ..patterns import PatternMatch, classify
from ..syntax_tree import iter_nodes, source_loc
from ..transform_types import TransformContext


class Phase(ABC):
    """One traversal of the tree making targeted edits."""

    name: str = ""

    @abstractmethod
    def run(self, context: TransformContext) -> None: ...

    def _matches(self, context: TransformContext, *kinds: type) -> list[PatternMatch]:
        """All nodes classified as one of *kinds*, in source order."""
        tree = context.tree
        matches = (classify(node, tree) for node in iter_nodes(tree.root))
        return [m for m in matches if isinstance(m, kinds)]

    def _lookup(
        self, context: TransformContext, class_name: str, statement: Node
    ) -> ClassDeclarationNode | None:
        """Resolve *class_name*, ignoring a class declared inside *statement*.

        A member moved into a class it encloses could never be printed.
        """
        cls = context.registry.lookup(class_name)
        if cls is not None and cls.is_within(statement):
            return None
        return cls

    def _report_unresolved(
        self,
        context: TransformContext,
        logger: logging.Logger,
        message: str,
        class_name: str,
        member_name: str,
        node: Node,
        severity: Severity = Severity.WARNING,
    ) -> Diagnostic:
        context.stats.unresolved_references += 1
        return context.diagnostics.emit(
            Diagnostic(
                kind=DiagnosticKind.UNRESOLVED_CLASS,
                severity=severity,
                message=message,
                class_name=class_name,
                member_name=member_name,
                location=source_loc(node),
            ),
            logger,
        )
