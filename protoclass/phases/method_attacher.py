"""Method Attacher — folds function-valued assignments into class methods."""

from __future__ import annotations

import logging

from ..class_nodes import MemberDefinition, MemberKind
from ..diagnostics import Diagnostic, DiagnosticKind, Severity
from ..patterns import PrototypeMethodAssign, StaticMethodAssign, is_async_function
from ..syntax_tree import source_loc
from ..transform_types import TransformContext
from ._base import Phase

logger = logging.getLogger(__name__)


class MethodAttacher(Phase):
    """Attaches instance methods (``static=False``) or static methods.

    Instance shape: ``Name.prototype.method = function (...) {...};``.
    Static shape: ``Name.method = function (...) {...};`` for any identifier
    ``Name`` except ``exports``.

    Every attempt is reported with its location; when ``Name`` has no class
    the assignment is kept and a warning is emitted as well.
    """

    def __init__(self, static: bool):
        self.static = static
        self.name = "attach-static-methods" if static else "attach-methods"

    def run(self, context: TransformContext) -> None:
        shape = StaticMethodAssign if self.static else PrototypeMethodAssign
        for match in self._matches(context, shape):
            self._attach(context, match)

    def _attach(
        self, context: TransformContext, match: PrototypeMethodAssign | StaticMethodAssign
    ) -> None:
        location = source_loc(match.statement)
        context.diagnostics.emit(
            Diagnostic(
                kind=DiagnosticKind.METHOD_ATTACHMENT,
                severity=Severity.INFO,
                message=f"Adding method {match.method_name} to class {match.class_name}",
                class_name=match.class_name,
                member_name=match.method_name,
                location=location,
            ),
            logger,
        )
        cls = self._lookup(context, match.class_name, match.statement)
        if cls is None:
            self._report_unresolved(
                context,
                logger,
                f"Class {match.class_name} not found for method {match.method_name}",
                match.class_name,
                match.method_name,
                match.statement,
            )
            return

        function = match.function
        cls.add_member(
            MemberDefinition(
                kind=MemberKind.METHOD,
                name=match.method_name,
                params=function.child_by_field_name("parameters"),
                body=function.child_by_field_name("body"),
                is_static=self.static,
                is_async=is_async_function(function),
            )
        )
        context.tree.remove_statement(match.statement)
        if self.static:
            context.stats.static_methods_attached += 1
        else:
            context.stats.methods_attached += 1
