"""Field Initializer Merger — folds prototype literals into the constructor."""

from __future__ import annotations

import logging

from ..patterns import FieldLiteralAssign
from ..transform_types import TransformContext
from ._base import Phase

logger = logging.getLogger(__name__)


class FieldInitializerMerger(Phase):
    """``Name.prototype.member = <literal>;`` → ``this.member = <literal>;``.

    The initializer is appended to the constructor body of ``Name``; matches
    for the same class accumulate in source order. When ``Name`` was not
    synthesized the statement is left as it is.
    """

    name = "merge-fields"

    def run(self, context: TransformContext) -> None:
        for match in self._matches(context, FieldLiteralAssign):
            cls = self._lookup(context, match.class_name, match.statement)
            if cls is None:
                self._report_unresolved(
                    context,
                    logger,
                    f"Class {match.class_name} not found for field {match.member_name}",
                    match.class_name,
                    match.member_name,
                    match.statement,
                )
                continue
            cls.add_field_initializer(match.member_name, match.literal)
            context.tree.remove_statement(match.statement)
            context.stats.fields_merged += 1
            logger.debug(
                "Merged field %s.%s = %s", match.class_name, match.member_name, match.literal
            )
