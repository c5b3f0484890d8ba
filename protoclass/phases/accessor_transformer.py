"""Accessor Transformer — folds ``Object.defineProperty`` calls into get/set members."""

from __future__ import annotations

import logging

from ..class_nodes import MemberDefinition
from ..diagnostics import Severity
from ..patterns import AccessorDescriptorCall
from ..transform_types import TransformContext
from ._base import Phase

logger = logging.getLogger(__name__)


class AccessorTransformer(Phase):
    name = "transform-accessors"

    def run(self, context: TransformContext) -> None:
        for match in self._matches(context, AccessorDescriptorCall):
            cls = self._lookup(context, match.class_name, match.statement)
            if cls is None:
                # unlike fields and methods, a missing class here is an error
                self._report_unresolved(
                    context,
                    logger,
                    f"Class {match.class_name} not found for accessor "
                    f"{match.property_name}",
                    match.class_name,
                    match.property_name,
                    match.statement,
                    severity=Severity.ERROR,
                )
                continue
            for accessor in match.accessors:
                cls.add_member(
                    MemberDefinition(
                        kind=accessor.kind,
                        name=match.property_name,
                        params=accessor.params,
                        body=accessor.body,
                    )
                )
            if not match.accessors:
                logger.debug(
                    "Descriptor for %s.%s has no get/set; removing call",
                    match.class_name,
                    match.property_name,
                )
            context.tree.remove_statement(match.statement)
            context.stats.accessors_created += len(match.accessors)
            context.stats.descriptor_calls_removed += 1
