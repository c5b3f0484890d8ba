"""Orchestrator — runs the phase sequence over one syntax tree."""

from __future__ import annotations

import logging

from .phases import Phase, default_phases
from .syntax_tree import SyntaxTree
from .transform_types import TransformConfig, TransformContext, TransformResult

logger = logging.getLogger(__name__)


def run_phases(
    tree: SyntaxTree,
    config: TransformConfig | None = None,
    phases: list[Phase] | None = None,
) -> TransformContext:
    """Run *phases* (default: the full sequence) over *tree*, in order.

    The returned context holds the registry, diagnostics and statistics of
    this invocation; the edits themselves are recorded on *tree*.
    """
    context = TransformContext(tree=tree, config=config or TransformConfig())
    for phase in phases if phases is not None else default_phases():
        logger.debug("Running phase %s", phase.name)
        phase.run(context)
    return context


def transform_tree(
    tree: SyntaxTree, config: TransformConfig | None = None
) -> TransformResult:
    context = run_phases(tree, config)
    output = tree.to_source()
    logger.info(
        "Transform complete: %d classes, %d edits, %d diagnostics",
        context.stats.classes_created,
        context.stats.total_edits,
        len(context.diagnostics),
    )
    return TransformResult(
        source=tree.source.decode("utf-8"),
        output=output,
        diagnostics=list(context.diagnostics),
        stats=context.stats,
        prototype_names=context.prototype_names,
    )
