"""Class registry — name-indexed lookup of synthesized classes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .class_nodes import ClassDeclarationNode

logger = logging.getLogger(__name__)


@dataclass
class ClassRegistry:
    """Maps class name → synthesized class node for one invocation.

    Written only by the class synthesizer; every later phase only reads it.
    Registering a name twice silently replaces the earlier entry.
    """

    classes: dict[str, ClassDeclarationNode] = field(default_factory=dict)

    def register(self, node: ClassDeclarationNode) -> None:
        if node.name in self.classes:
            logger.debug("Class %s registered again; replacing earlier entry", node.name)
        self.classes[node.name] = node

    def lookup(self, name: str) -> ClassDeclarationNode | None:
        return self.classes.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.classes

    def __len__(self) -> int:
        return len(self.classes)
