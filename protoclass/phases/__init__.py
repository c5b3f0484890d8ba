"""Transform phases, in the order they run."""

from __future__ import annotations

from ._base import Phase
from .accessor_transformer import AccessorTransformer
from .field_merger import FieldInitializerMerger
from .method_attacher import MethodAttacher
from .scanner import Scanner, scan_prototype_names
from .synthesizer import ClassSynthesizer


def default_phases() -> list[Phase]:
    return [
        Scanner(),
        ClassSynthesizer(),
        FieldInitializerMerger(),
        MethodAttacher(static=False),
        MethodAttacher(static=True),
        AccessorTransformer(),
    ]


__all__ = [
    "Phase",
    "Scanner",
    "ClassSynthesizer",
    "FieldInitializerMerger",
    "MethodAttacher",
    "AccessorTransformer",
    "default_phases",
    "scan_prototype_names",
]
