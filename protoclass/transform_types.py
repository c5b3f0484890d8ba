"""Transform pipeline data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass, field

from .diagnostics import Diagnostic, DiagnosticSink, Severity
from .registry import ClassRegistry
from .syntax_tree import SyntaxTree
from . import constants


@dataclass(frozen=True)
class TransformConfig:
    """Groups transform configuration."""

    indent_width: int = constants.DEFAULT_INDENT_WIDTH
    use_tabs: bool = False

    def __post_init__(self):
        if self.indent_width < 1:
            raise ValueError(f"indent_width must be positive, got {self.indent_width}")

    @property
    def indent_unit(self) -> str:
        return "\t" if self.use_tabs else " " * self.indent_width


@dataclass
class TransformStats:
    """Counts of edits made by each phase."""

    prototype_names: int = 0
    classes_created: int = 0
    fields_merged: int = 0
    methods_attached: int = 0
    static_methods_attached: int = 0
    accessors_created: int = 0
    descriptor_calls_removed: int = 0
    unresolved_references: int = 0

    @property
    def total_edits(self) -> int:
        return (
            self.classes_created
            + self.fields_merged
            + self.methods_attached
            + self.static_methods_attached
            + self.descriptor_calls_removed
        )

    def report(self) -> str:
        rows = [
            ("Prototype names seen", self.prototype_names),
            ("Classes created", self.classes_created),
            ("Fields merged", self.fields_merged),
            ("Methods attached", self.methods_attached),
            ("Static methods attached", self.static_methods_attached),
            ("Accessors created", self.accessors_created),
            ("Unresolved references", self.unresolved_references),
        ]
        lines = ["═══ Transform Statistics ═══"]
        lines.extend(f"  {name:<26} {count:>6}" for name, count in rows)
        return "\n".join(lines)


@dataclass
class TransformContext:
    """Shared state for one invocation of the phase sequence."""

    tree: SyntaxTree
    config: TransformConfig = field(default_factory=TransformConfig)
    registry: ClassRegistry = field(default_factory=ClassRegistry)
    diagnostics: DiagnosticSink = field(default_factory=DiagnosticSink)
    stats: TransformStats = field(default_factory=TransformStats)
    prototype_names: frozenset[str] = frozenset()


@dataclass
class TransformResult:
    """Output of transforming one unit."""

    source: str
    output: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    stats: TransformStats = field(default_factory=TransformStats)
    prototype_names: frozenset[str] = frozenset()

    @property
    def changed(self) -> bool:
        return self.output != self.source

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]
