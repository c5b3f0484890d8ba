"""Batch driver — discovers units, converts each one and aggregates results."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable

from .api import transform_source
from .diagnostics import Severity
from .errors import UnparseableSourceError
from .transform_types import TransformConfig, TransformResult
from . import constants

logger = logging.getLogger(__name__)


class UnitStatus(Enum):
    CONVERTED = "converted"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True)
class Unit:
    """One input file and its path relative to the argument it was found under."""

    path: Path
    relative: Path


@dataclass
class UnitResult:
    unit: Unit
    status: UnitStatus
    result: TransformResult | None = None
    error: str = ""


@dataclass
class BatchSummary:
    units: list[UnitResult] = field(default_factory=list)

    def count(self, status: UnitStatus) -> int:
        return sum(1 for u in self.units if u.status == status)

    def diagnostics_by_severity(self, severity: Severity) -> int:
        return sum(
            1
            for u in self.units
            if u.result is not None
            for d in u.result.diagnostics
            if d.severity == severity
        )

    @property
    def failed(self) -> bool:
        return self.count(UnitStatus.FAILED) > 0

    @property
    def has_errors(self) -> bool:
        return self.diagnostics_by_severity(Severity.ERROR) > 0

    def report(self) -> str:
        return "\n".join(
            [
                "═══ Batch Summary ═══",
                f"  Units:      {len(self.units)}",
                f"  Converted:  {self.count(UnitStatus.CONVERTED)}",
                f"  Unchanged:  {self.count(UnitStatus.UNCHANGED)}",
                f"  Failed:     {self.count(UnitStatus.FAILED)}",
                f"  Warnings:   {self.diagnostics_by_severity(Severity.WARNING)}",
                f"  Errors:     {self.diagnostics_by_severity(Severity.ERROR)}",
            ]
        )


def discover_units(
    paths: Iterable[Path | str],
    extensions: Iterable[str] = constants.DEFAULT_EXTENSIONS,
) -> list[Unit]:
    """Expand files and directories into the units to convert, sorted per argument.

    Directories are searched recursively, skipping ``node_modules`` and
    ``.git``. Files named explicitly are taken regardless of extension.
    """
    suffixes = tuple(extensions)
    units: list[Unit] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            found = sorted(
                p
                for p in path.rglob("*")
                if p.is_file()
                and p.suffix in suffixes
                and not constants.SKIPPED_DIRECTORIES.intersection(
                    p.relative_to(path).parts
                )
            )
            units.extend(Unit(p, p.relative_to(path)) for p in found)
        elif path.is_file():
            units.append(Unit(path, Path(path.name)))
        else:
            logger.warning("No such file or directory: %s", path)
    return units


def convert_file(
    unit: Unit,
    config: TransformConfig | None = None,
    *,
    write: bool = True,
    out_dir: Path | None = None,
) -> UnitResult:
    """Convert one unit, writing in place (or under *out_dir*) when *write*."""
    try:
        source = unit.path.read_text(encoding="utf-8")
        result = transform_source(source, config, allow_errors=False)
    except (OSError, UnicodeDecodeError, UnparseableSourceError) as exc:
        logger.error("Skipping %s: %s", unit.path, exc)
        return UnitResult(unit, UnitStatus.FAILED, error=str(exc))

    status = UnitStatus.CONVERTED if result.changed else UnitStatus.UNCHANGED
    target = unit.path if out_dir is None else out_dir / unit.relative
    if write and (result.changed or out_dir is not None):
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(result.output, encoding="utf-8")
        except OSError as exc:
            logger.error("Could not write %s: %s", target, exc)
            return UnitResult(unit, UnitStatus.FAILED, result=result, error=str(exc))
    logger.info("%s: %s", unit.path, status.value)
    return UnitResult(unit, status, result=result)


def run_batch(
    paths: Iterable[Path | str],
    config: TransformConfig | None = None,
    *,
    extensions: Iterable[str] = constants.DEFAULT_EXTENSIONS,
    write: bool = True,
    out_dir: Path | None = None,
) -> BatchSummary:
    """Convert every unit found under *paths*, one independent invocation each."""
    summary = BatchSummary()
    for unit in discover_units(paths, extensions):
        summary.units.append(convert_file(unit, config, write=write, out_dir=out_dir))
    return summary
