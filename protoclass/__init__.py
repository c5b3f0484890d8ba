"""protoclass — rewrite prototype-based JavaScript constructors as classes."""

from .api import convert_source, parse_source, transform_source  # noqa: F401
from .diagnostics import Diagnostic, DiagnosticKind, Severity  # noqa: F401
from .errors import ProtoclassError, UnparseableSourceError  # noqa: F401
from .transform_types import TransformConfig, TransformResult  # noqa: F401
