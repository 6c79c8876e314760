"""Check TypeScript declaration files against the JavaScript modules they describe."""

from .critic import analyze, check_source, critique, dts_critic
from .errors import filter_findings, to_error_kind
from .models import CriticFinding, ErrorKind, Position

__all__ = [
    "CriticFinding",
    "ErrorKind",
    "Position",
    "analyze",
    "check_source",
    "critique",
    "dts_critic",
    "filter_findings",
    "to_error_kind",
]
