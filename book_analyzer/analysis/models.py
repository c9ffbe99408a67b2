from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SemanticAnalysis:
    """Subject classification and summary produced by the external analyzer.

    Values are passed through as returned; only the presence of every field
    is checked.
    """

    summary: str
    lcc: Any = field(default_factory=list)
    bisac: Any = field(default_factory=list)
    lcsh: Any = field(default_factory=list)
    field_of_study: Any = None
    discipline: Any = None
