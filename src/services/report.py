from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass
class ProcessingReport:
    """Outcome of a bulk job (ingestion or re-derivation)."""

    success: bool
    message: str
    total_rows: int = 0
    inserted_rows: int = 0
    error_rows: int = 0
    skipped_rows: int = 0
    error_messages: List[str] = field(default_factory=list)

    @property
    def total_runs(self) -> int:
        return self.total_rows

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
