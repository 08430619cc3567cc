"""Parse the slash separated it/s series stored in ``runs.vram_usage``.

``parse`` is lenient and never fails: pieces that are blank, not numbers,
or NaN are dropped. ``validate_with_errors`` is the strict variant for
callers that need to reject bad input.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

MIN_ITS = 0.1
MAX_ITS = 100.0


class PerformanceParseError(ValueError):
    """Base class of the strict validation failures."""


class EmptyInput(PerformanceParseError):
    def __init__(self) -> None:
        super().__init__("Empty input string")


class NoValidValues(PerformanceParseError):
    def __init__(self) -> None:
        super().__init__("No valid ITS values found")


class InvalidValue(PerformanceParseError):
    def __init__(self, value: float) -> None:
        super().__init__(f"Invalid ITS value: {value}")
        self.value = value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, InvalidValue) and other.value == self.value

    def __hash__(self) -> int:
        return hash(("InvalidValue", self.value))


@dataclass
class ParsedPerformance:
    its_values: List[float] = field(default_factory=list)
    avg_its: Optional[float] = None
    raw_vram_usage: str = ""


@dataclass(frozen=True)
class PerformanceStats:
    min_its: float = 0.0
    max_its: float = 0.0
    avg_its: float = 0.0
    count: int = 0


def _to_float(piece: str) -> Optional[float]:
    piece = piece.strip()
    if not piece:
        return None
    try:
        value = float(piece)
    except ValueError:
        return None
    return None if math.isnan(value) else value


class PerformanceParser:
    @staticmethod
    def parse(vram_usage: Optional[str]) -> ParsedPerformance:
        raw = vram_usage or ""
        values = [v for v in (_to_float(p) for p in raw.split("/")) if v is not None]
        avg = sum(values) / len(values) if values else None
        return ParsedPerformance(its_values=values, avg_its=avg, raw_vram_usage=raw)

    @staticmethod
    def is_valid(data: ParsedPerformance) -> bool:
        return bool(data.its_values) and data.avg_its is not None

    @staticmethod
    def get_statistics(data: ParsedPerformance) -> PerformanceStats:
        values = data.its_values
        if not values:
            return PerformanceStats()
        return PerformanceStats(
            min_its=min(values),
            max_its=max(values),
            avg_its=sum(values) / len(values),
            count=len(values),
        )

    @staticmethod
    def get_summary(data: ParsedPerformance) -> str:
        if not data.its_values:
            return "No valid ITS values"
        stats = PerformanceParser.get_statistics(data)
        return (
            f"ITS: {data.raw_vram_usage} "
            f"(avg: {stats.avg_its:.2f}, min: {stats.min_its:.2f}, max: {stats.max_its:.2f})"
        )

    @staticmethod
    def validate_with_errors(vram_usage: Optional[str]) -> ParsedPerformance:
        """Strict parse; raises EmptyInput, NoValidValues or InvalidValue."""
        if not vram_usage or not vram_usage.strip():
            raise EmptyInput()
        data = PerformanceParser.parse(vram_usage)
        if not data.its_values:
            raise NoValidValues()
        for value in data.its_values:
            if value < MIN_ITS or value > MAX_ITS:
                raise InvalidValue(value)
        return data

    @staticmethod
    def check(vram_usage: Optional[str]) -> Optional[PerformanceParseError]:
        """Non-raising form of ``validate_with_errors``: the error, or None when valid."""
        try:
            PerformanceParser.validate_with_errors(vram_usage)
        except PerformanceParseError as exc:
            return exc
        return None
