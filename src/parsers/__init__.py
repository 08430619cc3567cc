"""Parsers for the free-text fields of a benchmark run."""

from parsers.app_details_parser import AppDetailsParser, ParsedAppDetails
from parsers.gpu_info_parser import GpuInfoParser, ParsedGpuInfo
from parsers.libraries_parser import LibrariesParser, ParsedLibraries
from parsers.performance_parser import (
    EmptyInput,
    InvalidValue,
    NoValidValues,
    ParsedPerformance,
    PerformanceParseError,
    PerformanceParser,
    PerformanceStats,
)
from parsers.system_info_parser import ParsedSystemInfo, SystemInfoParser

__all__ = [
    "AppDetailsParser",
    "EmptyInput",
    "GpuInfoParser",
    "InvalidValue",
    "LibrariesParser",
    "NoValidValues",
    "ParsedAppDetails",
    "ParsedGpuInfo",
    "ParsedLibraries",
    "ParsedPerformance",
    "ParsedSystemInfo",
    "PerformanceParseError",
    "PerformanceParser",
    "PerformanceStats",
    "SystemInfoParser",
]
