from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional

from parsers.tokenizer import GREEDY, KeyPolicy, TokenizerSpec, build_summary, tokenize

SYSTEM_INFO_KEYS = ("arch", "cpu", "system", "release", "python")

# Every key swallows the colon-less tokens after it, so multi-word CPU names survive:
# "cpu:Intel(R) Core(TM) i7-10700K CPU @ 3.80GHz".
SYSTEM_INFO_SPEC = TokenizerSpec(
    keys={key: KeyPolicy(key, continuation=GREEDY) for key in SYSTEM_INFO_KEYS},
)


@dataclass
class ParsedSystemInfo:
    arch: Optional[str] = None
    cpu: Optional[str] = None
    system: Optional[str] = None
    release: Optional[str] = None
    python: Optional[str] = None

    def is_complete(self) -> bool:
        """True only when all five fields were found."""
        return all(getattr(self, f.name) is not None for f in fields(self))


class SystemInfoParser:
    """Parse ``runs.system_info``, e.g. ``arch:x86_64 cpu:Intel system:Linux release:5.15.0 python:3.9.0``."""

    @staticmethod
    def parse(system_info: Optional[str]) -> ParsedSystemInfo:
        return ParsedSystemInfo(**tokenize(system_info, SYSTEM_INFO_SPEC))

    @staticmethod
    def is_valid(info: ParsedSystemInfo) -> bool:
        return any(getattr(info, key) is not None for key in SYSTEM_INFO_KEYS)

    @staticmethod
    def get_summary(info: ParsedSystemInfo) -> str:
        return build_summary([(key, getattr(info, key)) for key in SYSTEM_INFO_KEYS])
