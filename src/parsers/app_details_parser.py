from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from parsers.tokenizer import KeyPolicy, TokenizerSpec, build_summary, tokenize

APP_DETAILS_SPEC = TokenizerSpec(
    keys={
        "app": KeyPolicy("app_name"),
        "updated": KeyPolicy("updated"),
        "hash": KeyPolicy("hash"),
        "url": KeyPolicy("url"),
    },
)


@dataclass
class ParsedAppDetails:
    app_name: Optional[str] = None
    updated: Optional[str] = None
    hash: Optional[str] = None
    url: Optional[str] = None


class AppDetailsParser:
    """Parse ``runs.info``, e.g. ``app:name updated:2024-01-01 hash:abc url:https://...``."""

    @staticmethod
    def parse(info: Optional[str]) -> ParsedAppDetails:
        return ParsedAppDetails(**tokenize(info, APP_DETAILS_SPEC))

    @staticmethod
    def is_valid(details: ParsedAppDetails) -> bool:
        return any(v is not None for v in (details.app_name, details.updated, details.hash, details.url))

    @staticmethod
    def get_summary(details: ParsedAppDetails) -> str:
        return build_summary(
            [
                ("app", details.app_name),
                ("updated", details.updated),
                ("hash", details.hash),
                ("url", details.url),
            ]
        )
