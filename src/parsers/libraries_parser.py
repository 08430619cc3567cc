from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from parsers.tokenizer import GREEDY, UNKNOWN_APPEND, KeyPolicy, TokenizerSpec, build_summary, tokenize

LIBRARY_KEYS = ("torch", "xformers", "diffusers", "transformers")

# torch stays open until the next known library key, which keeps build tags such as
# "torch:2.0.1 autocast half" in one value.
LIBRARIES_SPEC = TokenizerSpec(
    keys={
        "torch": KeyPolicy("torch", continuation=GREEDY, strip=True),
        "xformers": KeyPolicy("xformers"),
        "diffusers": KeyPolicy("diffusers"),
        "transformers": KeyPolicy("transformers"),
    },
    unknown_keys=UNKNOWN_APPEND,
)


@dataclass
class ParsedLibraries:
    torch: Optional[str] = None
    xformers: Optional[str] = None
    diffusers: Optional[str] = None
    transformers: Optional[str] = None


class LibrariesParser:
    """Parse ``runs.model_info``, e.g. ``torch:2.0.0 xformers:0.0.22 diffusers:0.21.0 transformers:4.30.0``."""

    @staticmethod
    def parse(model_info: Optional[str]) -> ParsedLibraries:
        return ParsedLibraries(**tokenize(model_info, LIBRARIES_SPEC))

    @staticmethod
    def is_valid(libraries: ParsedLibraries) -> bool:
        return any(getattr(libraries, key) is not None for key in LIBRARY_KEYS)

    @staticmethod
    def has_all_required(libraries: ParsedLibraries, required: Iterable[str]) -> bool:
        return all(LibrariesParser.get_version(libraries, name) is not None for name in required)

    @staticmethod
    def get_version(libraries: ParsedLibraries, library_name: str) -> Optional[str]:
        name = library_name.lower()
        if name not in LIBRARY_KEYS:
            return None
        return getattr(libraries, name)

    @staticmethod
    def get_summary(libraries: ParsedLibraries) -> str:
        return build_summary([(key, getattr(libraries, key)) for key in LIBRARY_KEYS])
