"""Generic ``key:value`` scanner shared by the run-field parsers.

Run fields such as ``system_info`` or ``device_info`` are space separated
``key:value`` tokens where values may span several tokens without quoting::

    arch:x86_64 cpu:Intel Core i7 system:Linux

Each parser describes its keys with a :class:`TokenizerSpec` and calls
:func:`tokenize`, which does a single left-to-right pass keeping one
"open" field that bare (colon-less) tokens are appended to.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

NONE = "none"
GREEDY = "greedy"

# What an unrecognized ``key:value`` token does to the scan.
UNKNOWN_CLOSE = "close"  # closes the open field; following bare tokens are dropped
UNKNOWN_APPEND = "append"  # whole token is appended to the open field, if any
UNKNOWN_CATCH_ALL = "catch_all"  # whole token goes to the catch-all field, which opens

_DISCARD = object()


@dataclass(frozen=True)
class KeyPolicy:
    field: str
    continuation: str = NONE
    opens_catch_all: bool = False
    strip: bool = False


@dataclass(frozen=True)
class TokenizerSpec:
    keys: Mapping[str, KeyPolicy]
    unknown_keys: str = UNKNOWN_CLOSE
    catch_all: Optional[str] = None
    # bare tokens containing ``absorb_marker`` always extend ``absorb_into``
    absorb_into: Optional[str] = None
    absorb_marker: Optional[str] = None
    fields: List[str] = field(init=False)

    def __post_init__(self) -> None:
        names = [p.field for p in self.keys.values()]
        if self.catch_all:
            names.append(self.catch_all)
        object.__setattr__(self, "fields", list(dict.fromkeys(names)))


def tokenize(text: Optional[str], spec: TokenizerSpec) -> Dict[str, Optional[str]]:
    """Scan ``text`` and return one entry per field of ``spec`` (``None`` when absent)."""
    parts: Dict[str, List[str]] = {}
    strip = {p.field: p.strip for p in spec.keys.values()}
    catch_all: List[str] = []
    catch_all_open = False
    open_field = None

    for token in (text or "").split(" "):
        key, sep, value = token.partition(":")
        if not sep:
            if spec.absorb_marker and spec.absorb_marker in token:
                if spec.absorb_into in parts:
                    parts[spec.absorb_into].append(token)
            elif catch_all_open:
                catch_all.append(token)
            elif open_field is not None and open_field is not _DISCARD:
                parts[open_field].append(token)
            continue

        policy = spec.keys.get(key)
        if policy is None:
            if spec.unknown_keys == UNKNOWN_CATCH_ALL and spec.catch_all:
                catch_all_open = True
                catch_all.append(token)
            elif spec.unknown_keys == UNKNOWN_APPEND:
                if open_field is not None and open_field is not _DISCARD:
                    parts[open_field].append(token)
            else:
                open_field = _DISCARD
            continue

        parts[policy.field] = [value]
        open_field = policy.field if policy.continuation == GREEDY else None
        if policy.opens_catch_all:
            catch_all_open = True

    result: Dict[str, Optional[str]] = {name: None for name in spec.fields}
    for name, values in parts.items():
        joined = " ".join(values)
        result[name] = joined.strip() if strip.get(name) else joined
    if spec.catch_all and catch_all:
        result[spec.catch_all] = " ".join(catch_all)
    return result


def build_summary(pairs) -> str:
    """Join ``(key, value)`` pairs into ``key:value`` text, skipping ``None`` values.

    A ``None`` key emits the value bare.
    """
    out = []
    for key, value in pairs:
        if value is None:
            continue
        out.append(value if key is None else f"{key}:{value}")
    return " ".join(out)
