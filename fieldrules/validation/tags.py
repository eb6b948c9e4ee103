"""Rule Tag Grammar

A field's tag is a compact rule list:

    min?3,max?40
    nonzero&err=is required
    min?123&foo&err=custom error message,nonzero

Rules are separated by ``,``. Each rule is ``name`` or ``name?params``;
without a ``?`` the params may also start at the first ``&``.
Params are separated by ``&``; each is ``key=value`` or a bare value.
Bare values get positional keys "0", "1", ... in order of appearance
within their rule. The key ``err`` is reserved: its value replaces the
rule's own failure message and is not passed to the rule.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

ERR_KEY = "err"

_EMPTY_PARAMS: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class RuleSpec:
    """One parsed rule occurrence."""
    name: str
    params: Mapping[str, str] = field(default_factory=lambda: _EMPTY_PARAMS)
    custom_error: str | None = None

    def __str__(self) -> str:
        parts = [v if k.isdigit() else f"{k}={v}" for k, v in self.params.items()]
        if self.custom_error is not None:
            parts.append(f"{ERR_KEY}={self.custom_error}")
        return f"{self.name}?{'&'.join(parts)}" if parts else self.name


TagSpec = tuple[RuleSpec, ...]


def _parse_params(section: str) -> tuple[Mapping[str, str], str | None]:
    params: dict[str, str] = {}
    custom_error = None
    position = 0
    for fragment in section.split("&"):
        fragment = fragment.strip()
        if not fragment:
            continue
        if "=" in fragment:
            key, value = fragment.split("=", 1)
            key, value = key.strip(), value.strip()
            if key == ERR_KEY:
                custom_error = value
                continue
            params[key] = value
        else:
            params[str(position)] = fragment
            position += 1
    return MappingProxyType(params), custom_error


def _parse_rule(fragment: str) -> RuleSpec | None:
    name, sep, section = fragment.partition("?")
    if not sep:
        # "nonzero&err=is required": params may follow the name directly.
        name, sep, section = fragment.partition("&")
    name = name.strip()
    if not name:
        return None
    if not sep:
        return RuleSpec(name=name)
    params, custom_error = _parse_params(section)
    return RuleSpec(name=name, params=params, custom_error=custom_error)


@lru_cache(maxsize=1024)
def parse_tag(raw: str) -> TagSpec:
    """Parse a raw tag string into its ordered rule specs.

    Total: malformed fragments are skipped, never raised on.
    """
    specs = []
    for fragment in raw.split(","):
        if not fragment:
            continue
        spec = _parse_rule(fragment)
        if spec is not None:
            specs.append(spec)
    return tuple(specs)
