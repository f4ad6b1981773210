"""Registration key classification and wildcard matching."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Pattern, Union

WILDCARD = "*"


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> Pattern[str]:
    """Compile a ``*`` glob into an anchored regular expression.

    Every character other than ``*`` is matched literally. ``*`` matches any
    run of characters, delimiters such as ``:`` or ``.`` included.
    """

    body = ".*".join(re.escape(part) for part in pattern.split(WILDCARD))
    return re.compile(body, re.DOTALL)


def is_pattern(key: str) -> bool:
    return WILDCARD in key


@dataclass(frozen=True, slots=True)
class ExactKey:
    """Key matched by plain string equality."""

    name: str

    @property
    def is_wildcard(self) -> bool:
        return False

    def matches(self, event: str) -> bool:
        return self.name == event


@dataclass(frozen=True, slots=True)
class WildcardKey:
    """Key containing ``*`` matched against concrete event names."""

    name: str
    regex: Pattern[str] = field(compare=False, repr=False)

    @property
    def is_wildcard(self) -> bool:
        return True

    def matches(self, event: str) -> bool:
        return self.regex.fullmatch(event) is not None


RegistrationKey = Union[ExactKey, WildcardKey]


def classify(key: str) -> RegistrationKey:
    """Return the tagged representation for a registration key."""

    if is_pattern(key):
        return WildcardKey(key, compile_pattern(key))
    return ExactKey(key)


__all__ = [
    "ExactKey",
    "RegistrationKey",
    "WILDCARD",
    "WildcardKey",
    "classify",
    "compile_pattern",
    "is_pattern",
]
