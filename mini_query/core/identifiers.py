"""Identifier validation for names that are interpolated into SQL text.

Table and column names cannot be bound as parameters, so a strict
`[A-Za-z0-9_]+` full match is the only thing standing between caller input
and the SQL string.
"""

from __future__ import annotations

import re
from typing import NewType

from .errors import InvalidIdentifierError

Identifier = NewType("Identifier", str)

_IDENTIFIER_RE = re.compile(r"[A-Za-z0-9_]+")


def is_valid_identifier(name: object) -> bool:
    """Return whether `name` is safe to interpolate literally into SQL."""

    return isinstance(name, str) and _IDENTIFIER_RE.fullmatch(name) is not None


def require_identifier(name: object, kind: str = "table") -> Identifier:
    """Return `name` as an `Identifier` or raise `InvalidIdentifierError`."""

    if not is_valid_identifier(name):
        raise InvalidIdentifierError(name, kind)
    return Identifier(name)  # type: ignore[arg-type]
