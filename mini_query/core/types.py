"""Shared core type aliases used across contracts, compiler, and ports."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union

Scalar = Union[None, bool, int, float, str]
Value = Union[Scalar, List["Value"]]

PositionalParams = List[Any]
QueryParams = Optional[PositionalParams]

Row = Mapping[str, Any]
Rows = List[Row]
MaybeRow = Optional[Row]

RawConditions = Mapping[str, Mapping[str, Any]]
