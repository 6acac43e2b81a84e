"""Shared types for the frontmatter YAML core."""

from __future__ import annotations

from typing import Union

# None | bool | int | float | str | list[Value] | dict[str, Value]
Scalar = Union[None, bool, int, float, str]
Value = Union[Scalar, list["Value"], dict[str, "Value"]]

__all__ = ["Scalar", "Value"]
