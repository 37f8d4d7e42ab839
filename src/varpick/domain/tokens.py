"""Token policies: how an address becomes the literal text inserted in the buffer."""

from dataclasses import dataclass
from typing import Callable, Union

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "DEFAULT_OPEN",
    "DEFAULT_CLOSE",
    "TokenWrap",
    "StaticWrap",
    "CustomFormat",
    "TokenPolicy",
]

DEFAULT_OPEN = "{{"
DEFAULT_CLOSE = "}}"


class TokenWrap(BaseModel):
    """User-facing delimiter options, as found in configuration files.

    Each side falls back to its default independently, so ``{"open": "${"}``
    still closes with ``}}``.
    """

    model_config = ConfigDict(frozen=True)

    open: str = Field(DEFAULT_OPEN, description="Text placed before the address")
    close: str = Field(DEFAULT_CLOSE, description="Text placed after the address")


@dataclass(frozen=True, slots=True)
class StaticWrap:
    """Wrap the address between two fixed delimiters."""

    open: str = DEFAULT_OPEN
    close: str = DEFAULT_CLOSE


@dataclass(frozen=True, slots=True)
class CustomFormat:
    """Delegate formatting to a caller-supplied function."""

    fn: Callable[[str], str]


TokenPolicy = Union[StaticWrap, CustomFormat]
