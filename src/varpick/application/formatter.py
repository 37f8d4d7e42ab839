"""
Token formatting: turn an address into the literal text written to the buffer.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from varpick.domain.exceptions import ConfigurationError
from varpick.domain.tokens import CustomFormat, StaticWrap, TokenPolicy, TokenWrap

DEFAULT_POLICY = StaticWrap()


def format_token(address: str, policy: TokenPolicy = DEFAULT_POLICY) -> str:
    """Return the insertion text for ``address`` under ``policy``."""
    if isinstance(policy, CustomFormat):
        return policy.fn(address)
    return f"{policy.open}{address}{policy.close}"


def resolve_token_policy(value: Any) -> TokenPolicy:
    """
    Normalize the accepted token option shapes into a ``TokenPolicy``.

    Accepted values:
        - None: default ``{{ }}`` delimiters
        - ``StaticWrap`` / ``CustomFormat``: returned unchanged
        - ``TokenWrap`` or a mapping with optional ``open``/``close`` keys
        - a ``(open, close)`` pair
        - a callable taking the address and returning the token text

    Raises:
        ConfigurationError: If the value has none of the shapes above
    """
    if value is None:
        return DEFAULT_POLICY
    if isinstance(value, (StaticWrap, CustomFormat)):
        return value
    if isinstance(value, TokenWrap):
        return StaticWrap(open=value.open, close=value.close)
    if isinstance(value, Mapping):
        # Missing or null sides fall back independently
        cleaned = {k: v for k, v in value.items() if k in ("open", "close") and v is not None}
        try:
            wrap = TokenWrap(**cleaned)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid token delimiters {dict(value)!r}: {e}") from e
        return StaticWrap(open=wrap.open, close=wrap.close)
    if isinstance(value, tuple) and len(value) == 2 and all(isinstance(part, str) for part in value):
        return StaticWrap(open=value[0], close=value[1])
    if callable(value):
        return CustomFormat(fn=value)

    raise ConfigurationError(
        f"Token option must be a delimiter mapping, an (open, close) pair or a callable, got {type(value).__name__}"
    )
