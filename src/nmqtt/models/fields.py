"""Field type helpers and utilities.

This module provides convenience functions for declaring packet fields whose
range is fixed by their wire width.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo

U16_MAX = 0xFFFF
COUNT_MAX = 0xFF


def U16(**kwargs: Any) -> FieldInfo:
    """Create an unsigned 16-bit integer field (0-65535).

    Args:
        **kwargs: Additional Field() arguments (description, default, etc.)

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Connect(BasePacket):
        ...     keep_alive: int = U16(default=60)
    """
    return cast(FieldInfo, Field(ge=0, le=U16_MAX, **kwargs))


def CountPrefixed(**kwargs: Any) -> FieldInfo:
    """Create a sequence field written behind a one-byte count (at most 255 items).

    Args:
        **kwargs: Additional Field() arguments

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class SubAck(BasePacket):
        ...     return_codes: tuple[SubAckReturnCode, ...] = CountPrefixed(default=())
    """
    return cast(FieldInfo, Field(max_length=COUNT_MAX, **kwargs))
