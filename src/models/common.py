# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared base for API request and response models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model serialized with camelCase keys.

    Input accepts both camelCase (``anoLetivo``) and snake_case
    (``ano_letivo``) keys.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def require_text(value: str, message: str) -> str:
    """Reject blank strings with a field-specific message.

    Args:
        value: Value to check.
        message: Error message when blank.

    Returns:
        The value unchanged.

    Raises:
        ValueError: If the value is empty or whitespace only.
    """
    if not value or not value.strip():
        raise ValueError(message)
    return value
