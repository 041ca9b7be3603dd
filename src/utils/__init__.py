# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations
- cpf: CPF normalization and check-digit validation
"""

from src.utils.cpf import is_valid_cpf, normalize_cpf
from src.utils.datetime import utc_now
from src.utils.logging import bind_context, clear_context, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "bind_context",
    "clear_context",
    # Datetime
    "utc_now",
    # CPF
    "normalize_cpf",
    "is_valid_cpf",
]
