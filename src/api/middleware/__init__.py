# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API middleware components.

Exports:
    limiter: Shared slowapi Limiter.
    rate_limit_exceeded_handler: 429 response handler.
    RequestContextMiddleware: Binds request-scoped logging context.
"""

from src.api.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from src.api.middleware.request_context import RequestContextMiddleware

__all__ = [
    "limiter",
    "rate_limit_exceeded_handler",
    "RequestContextMiddleware",
]
