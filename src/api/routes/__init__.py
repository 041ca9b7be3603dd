# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API Routes package.

This module exports the non-versioned route modules of the API.
"""

from src.api.routes import health

__all__ = ["health"]
