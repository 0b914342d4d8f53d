# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations


def normalize_email(value: str) -> str:
    """Canonical form used for storage and lookup: trimmed, lowercase."""
    return value.strip().lower()
