# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(slots=True, frozen=True)
class NewUser:
    """A validated registration, before the store has assigned an id."""

    name: str
    email: str
    hashed_password: str
    role: str | None = None


@dataclass(slots=True, frozen=True)
class User:

    id: str
    name: str
    email: str
    hashed_password: str
    created_at: datetime
    role: str | None = None

    def sanitized(self) -> dict[str, Any]:
        """Public view of the user with all credential material removed."""
        payload: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at.isoformat(),
        }
        if self.role is not None:
            payload["role"] = self.role
        return payload


@dataclass(slots=True, frozen=True)
class TokenClaims:

    user_id: str
    email: str
    role: str | None = None
    issued_at: datetime | None = None
    expires_at: datetime | None = None
