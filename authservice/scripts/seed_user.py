# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Create a user through the registration rules (development seed)."""

from __future__ import annotations

import argparse
import json
import sys

from authservice.infrastructure.container import Container
from authservice.shared.config import load_config
from authservice.shared.errors.base import DomainError
from authservice.shared.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Register a user in the configured database")
    parser.add_argument("--name", default="Test_User", help="Display name (3-50 letters, digits, _)")
    parser.add_argument("--email", default="test@example.com", help="Email address")
    parser.add_argument("--password", default="Test12345!", help="Plaintext password")
    return parser


def seed_user(container: Container, name: str, email: str, password: str) -> dict:
    container.database.create_all()
    return container.register_user_use_case.execute(
        {
            "name": name,
            "email": email,
            "password": password,
            "confirmPassword": password,
        }
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config()
    setup_logging(config.log_level, config.log_file)
    container = Container(config)
    try:
        user = seed_user(container, args.name, args.email, args.password)
    except DomainError as exc:
        print(f"{exc.kind.value}: {exc.message}", file=sys.stderr)
        return 1
    finally:
        container.database.dispose()
    print(json.dumps(user, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
