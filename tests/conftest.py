"""Test configuration."""

import os

# Cheap hashes and quiet logging before Settings is read anywhere
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")

import logfire  # noqa: E402

logfire.configure(send_to_logfire=False, console=False)
