"""Shared test utilities."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures" / "quay"

IMAGE_ID = "1234"
REPOSITORY = "ejholmes/docker-statsd"
COMMIT_REF = "long-f1fb3b0"
BUILD_URL = (
    "https://quay.io/repository/ejholmes/docker-statsd/build/"
    "3c1a5a8b-7d4e-4d5b-9f51-0c6d2b8c9e12"
)


def load_fixture(name: str) -> bytes:
    """Return the raw bytes of a Quay webhook fixture."""
    path = FIXTURES_DIR / f"{name}.json"
    if not path.exists():
        pytest.fail(f"Unable to load fixture {name}")
    return path.read_bytes()
