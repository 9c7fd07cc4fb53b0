"""Root conftest — shared test configuration and core fixtures."""

import os

import pytest

# Keep test logs readable and independent of a developer's .env
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from envelope_kit.core.encode_envelope import EnvelopeEncoder  # noqa: E402
from envelope_kit.core.resolve_encoder import TypeResolver  # noqa: E402


@pytest.fixture
def resolver() -> TypeResolver:
    return TypeResolver()


@pytest.fixture
def encoder(resolver) -> EnvelopeEncoder:
    return EnvelopeEncoder(resolver)
