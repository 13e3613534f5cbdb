# tests/conftest.py
# -*- coding: utf-8 -*-
"""Shared fixtures. Argon2 costs are lowered for speed unless a test is marked 'real_kdf'."""

import pytest

import filecrypt.core.crypto_logic as crypto_logic


def pytest_configure(config):
    config.addinivalue_line("markers", "real_kdf: run key derivation with the production Argon2 parameters")


@pytest.fixture(autouse=True)
def fast_kdf(request, monkeypatch):
    """Use cheap Argon2 parameters; container framing and AEAD behavior are unaffected."""
    if request.node.get_closest_marker("real_kdf"):
        yield
        return
    monkeypatch.setattr(crypto_logic, "ARGON2_TIME_COST", 1)
    monkeypatch.setattr(crypto_logic, "ARGON2_MEMORY_COST_KIB", 64)
    monkeypatch.setattr(crypto_logic, "ARGON2_PARALLELISM", 1)
    yield


@pytest.fixture
def counting_random():
    """Deterministic random source for framing tests: 0x00, 0x01, 0x02, ... across calls."""
    state = {"next": 0}

    def random_bytes(size: int) -> bytes:
        start = state["next"]
        state["next"] += size
        return bytes((start + i) % 256 for i in range(size))

    return random_bytes
