"""Shared fixtures: cleartext keys and scheduler factories."""

import pytest

from fhe_life.backends.cleartext import CleartextClientKey
from fhe_life.core import EvaluatorPool, GenerationScheduler, encrypt_zero_triple


@pytest.fixture
def client_key():
    return CleartextClientKey()


@pytest.fixture
def evaluator(client_key):
    return client_key.server_key()


@pytest.fixture
def zeros(client_key):
    return encrypt_zero_triple(client_key)


@pytest.fixture
def make_scheduler(evaluator, zeros):
    """Factory building a scheduler with a pool of the requested size."""
    def _make(pool_size=4, max_workers=None):
        pool = EvaluatorPool.from_evaluator(evaluator, pool_size)
        return GenerationScheduler(pool, zeros, max_workers=max_workers)
    return _make
