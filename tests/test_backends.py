"""Tests for the gate backends and the backend registry."""

import pytest

import logging

from fhe_life.backends import generate_keys
from fhe_life.backends import base
from fhe_life.backends.cleartext import CleartextClientKey, CleartextEvaluator
from fhe_life.errors import EvaluatorBusyError, KeyMismatchError


class TestCleartextGates:
    """Truth tables and key checks of the reference backend."""

    @pytest.mark.parametrize("a", [False, True])
    @pytest.mark.parametrize("b", [False, True])
    def test_binary_gates(self, client_key, evaluator, a, b):
        ca, cb = client_key.encrypt(a), client_key.encrypt(b)
        assert client_key.decrypt(evaluator.and_(ca, cb)) == (a and b)
        assert client_key.decrypt(evaluator.or_(ca, cb)) == (a or b)
        assert client_key.decrypt(evaluator.xor(ca, cb)) == (a != b)

    @pytest.mark.parametrize("a", [False, True])
    def test_not(self, client_key, evaluator, a):
        assert client_key.decrypt(evaluator.not_(client_key.encrypt(a))) is (not a)

    def test_gate_count(self, client_key, evaluator):
        t = client_key.encrypt(True)
        evaluator.and_(t, t)
        evaluator.not_(t)
        assert evaluator.gate_count == 2

    def test_clone_shares_key_not_counter(self, client_key, evaluator):
        t = client_key.encrypt(True)
        evaluator.xor(t, t)
        clone = evaluator.clone()
        assert clone.key_id == evaluator.key_id
        assert clone.gate_count == 0
        assert client_key.decrypt(clone.xor(t, t)) is False

    def test_mixed_keys_rejected(self, client_key, evaluator):
        other = CleartextClientKey()
        with pytest.raises(KeyMismatchError):
            evaluator.and_(client_key.encrypt(True), other.encrypt(True))

    def test_decrypt_with_wrong_key_rejected(self, client_key):
        with pytest.raises(KeyMismatchError):
            CleartextClientKey().decrypt(client_key.encrypt(True))

    def test_concurrent_use_detected(self, client_key):
        """A second caller entering a busy evaluator is an error."""
        evaluator = CleartextEvaluator(client_key.key_id)
        t = client_key.encrypt(True)
        with evaluator.entered():
            with pytest.raises(EvaluatorBusyError):
                evaluator.and_(t, t)
        assert client_key.decrypt(evaluator.and_(t, t)) is True

    def test_repr_hides_value(self, client_key):
        assert 'True' not in repr(client_key.encrypt(True))


class TestRegistry:
    """generate_keys() backend lookup."""

    def test_cleartext(self):
        client_key, evaluator = generate_keys('cleartext')
        t = client_key.encrypt(True)
        assert client_key.decrypt(evaluator.not_(t)) is False

    def test_seeded_keys_reproducible(self):
        a, _ = generate_keys('cleartext', seed=42)
        b, _ = generate_keys('cleartext', seed=42)
        assert a.key_id == b.key_id
        assert b.decrypt(a.encrypt(True)) is True

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unsupported backend"):
            generate_keys('paillier')


class TestKeySeed:
    """Seed selection for key generation."""

    def test_unseeded_draws_from_csprng(self, monkeypatch):
        calls = []

        def fake_randbits(bits):
            calls.append(bits)
            return 12345

        monkeypatch.setattr(base.secrets, "randbits", fake_randbits)
        assert base.key_seed(None, "jaxite") == 12345
        assert calls == [base.SEED_BITS]

    def test_unseeded_seeds_differ(self):
        seeds = {base.key_seed(None, "jaxite") for _ in range(8)}
        assert len(seeds) > 1

    def test_fixed_seed_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger=base.__name__):
            assert base.key_seed(7, "jaxite") == 7
        assert "reproducible" in caplog.text


class TestJaxite:
    """Real CGGI gates; skipped unless jaxite is installed."""

    @pytest.fixture(scope="class")
    def keys(self):
        pytest.importorskip("jaxite")
        return generate_keys('jaxite', seed=1)

    def test_and_gate(self, keys):
        client_key, evaluator = keys
        result = evaluator.and_(client_key.encrypt(True), client_key.encrypt(False))
        assert client_key.decrypt(result) is False

    def test_not_gate(self, keys):
        client_key, evaluator = keys
        assert client_key.decrypt(evaluator.not_(client_key.encrypt(False))) is True
