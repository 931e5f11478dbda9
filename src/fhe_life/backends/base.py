"""Gate library surface consumed by the circuits.

Any FHE boolean library can drive the engine as long as it is wrapped in
objects with these shapes. Evaluators hold server-side material only; the
client key (decryption capability) never reaches the core.
"""

import logging
import secrets
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

SEED_BITS = 32

# Opaque encrypted boolean. Gate calls return new values and never mutate inputs.
Ciphertext = Any


class GateEvaluator(Protocol):
    """Mutable evaluation handle for one key. Not safe for concurrent use."""

    def and_(self, a: Ciphertext, b: Ciphertext) -> Ciphertext:
        ...

    def or_(self, a: Ciphertext, b: Ciphertext) -> Ciphertext:
        ...

    def xor(self, a: Ciphertext, b: Ciphertext) -> Ciphertext:
        ...

    def not_(self, a: Ciphertext) -> Ciphertext:
        ...

    def clone(self) -> 'GateEvaluator':
        """Return an independent evaluator for the same key."""
        ...


class ClientKey(Protocol):
    """Encryption/decryption capability held by the key owner."""

    def encrypt(self, value: bool) -> Ciphertext:
        ...

    def decrypt(self, ciphertext: Ciphertext) -> bool:
        ...


def key_seed(seed: Optional[int], backend: str) -> int:
    """Choose the seed for key generation.

    Without an explicit seed a fresh one is drawn from the OS CSPRNG, so
    two unseeded runs never share key material. A fixed seed makes keys
    reproducible by anyone who knows it, which is only fit for testing.

    Args:
        seed: Caller-supplied seed, or None
        backend: Backend name, for the log message

    Returns:
        Seed to hand to the backend's key generator
    """
    if seed is None:
        return secrets.randbits(SEED_BITS)
    logger.warning(f"Generating {backend} keys from fixed seed {seed}: keys are reproducible")
    return seed
