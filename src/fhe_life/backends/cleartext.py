"""Insecure cleartext gate backend.

Ciphertexts produced here carry the plaintext bit next to the id of the
key that "encrypted" it. Nothing is hidden: the backend exists so the
circuits, board and scheduler can be exercised quickly in tests and demos
with the same checks a real FHE library would impose (matching keys,
exclusive evaluator use).
"""

import threading
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional
import logging

from ..errors import EvaluatorBusyError, KeyMismatchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleartextCiphertext:
    """Encrypted boolean stand-in.

    Attributes:
        key_id: Identifier of the key the value belongs to
        value: The boolean, stored in the clear
    """
    key_id: str
    value: bool

    def __repr__(self) -> str:
        # Keep the bit out of debug output, as a real ciphertext would
        return f"CleartextCiphertext(key={self.key_id[:8]})"


class CleartextClientKey:
    """Client key for the cleartext backend."""

    def __init__(self, key_id: Optional[str] = None):
        self.key_id = key_id or uuid.uuid4().hex

    def encrypt(self, value: bool) -> CleartextCiphertext:
        return CleartextCiphertext(self.key_id, bool(value))

    def decrypt(self, ciphertext: CleartextCiphertext) -> bool:
        if ciphertext.key_id != self.key_id:
            raise KeyMismatchError(
                f"Ciphertext under key {ciphertext.key_id[:8]} cannot be decrypted "
                f"with key {self.key_id[:8]}"
            )
        return ciphertext.value

    def server_key(self) -> 'CleartextEvaluator':
        """Derive an evaluator for this key."""
        return CleartextEvaluator(self.key_id)


class CleartextEvaluator:
    """Gate evaluator for the cleartext backend.

    Every gate call checks that all operands share the evaluator's key and
    counts the gate. Callers are tracked for the whole gate, which yields
    the thread once while inside, so two threads sharing an evaluator meet
    there and the later one gets EvaluatorBusyError.

    Attributes:
        key_id: Key this evaluator operates under
        gate_count: Number of gates evaluated by this instance
    """

    def __init__(self, key_id: str):
        self.key_id = key_id
        self.gate_count = 0
        self._active = 0
        self._active_lock = threading.Lock()

    def clone(self) -> 'CleartextEvaluator':
        return CleartextEvaluator(self.key_id)

    def _check(self, *operands: CleartextCiphertext) -> None:
        for ct in operands:
            if ct.key_id != self.key_id:
                raise KeyMismatchError(
                    f"Operand under key {ct.key_id[:8]} given to evaluator for key {self.key_id[:8]}"
                )

    @contextmanager
    def entered(self):
        """Mark the evaluator as in use for the duration of a with-block."""
        with self._active_lock:
            self._active += 1
            active = self._active
        try:
            if active > 1:
                raise EvaluatorBusyError(f"Evaluator {id(self):#x} entered by {active} callers at once")
            time.sleep(0)
            yield
        finally:
            with self._active_lock:
                self._active -= 1

    def _gate(self, result: bool) -> CleartextCiphertext:
        with self.entered():
            self.gate_count += 1
            return CleartextCiphertext(self.key_id, result)

    def and_(self, a: CleartextCiphertext, b: CleartextCiphertext) -> CleartextCiphertext:
        self._check(a, b)
        return self._gate(a.value and b.value)

    def or_(self, a: CleartextCiphertext, b: CleartextCiphertext) -> CleartextCiphertext:
        self._check(a, b)
        return self._gate(a.value or b.value)

    def xor(self, a: CleartextCiphertext, b: CleartextCiphertext) -> CleartextCiphertext:
        self._check(a, b)
        return self._gate(a.value != b.value)

    def not_(self, a: CleartextCiphertext) -> CleartextCiphertext:
        self._check(a)
        return self._gate(not a.value)

    def __repr__(self) -> str:
        return f"CleartextEvaluator(key={self.key_id[:8]}, gates={self.gate_count})"


def generate_keys(seed: Optional[int] = None):
    """Create a cleartext (client_key, evaluator) pair.

    Args:
        seed: Optional seed making the key id reproducible

    Returns:
        Tuple of (CleartextClientKey, CleartextEvaluator)
    """
    key_id = uuid.UUID(int=seed).hex if seed is not None else None
    client_key = CleartextClientKey(key_id)
    logger.warning("Using the cleartext backend: cell states are NOT encrypted")
    return client_key, client_key.server_key()
