"""CGGI boolean gates backed by Google's jaxite library.

Key generation takes a while and each binary gate triggers a bootstrap, so
this backend is meant for real encrypted runs rather than tests.
"""

import logging
from typing import Any, Optional

from jaxite.jaxite_bool import jaxite_bool

from .base import key_seed

logger = logging.getLogger(__name__)


class JaxiteClientKey:
    """Wraps a jaxite ClientKeySet together with its LWE randomness source."""

    def __init__(self, client_key_set: Any, lwe_rng: Any):
        self._cks = client_key_set
        self._lwe_rng = lwe_rng

    def encrypt(self, value: bool) -> Any:
        return jaxite_bool.encrypt(bool(value), self._cks, self._lwe_rng)

    def decrypt(self, ciphertext: Any) -> bool:
        return bool(jaxite_bool.decrypt(ciphertext, self._cks))


class JaxiteEvaluator:
    """Gate evaluator holding a jaxite ServerKeySet.

    jaxite gates are pure functions of (ciphertexts, server key, params),
    so clones share the immutable key material and differ only as handles.
    """

    def __init__(self, server_key_set: Any, params: Any):
        self._sks = server_key_set
        self._params = params

    def clone(self) -> 'JaxiteEvaluator':
        return JaxiteEvaluator(self._sks, self._params)

    def and_(self, a: Any, b: Any) -> Any:
        return jaxite_bool.and_(a, b, self._sks, self._params)

    def or_(self, a: Any, b: Any) -> Any:
        return jaxite_bool.or_(a, b, self._sks, self._params)

    def xor(self, a: Any, b: Any) -> Any:
        return jaxite_bool.xor_(a, b, self._sks, self._params)

    def not_(self, a: Any) -> Any:
        return jaxite_bool.not_(a, self._params)


def generate_keys(seed: Optional[int] = None):
    """Generate a 128-bit-security jaxite key pair.

    Args:
        seed: Seed for the LWE/RLWE generators. When omitted a fresh
            random seed is drawn; pass one only for reproducible tests.

    Returns:
        Tuple of (JaxiteClientKey, JaxiteEvaluator)
    """
    seed = key_seed(seed, 'jaxite')
    bool_params = jaxite_bool.bool_params
    lwe_rng = bool_params.get_lwe_rng_for_128_bit_security(seed=seed)
    rlwe_rng = bool_params.get_rlwe_rng_for_128_bit_security(seed=seed)
    params = bool_params.get_params_for_128_bit_security()

    logger.info("Generating jaxite client key set")
    cks = jaxite_bool.ClientKeySet(params, lwe_rng=lwe_rng, rlwe_rng=rlwe_rng)
    logger.info("Generating jaxite server key set")
    sks = jaxite_bool.ServerKeySet(
        cks, params, lwe_rng=lwe_rng, rlwe_rng=rlwe_rng, bootstrap_callback=None
    )
    return JaxiteClientKey(cks, lwe_rng), JaxiteEvaluator(sks, params)
