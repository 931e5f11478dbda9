"""
Gate backends

Adapters that present an FHE boolean library through the GateEvaluator /
ClientKey surface used by the engine. The jaxite backend is optional and
only imported when requested.
"""

import importlib

from .base import Ciphertext, ClientKey, GateEvaluator
from .cleartext import CleartextCiphertext, CleartextClientKey, CleartextEvaluator

BACKENDS = {
    'cleartext': '.cleartext',
    'jaxite': '.jaxite',
}


def generate_keys(name: str = 'cleartext', seed=None):
    """Generate a (client_key, evaluator) pair for the named backend.

    Raises:
        ValueError: If the backend name is unknown
    """
    if name not in BACKENDS:
        raise ValueError(f"Unsupported backend: {name} (expected one of {sorted(BACKENDS)})")
    module = importlib.import_module(BACKENDS[name], __name__)
    return module.generate_keys(seed=seed)


__all__ = [
    'BACKENDS',
    'Ciphertext',
    'ClientKey',
    'GateEvaluator',
    'CleartextCiphertext',
    'CleartextClientKey',
    'CleartextEvaluator',
    'generate_keys',
]
