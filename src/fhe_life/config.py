"""Run configuration for the encrypted Game of Life."""

import os
from typing import Any, Dict, Mapping, Optional

from .backends import BACKENDS
from .errors import InvalidPoolSizeError

ENV_PREFIX = 'FHE_LIFE_'


class LifeConfig:
    """Configuration for an encrypted run."""

    def __init__(self,
                 pool_size: int = 4,
                 max_workers: Optional[int] = None,
                 generations: int = 4,
                 wait_seconds: float = 0.0,
                 backend: str = 'cleartext',
                 seed: Optional[int] = None):
        """Initialize run configuration.

        Args:
            pool_size: Number of evaluator clones (>= 1)
            max_workers: Worker threads (defaults to pool_size)
            generations: Generations to compute (>= 0)
            wait_seconds: Pause between generations (>= 0)
            backend: Gate backend name
            seed: Key generation seed

        Raises:
            InvalidPoolSizeError: If pool_size is less than 1
            ValueError: If any other value is out of range
        """
        if pool_size < 1:
            raise InvalidPoolSizeError(f"Evaluator pool size must be at least 1, got {pool_size}")
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        if generations < 0:
            raise ValueError(f"generations cannot be negative, got {generations}")
        if wait_seconds < 0:
            raise ValueError(f"wait_seconds cannot be negative, got {wait_seconds}")
        if backend not in BACKENDS:
            raise ValueError(f"Unsupported backend: {backend} (expected one of {sorted(BACKENDS)})")

        self.pool_size = pool_size
        self.max_workers = max_workers
        self.generations = generations
        self.wait_seconds = wait_seconds
        self.backend = backend
        self.seed = seed

    @staticmethod
    def env_values(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Read FHE_LIFE_* environment variables without validating them.

        Recognized: FHE_LIFE_POOL_SIZE, FHE_LIFE_MAX_WORKERS,
        FHE_LIFE_GENERATIONS, FHE_LIFE_WAIT_SECONDS, FHE_LIFE_BACKEND,
        FHE_LIFE_SEED. Unset or empty variables are left out.

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        for name, convert in (('pool_size', int), ('max_workers', int),
                              ('generations', int), ('wait_seconds', float),
                              ('backend', str), ('seed', int)):
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is not None and raw != '':
                try:
                    kwargs[name] = convert(raw)
                except ValueError:
                    raise ValueError(f"Invalid value for {ENV_PREFIX}{name.upper()}: {raw!r}") from None
        return kwargs

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'LifeConfig':
        """Build configuration from FHE_LIFE_* environment variables."""
        return cls(**cls.env_values(environ))

    def copy(self) -> 'LifeConfig':
        """Create a copy of the configuration."""
        return LifeConfig(
            pool_size=self.pool_size,
            max_workers=self.max_workers,
            generations=self.generations,
            wait_seconds=self.wait_seconds,
            backend=self.backend,
            seed=self.seed,
        )

    def __repr__(self) -> str:
        return (f"LifeConfig(pool_size={self.pool_size}, max_workers={self.max_workers}, "
                f"generations={self.generations}, wait_seconds={self.wait_seconds}, "
                f"backend={self.backend!r}, seed={self.seed})")
