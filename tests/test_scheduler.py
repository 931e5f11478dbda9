"""End-to-end tests of encrypted generations.

Every test decrypts the encrypted result and compares it with the
plaintext Game of Life, the way a key holder would check the engine.
"""

import numpy as np
import pytest

from fhe_life.backends.cleartext import CleartextClientKey
from fhe_life.core import Board, EvaluatorPool, GenerationScheduler, encrypt_grid, encrypt_zero_triple
from fhe_life.core.rules import step_grid
from fhe_life.display import decrypt_board
from fhe_life.errors import KeyMismatchError
from fhe_life.patterns import BLINKER, BLOCK, GLIDER, place_pattern


def evolve_decrypted(board, scheduler, client_key, generations):
    history = []
    for _ in range(generations):
        board.evolve(scheduler)
        history.append(decrypt_board(board, client_key))
    return history


class TestPlaintextEquivalence:
    """Encrypted evolution matches the plaintext rules."""

    @pytest.mark.parametrize("shape", [(1, 1), (1, 5), (4, 1), (2, 2), (5, 7), (8, 8)])
    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_random_grids(self, client_key, make_scheduler, shape, seed):
        rng = np.random.default_rng(seed)
        grid = rng.random(shape) < 0.4
        board = encrypt_grid(grid, client_key)
        scheduler = make_scheduler(pool_size=3)

        expected = grid
        for decrypted in evolve_decrypted(board, scheduler, client_key, 3):
            expected = step_grid(expected)
            np.testing.assert_array_equal(decrypted, expected)

    def test_blinker_period_two(self, client_key, make_scheduler):
        grid = place_pattern(5, 5, BLINKER, 2, 1)
        board = encrypt_grid(grid, client_key)
        history = evolve_decrypted(board, make_scheduler(), client_key, 2)
        assert not np.array_equal(history[0], grid)
        np.testing.assert_array_equal(history[1], grid)


class TestClassicPatterns:
    """Well-known behaviors of Conway patterns."""

    @pytest.mark.parametrize("size", [4, 6])
    def test_block_still_life(self, client_key, make_scheduler, size):
        grid = place_pattern(size, size, BLOCK, 1, 1)
        board = encrypt_grid(grid, client_key)
        for decrypted in evolve_decrypted(board, make_scheduler(), client_key, 5):
            np.testing.assert_array_equal(decrypted, grid)

    def test_isolated_cell_dies(self, client_key, make_scheduler):
        grid = np.zeros((3, 3), dtype=bool)
        grid[1, 1] = True
        board = encrypt_grid(grid, client_key)
        (decrypted,) = evolve_decrypted(board, make_scheduler(), client_key, 1)
        assert not decrypted.any()

    def test_glider_translates_after_four_generations(self, client_key, make_scheduler):
        """A glider on a 6x6 torus moves one cell down and right every 4 generations."""
        grid = place_pattern(6, 6, GLIDER, 0, 0)
        board = encrypt_grid(grid, client_key)
        history = evolve_decrypted(board, make_scheduler(pool_size=4), client_key, 8)

        np.testing.assert_array_equal(history[3], np.roll(grid, (1, 1), axis=(0, 1)))
        np.testing.assert_array_equal(history[7], np.roll(grid, (2, 2), axis=(0, 1)))
        assert all(int(g.sum()) == 5 for g in history)


class TestPoolSizeInvariance:
    """The number of evaluators never changes the result."""

    def test_one_versus_sixteen(self, client_key, make_scheduler):
        grid = np.random.default_rng(7).random((6, 6)) < 0.5
        single = encrypt_grid(grid, client_key)
        many = encrypt_grid(grid, client_key)

        serial = evolve_decrypted(single, make_scheduler(pool_size=1), client_key, 4)
        parallel = evolve_decrypted(many, make_scheduler(pool_size=16, max_workers=8), client_key, 4)

        for a, b in zip(serial, parallel):
            np.testing.assert_array_equal(a, b)

    def test_more_workers_than_evaluators(self, client_key, make_scheduler):
        grid = place_pattern(6, 6, GLIDER, 1, 1)
        board = encrypt_grid(grid, client_key)
        scheduler = make_scheduler(pool_size=2, max_workers=12)
        (decrypted,) = evolve_decrypted(board, scheduler, client_key, 1)
        np.testing.assert_array_equal(decrypted, step_grid(grid))

    def test_every_evaluator_used(self, client_key, make_scheduler):
        board = encrypt_grid(np.zeros((4, 4), dtype=bool), client_key)
        scheduler = make_scheduler(pool_size=4, max_workers=1)
        board.evolve(scheduler)
        # Single worker: cell k always lands on its preferred slot k mod 4
        assert scheduler.pool.stats()['uses'] == [4, 4, 4, 4]


class TestSchedulerErrors:
    """Configuration and key errors."""

    def test_invalid_worker_count(self, evaluator, zeros):
        pool = EvaluatorPool.from_evaluator(evaluator, 2)
        with pytest.raises(ValueError, match="max_workers"):
            GenerationScheduler(pool, zeros, max_workers=0)

    def test_zero_triple_under_other_key_propagates(self, client_key, evaluator):
        """A zero triple from another key is fatal and leaves the board unchanged."""
        other_zeros = encrypt_zero_triple(CleartextClientKey())
        pool = EvaluatorPool.from_evaluator(evaluator, 2)
        scheduler = GenerationScheduler(pool, other_zeros)
        board = encrypt_grid(place_pattern(4, 4, BLOCK, 1, 1), client_key)
        before = board.cells

        with pytest.raises(KeyMismatchError):
            board.evolve(scheduler)
        assert board.cells is before
        assert board.generation == 0

    def test_run_reports_each_generation(self, client_key, make_scheduler):
        board = encrypt_grid(place_pattern(5, 5, BLINKER, 2, 1), client_key)
        seen = []
        make_scheduler().run(board, 3, on_generation=lambda gen, cells: seen.append((gen, len(cells))))
        assert seen == [(1, 25), (2, 25), (3, 25)]
        assert board.generation == 3

    def test_board_from_foreign_key_rejected(self, evaluator, zeros):
        stranger = CleartextClientKey()
        board = Board(2, 2, [stranger.encrypt(True)] * 4)
        scheduler = GenerationScheduler(EvaluatorPool.from_evaluator(evaluator, 1), zeros)
        with pytest.raises(KeyMismatchError):
            board.evolve(scheduler)
