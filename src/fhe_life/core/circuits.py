"""Boolean circuits for the Game of Life transition over ciphertexts.

The neighbor count is accumulated with a 3-bit ripple-carry adder, one
neighbor at a time, and the survival/birth rule is then read off the
three sum bits. Only gate calls on the supplied evaluator touch the data,
so nothing is ever decrypted.

Counting is modulo 8: eight live neighbors wrap to 0, which the rule
treats the same as any other count outside {2, 3}.
"""

from typing import NamedTuple, Sequence

from ..backends.base import Ciphertext, GateEvaluator

NEIGHBOR_COUNT = 8


class CounterBits(NamedTuple):
    """Encrypted 3-bit unsigned integer, least significant bit first."""
    bit0: Ciphertext
    bit1: Ciphertext
    bit2: Ciphertext


# Three encryptions of False: the adder's starting value
ZeroTriple = CounterBits


def add_bit(evaluator: GateEvaluator, a: Ciphertext, total: CounterBits) -> CounterBits:
    """Add one encrypted bit to an encrypted 3-bit sum.

    Args:
        evaluator: Gate evaluator for the ciphertexts' key
        a: Encrypted bit to add
        total: Running encrypted sum

    Returns:
        New encrypted sum (carry out of bit 2 is dropped)
    """
    c0 = evaluator.xor(a, total.bit0)
    carry = evaluator.and_(a, total.bit0)
    c1 = evaluator.xor(carry, total.bit1)
    carry = evaluator.and_(carry, total.bit1)
    c2 = evaluator.xor(carry, total.bit2)
    return CounterBits(c0, c1, c2)


def count_population(evaluator: GateEvaluator, neighbors: Sequence[Ciphertext],
                     zeros: ZeroTriple) -> CounterBits:
    """Count the live cells among eight encrypted neighbors, modulo 8.

    Each fold depends on the previous running sum, so the eight additions
    run strictly in order.

    Args:
        evaluator: Gate evaluator for the ciphertexts' key
        neighbors: Exactly eight encrypted neighbor states
        zeros: Encrypted 3-bit zero under the same key

    Returns:
        Encrypted neighbor count

    Raises:
        ValueError: If the neighbor sequence is not of length eight
    """
    if len(neighbors) != NEIGHBOR_COUNT:
        raise ValueError(f"Expected {NEIGHBOR_COUNT} neighbors, got {len(neighbors)}")

    total = CounterBits(*zeros)
    for neighbor in neighbors:
        total = add_bit(evaluator, neighbor, total)
    return total


def next_state(evaluator: GateEvaluator, cell: Ciphertext, bits: CounterBits) -> Ciphertext:
    """Apply the survival/birth rule to an encrypted cell.

    Alive next generation iff the count is 3 (011), or the cell is alive
    and the count is 2 (010).

    Args:
        evaluator: Gate evaluator for the ciphertexts' key
        cell: Current encrypted cell state
        bits: Encrypted neighbor count

    Returns:
        Encrypted next cell state
    """
    sum_is_2_or_3 = evaluator.and_(bits.bit1, evaluator.not_(bits.bit2))
    sum_is_3 = evaluator.and_(bits.bit0, sum_is_2_or_3)
    survives = evaluator.and_(cell, sum_is_2_or_3)
    return evaluator.or_(sum_is_3, survives)


def evolve_cell(evaluator: GateEvaluator, cell: Ciphertext,
                neighbors: Sequence[Ciphertext], zeros: ZeroTriple) -> Ciphertext:
    """Compute one cell's next encrypted state from its neighborhood."""
    return next_state(evaluator, cell, count_population(evaluator, neighbors, zeros))
