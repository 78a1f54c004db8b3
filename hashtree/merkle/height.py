"""
Tree Height

Number of level slots pre-allocated for a given block count.

The formula is kept exactly as the tree has always computed it:
- power of two: count // 2 + 1
- otherwise:    log2(next_power_of_two(count)) - 1

where log2 is the bit length of its argument (log2(4) == 3). This is not
ceil(log2(count)) + 1; for example 8 blocks yield 5 slots while the built
tree has 4 levels. generate() adjusts the slot list to the levels it
actually builds.
"""
from __future__ import annotations


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def bit_length_log2(n: int) -> int:
    """Count of bits needed to represent n (0 for n <= 0)."""
    return n.bit_length() if n > 0 else 0


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (n itself when already a power of two)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def tree_height(block_count: int) -> int:
    """
    Level slots to pre-allocate for block_count raw blocks.

    Args:
        block_count: Number of raw blocks (not padded leaves)

    Returns:
        Slot count; 0 when there are no blocks
    """
    if block_count <= 0:
        return 0
    if is_power_of_two(block_count):
        return block_count // 2 + 1
    return bit_length_log2(next_power_of_two(block_count)) - 1


__all__ = [
    "is_power_of_two",
    "bit_length_log2",
    "next_power_of_two",
    "tree_height",
]
