"""Block odd-even transposition sort of 32-bit floats over simulated ranks."""

from __future__ import annotations

import argparse
import heapq
import os
from array import array
from collections.abc import Iterable, Sequence
from itertools import chain, islice
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def partition(n: int, size: int, rank: int) -> tuple[int, int]:
    """Return ``(count, offset)`` of the slice of ``n`` items owned by ``rank``."""
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    if not 0 <= rank < size:
        raise ValueError(f"rank {rank} outside 0..{size - 1}")
    if n < 0:
        raise ValueError(f"n must not be negative, got {n}")
    base, extra = divmod(n, size)
    count = base + (1 if rank < extra else 0)
    offset = base * rank + min(extra, rank)
    return count, offset


def merge_low(mine: Sequence[float], theirs: Sequence[float]) -> list[float]:
    """Keep the ``len(mine)`` smallest values of two sorted sequences."""
    if not mine or not theirs or mine[-1] <= theirs[0]:
        return list(mine)
    return list(islice(heapq.merge(mine, theirs), len(mine)))


def merge_high(mine: Sequence[float], theirs: Sequence[float]) -> list[float]:
    """Keep the ``len(mine)`` largest values of two sorted sequences."""
    if not mine or not theirs or theirs[-1] <= mine[0]:
        return list(mine)
    merged = list(heapq.merge(theirs, mine))
    return merged[len(merged) - len(mine):]


def odd_even_sort(values: Iterable[float], size: int) -> list[float]:
    """Sort ``values`` by block odd-even transposition across ``size`` ranks."""
    values = list(values)
    n = len(values)
    blocks = []
    for rank in range(size):
        count, offset = partition(n, size, rank)
        blocks.append(sorted(values[offset:offset + count]))

    for turn in range(size + 1):
        # A rank is the left partner when (rank + turn) is odd.
        for left in range((turn + 1) % 2, size - 1, 2):
            right = left + 1
            low, high = blocks[left], blocks[right]
            if not low or not high:
                continue
            blocks[left], blocks[right] = merge_low(low, high), merge_high(high, low)

    return list(chain.from_iterable(blocks))


def read_floats(path: PathLike, n: int) -> list[float]:
    """Read ``n`` native 32-bit floats from the start of a file."""
    data = array("f")
    with open(path, "rb") as fh:
        try:
            data.fromfile(fh, n)
        except EOFError as exc:
            raise ValueError(f"{path} holds fewer than {n} floats") from exc
    return data.tolist()


def write_floats(path: PathLike, values: Iterable[float]) -> None:
    """Write values as native 32-bit floats."""
    with open(path, "wb") as fh:
        array("f", values).tofile(fh)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="oddeven", description="Sort a file of 32-bit floats.")
    parser.add_argument("n", type=int, help="number of floats in the input")
    parser.add_argument("input", help="input file")
    parser.add_argument("output", help="output file")
    parser.add_argument("--ranks", type=int, default=os.cpu_count() or 1, help="number of simulated ranks")
    args = parser.parse_args(argv)
    if args.ranks <= 0:
        parser.error("--ranks must be positive")
    write_floats(args.output, odd_even_sort(read_floats(args.input, args.n), args.ranks))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())