import random
from array import array

import pytest

from hpcwork.oddeven import (
    main,
    merge_high,
    merge_low,
    odd_even_sort,
    partition,
    read_floats,
    write_floats,
)


@pytest.mark.parametrize("n,size", [(0, 1), (10, 3), (7, 7), (3, 5), (100, 8)])
def test_partition_covers_range_contiguously(n, size):
    parts = [partition(n, size, rank) for rank in range(size)]
    assert sum(count for count, _ in parts) == n
    expected_offset = 0
    for count, offset in parts:
        assert offset == expected_offset
        expected_offset += count
    counts = [count for count, _ in parts]
    assert max(counts) - min(counts) <= 1
    assert counts == sorted(counts, reverse=True)


def test_partition_bad_rank():
    with pytest.raises(ValueError):
        partition(10, 3, 3)
    with pytest.raises(ValueError):
        partition(10, 0, 0)


def test_merge_low_keeps_smallest():
    assert merge_low([1.0, 5.0, 9.0], [2.0, 3.0, 10.0]) == [1.0, 2.0, 3.0]


def test_merge_high_keeps_largest():
    assert merge_high([2.0, 3.0, 10.0], [1.0, 5.0, 9.0]) == [5.0, 9.0, 10.0]


def test_merge_already_ordered_unchanged():
    assert merge_low([1.0, 2.0], [2.0, 3.0, 4.0]) == [1.0, 2.0]
    assert merge_high([2.0, 3.0, 4.0], [1.0, 2.0]) == [2.0, 3.0, 4.0]


def test_merge_pair_preserves_multiset():
    rng = random.Random(1)
    a = sorted(rng.uniform(-5, 5) for _ in range(7))
    b = sorted(rng.uniform(-5, 5) for _ in range(6))
    low, high = merge_low(a, b), merge_high(b, a)
    assert sorted(low + high) == sorted(a + b)
    assert len(low) == 7 and len(high) == 6
    assert low[-1] <= high[0]


@pytest.mark.parametrize("n", [0, 1, 2, 17, 100])
@pytest.mark.parametrize("size", [1, 2, 3, 4, 7, 12])
def test_odd_even_sort_sorts(n, size):
    rng = random.Random(n * 31 + size)
    values = [rng.uniform(-1000, 1000) for _ in range(n)]
    assert odd_even_sort(values, size) == sorted(values)


def test_odd_even_sort_reverse_input():
    values = [float(v) for v in range(50, 0, -1)]
    assert odd_even_sort(values, 6) == sorted(values)


def test_float_file_round_trip(tmp_path):
    path = tmp_path / "data.bin"
    values = [0.5, -2.25, 1024.0, 0.0]
    write_floats(path, values)
    assert read_floats(path, 4) == values
    assert path.stat().st_size == 4 * array("f").itemsize


def test_read_floats_short_file(tmp_path):
    path = tmp_path / "data.bin"
    write_floats(path, [1.0])
    with pytest.raises(ValueError):
        read_floats(path, 3)


def test_main_sorts_file(tmp_path):
    src = tmp_path / "in.bin"
    dst = tmp_path / "out.bin"
    values = [3.5, -1.0, 8.25, 0.0, 2.0, -7.5, 4.0]
    write_floats(src, values)
    assert main([str(len(values)), str(src), str(dst), "--ranks", "3"]) == 0
    assert read_floats(dst, len(values)) == sorted(values)