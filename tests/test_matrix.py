import random
from unittest import mock

import pytest

from parallab.matrix import (
    SystemInfo,
    column_max_parallel,
    column_max_range,
    column_max_sequential,
    create_random_matrix,
    format_system_info,
    main,
    split_ranges,
    system_info,
)


@pytest.mark.parametrize("n,parts", [(10, 3), (100, 4), (7, 7), (3, 8), (0, 2), (1000, 256)])
def test_split_ranges_covers_everything(n, parts):
    ranges = split_ranges(n, parts)
    assert len(ranges) == parts
    assert ranges[0][0] == 0
    assert ranges[-1][1] == n
    for (_, end), (start, _) in zip(ranges, ranges[1:]):
        assert end == start
    sizes = [end - start for start, end in ranges]
    assert max(sizes) - min(sizes) <= 1
    assert sizes == sorted(sizes, reverse=True)


def test_split_ranges_rejects_zero_parts():
    with pytest.raises(ValueError):
        split_ranges(5, 0)


def test_create_random_matrix_shape_and_range():
    mat = create_random_matrix(20, random.Random(3))
    assert len(mat) == 20
    assert all(len(row) == 20 for row in mat)
    assert all(0 <= v <= 1000 for row in mat for v in row)


def test_create_random_matrix_is_reproducible():
    first = create_random_matrix(8, random.Random(42))
    second = create_random_matrix(8, random.Random(42))
    other = create_random_matrix(8, random.Random(43))
    assert len(first) == 8
    assert all(len(row) == 8 for row in first)
    assert first == second
    assert first != other
    assert len({v for row in first for v in row}) > 1


def test_sequential_small_example():
    mat = [[1, 5], [3, 2]]
    column_max_sequential(mat)
    assert mat == [[3, 5], [3, 5]]


def test_sequential_diagonal_holds_column_max():
    original = create_random_matrix(15, random.Random(1))
    mat = [row[:] for row in original]
    column_max_sequential(mat)
    for j in range(15):
        column = [row[j] for row in original]
        assert mat[j][j] == max(column)
        assert mat[j][j] in column
        for i in range(15):
            if i != j:
                assert mat[i][j] == original[i][j]


@pytest.mark.parametrize("threads", [1, 2, 3, 16, 64])
def test_parallel_matches_sequential(threads):
    original = create_random_matrix(30, random.Random(9))
    expected = [row[:] for row in original]
    column_max_sequential(expected)
    mat = [row[:] for row in original]
    column_max_parallel(mat, threads)
    assert mat == expected


def test_parallel_rejects_zero_threads():
    with pytest.raises(ValueError):
        column_max_parallel([[1]], 0)


def test_column_max_range_touches_only_its_columns():
    original = create_random_matrix(10, random.Random(5))
    mat = [row[:] for row in original]
    column_max_range(mat, 2, 5)
    for j in range(10):
        if not 2 <= j < 5:
            assert [row[j] for row in mat] == [row[j] for row in original]
        else:
            assert mat[j][j] == max(row[j] for row in original)


def test_system_info_reports_machine():
    info = system_info()
    assert info.logical_processors >= 1
    assert info.page_size > 0
    assert info.total_memory >= info.available_memory


def test_system_info_maps_architecture():
    with mock.patch("platform.machine", return_value="AMD64"):
        assert system_info().architecture == "x64 (AMD або Intel)"
    with mock.patch("platform.machine", return_value="weird"):
        assert system_info().architecture == "Невідома архітектура"


def test_format_system_info():
    info = SystemInfo("ARM64", 4, 4096, 2 * 1024**3, 1024**3)
    text = format_system_info(info)
    assert "Архітектура процесора: ARM64" in text
    assert "Логічних процесорів: 4" in text
    assert "Загальна фізична пам'ять (RAM): 2.00 GB" in text


def test_format_system_info_without_memory():
    info = SystemInfo("x86", 1, 4096, None, None)
    assert "Помилка отримання інформації про пам'ять." in format_system_info(info)


def test_main_prints_timings(capsys):
    assert main(["--sizes", "3", "--threads", "2", "4", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "=== Розмір матриці: 3 x 3 ===" in out
    assert "Паралельний час (потоків 4)" in out
    assert "Послідовний час виконання" in out