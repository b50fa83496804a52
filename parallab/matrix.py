"""Column-maximum benchmark: write each column's maximum onto the diagonal."""

from __future__ import annotations

import argparse
import mmap
import os
import platform
import random
import threading
import time
from dataclasses import dataclass

import psutil

Matrix = list[list[int]]

DEFAULT_SIZES = (100, 1000, 10000, 50000)
DEFAULT_THREADS = (4, 8, 16, 32, 64, 128, 256)

_GIB = 1024.0 * 1024 * 1024

_ARCHITECTURES = {
    "amd64": "x64 (AMD або Intel)",
    "x86_64": "x64 (AMD або Intel)",
    "x64": "x64 (AMD або Intel)",
    "i386": "x86",
    "i486": "x86",
    "i586": "x86",
    "i686": "x86",
    "x86": "x86",
    "arm": "ARM",
    "armv6l": "ARM",
    "armv7l": "ARM",
    "arm64": "ARM64",
    "aarch64": "ARM64",
}
_UNKNOWN_ARCHITECTURE = "Невідома архітектура"


def split_ranges(n: int, parts: int) -> list[tuple[int, int]]:
    """Split ``range(n)`` into ``parts`` contiguous ranges; earlier ranges get the remainder."""
    if parts < 1:
        raise ValueError("parts must be at least 1")
    if n < 0:
        raise ValueError("n must not be negative")
    base, remainder = divmod(n, parts)
    ranges = []
    start = 0
    for index in range(parts):
        end = start + base + (1 if index < remainder else 0)
        ranges.append((start, end))
        start = end
    return ranges


def create_random_matrix(n: int, rng: random.Random | None = None) -> Matrix:
    """Return an ``n`` x ``n`` matrix of random integers in 0..1000."""
    rng = rng or random.Random()
    return [[rng.randint(0, 1000) for _ in range(n)] for _ in range(n)]


def column_max_range(mat: Matrix, start: int, end: int) -> None:
    """Write the maximum of each column in ``[start, end)`` onto the diagonal, in place."""
    for j in range(start, end):
        mat[j][j] = max(row[j] for row in mat)


def column_max_sequential(mat: Matrix) -> None:
    """Write every column's maximum onto the diagonal, in place."""
    column_max_range(mat, 0, len(mat))


def column_max_parallel(mat: Matrix, num_threads: int) -> None:
    """Same as :func:`column_max_sequential`, with columns shared among threads."""
    workers = [
        threading.Thread(target=column_max_range, args=(mat, start, end))
        for start, end in split_ranges(len(mat), num_threads)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()


@dataclass(frozen=True)
class SystemInfo:
    """Processor and memory facts about the running machine."""

    architecture: str
    logical_processors: int
    page_size: int
    total_memory: int | None
    available_memory: int | None


def system_info() -> SystemInfo:
    """Collect processor and memory information."""
    machine = platform.machine().lower()
    architecture = _ARCHITECTURES.get(machine, _UNKNOWN_ARCHITECTURE)
    try:
        memory = psutil.virtual_memory()
        total, available = memory.total, memory.available
    except (OSError, RuntimeError):
        total = available = None
    return SystemInfo(
        architecture=architecture,
        logical_processors=os.cpu_count() or 1,
        page_size=mmap.PAGESIZE,
        total_memory=total,
        available_memory=available,
    )


def format_system_info(info: SystemInfo) -> str:
    """Render system information as the report printed before the benchmark."""
    lines = [
        "=== Інформація про процесор ===",
        f"Архітектура процесора: {info.architecture}",
        f"Логічних процесорів: {info.logical_processors}",
        f"Розмір сторінки пам'яті: {info.page_size} байт",
        "",
        "=== Інформація про пам'ять ===",
    ]
    if info.total_memory is None or info.available_memory is None:
        lines.append("Помилка отримання інформації про пам'ять.")
    else:
        lines.append(
            f"Загальна фізична пам'ять (RAM): {info.total_memory / _GIB:.2f} GB"
        )
        lines.append(
            f"Доступна фізична пам'ять (RAM): {info.available_memory / _GIB:.2f} GB"
        )
    lines.append("")
    return "\n".join(lines)


def _timed(func, *args) -> float:
    started = time.perf_counter()
    func(*args)
    return time.perf_counter() - started


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Column maximum benchmark.")
    parser.add_argument("--sizes", type=int, nargs="+", default=list(DEFAULT_SIZES))
    parser.add_argument(
        "--threads", type=int, nargs="+", default=list(DEFAULT_THREADS)
    )
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    print(format_system_info(system_info()))
    rng = random.Random(args.seed)

    for n in args.sizes:
        print(f"\n=== Розмір матриці: {n} x {n} ===")
        mat = create_random_matrix(n, rng)
        elapsed = _timed(column_max_sequential, mat)
        print(f"Послідовний час виконання: {elapsed:.6f} секунд.")
        for threads in args.threads:
            copy = [row[:] for row in mat]
            elapsed = _timed(column_max_parallel, copy, threads)
            print(f"Паралельний час (потоків {threads}): {elapsed:.6f} секунд.")
    return 0