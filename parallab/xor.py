"""XOR of multiples of seven: sequential, lock-guarded and compare-and-swap versions."""

from __future__ import annotations

import argparse
import random
import threading
import time
from collections.abc import Sequence
from functools import reduce
from operator import xor

DEFAULT_SIZES = (10000, 100000, 1000000, 10000000, 100000000)


def generate_data(size: int, rng: random.Random | None = None) -> list[int]:
    """Return ``size`` random integers in 0..1000."""
    rng = rng or random.Random()
    return [rng.randint(0, 1000) for _ in range(size)]


def _multiples_of_seven(values):
    return (v for v in values if v % 7 == 0)


def xor_sequential(data: Sequence[int]) -> int:
    """XOR together every element divisible by seven."""
    return reduce(xor, _multiples_of_seven(data), 0)


def _run_halves(data: Sequence[int], target) -> None:
    mid = len(data) // 2
    workers = [
        threading.Thread(target=target, args=(data[:mid],)),
        threading.Thread(target=target, args=(data[mid:],)),
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()


def xor_with_lock(data: Sequence[int]) -> int:
    """Two threads fold their halves into a shared result guarded by a lock."""
    lock = threading.Lock()
    result = 0

    def process(part):
        nonlocal result
        for value in _multiples_of_seven(part):
            with lock:
                result ^= value

    _run_halves(data, process)
    return result


class AtomicInt:
    """An integer cell updated by compare-and-swap."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    def load(self) -> int:
        with self._lock:
            return self._value

    def compare_exchange(self, expected: int, desired: int) -> tuple[bool, int]:
        """Store ``desired`` if the value equals ``expected``.

        Returns whether the swap happened and the value seen before it.
        """
        with self._lock:
            current = self._value
            if current == expected:
                self._value = desired
                return True, current
            return False, current


def xor_with_cas(data: Sequence[int]) -> int:
    """Two threads fold their halves into an :class:`AtomicInt` with CAS loops."""
    result = AtomicInt(0)

    def process(part):
        for value in _multiples_of_seven(part):
            current = result.load()
            while True:
                swapped, current = result.compare_exchange(current, current ^ value)
                if swapped:
                    break

    _run_halves(data, process)
    return result.load()


def _timed(func, data):
    started = time.perf_counter()
    value = func(data)
    return value, time.perf_counter() - started


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="XOR of multiples of seven.")
    parser.add_argument("--sizes", type=int, nargs="+", default=list(DEFAULT_SIZES))
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    rng = random.Random(args.seed)

    labels = (
        ("Послідовно:\t", xor_sequential),
        ("З м'ютексом:\t", xor_with_lock),
        ("З CAS:\t\t", xor_with_cas),
    )
    for size in args.sizes:
        print(f"\nРозмір масиву: {size} елементів")
        data = generate_data(size, rng)
        for label, func in labels:
            value, elapsed = _timed(func, data)
            print(f"{label}XOR = {value}, час = {elapsed} с")
    return 0