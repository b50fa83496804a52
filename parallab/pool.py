"""A bounded thread pool that rejects tasks when its queue is full and records metrics."""

from __future__ import annotations

import argparse
import random
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

Task = Callable[[], None]


class TaskQueue:
    """A thread-safe FIFO of tasks with a capacity checked on push."""

    def __init__(self) -> None:
        self._tasks: deque[Task] = deque()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def empty(self) -> bool:
        return len(self) == 0

    def clear(self) -> None:
        with self._lock:
            self._tasks.clear()

    def pop(self) -> Task:
        """Remove and return the oldest task; raise IndexError when empty."""
        with self._lock:
            if not self._tasks:
                raise IndexError("Черга пуста")
            return self._tasks.popleft()

    def push(self, task: Task, capacity: int) -> bool:
        """Append ``task`` unless the queue already holds ``capacity`` tasks."""
        with self._lock:
            if len(self._tasks) >= capacity:
                return False
            self._tasks.append(task)
            return True

    def peek(self) -> Task:
        """Return the oldest task without removing it; raise IndexError when empty."""
        with self._lock:
            if not self._tasks:
                raise IndexError("Черга пуста")
            return self._tasks[0]


@dataclass(frozen=True)
class PoolMetrics:
    """Counters and timings gathered by a :class:`ThreadPool`."""

    workers: int
    attempted: int
    accepted: int
    completed: int
    rejected: int
    average_wait: float
    min_full: float
    max_full: float


class ThreadPool:
    """A fixed set of worker threads fed from a bounded :class:`TaskQueue`."""

    def __init__(self, workers: int = 6, capacity: int = 15) -> None:
        if workers < 1:
            raise ValueError("workers must be at least 1")
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._queue = TaskQueue()
        self._cv = threading.Condition()
        self._stop = False

        self._stats = threading.Lock()
        self._attempted = 0
        self._accepted = 0
        self._completed = 0
        self._rejected = 0
        self._is_full = False
        self._full_start = 0.0
        self._full_durations: list[float] = []
        self._total_wait = 0.0
        self._wait_cycles = 0

        self._threads = [
            threading.Thread(target=self._worker, daemon=True) for _ in range(workers)
        ]
        for thread in self._threads:
            thread.start()
        self._created = workers

    def add_task(self, task: Task) -> bool:
        """Queue ``task``; return False if it was rejected because the queue is full."""
        with self._stats:
            self._attempted += 1
        if not self._queue.push(task, self._capacity):
            with self._stats:
                self._rejected += 1
            return False
        now = time.monotonic()
        with self._stats:
            self._accepted += 1
        if len(self._queue) == self._capacity:
            with self._stats:
                if not self._is_full:
                    self._is_full = True
                    self._full_start = now
        with self._cv:
            self._cv.notify_all()
        return True

    def shutdown(self) -> None:
        """Let workers drain the queue, then stop and join them."""
        with self._cv:
            self._stop = True
            self._cv.notify_all()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()

    def metrics(self) -> PoolMetrics:
        with self._stats:
            average = self._total_wait / self._wait_cycles if self._wait_cycles else 0.0
            durations = list(self._full_durations)
            return PoolMetrics(
                workers=self._created,
                attempted=self._attempted,
                accepted=self._accepted,
                completed=self._completed,
                rejected=self._rejected,
                average_wait=average,
                min_full=min(durations, default=0.0),
                max_full=max(durations, default=0.0),
            )

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def _worker(self) -> None:
        while True:
            with self._cv:
                started = time.monotonic()
                self._cv.wait_for(lambda: self._stop or not self._queue.empty())
                waited = time.monotonic() - started
            with self._stats:
                self._total_wait += waited
                self._wait_cycles += 1
            if self._stop and self._queue.empty():
                break
            try:
                task = self._queue.pop()
            except IndexError:
                continue
            with self._stats:
                if self._is_full:
                    self._is_full = False
                    self._full_durations.append(time.monotonic() - self._full_start)
                self._completed += 1
            task()


def format_metrics(metrics: PoolMetrics) -> str:
    """Render pool metrics as the summary report."""
    return "\n".join(
        [
            f"Кількість робочих потоків: {metrics.workers}",
            f"Спроб додати задач: {metrics.attempted}",
            f"Завершено задач: {metrics.completed}",
            f"Відкинуто задач: {metrics.rejected}",
            f"Середній час простою потоків (с): {metrics.average_wait}",
            "Найкоротший час, коли черга була повністю заповнена (с): "
            f"{metrics.min_full}",
            f"Найдовший час, коли черга була повністю заповнена (с): {metrics.max_full}",
        ]
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Bounded thread pool demo.")
    parser.add_argument("--workers", type=int, default=6)
    parser.add_argument("--capacity", type=int, default=15)
    parser.add_argument("--producers", type=int, default=5)
    parser.add_argument("--tasks", type=int, default=10)
    parser.add_argument("--min-duration", type=int, default=5)
    parser.add_argument("--max-duration", type=int, default=10)
    parser.add_argument("--interval", type=float, default=0.5)
    args = parser.parse_args(argv)

    print_lock = threading.Lock()

    def make_task(task_id: int, duration: int) -> Task:
        def run() -> None:
            with print_lock:
                print(f"Завдання #{task_id} виконується {duration} сек", flush=True)
            time.sleep(duration)
            with print_lock:
                print(f"Завдання #{task_id} завершено", flush=True)

        return run

    pool = ThreadPool(args.workers, args.capacity)

    def produce(producer: int) -> None:
        rng = random.Random()
        for index in range(args.tasks):
            task_id = producer * args.tasks + index + 1
            duration = rng.randint(args.min_duration, args.max_duration)
            pool.add_task(make_task(task_id, duration))
            time.sleep(args.interval)

    producers = [
        threading.Thread(target=produce, args=(p,)) for p in range(args.producers)
    ]
    for producer in producers:
        producer.start()
    for producer in producers:
        producer.join()

    pool.shutdown()
    print(format_metrics(pool.metrics()))
    return 0