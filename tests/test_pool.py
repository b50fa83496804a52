import threading
import time

import pytest

from parallab.pool import PoolMetrics, TaskQueue, ThreadPool, format_metrics, main


def _noop():
    pass


def test_queue_is_fifo():
    q = TaskQueue()
    first, second = (lambda: 1), (lambda: 2)
    assert q.push(first, 5)
    assert q.push(second, 5)
    assert len(q) == 2
    assert q.peek() is first
    assert q.pop() is first
    assert q.pop() is second
    assert q.empty()


def test_queue_respects_capacity():
    q = TaskQueue()
    assert q.push(_noop, 2)
    assert q.push(_noop, 2)
    assert not q.push(_noop, 2)
    assert len(q) == 2


def test_queue_clear():
    q = TaskQueue()
    for _ in range(3):
        q.push(_noop, 10)
    q.clear()
    assert q.empty()
    assert len(q) == 0


def test_queue_pop_empty_raises():
    with pytest.raises(IndexError):
        TaskQueue().pop()


def test_queue_peek_empty_raises():
    with pytest.raises(IndexError):
        TaskQueue().peek()


def test_pool_rejects_bad_arguments():
    with pytest.raises(ValueError):
        ThreadPool(0, 5)
    with pytest.raises(ValueError):
        ThreadPool(2, 0)


def test_pool_runs_all_tasks():
    results = []
    lock = threading.Lock()
    pool = ThreadPool(4, 100)
    for i in range(20):
        def task(i=i):
            with lock:
                results.append(i)
        assert pool.add_task(task)
    pool.shutdown()
    assert sorted(results) == list(range(20))
    metrics = pool.metrics()
    assert metrics.workers == 4
    assert metrics.attempted == 20
    assert metrics.accepted == 20
    assert metrics.completed == 20
    assert metrics.rejected == 0
    assert metrics.average_wait >= 0.0


def test_pool_rejects_when_full_and_records_full_time():
    gate = threading.Event()
    started = threading.Event()
    ran = []

    def blocker():
        started.set()
        gate.wait(5)
        ran.append("blocker")

    pool = ThreadPool(1, 1)
    assert pool.add_task(blocker)
    assert started.wait(5)
    assert pool.add_task(lambda: ran.append("queued"))
    assert not pool.add_task(lambda: ran.append("rejected"))
    time.sleep(0.05)
    gate.set()
    pool.shutdown()

    assert ran == ["blocker", "queued"]
    metrics = pool.metrics()
    assert metrics.attempted == 3
    assert metrics.accepted == 2
    assert metrics.rejected == 1
    assert metrics.completed == 2
    assert 0.0 <= metrics.min_full <= metrics.max_full
    assert metrics.max_full >= 0.04


def test_shutdown_drains_queue():
    gate = threading.Event()
    done = []
    pool = ThreadPool(1, 10)
    pool.add_task(lambda: gate.wait(5))
    for i in range(5):
        pool.add_task(lambda i=i: done.append(i))
    gate.set()
    pool.shutdown()
    assert done == list(range(5))


def test_context_manager_shuts_down():
    done = []
    with ThreadPool(2, 10) as pool:
        for i in range(6):
            pool.add_task(lambda i=i: done.append(i))
    assert sorted(done) == list(range(6))
    assert pool.metrics().completed == 6


def test_format_metrics():
    metrics = PoolMetrics(6, 50, 49, 49, 1, 0.5, 0.1, 0.9)
    text = format_metrics(metrics)
    assert "Кількість робочих потоків: 6" in text
    assert "Відкинуто задач: 1" in text
    assert "Спроб додати задач: 50" in text


def test_main_runs_small_workload(capsys):
    code = main(
        [
            "--producers", "2",
            "--tasks", "2",
            "--min-duration", "0",
            "--max-duration", "0",
            "--interval", "0",
        ]
    )
    assert code == 0
    out = capsys.readouterr().out
    assert "Спроб додати задач: 4" in out
    for task_id in range(1, 5):
        assert f"Завдання #{task_id} завершено" in out