"""Client for the matrix service: sends a random matrix and times parallel runs."""

from __future__ import annotations

import argparse
import random
import socket
import sys
import threading
from collections.abc import Iterable

from parallab.matrix import create_random_matrix
from parallab.protocol import (
    Command,
    ProtocolError,
    recv_command,
    recv_f64,
    send_command,
    send_matrix,
    send_u32,
)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 1234
DEFAULT_SIZE = 10000
DEFAULT_THREAD_COUNTS = (1, 16)

_print_lock = threading.Lock()


def _say(message: str, *, error: bool = False) -> None:
    with _print_lock:
        print(message, file=sys.stderr if error else sys.stdout, flush=True)


def _expect(sock: socket.socket, reply: Command, failure: str) -> None:
    if recv_command(sock) != reply:
        raise ProtocolError(failure)


def run_client(
    client_id: int,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    size: int = DEFAULT_SIZE,
    thread_counts: Iterable[int] = DEFAULT_THREAD_COUNTS,
) -> list[tuple[int, float]]:
    """Run one INIT/START/STATUS session and return ``(threads, seconds)`` pairs."""
    _say(f"[Клієнт {client_id}] під'єднується до сервера {host}:{port}...")
    try:
        sock = socket.create_connection((host, port))
    except OSError as error:
        raise ConnectionError(
            f"[Клієнт {client_id}] не вдалося під'єднатися"
        ) from error

    timings = []
    with sock:
        matrix = create_random_matrix(size, random.Random())

        send_command(sock, Command.INIT)
        send_u32(sock, size)
        send_matrix(sock, matrix)
        _expect(sock, Command.INIT_REPLY, "INIT не вдався")
        _say(f"[Клієнт {client_id}] INIT підтверджено")

        for threads in thread_counts:
            send_command(sock, Command.START)
            send_u32(sock, threads)
            _expect(sock, Command.START_REPLY, "START не вдався")
            duration = recv_f64(sock)
            timings.append((threads, duration))
            _say(
                f"[Клієнт {client_id}] потоки = {threads}, "
                f"час виконання: {duration} сек"
            )

        send_command(sock, Command.STATUS)
        _expect(sock, Command.STATUS_REPLY, "STATUS не вдався")
        _say(f"[Клієнт {client_id}] STATUS підтверджено сервером")
    return timings


def _run_reporting(client_id: int, *args) -> None:
    try:
        run_client(client_id, *args)
    except ConnectionError as error:
        _say(str(error), error=True)
    except (ProtocolError, OSError) as error:
        _say(f"[Клієнт {client_id}] Помилка: {error}", error=True)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Matrix service client.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--clients", type=int, default=2)
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE)
    parser.add_argument(
        "--threads", type=int, nargs="+", default=list(DEFAULT_THREAD_COUNTS)
    )
    args = parser.parse_args(argv)

    workers = [
        threading.Thread(
            target=_run_reporting,
            args=(client_id, args.host, args.port, args.size, tuple(args.threads)),
        )
        for client_id in range(1, args.clients + 1)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    return 0