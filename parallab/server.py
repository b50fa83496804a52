"""Matrix service: receives a matrix, computes column maxima in parallel, reports timings."""

from __future__ import annotations

import argparse
import socket
import sys
import threading
import time

from parallab.matrix import split_ranges
from parallab.protocol import (
    Command,
    ProtocolError,
    recv_command,
    recv_matrix,
    recv_u32,
    send_command,
    send_f64,
)

DEFAULT_PORT = 1234

_print_lock = threading.Lock()


def _say(message: str, *, error: bool = False) -> None:
    with _print_lock:
        print(message, file=sys.stderr if error else sys.stdout, flush=True)


def _column_maxima(matrix: list[list[int]], threads: int) -> list[int]:
    n = len(matrix)
    result = [0] * n

    def work(start: int, end: int) -> None:
        for j in range(start, end):
            result[j] = max(row[j] for row in matrix)

    workers = [
        threading.Thread(target=work, args=bounds)
        for bounds in split_ranges(n, threads)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    return result


class Session:
    """The state of one client connection: its matrix, once received."""

    def __init__(self) -> None:
        self.matrix: list[list[int]] | None = None

    @property
    def ready(self) -> bool:
        return self.matrix is not None

    def init(self, matrix: list[list[int]]) -> None:
        self.matrix = matrix

    def start(self, threads: int) -> float:
        """Put each column's maximum on the diagonal using ``threads`` threads.

        Returns the elapsed time in seconds.
        """
        if self.matrix is None:
            raise ProtocolError("Дані не ініціалізовано")
        started = time.perf_counter()
        maxima = _column_maxima(self.matrix, threads)
        for i, value in enumerate(maxima):
            self.matrix[i][i] = value
        return time.perf_counter() - started


def handle_client(sock: socket.socket) -> None:
    """Serve one client until it asks for STATUS, breaks the protocol or leaves."""
    client = sock.fileno()
    _say(f"[Сервер] Клієнт під'єднався: {client}")
    session = Session()
    with sock:
        try:
            while True:
                command = recv_command(sock)
                if command == Command.INIT:
                    n = recv_u32(sock)
                    session.init(recv_matrix(sock, n))
                    _say(f"[Сервер] INIT отримано: N = {n}")
                    send_command(sock, Command.INIT_REPLY)
                elif command == Command.START:
                    if not session.ready:
                        raise ProtocolError("Дані не ініціалізовано")
                    threads = recv_u32(sock)
                    _say(f"[Сервер] START отрмано: потоки = {threads}")
                    duration = session.start(threads)
                    send_command(sock, Command.START_REPLY)
                    send_f64(sock, duration)
                elif command == Command.STATUS:
                    if not session.ready:
                        raise ProtocolError("Дані не ініціалізовано")
                    _say("[Сервер] запит STATUS, відправка результатів...")
                    send_command(sock, Command.STATUS_REPLY)
                    break
                else:
                    _say(f"[Сервер] Незрозуміла команда: {int(command)}", error=True)
                    break
        except (ProtocolError, OSError, ValueError, MemoryError) as error:
            _say(f"[Сервер] Помилка клієнта {client}: {error}", error=True)
    _say(f"[Сервер] Клієнт {client} від'єднався")


def serve(host: str, port: int) -> None:
    """Accept clients forever, one thread per connection."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.bind((host, port))
        listener.listen(socket.SOMAXCONN)
        _say(f"[Сервер] Працює на порті {port}...")
        while True:
            try:
                client, _ = listener.accept()
            except OSError as error:
                _say(f"accept не вдався через помилку: {error}", error=True)
                continue
            threading.Thread(target=handle_client, args=(client,), daemon=True).start()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Column maximum matrix server.")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    try:
        serve(args.host, args.port)
    except OSError as error:
        _say(f"bind/listen не вдався через помилку: {error}", error=True)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0