"""Binary framing for the matrix service: big-endian commands and integers."""

from __future__ import annotations

import socket
import struct
from collections.abc import Sequence
from enum import IntEnum

_U16 = struct.Struct("!H")
_U32 = struct.Struct("!I")
# Durations travel as the host's native double, which is little-endian.
_F64 = struct.Struct("<d")


class Command(IntEnum):
    """Command and reply codes exchanged between client and server."""

    INIT = 0x01
    START = 0x02
    STATUS = 0x03
    INIT_REPLY = 0x11
    START_REPLY = 0x12
    STATUS_REPLY = 0x13


class ProtocolError(Exception):
    """The peer sent something the protocol does not allow."""


class ConnectionClosed(ProtocolError):
    """The peer closed the connection before a full message arrived."""


def recv_exact(sock: socket.socket, size: int) -> bytes:
    """Receive exactly ``size`` bytes or raise :class:`ConnectionClosed`."""
    buffer = bytearray()
    while len(buffer) < size:
        chunk = sock.recv(size - len(buffer))
        if not chunk:
            raise ConnectionClosed("З'єднання роз'єднано клієнтом")
        buffer += chunk
    return bytes(buffer)


def send_command(sock: socket.socket, command: int) -> None:
    sock.sendall(_U16.pack(command))


def recv_command(sock: socket.socket) -> Command | int:
    """Receive a command code; unknown codes come back as plain integers."""
    (value,) = _U16.unpack(recv_exact(sock, _U16.size))
    try:
        return Command(value)
    except ValueError:
        return value


def send_u32(sock: socket.socket, value: int) -> None:
    sock.sendall(_U32.pack(value))


def recv_u32(sock: socket.socket) -> int:
    (value,) = _U32.unpack(recv_exact(sock, _U32.size))
    return value


def send_f64(sock: socket.socket, value: float) -> None:
    sock.sendall(_F64.pack(value))


def recv_f64(sock: socket.socket) -> float:
    (value,) = _F64.unpack(recv_exact(sock, _F64.size))
    return value


def send_matrix(sock: socket.socket, matrix: Sequence[Sequence[int]]) -> None:
    """Send the values of a square matrix row by row as unsigned 32-bit integers.

    The size is not sent; callers send it first with :func:`send_u32`.
    """
    n = len(matrix)
    row_format = struct.Struct(f"!{n}I")
    for row in matrix:
        if len(row) != n:
            raise ValueError("matrix must be square")
        sock.sendall(row_format.pack(*row))


def recv_matrix(sock: socket.socket, n: int) -> list[list[int]]:
    """Receive an ``n`` x ``n`` matrix sent by :func:`send_matrix`."""
    row_format = struct.Struct(f"!{n}I")
    return [list(row_format.unpack(recv_exact(sock, row_format.size))) for _ in range(n)]