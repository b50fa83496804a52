"""A minimal static-page HTTP server answering GET requests from a page directory."""

from __future__ import annotations

import argparse
import socket
import sys
import threading
from pathlib import Path

DEFAULT_PORT = 8080
DEFAULT_PAGE_DIR = "pages"
_RECV_SIZE = 4095

_NOT_FOUND_PAGE = (
    "<!DOCTYPE html>"
    '<html><head><meta charset="utf-8">'
    "<title>404 Not Found</title>"
    "<style>"
    "body { font-family: Arial, sans-serif; text-align: center; padding-top: 50px; }"
    "h1 { font-size: 48px; color: #cc0000; }"
    "p  { font-size: 24px; color: #555; }"
    "</style>"
    "</head><body>"
    "<h1>404 Not Found</h1>"
    "</body></html>"
).encode("utf-8")


def build_response(status: str, content_type: str, body: bytes) -> bytes:
    """Build a complete HTTP/1.1 response that closes the connection."""
    head = (
        f"HTTP/1.1 {status}\r\n"
        f"Content-Length: {len(body)}\r\n"
        f"Content-Type: {content_type}\r\n"
        "Connection: close\r\n\r\n"
    )
    return head.encode("latin-1") + body


def handle_request(raw: bytes, page_dir: str | Path) -> bytes:
    """Answer one raw request: serve a file from ``page_dir`` or report an error."""
    tokens = raw.decode("utf-8", errors="surrogateescape").split()
    method = tokens[0] if tokens else ""
    path = tokens[1] if len(tokens) > 1 else ""

    if method != "GET":
        return build_response(
            "405 Method Not Allowed", "text/plain", b"Method Not Allowed"
        )

    if path == "/":
        path = "/home.html"
    file_path = Path(f"{page_dir}{path}")

    try:
        body = file_path.read_bytes()
    except (OSError, ValueError):
        return build_response("404 Not Found", "text/html", _NOT_FOUND_PAGE)

    content_type = "text/html" if ".html" in path else "application/octet-stream"
    return build_response("200 OK", content_type, body)


def handle_client(conn: socket.socket, page_dir: str | Path) -> None:
    """Read one request from ``conn``, send the answer and close the connection."""
    with conn:
        try:
            raw = conn.recv(_RECV_SIZE)
        except OSError:
            return
        if not raw:
            return
        try:
            conn.sendall(handle_request(raw, page_dir))
        except OSError:
            pass


def serve(host: str, port: int, page_dir: str | Path) -> None:
    """Listen on ``host``:``port`` forever, one thread per connection."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        listener.bind((host, port))
        listener.listen(socket.SOMAXCONN)
        print(f"Listening on port {port}...", flush=True)
        while True:
            try:
                conn, _ = listener.accept()
            except OSError:
                print("accept() failed", file=sys.stderr)
                continue
            threading.Thread(
                target=handle_client, args=(conn, page_dir), daemon=True
            ).start()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Serve static pages over HTTP.")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--pages", default=DEFAULT_PAGE_DIR)
    args = parser.parse_args(argv)
    try:
        serve(args.host, args.port, args.pages)
    except OSError as error:
        print(f"bind() failed: {error}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0