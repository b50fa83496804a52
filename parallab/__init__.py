"""Concurrency benchmarks, a bounded thread pool, a static HTTP server and a matrix TCP service."""

__version__ = "0.1.0"