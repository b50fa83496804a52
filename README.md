# parallab

Small command-line benchmarks and servers for exploring concurrency. They cover
splitting work across threads, guarding shared state with a lock or with
compare-and-swap, running a bounded thread pool, and speaking simple TCP
protocols.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Commands

### `parallab-matrix`

This command first prints processor information: architecture, number of
logical processors and memory page size. It then prints total and available
physical memory. Next it fills square matrices with random values from 0 to
1000. For each matrix it finds every column's maximum and writes it onto the
main diagonal. This work runs once sequentially and then once for each thread
count, and every run is timed.

Options:

- `--sizes N ...` sets the matrix sizes (default: 100 1000 10000 50000).
- `--threads T ...` sets the thread counts (default: 4 8 16 32 64 128 256).
- `--seed S` seeds the random generator.

### `parallab-xor`

This command generates random arrays of values from 0 to 1000. For each array
it XORs together the elements that are divisible by 7, in three ways:

- sequentially;
- with two threads that share a lock;
- with two threads that update an `AtomicInt` by compare-and-swap.

It prints each result and how long it took.

Options:

- `--sizes N ...` sets the array sizes (default: 10000 100000 1000000 10000000 100000000).
- `--seed S` seeds the random generator.

### `parallab-pool`

This command runs a bounded `ThreadPool`. Producer threads each submit tasks
that print a message, sleep for a random number of seconds, and print again.
A task that arrives while the queue is full is rejected. When the producers
finish, the pool drains its queue and shuts down, then prints its metrics:

- the number of workers;
- how many tasks were attempted, completed and rejected;
- the average time a worker waited for work;
- the shortest and longest periods during which the queue was full.

Options and their defaults:

| Option | Default |
| --- | --- |
| `--workers` | 6 |
| `--capacity` | 15 |
| `--producers` | 5 |
| `--tasks` (per producer) | 10 |
| `--min-duration` (seconds) | 5 |
| `--max-duration` (seconds) | 10 |
| `--interval` (seconds between submissions) | 0.5 |

### `parallab-http`

This command starts an HTTP server that serves files from a page directory.
It uses one thread per connection and answers a single request on each
connection.

- A request for `/` is served `home.html`.
- A method other than `GET` gets `405 Method Not Allowed`.
- A missing file gets a `404 Not Found` HTML page.
- A path that contains `.html` is sent as `text/html`. Anything else is sent as
  `application/octet-stream`.

Options: `--host` (default: all interfaces), `--port` (default 8080) and
`--pages` (default `pages`).

### `parallab-server` and `parallab-client`

These two commands talk over TCP using a small binary protocol. Command codes
are big-endian 16-bit numbers. The matrix size, the matrix values and thread
counts are big-endian unsigned 32-bit numbers. The timing the server sends back
is a little-endian 64-bit float.

A session has three steps:

1. The client sends `INIT`, the size N, and an N x N matrix. The server replies
   `INIT_REPLY`.
2. The client sends `START` with a thread count, once for each count it was
   given. For each one, the server computes the column maxima with that many
   threads and writes them onto the diagonal. It then replies `START_REPLY`
   with the elapsed seconds.
3. The client sends `STATUS`. The server replies `STATUS_REPLY` and closes the
   connection.

If the client sends `START` or `STATUS` before `INIT`, or sends an unknown
command, the server ends the session.

Start the server:

```
parallab-server
```

Options: `--host` (default: all interfaces) and `--port` (default 1234).

Then, in another terminal, start the client:

```
parallab-client
```

Options:

- `--host` (default `127.0.0.1`) and `--port` (default 1234).
- `--clients` sets how many concurrent sessions to run (default 2).
- `--size` sets the matrix size (default 10000). At the default size a session
  sends 100 million values, so a smaller size such as `--size 500` is
  practical for trying it out.
- `--threads T ...` sets the thread counts to run (default: 1 16).

## Library use

You can also call the building blocks directly:

```python
import random
from parallab.matrix import create_random_matrix, column_max_parallel, split_ranges
from parallab.xor import xor_sequential, xor_with_cas
from parallab.pool import ThreadPool, format_metrics

rng = random.Random(1)
mat = create_random_matrix(100, rng)
column_max_parallel(mat, 8)          # column maxima written onto the diagonal

print(split_ranges(10, 3))           # [(0, 4), (4, 7), (7, 10)]

data = [rng.randint(0, 1000) for _ in range(10_000)]
assert xor_sequential(data) == xor_with_cas(data)

with ThreadPool(workers=4, capacity=10) as pool:
    accepted = pool.add_task(lambda: None)   # False if the queue was full
print(format_metrics(pool.metrics()))
```

Other entry points:

- `parallab.http_server.handle_request(raw, page_dir)` returns the response
  bytes for a raw request.
- `parallab.protocol` has the framing helpers: `send_matrix`, `recv_matrix`,
  `send_u32`, `recv_u32`, and so on.
- `parallab.client.run_client(...)` runs one session and returns a list of
  `(threads, seconds)` pairs.