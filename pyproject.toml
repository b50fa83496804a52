[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "parallab"
version = "0.1.0"
description = "Small benchmarks and servers for exploring threads, locks, thread pools and sockets"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["benchmark", "threads", "thread-pool", "sockets", "concurrency", "matrix"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
parallab-matrix = "parallab.matrix:main"
parallab-xor = "parallab.xor:main"
parallab-pool = "parallab.pool:main"
parallab-http = "parallab.http_server:main"
parallab-server = "parallab.server:main"
parallab-client = "parallab.client:main"

[tool.hatch.build.targets.wheel]
packages = ["parallab"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
