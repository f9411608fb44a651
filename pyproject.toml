[build-system]
requires = ["hatchling>=1.18"]
build-backend = "hatchling.build"

[project]
name = "semaphore"
version = "0.1.0"
description = "Semaphore field hashing, hash and proof encodings, and Merkle trees (fully stored and lazy nodes)"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome>=3.18",
]
keywords = [
    "semaphore",
    "zero-knowledge",
    "merkle-tree",
    "keccak",
    "bn254",
    "groth16",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[tool.hatch.build.targets.wheel]
packages = ["semaphore"]

[tool.hatch.build.targets.sdist]
include = [
    "semaphore",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
