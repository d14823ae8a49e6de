[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shardcache"
version = "0.1.0"
description = "A sharded in-memory key/value cache served over HTTP, with TTLs, probabilistic eviction and optional snappy compression."
requires-python = ">=3.10"
keywords = ["cache", "key-value", "http", "sharding", "eviction", "ttl", "snappy", "xxhash"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Database :: Database Engines/Servers",
]
dependencies = [
    "flask>=2.2",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
shardcache-server = "shardcache.server:main"

[tool.hatch.build.targets.wheel]
packages = ["shardcache"]

[tool.hatch.build.targets.sdist]
include = ["shardcache", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
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
