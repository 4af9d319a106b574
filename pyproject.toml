[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chanfs"
version = "0.1.0"
description = "Present an imageboard's threads and replies as an in-memory directory tree"
requires-python = ">=3.10"
dependencies = []
keywords = ["filesystem", "imageboard", "catalog", "threads", "json"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["chanfs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
