[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lockpick"
version = "0.1.0"
description = "Boolean circuit graphs for unsigned integer arithmetic, with supporting containers and logging"
requires-python = ">=3.10"
dependencies = []
keywords = ["boolean circuit", "logic graph", "karatsuba", "hash table", "arithmetic"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["lockpick"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
