[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hessian2"
version = "0.1.0"
description = "Hessian 2.0 scalar encoding and decoding, and Dubbo header parsing, in pure Python"
requires-python = ">=3.10"
dependencies = []
keywords = ["hessian", "hessian2", "dubbo", "serialization", "rpc", "binary"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hessian2"]

[tool.hatch.build.targets.sdist]
include = ["hessian2", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
