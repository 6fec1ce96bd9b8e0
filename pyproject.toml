[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xdc"
version = "0.3.0"
description = "Experimental dynamic casting between registered interfaces of an object"
requires-python = ">=3.10"
dependencies = []
keywords = ["casting", "interfaces", "traits", "dynamic", "metadata"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xdc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
