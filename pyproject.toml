[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "observa"
version = "0.2.0"
description = "Observable values, callback lists, running statistics, timers and INI files"
requires-python = ">=3.10"
dependencies = []
keywords = ["observer", "callbacks", "observable", "statistics", "timer", "stopwatch", "ini"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["observa"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
