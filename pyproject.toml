[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vfsterm"
version = "0.1.0"
description = "A small line-oriented terminal over a virtual folder tree of reference-counted, disk-backed files"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "terminal", "virtual filesystem", "reference counting", "copy-on-write"]
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
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
vfsterm = "vfsterm.terminal:main"

[tool.hatch.build.targets.wheel]
packages = ["vfsterm"]

[tool.pytest.ini_options]
addopts = "-ra"
