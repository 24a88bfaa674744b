[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pipekit"
version = "0.1.0"
description = "Run shell-style command pipelines between files, with here-document input and a small printf-style formatter"
requires-python = ">=3.10"
dependencies = []
keywords = ["pipe", "pipeline", "shell", "here-doc", "printf", "subprocess"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pipekit = "pipekit.cli:main"
pipekit-multi = "pipekit.cli:bonus_main"

[tool.hatch.build.targets.wheel]
packages = ["pipekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
