[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "mediadeck"
version = "0.1.0"
description = "Playlist engines, settings store, timers and a snake game for a small media player"
requires-python = ">=3.10"
dependencies = []
keywords = ["media player", "playlist", "m3u", "sqlite", "alarm", "snake"]
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
    "Topic :: Multimedia :: Sound/Audio :: Players",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["mediadeck*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
