[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "foxus"
version = "0.1.0"
description = "A local-first productivity tracker with focus mode"
requires-python = ">=3.10"
dependencies = [
    "platformdirs",
]
keywords = ["productivity", "time-tracking", "focus", "native-messaging", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
foxus-native-host = "foxus.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["foxus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
