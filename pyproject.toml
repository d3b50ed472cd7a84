[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "commune"
version = "0.1.0"
description = "A small pygame card table with drag-and-drop cards, trays, menus and a splash screen"
requires-python = ">=3.10"
dependencies = ["pygame"]
keywords = ["game", "cards", "pygame", "drag-and-drop"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
commune = "commune.app:main"

[tool.hatch.build.targets.wheel]
packages = ["commune"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
