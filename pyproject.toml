[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "marinesiege"
version = "0.1.0"
description = "A top-down arcade shooter: hold the room against endless waves of enemies and their bosses."
requires-python = ">=3.10"
keywords = ["game", "arcade", "shooter", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
marinesiege = "marinesiege.game:main"

[tool.hatch.build.targets.wheel]
packages = ["marinesiege"]

[tool.pytest.ini_options]
addopts = "-ra"
