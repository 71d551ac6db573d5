[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "invaders"
version = "0.1.0"
description = "A small space-invaders style arcade game with a testable game model"
requires-python = ">=3.10"
keywords = ["game", "arcade", "invaders", "shooter", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
invaders = "invaders.app:main"

[tool.hatch.build.targets.wheel]
packages = ["invaders"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
