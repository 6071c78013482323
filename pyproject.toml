[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "n64build"
version = "0.1.0"
description = "Project settings, memory layout and source-tree handling for building N64 homebrew ROMs"
requires-python = ">=3.10"
dependencies = []
keywords = ["n64", "homebrew", "build", "rom", "libultra"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["n64build"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
