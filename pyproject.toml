[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "discmd"
version = "0.1.0"
description = "Building blocks for chat bot command frameworks: commands, contexts, slash arguments and edit tracking"
requires-python = ">=3.10"
dependencies = []
keywords = ["chat", "bot", "commands", "slash-commands", "framework"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Communications :: Chat",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["discmd"]

[tool.pytest.ini_options]
addopts = "-ra"
