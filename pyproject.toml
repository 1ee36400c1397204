[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nanocode"
version = "0.1.0"
description = "Building blocks for tool-calling AI agents: message types, agent profiles, JSON-defined shell tools and structured debug logging."
requires-python = ">=3.11"
keywords = ["ai", "agent", "llm", "tool-calling", "bash", "jsonl", "logging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]
dependencies = [
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["nanocode"]

[tool.pytest.ini_options]
addopts = "-ra"
