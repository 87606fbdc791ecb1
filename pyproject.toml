[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aratamq"
version = "0.1.0"
description = "An in-process message broker with direct, fanout and topic exchanges"
requires-python = ">=3.10"
dependencies = []
keywords = ["message broker", "message queue", "exchange", "routing", "pubsub"]
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
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
aratamq = "aratamq.cli:main"
aratamq-producer = "aratamq.cli:producer_main"
aratamq-consumer = "aratamq.cli:consumer_main"

[tool.hatch.build.targets.wheel]
packages = ["aratamq"]

[tool.pytest.ini_options]
addopts = "-ra"
