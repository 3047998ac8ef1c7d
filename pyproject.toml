[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pushwire"
version = "0.1.0"
description = "Building blocks for push connections: WebSocket framing, server-sent events, subject matching and publish fan-out."
requires-python = ">=3.10"
dependencies = []
keywords = ["websocket", "sse", "server-sent-events", "pubsub", "push", "http"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pushwire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
