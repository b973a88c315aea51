[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "codeproxy"
version = "0.2.1"
description = "Data models, tool-call state, schema cache and metrics for translating Claude Messages requests to Gemini GenerateContent"
requires-python = ">=3.10"
dependencies = []
keywords = ["claude", "gemini", "proxy", "tool calling", "streaming", "sse"]
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
    "Topic :: Internet :: Proxy Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["codeproxy"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
