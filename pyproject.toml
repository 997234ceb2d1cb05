[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flowdata"
version = "0.1.0"
description = "Parse flow-management API data into flight information regions, events and flow measures."
requires-python = ">=3.10"
dependencies = []
keywords = ["flow measures", "air traffic", "flight information region", "events", "parser"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["flowdata"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
