[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "modscan-core"
version = "0.1.0"
description = "Modbus scanner core: register data simulation, numeric and byte-list editors, selectors, poll statistics and a bounded message log"
requires-python = ">=3.10"
dependencies = []
keywords = ["modbus", "simulation", "scanner", "registers", "industrial"]
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
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["modscan_core"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
