[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rotorkit"
version = "0.1.0"
description = "Building blocks for antenna rotator controllers: soft clock and calendar helpers, RTC chip drivers, NMEA GPS parsing, moon position and shared state codes."
requires-python = ">=3.10"
dependencies = []
keywords = ["ham radio", "antenna rotator", "nmea", "gps", "rtc", "moon tracking", "maidenhead"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Ham Radio",
    "Topic :: Scientific/Engineering :: Astronomy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rotorkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
