[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "workoutiter"
version = "0.1.0"
description = "A small desktop app that steps through a rotating list of workouts"
requires-python = ">=3.10"
dependencies = []
keywords = ["workout", "fitness", "rotation", "tkinter", "desktop"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Environment :: Win32 (MS Windows)",
    "Environment :: MacOS X",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: English",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.gui-scripts]
workoutiter = "workoutiter.ui:main"

[tool.hatch.build.targets.wheel]
packages = ["workoutiter"]

[tool.pytest.ini_options]
addopts = "-ra"
