[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ctlcenter"
version = "0.1.0"
description = "A small pop-up control center for media, radios, notifications, brightness and volume"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "control-center",
    "applet",
    "panel",
    "volume",
    "brightness",
    "wifi",
    "bluetooth",
    "desktop",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: Window Managers :: Applets",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ctlcenter = "ctlcenter.control_center:main"

[tool.hatch.build.targets.wheel]
packages = ["ctlcenter"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
