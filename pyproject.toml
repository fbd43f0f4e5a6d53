[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "numberlib"
version = "1.0.0"
description = "Keep a library of numbers with their links, and poll those links for SMS verification codes"
requires-python = ">=3.10"
dependencies = []
keywords = ["sms", "verification code", "phone numbers", "polling", "regex"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Telephony",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
numberlib = "numberlib.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["numberlib"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
