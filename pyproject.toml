[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sshconfig"
version = "1.3.0"
description = "Parse, query and round-trip OpenSSH client configuration files"
requires-python = ">=3.10"
dependencies = []
keywords = ["ssh", "ssh_config", "openssh", "configuration", "parser"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sshconfig"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
