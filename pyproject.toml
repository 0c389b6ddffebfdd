[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "paristrace"
version = "0.1.0"
description = "Building blocks for Paris-style traceroute: protocol headers, checksums, raw-socket sending and option checks"
requires-python = ">=3.10"
dependencies = []
keywords = ["traceroute", "paris-traceroute", "icmp", "ipv6", "checksum", "networking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["paristrace"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
