[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nfs3wire"
version = "0.5.0"
description = "XDR codec and wire types for ONC RPC, PORTMAP, MOUNT3 and NFSv3"
requires-python = ">=3.10"
dependencies = []
keywords = ["nfs", "nfs3", "xdr", "rpc", "portmap", "mount", "rfc1813", "rfc1057", "rfc1014"]
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
    "Topic :: System :: Filesystems",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nfs3wire"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
