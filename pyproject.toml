[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cpswap"
version = "0.1.0"
description = "Constant-product AMM math, slippage quotes and instruction/event decoding for a CP swap program"
requires-python = ">=3.10"
dependencies = []
keywords = ["amm", "constant-product", "swap", "liquidity", "decoder", "quote"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[project.scripts]
cpswap = "cpswap.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cpswap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
