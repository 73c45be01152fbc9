[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bituncoin"
version = "1.0.0"
description = "In-memory Gold-Coin toolkit: tokenomics, staking, proof-of-stake blocks, addresses, wallet security, invoices and a node API"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = [
    "cryptocurrency",
    "blockchain",
    "proof-of-stake",
    "staking",
    "wallet",
    "invoices",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
bituncoin-demo = "bituncoin.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["bituncoin"]

[tool.hatch.build.targets.sdist]
include = [
    "bituncoin",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
