[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slipqr"
version = "0.1.0"
description = "SLIP frame decoding with CRC-16 checks over serial links, plus QR Code data and error correction codeword encoding"
requires-python = ">=3.10"
keywords = ["slip", "serial", "crc16", "qrcode", "reed-solomon", "protocol"]
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
    "Topic :: Terminals :: Serial",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["slipqr"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
