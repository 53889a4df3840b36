"""SLIP frame decoding over serial links, and QR Code data and ECC codeword encoding."""

__version__ = "0.1.0"