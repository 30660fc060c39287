"""Constant-product AMM math, quotes, and instruction and event decoding."""

__version__ = "0.1.0"