"""Keeper cost cascade calculator for fantasy football keeper leagues."""

__version__ = "0.1.0"
