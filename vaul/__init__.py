"""VAUL: store, organize, and quickly retrieve terminal commands."""

__version__ = "0.1.0"
