"""Beverage shop ordering app and sales analytics."""

__version__ = "0.1.0"
