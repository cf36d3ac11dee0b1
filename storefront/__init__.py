"""Storefront core: cart engine and admin navigation guard."""

__version__ = "0.1.0"
