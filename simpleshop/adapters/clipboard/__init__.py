"""Clipboard adapters for copying the cart."""
