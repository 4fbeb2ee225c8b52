"""Telegram inline palette for searching the pub.dev package registry."""

__version__ = "0.1.0"
