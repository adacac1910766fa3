"""Scoring core for a weekly segment challenge league."""

__version__ = "0.1.0"
