"""Tableside: dining service tracking backend for restaurant floor staff."""

__version__ = "1.0.0"
