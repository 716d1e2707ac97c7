"""Hackbox - coding challenges with automatic grading."""

__version__ = "0.1.0"
