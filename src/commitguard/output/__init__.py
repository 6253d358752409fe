"""Reporters — Rich terminal and JSON."""
