"""Ensemble file I/O."""
