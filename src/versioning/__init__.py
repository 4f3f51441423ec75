"""Dependency version models, range matching and install resolution."""
