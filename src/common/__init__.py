"""Shared helpers: logging, console output and HTTP."""
