"""Shared utilities for the sequential thinking server."""
