"""Dependency injection utilities."""
