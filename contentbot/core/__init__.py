"""Shared settings, logging and text utilities."""
