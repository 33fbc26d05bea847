"""Shared helpers used across the resolution engine, discovery, and CLI."""
