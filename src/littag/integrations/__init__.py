"""Adapters for external parsing/validation libraries."""
