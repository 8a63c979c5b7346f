"""Adapters: concrete implementations of cross-cutting protocols."""
