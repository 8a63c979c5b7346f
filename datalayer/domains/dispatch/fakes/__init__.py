"""Fakes for the dispatch domain."""

from datalayer.domains.dispatch.fakes.store import FakeStore

__all__ = ["FakeStore"]
