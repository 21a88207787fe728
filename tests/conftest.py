"""Shared fixtures for the Fencing Scout test suite."""
import pytest

from tests.helpers import InMemoryDocumentStore, ManualScheduler


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()
