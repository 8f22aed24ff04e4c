"""Pytest configuration and fixtures for integration tests."""

import pytest

from src.docs_tree.context import build_context
from src.publisher.cleanup import CleanupSweeper
from src.publisher.publisher import DocsPublisher
from tests.fixtures import write_guides_project
from tests.helpers import InMemoryPageStore, StubRenderer


@pytest.fixture
def store():
    return InMemoryPageStore()


@pytest.fixture
def guides_project(tmp_path):
    return write_guides_project(tmp_path / "handbook")


@pytest.fixture
def publish(store):
    """Build the context of a project and publish it; returns the summary.

    The store's call log is cleared first, so it only holds the calls of
    this run.
    """
    def _publish(base_path, title_prefix="", parent_page=None, max_workers=1):
        context = build_context(base_path, title_prefix)
        store.calls.clear()
        publisher = DocsPublisher(store, StubRenderer(), max_workers=max_workers)
        return publisher.publish(context, parent_page=parent_page)

    return _publish


@pytest.fixture
def cleanup(store):
    def _cleanup(site_name="Handbook", repo=None):
        store.calls.clear()
        return CleanupSweeper(store).sweep(site_name, repo=repo)

    return _cleanup
