"""Unit tests for publisher.cleanup module."""

import logging

import pytest

from src.docs_tree.models import Meta
from src.publisher.cleanup import CleanupSweeper
from src.publisher.errors import ConflictError
from tests.fixtures import OTHER_REPO_URL, REPO_URL
from tests.helpers import InMemoryPageStore


@pytest.fixture
def store():
    return InMemoryPageStore()


def _publish_site(store, repo=REPO_URL):
    home = store.add_page("Handbook", meta=Meta(repo))
    guides = store.add_page("Guides", home.id, Meta(repo, "docs/guides/README.md", "a"))
    store.add_page("Intro", guides.id, Meta(repo, "docs/guides/intro.md", "b"))
    store.add_page("Overview", home.id, Meta(repo, "docs/index.md", "c"))
    return home


class TestSweep:
    """Test cases for CleanupSweeper.sweep."""

    def test_removes_home_and_everything_below(self, store):
        home = _publish_site(store)

        result = CleanupSweeper(store).sweep("Handbook", repo=REPO_URL)

        assert result.found
        assert result.root_id == home.id
        assert result.removed_pages == 3
        assert store.pages == {}
        assert store.calls_of('delete')[-1] == "Handbook"

    def test_missing_home_deletes_nothing(self, store, caplog):
        store.add_page("Unrelated")

        with caplog.at_level(logging.WARNING):
            result = CleanupSweeper(store).sweep("Handbook")

        assert not result.found
        assert result.removed_pages == 0
        assert store.calls == []
        assert "nothing to clean here" in caplog.text

    def test_home_of_other_repo_raises_conflict(self, store):
        _publish_site(store, repo=OTHER_REPO_URL)

        with pytest.raises(ConflictError):
            CleanupSweeper(store).sweep("Handbook", repo=REPO_URL)

        assert store.calls == []

    def test_without_repo_any_home_is_removed(self, store):
        _publish_site(store, repo=OTHER_REPO_URL)

        result = CleanupSweeper(store).sweep("Handbook")

        assert result.found
        assert store.pages == {}

    def test_parent_of_home_is_kept(self, store):
        parent = store.add_page("Engineering")
        store.add_page("Handbook", parent.id, Meta(REPO_URL))

        CleanupSweeper(store).sweep("Handbook", repo=REPO_URL)

        assert list(store.pages) == [parent.id]
