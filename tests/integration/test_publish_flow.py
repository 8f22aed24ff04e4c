"""Integration tests for publish runs against an in-memory page store."""

import pytest
import yaml

from src.docs_tree.models import Meta
from src.publisher.errors import ConflictError, ParentPageNotFoundError
from tests.fixtures import OTHER_REPO_URL, REPO_URL, write_docs_project


def _set_nav(project, nav):
    config = yaml.safe_load((project / "mkdocs.yml").read_text())
    config["nav"] = nav
    (project / "mkdocs.yml").write_text(yaml.safe_dump(config, sort_keys=False))


class TestFirstPublish:
    """Publishing a project into an empty space."""

    def test_guides_tree_shape(self, store, guides_project, publish):
        summary = publish(guides_project)

        home = store.page_titled("Handbook")
        guides = store.page_titled("Guides")
        assert home.parent_id is None
        assert home.meta.path == "README.md"
        assert store.children_titles(home.id) == ["Guides", "Overview"]
        assert store.children_titles(guides.id) == ["Intro", "Setup"]
        assert summary.created == 5
        assert summary.deleted == 0

    def test_every_page_carries_provenance(self, store, guides_project, publish):
        publish(guides_project)

        paths = sorted(page.meta.path for page in store.pages.values())
        assert paths == [
            "README.md",
            "docs/guides/README.md",
            "docs/guides/intro.md",
            "docs/guides/setup.md",
            "docs/index.md",
        ]
        assert {page.meta.repo for page in store.pages.values()} == {REPO_URL}

    def test_flat_nav_is_one_level(self, store, tmp_path, publish):
        project = write_docs_project(
            tmp_path / "flat",
            [{"One": "one.md"}, {"Two": "two.md"}],
            {"docs/one.md": "1", "docs/two.md": "2"},
        )

        publish(project)

        home = store.page_titled("Handbook")
        assert home.meta == Meta(REPO_URL)
        assert store.children_titles(home.id) == ["One", "Two"]
        assert len(store.pages) == 3

    def test_under_parent_page(self, store, guides_project, publish):
        parent = store.add_page("Engineering")

        publish(guides_project, parent_page="Engineering")

        assert store.page_titled("Handbook").parent_id == parent.id

    def test_missing_parent_page_changes_nothing(self, store, guides_project, publish):
        with pytest.raises(ParentPageNotFoundError):
            publish(guides_project, parent_page="Engineering")

        assert store.pages == {}

    def test_title_prefix(self, store, guides_project, publish):
        publish(guides_project, title_prefix="[ACME]")

        titles = sorted(page.title for page in store.pages.values())
        assert titles == ["Handbook", "[ACME] Guides", "[ACME] Intro", "[ACME] Overview", "[ACME] Setup"]

    def test_parallel_run_builds_same_tree(self, store, guides_project, publish):
        publish(guides_project, max_workers=4)

        guides = store.page_titled("Guides")
        assert store.children_titles(store.page_titled("Handbook").id) == ["Guides", "Overview"]
        assert store.children_titles(guides.id) == ["Intro", "Setup"]


class TestRepublish:
    """Publishing again after the project changed, or did not."""

    def test_unchanged_project_makes_no_calls(self, store, guides_project, publish):
        publish(guides_project)

        summary = publish(guides_project)

        assert store.calls == []
        assert summary.created == summary.updated == summary.deleted == 0
        assert summary.unchanged == 5

    def test_edited_file_updates_one_page(self, store, guides_project, publish):
        publish(guides_project)
        (guides_project / "docs/guides/setup.md").write_text("# Setup\n\nNew step.\n")

        summary = publish(guides_project)

        assert store.calls == [('update', 'Setup')]
        assert summary.updated == 1

    def test_renamed_title_updates_in_place(self, store, guides_project, publish):
        publish(guides_project)
        intro_id = store.page_titled("Intro").id
        nav = [
            {"Overview": "index.md"},
            {"Guides": [{"Getting Started": "guides/intro.md"}, {"Setup": "guides/setup.md"}]},
        ]
        _set_nav(guides_project, nav)

        publish(guides_project)

        # The README links to the intro page, so it follows the new title
        assert store.calls == [('update', 'Handbook'), ('update', 'Getting Started')]
        assert store.page_titled("Getting Started").id == intro_id

    def test_removed_page_is_deleted(self, store, guides_project, publish):
        publish(guides_project)
        (guides_project / "docs/guides/intro.md").unlink()

        summary = publish(guides_project)

        assert store.calls == [('update', 'Handbook'), ('delete', 'Intro')]
        assert summary.deleted == 1
        assert store.children_titles(store.page_titled("Guides").id) == ["Setup"]

    def test_section_without_readme_still_publishes_children(self, store, guides_project, publish):
        publish(guides_project)
        (guides_project / "docs/guides/README.md").unlink()

        publish(guides_project)

        home = store.page_titled("Handbook")
        assert store.find_page_by_title("Guides") is None
        assert store.children_titles(home.id) == ["Intro", "Overview", "Setup"]

    def test_prefix_change_retitles_every_page(self, store, guides_project, publish):
        publish(guides_project)

        summary = publish(guides_project, title_prefix="[ACME]")

        assert summary.updated == 5
        assert summary.unchanged == 0
        assert sorted(store.calls_of('update')) == [
            "Handbook", "[ACME] Guides", "[ACME] Intro", "[ACME] Overview", "[ACME] Setup",
        ]


    def test_swapped_titles_converge_in_one_run(self, store, guides_project, publish):
        publish(guides_project)
        intro_id = store.page_titled("Intro").id
        setup_id = store.page_titled("Setup").id
        _set_nav(guides_project, [
            {"Overview": "index.md"},
            {"Guides": [{"Setup": "guides/intro.md"}, {"Intro": "guides/setup.md"}]},
        ])

        publish(guides_project)

        assert store.page_titled("Setup").id == intro_id
        assert store.page_titled("Intro").id == setup_id
        assert len(store.pages) == 5

        summary = publish(guides_project)

        assert store.calls == []
        assert summary.unchanged == 5

    def test_newly_published_link_target_updates_linking_page(self, store, guides_project, publish):
        (guides_project / "docs/index.md").write_text("# Overview\n\nSee the [FAQ](faq.md).\n")
        (guides_project / "docs/faq.md").write_text("# FAQ\n")
        publish(guides_project)
        _set_nav(guides_project, [
            {"Overview": "index.md"},
            {"FAQ": "faq.md"},
            {"Guides": [{"Intro": "guides/intro.md"}, {"Setup": "guides/setup.md"}]},
        ])

        summary = publish(guides_project)

        assert store.calls == [('update', 'Overview'), ('create', 'FAQ')]
        assert summary.updated == 1
        assert summary.created == 1

    def test_removed_section_counts_pages_below_it(self, store, guides_project, publish):
        publish(guides_project)
        _set_nav(guides_project, [{"Overview": "index.md"}])

        summary = publish(guides_project)

        assert sorted(store.calls_of('delete')) == ["Guides", "Intro", "Setup"]
        assert summary.deleted == 3
        assert store.children_titles(store.page_titled("Handbook").id) == ["Overview"]


class TestDuplicateNavEntries:
    """A file listed twice in the nav is published once."""

    NAV = [
        {"Overview": "index.md"},
        {"Start here": "index.md"},
        {"Guides": [{"Intro": "guides/intro.md"}, {"Setup": "guides/setup.md"}]},
    ]

    def test_repeated_runs_settle(self, store, guides_project, publish):
        _set_nav(guides_project, self.NAV)

        first = publish(guides_project)
        publish(guides_project)
        third = publish(guides_project)

        assert first.created == 5
        assert store.find_page_by_title("Start here") is None
        assert store.calls == []
        assert third.unchanged == 5

    def test_second_entry_is_reported(self, store, guides_project, publish, caplog):
        _set_nav(guides_project, self.NAV)

        with caplog.at_level("WARNING"):
            publish(guides_project)

        assert 'Skipping page "Start here"' in caplog.text


class TestConflicts:
    """Pages owned by another repository are never touched."""

    def test_foreign_home_stops_the_run(self, store, guides_project, publish):
        store.add_page("Handbook", meta=Meta(OTHER_REPO_URL))

        with pytest.raises(ConflictError):
            publish(guides_project)

        assert store.calls == []
        assert len(store.pages) == 1

    def test_foreign_page_with_same_title_stops_the_run(self, store, guides_project, publish):
        store.add_page("Setup", meta=Meta(OTHER_REPO_URL, "docs/setup.md", "x"))

        with pytest.raises(ConflictError):
            publish(guides_project)

        assert store.page_titled("Setup").meta.repo == OTHER_REPO_URL


class TestCleanup:
    """Removing a published site."""

    def test_cleanup_removes_everything(self, store, guides_project, publish, cleanup):
        publish(guides_project)

        result = cleanup(repo=REPO_URL)

        assert result.found
        assert result.removed_pages == 4
        assert store.pages == {}
        assert len(store.calls_of('delete')) == 5

    def test_cleanup_without_site_deletes_nothing(self, store, cleanup):
        store.add_page("Unrelated")

        result = cleanup()

        assert not result.found
        assert store.calls == []
        assert len(store.pages) == 1

    def test_publish_after_cleanup_recreates_site(self, store, guides_project, publish, cleanup):
        publish(guides_project)
        cleanup()

        summary = publish(guides_project)

        assert summary.created == 5
