"""Tests for selection state and resolution."""

import pytest

from vaultctx.selection import Resolver, SelectionSet, document_order
from vaultctx.vault import Document


def _paths(documents: list[Document]) -> list[str]:
    return [document.path for document in documents]


class TestSelectionSet:
    """Tests for SelectionSet commands."""

    def test_starts_empty(self):
        selection = SelectionSet()
        assert selection.is_empty
        assert selection.documents == []
        assert selection.tag_roots == []

    def test_add_document_keeps_insertion_order(self):
        selection = SelectionSet()
        selection.add_document("z.md")
        selection.add_document("a.md")
        selection.add_document("z.md")
        assert selection.documents == ["z.md", "a.md"]

    def test_add_document_rejects_empty_path(self):
        with pytest.raises(ValueError):
            SelectionSet().add_document("/")

    def test_add_tag_root_normalizes(self):
        selection = SelectionSet()
        selection.add_tag_root("#Work/")
        selection.add_tag_root("work")
        assert selection.tag_roots == ["work"]

    def test_add_tag_root_rejects_empty_tag(self):
        with pytest.raises(ValueError):
            SelectionSet().add_tag_root("#")

    def test_add_document_clears_its_exclusion(self):
        selection = SelectionSet()
        selection.exclude("a.md")
        selection.add_document("a.md")
        assert not selection.is_excluded("a.md")

    def test_add_tag_root_clears_only_its_own_key(self):
        selection = SelectionSet()
        selection.exclude("#work")
        selection.exclude("#work/meetings")
        selection.add_tag_root("Work")
        assert not selection.is_excluded("#work")
        assert selection.is_excluded("#work/meetings")

    def test_remove_leaves_exclusions(self):
        selection = SelectionSet()
        selection.add_document("a.md")
        selection.add_tag_root("work")
        selection.exclude("#work/x")

        selection.remove_document("a.md")
        selection.remove_tag_root("#WORK")

        assert selection.is_empty
        assert selection.excluded_keys == {"#work/x"}

    def test_exclusion_is_sticky(self):
        selection = SelectionSet()
        selection.exclude("#work/meetings")
        selection.remove_tag_root("work")
        selection.add_tag_root("work")
        assert selection.is_excluded("#work/meetings")

    def test_exclude_normalizes_tag_keys(self):
        selection = SelectionSet()
        selection.exclude("#Work/Meetings/")
        assert selection.excluded_keys == {"#work/meetings"}

    def test_remove_folder(self):
        selection = SelectionSet()
        for path in ("b/c.md", "b/d.md", "bb/e.md", "a.md"):
            selection.add_document(path)

        removed = selection.remove_folder("b/")

        assert removed == 2
        assert selection.documents == ["bb/e.md", "a.md"]

    def test_clear_all(self):
        selection = SelectionSet()
        selection.add_document("a.md")
        selection.add_tag_root("work")
        selection.exclude("b.md")

        selection.clear_all()

        assert selection.is_empty
        assert selection.excluded_keys == set()


class TestResolver:
    """Tests for Resolver."""

    def test_empty_selection(self, memory_vault):
        assert Resolver(memory_vault).resolve(SelectionSet()) == []

    def test_tag_root_collects_descendants(self, memory_vault):
        selection = SelectionSet()
        selection.add_tag_root("work")

        result = Resolver(memory_vault).resolve(selection)

        assert _paths(result) == ["b/c.md", "b/d.md", "e/f.md"]

    def test_excluded_path_never_reached_through_tag(self, memory_vault):
        selection = SelectionSet()
        selection.add_tag_root("work")
        selection.exclude("b/c.md")

        assert "b/c.md" not in _paths(Resolver(memory_vault).resolve(selection))

    def test_excluded_segment_prunes_documents(self, memory_vault):
        selection = SelectionSet()
        selection.add_tag_root("work")
        selection.exclude("#work/meetings")

        assert _paths(Resolver(memory_vault).resolve(selection)) == ["b/c.md", "e/f.md"]

    def test_excluded_root_hides_everything_but_stays_selected(self, memory_vault):
        selection = SelectionSet()
        selection.add_tag_root("work")
        selection.exclude("#work")

        assert Resolver(memory_vault).resolve(selection) == []
        assert selection.tag_roots == ["work"]

    def test_direct_pick_survives_tag_exclusion(self, memory_vault):
        selection = SelectionSet()
        selection.add_tag_root("work")
        selection.exclude("#work/meetings")
        selection.add_document("b/d.md")

        assert "b/d.md" in _paths(Resolver(memory_vault).resolve(selection))

    def test_re_adding_document_clears_exclusion(self, memory_vault):
        selection = SelectionSet()
        selection.add_document("a.md")
        selection.exclude("a.md")
        resolver = Resolver(memory_vault)

        assert resolver.resolve(selection) == []

        selection.add_document("a.md")
        assert _paths(resolver.resolve(selection)) == ["a.md"]

    def test_deduplicates_two_tag_roots(self, memory_vault):
        selection = SelectionSet()
        selection.add_tag_root("work")
        selection.add_tag_root("work/meetings")

        paths = _paths(Resolver(memory_vault).resolve(selection))
        assert paths.count("b/d.md") == 1

    def test_deduplicates_tag_and_direct(self, memory_vault):
        selection = SelectionSet()
        selection.add_document("b/c.md")
        selection.add_tag_root("work")

        paths = _paths(Resolver(memory_vault).resolve(selection))
        assert paths.count("b/c.md") == 1

    @pytest.mark.parametrize(
        ("ignored", "dropped"),
        [
            (["private"], True),
            (["private/notes"], True),
            (["#Private"], True),
            (["private/other"], False),
        ],
    )
    def test_ignored_tags(self, memory_vault, ignored, dropped):
        selection = SelectionSet()
        selection.add_document("e/f.md")
        selection.add_tag_root("work")

        paths = _paths(Resolver(memory_vault, ignored).resolve(selection))
        assert ("e/f.md" not in paths) is dropped

    def test_missing_document_aborts(self, memory_vault):
        selection = SelectionSet()
        selection.add_document("a.md")
        selection.add_document("gone.md")

        with pytest.raises(FileNotFoundError) as exc_info:
            Resolver(memory_vault).resolve(selection)

        assert exc_info.value.filename == "gone.md"

    def test_excluded_missing_document_is_not_checked(self, memory_vault):
        selection = SelectionSet()
        selection.add_document("a.md")
        selection.add_document("gone.md")
        selection.exclude("gone.md")

        assert _paths(Resolver(memory_vault).resolve(selection)) == ["a.md"]

    def test_vault_listed_once_per_resolve(self, make_vault):
        vault = make_vault({f"n{i}.md": ("", []) for i in range(50)})
        selection = SelectionSet()
        for path in vault.list_documents():
            selection.add_document(path)
        vault.listings = 0

        assert len(Resolver(vault).resolve(selection)) == 50
        assert vault.listings == 1

    def test_repeated_resolution_is_stable(self, memory_vault):
        selection = SelectionSet()
        selection.add_document("e/g.canvas")
        selection.add_tag_root("work")
        resolver = Resolver(memory_vault)

        assert resolver.resolve(selection) == resolver.resolve(selection)

    def test_order_follows_tree_order(self, make_vault):
        vault = make_vault({"a-b/x.md": ("", []), "a/x.md": ("", []), "A.md": ("", [])})
        selection = SelectionSet()
        for path in ("a-b/x.md", "a/x.md", "A.md"):
            selection.add_document(path)

        assert _paths(Resolver(vault).resolve(selection)) == ["A.md", "a/x.md", "a-b/x.md"]

    def test_document_order_key(self):
        assert document_order(Document(path="a/b.md")) == ["a", "b.md"]

    def test_collect_folder(self, memory_vault):
        resolver = Resolver(memory_vault)
        assert resolver.collect_folder("") == [
            "a.md",
            "b/c.md",
            "b/d.md",
            "e/f.md",
            "e/g.canvas",
        ]
        assert resolver.collect_folder("b") == ["b/c.md", "b/d.md"]

    def test_documents_skips_ignored(self, memory_vault):
        resolver = Resolver(memory_vault, ["private"])
        assert "e/f.md" not in _paths(resolver.documents())
