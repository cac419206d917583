"""Tests for tree reconstruction from flat repository listings."""

from __future__ import annotations

import itertools
import random
import unittest

from repofix.file_tree_model import (
    KIND_DIRECTORY,
    KIND_FILE,
    RepositoryEntry,
    build_tree,
    find_node,
    iter_nodes,
)


def _file(path: str, content_id: str | None = None) -> RepositoryEntry:
    return RepositoryEntry(path, KIND_FILE, content_id or f"sha-{path}")


def _dir(path: str) -> RepositoryEntry:
    return RepositoryEntry(path, KIND_DIRECTORY)


def _shape(forest) -> tuple:
    return tuple(node.shape() for node in forest)


class BuildTreeTests(unittest.TestCase):
    def test_empty_listing_builds_empty_forest(self) -> None:
        self.assertEqual(build_tree([]), [])

    def test_directories_precede_files_at_root(self) -> None:
        forest = build_tree(
            [
                _file("src/a.ts"),
                _file("src/b.ts"),
                _file("README.md"),
            ]
        )

        self.assertEqual([node.name for node in forest], ["src", "README.md"])
        src = forest[0]
        self.assertEqual(src.kind, KIND_DIRECTORY)
        self.assertEqual([child.name for child in src.children], ["a.ts", "b.ts"])
        self.assertEqual([child.path for child in src.children], ["src/a.ts", "src/b.ts"])
        self.assertEqual(forest[1].kind, KIND_FILE)
        self.assertEqual(forest[1].content_id, "sha-README.md")

    def test_children_sort_directories_first_then_case_insensitive(self) -> None:
        forest = build_tree(
            [
                _file("root/b"),
                _dir("root/A"),
                _file("root/c.txt"),
            ]
        )

        self.assertEqual([child.name for child in forest[0].children], ["A", "b", "c.txt"])

    def test_case_only_differences_sort_deterministically(self) -> None:
        names = [node.name for node in build_tree([_file("b"), _file("B"), _file("a")])]
        self.assertEqual(names, ["a", "B", "b"])

    def test_synthesized_directories_are_linked_once(self) -> None:
        forest = build_tree(
            [
                _file("a/b/c.py"),
                _file("a/b/d.py"),
                _file("a/e.py"),
            ]
        )

        self.assertEqual(len(forest), 1)
        a = forest[0]
        self.assertEqual([child.path for child in a.children], ["a/b", "a/e.py"])
        self.assertEqual([child.path for child in a.children[0].children], ["a/b/c.py", "a/b/d.py"])
        paths = [node.path for node in iter_nodes(forest)]
        self.assertEqual(len(paths), len(set(paths)))

    def test_child_path_extends_parent_path(self) -> None:
        forest = build_tree([_file("x/y/z.txt"), _dir("x/w")])

        def check(nodes, parent_path: str | None) -> None:
            for node in nodes:
                expected = node.name if parent_path is None else f"{parent_path}/{node.name}"
                self.assertEqual(node.path, expected)
                if node.kind == KIND_FILE:
                    self.assertEqual(node.children, [])
                    self.assertIsNotNone(node.content_id)
                check(node.children, node.path)

        check(forest, None)

    def test_declared_directory_and_nested_file_in_either_order(self) -> None:
        forward = build_tree([_file("a/b"), _dir("a")])
        backward = build_tree([_dir("a"), _file("a/b")])

        for forest in (forward, backward):
            self.assertEqual(len(forest), 1)
            self.assertEqual(forest[0].kind, KIND_DIRECTORY)
            self.assertEqual([child.path for child in forest[0].children], ["a/b"])
            self.assertEqual(forest[0].children[0].kind, KIND_FILE)
        self.assertEqual(_shape(forward), _shape(backward))

    def test_lone_file_has_no_children(self) -> None:
        forest = build_tree([_file("a")])

        self.assertEqual(forest[0].kind, KIND_FILE)
        self.assertEqual(forest[0].children, [])

    def test_file_wins_over_synthesized_directory_in_either_order(self) -> None:
        file_last = build_tree([_file("a/b"), _file("a", "sha-a")])
        file_first = build_tree([_file("a", "sha-a"), _file("a/b")])

        for forest in (file_last, file_first):
            self.assertEqual(len(forest), 1)
            self.assertEqual(forest[0].kind, KIND_FILE)
            self.assertEqual(forest[0].content_id, "sha-a")
            self.assertEqual(forest[0].children, [])
            self.assertIsNone(find_node(forest, "a/b"))

    def test_declared_directory_does_not_replace_file(self) -> None:
        forest = build_tree([_file("a", "sha-a"), _dir("a")])

        self.assertEqual(forest[0].kind, KIND_FILE)
        self.assertEqual(forest[0].content_id, "sha-a")

    def test_directory_entries_carry_no_content_id(self) -> None:
        forest = build_tree([RepositoryEntry("docs", KIND_DIRECTORY, "tree-sha")])
        self.assertIsNone(forest[0].content_id)

    def test_permutations_build_identical_trees(self) -> None:
        entries = [
            _file("src/app/main.py"),
            _dir("src/app"),
            _file("src/App.py"),
            _dir("docs"),
            _file("docs/index.md"),
            _file("setup.cfg"),
            _file("Makefile"),
        ]
        expected = _shape(build_tree(entries))
        for permutation in itertools.islice(itertools.permutations(entries), 0, None, 97):
            self.assertEqual(_shape(build_tree(list(permutation))), expected)

        rng = random.Random(7)
        conflicting = entries + [_file("docs/index.md/stale"), _file("setup.cfg/x/y")]
        reference = _shape(build_tree(conflicting))
        for _ in range(50):
            shuffled = list(conflicting)
            rng.shuffle(shuffled)
            self.assertEqual(_shape(build_tree(shuffled)), reference)

    def test_result_does_not_alias_between_builds(self) -> None:
        entries = [_file("a/b.txt")]
        first = build_tree(entries)
        first[0].children.clear()

        second = build_tree(entries)
        self.assertEqual([child.path for child in second[0].children], ["a/b.txt"])


class FindNodeTests(unittest.TestCase):
    def test_find_node_walks_segments(self) -> None:
        forest = build_tree([_file("a/b/c.txt"), _file("d.txt")])

        self.assertEqual(find_node(forest, "a/b").kind, KIND_DIRECTORY)
        self.assertEqual(find_node(forest, "a/b/c.txt").content_id, "sha-a/b/c.txt")
        self.assertEqual(find_node(forest, "d.txt").name, "d.txt")
        self.assertIsNone(find_node(forest, "a/missing"))
        self.assertIsNone(find_node(forest, ""))


if __name__ == "__main__":
    unittest.main()
