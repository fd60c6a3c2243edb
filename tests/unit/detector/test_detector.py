"""Tests for project-root discovery rules.

Skip names prune the whole containing directory, markers record a project
and stop descent, and the override marker forces descent into workspaces.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from fuzzyfind.detector import ProjectCollector, ProjectRules, find_projects
from fuzzyfind.traversal import Signal, walk


def _touch(root: Path, *relative: str) -> None:
    for rel in relative:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if rel.endswith("/"):
            path.mkdir(exist_ok=True)
        else:
            path.write_text("", encoding="utf-8")


class _RecordingCollector(ProjectCollector):
    def __init__(self, rules: ProjectRules) -> None:
        super().__init__(rules)
        self.visited: set[str] = set()

    def __call__(self, directory: str, name: str, is_dir: bool) -> Signal:
        self.visited.add(directory)
        return super().__call__(directory, name, is_dir)


class ProjectCollectorTests(unittest.TestCase):
    def test_signals_follow_rule_order(self) -> None:
        collector = ProjectCollector(ProjectRules())

        self.assertIs(collector("/x", "node_modules", True), Signal.STOP_FORCED)
        self.assertIs(collector("/x", "go.mod", False), Signal.STOP_DEFAULT)
        self.assertIs(collector("/x", "go.work", False), Signal.CONTINUE_FORCED)
        self.assertIs(collector("/x", "src", True), Signal.CONTINUE_DEFAULT)
        self.assertEqual(collector.projects, ["/x"])

    def test_directory_is_recorded_once_for_several_markers(self) -> None:
        collector = ProjectCollector(ProjectRules())

        collector("/x", ".git", True)
        collector("/x", "Makefile", False)
        collector("/x", "package.json", False)

        self.assertEqual(collector.projects, ["/x"])


class FindProjectsTests(unittest.TestCase):
    def test_skip_name_prunes_every_subdirectory_of_its_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "web/node_modules/lib/package.json", "web/app/Makefile", "web/go.work")
            collector = _RecordingCollector(ProjectRules())

            walk(str(root), collector)

        web = root / "web"
        self.assertIn(str(web), collector.visited)
        self.assertNotIn(str(web / "app"), collector.visited)
        self.assertNotIn(str(web / "node_modules"), collector.visited)
        self.assertEqual(collector.projects, [])

    def test_marker_records_directory_and_prunes_below(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "proj/Makefile", "proj/sub/go.mod")
            collector = _RecordingCollector(ProjectRules())

            walk(str(root), collector)

        self.assertEqual(collector.projects, [str(root / "proj")])
        self.assertNotIn(str(root / "proj" / "sub"), collector.visited)

    def test_override_marker_descends_past_project_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "ws/go.mod", "ws/go.work", "ws/svc/go.mod", "ws/lib/package.json")

            projects = find_projects([str(root)])

        ws = root / "ws"
        self.assertEqual(projects, [str(ws), str(ws / "lib"), str(ws / "svc")])

    def test_git_directory_marks_project(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "repo/.git/", "repo/.git/objects/")

            projects = find_projects([str(root)])

        self.assertEqual(projects, [str(root / "repo")])

    def test_projects_are_returned_in_visit_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "zeta/Cargo.toml", "alpha/pom.xml", "mid/group/beta/index.js")

            projects = find_projects([str(root)])

        self.assertEqual(
            projects,
            [str(root / "alpha"), str(root / "mid" / "group" / "beta"), str(root / "zeta")],
        )

    def test_results_across_base_dirs_are_deduplicated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "one/go.mod", "two/go.mod")

            projects = find_projects([str(root), str(root / "two"), str(root)])

        self.assertEqual(projects, [str(root / "one"), str(root / "two")])

    def test_missing_base_dir_is_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "one/go.mod")

            projects = find_projects([str(root / "missing"), str(root)])

        self.assertEqual(projects, [str(root / "one")])

    def test_custom_rules_are_honored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "py/pyproject.toml", "vendor-only/vendor/x/pyproject.toml", "js/package.json")
            rules = ProjectRules(
                markers=frozenset({"pyproject.toml"}),
                skip_names=frozenset({"vendor"}),
                override_marker="workspace.toml",
            )

            projects = find_projects([str(root)], rules)

        self.assertEqual(projects, [str(root / "py")])

    def test_scan_is_idempotent_on_unchanged_tree(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(
                root,
                "a/go.mod",
                "a/go.work",
                "a/x/Makefile",
                "b/c/d/.git/",
                "e/node_modules/f/package.json",
            )

            first = find_projects([str(root)])
            second = find_projects([str(root)])

        self.assertEqual(first, second)
        self.assertEqual(first, [str(root / "a"), str(root / "a" / "x"), str(root / "b" / "c" / "d")])


if __name__ == "__main__":
    unittest.main()
