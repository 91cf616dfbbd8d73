"""
Tests for glob-based file enumeration.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from pathlib import Path
from typing import Iterable, List

import anyio

from code_query.core import file_enumerator
from code_query.core.constants import DEFAULT_GLOB
from code_query.core.file_enumerator import (
    compile_ignore_patterns,
    expand_braces,
    iter_source_files,
    should_ignore_path,
)


def _collect(pattern: str, cwd: Path, ignore: Iterable[str] = ()) -> List[str]:
    async def run() -> List[str]:
        return [
            p async for p in iter_source_files(pattern, cwd=cwd, ignore_patterns=ignore)
        ]

    return anyio.run(run)


class TestExpandBraces:
    """Tests for brace alternatives."""

    def test_no_braces(self) -> None:
        assert expand_braces("src/**/*.ts") == ["src/**/*.ts"]

    def test_simple_group(self) -> None:
        assert expand_braces("**/*.{js,ts}") == ["**/*.js", "**/*.ts"]

    def test_default_glob(self) -> None:
        assert expand_braces(DEFAULT_GLOB) == [
            "**/*.cjs",
            "**/*.js",
            "**/*.jsx",
            "**/*.mjs",
            "**/*.ts",
            "**/*.tsx",
        ]

    def test_nested_group(self) -> None:
        assert expand_braces("a{b,c{d,e}}") == ["ab", "acd", "ace"]

    def test_multiple_groups(self) -> None:
        assert expand_braces("{a,b}{1,2}") == ["a1", "a2", "b1", "b2"]

    def test_group_without_comma_is_literal(self) -> None:
        assert expand_braces("a{b}c") == ["a{b}c"]

    def test_unbalanced_brace_is_literal(self) -> None:
        assert expand_braces("a{b,c") == ["a{b,c"]

    def test_duplicates_dropped(self) -> None:
        assert expand_braces("{a,a,b}") == ["a", "b"]


class TestShouldIgnorePath:
    """Tests for gitignore-style exclusion."""

    def test_component_pattern(self) -> None:
        assert should_ignore_path("node_modules/pkg/index.js", {"node_modules"})
        assert should_ignore_path("src/node_modules/x.js", {"node_modules"})
        assert not should_ignore_path("src/index.js", {"node_modules"})

    def test_wildcard_pattern(self) -> None:
        assert should_ignore_path("lib/app.min.js", {"*.min.js"})
        assert not should_ignore_path("lib/app.js", {"*.min.js"})

    def test_anchored_pattern(self) -> None:
        assert should_ignore_path("dist/a.js", {"/dist"})
        assert not should_ignore_path("src/dist/a.js", {"/dist"})

    def test_pattern_with_slash_matches_directory_prefix(self) -> None:
        assert should_ignore_path("src/generated/a.ts", {"src/generated"})
        assert not should_ignore_path("lib/src/generated/a.ts", {"src/generated"})

    def test_double_star_prefix(self) -> None:
        assert should_ignore_path("a/gen/x.ts", {"**/gen/*.ts"})
        assert should_ignore_path("gen/x.ts", {"**/gen/*.ts"})

    def test_directory_only_pattern(self) -> None:
        assert should_ignore_path("build/a.js", {"build/"})
        assert not should_ignore_path("build", {"build/"})

    def test_negated_patterns_are_dropped(self) -> None:
        assert compile_ignore_patterns(["!keep.js", "", "  "]) == []
        assert not should_ignore_path("keep.js", {"!keep.js"})

    def test_no_patterns(self) -> None:
        assert not should_ignore_path("a.js", set())


class TestIterSourceFiles:
    """Tests for streaming enumeration."""

    def _tree(self, make_files) -> Path:
        return make_files(
            {
                "a.js": "a();",
                "src/b.ts": "b();",
                "src/deep/c.tsx": "c();",
                "node_modules/pkg/d.js": "d();",
                ".hidden/e.js": "e();",
                "src/.f.js": "f();",
                "readme.md": "# readme",
            }
        )

    def test_default_glob_finds_sources(self, make_files) -> None:
        root = self._tree(make_files)
        found = _collect(DEFAULT_GLOB, root, {"node_modules"})
        assert sorted(found) == ["a.js", "src/b.ts", "src/deep/c.tsx"]

    def test_ignore_patterns_absent(self, make_files) -> None:
        root = self._tree(make_files)
        found = _collect(DEFAULT_GLOB, root)
        assert "node_modules/pkg/d.js" in found

    def test_hidden_paths_skipped(self, make_files) -> None:
        root = self._tree(make_files)
        found = _collect("**/*.js", root)
        assert ".hidden/e.js" not in found
        assert "src/.f.js" not in found

    def test_directories_are_not_yielded(self, make_files, tmp_path) -> None:
        make_files({"a.js": "a();"})
        (tmp_path / "folder.js").mkdir()
        assert _collect("*.js", tmp_path) == ["a.js"]

    def test_each_file_yielded_once(self, make_files) -> None:
        root = make_files({"a.js": "a();"})
        assert _collect("{a,*}.js", root) == ["a.js"]

    def test_literal_file_pattern(self, make_files) -> None:
        root = make_files({"src/a.ts": "a();", "src/b.ts": "b();"})
        assert _collect("src/a.ts", root) == ["src/a.ts"]

    def test_static_prefix(self, make_files) -> None:
        root = self._tree(make_files)
        assert sorted(_collect("src/**/*.{ts,tsx}", root)) == ["src/b.ts", "src/deep/c.tsx"]

    def test_absolute_pattern(self, make_files) -> None:
        root = self._tree(make_files)
        found = _collect(f"{root.as_posix()}/src/*.ts", root)
        assert found == [f"{root.as_posix()}/src/b.ts"]

    def test_no_matches(self, tmp_path) -> None:
        assert _collect(DEFAULT_GLOB, tmp_path) == []

    def test_is_lazy(self, tmp_path) -> None:
        gen = iter_source_files(DEFAULT_GLOB, cwd=tmp_path)
        assert hasattr(gen, "__anext__")

    def test_missing_static_base(self, tmp_path) -> None:
        assert _collect("missing/**/*.ts", tmp_path) == []


class TestDotfiles:
    """Tests for explicitly named hidden files."""

    def _tree(self, make_files) -> Path:
        return make_files(
            {
                ".eslintrc.js": "module.exports = {};",
                "src/.eslintrc.js": "module.exports = {};",
                "src/a.js": "a();",
                ".storybook/main.js": "main();",
                ".git/hooks/pre.js": "hook();",
            }
        )

    def test_literal_dotfile(self, make_files) -> None:
        root = self._tree(make_files)
        assert _collect(".eslintrc.js", root) == [".eslintrc.js"]

    def test_globstar_dotfile(self, make_files) -> None:
        root = self._tree(make_files)
        assert sorted(_collect("**/.eslintrc.js", root)) == [
            ".eslintrc.js",
            "src/.eslintrc.js",
        ]

    def test_wildcard_does_not_match_dotfile(self, make_files) -> None:
        root = self._tree(make_files)
        assert _collect("*.js", root) == []
        assert _collect("src/*.js", root) == ["src/a.js"]

    def test_dot_segment_enters_hidden_directory(self, make_files) -> None:
        root = self._tree(make_files)
        assert _collect(".storybook/*.js", root) == [".storybook/main.js"]
        assert _collect(".*/*.js", root) == [".storybook/main.js"]

    def test_globstar_does_not_cross_hidden_directory(self, make_files) -> None:
        root = self._tree(make_files)
        found = _collect("**/*.js", root)
        assert found == ["src/a.js"]


class TestDirectoryPruning:
    """Tests that skipped directories are never read."""

    def _record_scans(self, monkeypatch) -> List[str]:
        scanned: List[str] = []
        real_scan = file_enumerator._scan_directory

        def recording_scan(path: str):
            scanned.append(Path(path).as_posix())
            return real_scan(path)

        monkeypatch.setattr(file_enumerator, "_scan_directory", recording_scan)
        return scanned

    def _tree(self, make_files) -> Path:
        return make_files(
            {
                "a.js": "a();",
                "src/b.ts": "b();",
                "node_modules/pkg/lib/d.js": "d();",
                ".git/objects/x.js": "x();",
                "build/out.js": "out();",
            }
        )

    def test_ignored_directory_not_visited(self, make_files, monkeypatch) -> None:
        root = self._tree(make_files)
        scanned = self._record_scans(monkeypatch)

        found = _collect(DEFAULT_GLOB, root, {"node_modules"})

        assert sorted(found) == ["a.js", "build/out.js", "src/b.ts"]
        root_posix = root.as_posix()
        for path in scanned:
            assert not path.startswith(f"{root_posix}/node_modules")
            assert not path.startswith(f"{root_posix}/.git")

    def test_directory_only_rule_prunes(self, make_files, monkeypatch) -> None:
        root = self._tree(make_files)
        scanned = self._record_scans(monkeypatch)

        found = _collect(DEFAULT_GLOB, root, {"node_modules", "build/"})

        assert sorted(found) == ["a.js", "src/b.ts"]
        assert f"{root.as_posix()}/build" not in scanned

    def test_brace_alternatives_share_one_walk(self, make_files, monkeypatch) -> None:
        root = self._tree(make_files)
        scanned = self._record_scans(monkeypatch)

        _collect(DEFAULT_GLOB, root, {"node_modules"})

        assert scanned.count(root.as_posix()) == 1
        assert scanned.count(f"{root.as_posix()}/src") == 1

    def test_non_matching_directory_not_visited(self, make_files, monkeypatch) -> None:
        root = self._tree(make_files)
        scanned = self._record_scans(monkeypatch)

        assert _collect("src/*.ts", root) == ["src/b.ts"]
        assert scanned == [f"{root.as_posix()}/src"]
