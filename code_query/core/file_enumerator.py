"""
Streaming file enumeration for a glob pattern.

Expands brace alternatives and walks each static base directory once,
matching files against every alternative in the same pass. Hidden entries
are only matched by pattern segments that start with ``.``; hidden and
ignored directories are pruned before they are entered.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import fnmatch
import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePath, PurePosixPath
from typing import AsyncIterator, Dict, Iterable, List, Optional, Tuple, Union

from anyio import to_thread

logger = logging.getLogger(__name__)

_GLOB_CHARS = frozenset("*?[")
_GLOBSTAR = "**"


@dataclass(frozen=True)
class IgnoreRule:
    """A single compiled gitignore-style exclusion pattern."""

    pattern: str
    anchored: bool
    dir_only: bool

    def matches(self, parts: Tuple[str, ...], is_dir: bool = False) -> bool:
        # Directory-only rules never match a final file component.
        limit = len(parts) - 1 if self.dir_only and not is_dir else len(parts)
        if not self.anchored:
            return any(fnmatch.fnmatchcase(part, self.pattern) for part in parts[:limit])

        alternatives = [self.pattern]
        if self.pattern.startswith("**/"):
            alternatives.append(self.pattern[3:])
        for i in range(1, limit + 1):
            prefix = "/".join(parts[:i])
            if any(fnmatch.fnmatchcase(prefix, alt) for alt in alternatives):
                return True
        return False


def compile_ignore_patterns(ignore_patterns: Iterable[str]) -> List[IgnoreRule]:
    """
    Compile gitignore-style patterns.

    A pattern without ``/`` matches any path component; a pattern containing
    ``/`` matches the path (or one of its parent directories) relative to the
    working directory. A trailing ``/`` limits the rule to directories.
    Negated patterns are not supported and are dropped.
    """
    rules: List[IgnoreRule] = []
    for raw in ignore_patterns:
        pattern = raw.strip()
        if not pattern:
            continue
        if pattern.startswith("!"):
            logger.debug(f"Negated ignore pattern not supported, skipping: {pattern}")
            continue
        dir_only = pattern.endswith("/")
        pattern = pattern.rstrip("/")
        anchored = "/" in pattern
        pattern = pattern.lstrip("/")
        if not pattern:
            continue
        rules.append(IgnoreRule(pattern=pattern, anchored=anchored, dir_only=dir_only))
    return rules


def should_ignore_path(
    path: Union[str, PurePath], ignore_patterns: Iterable[str]
) -> bool:
    """
    Check if a path relative to the working directory is excluded.

    Args:
        path: Relative file path
        ignore_patterns: Gitignore-style patterns

    Returns:
        True if path should be ignored, False otherwise
    """
    parts = PurePosixPath(PurePath(path).as_posix()).parts
    return _is_ignored(parts, compile_ignore_patterns(ignore_patterns))


def _is_ignored(
    parts: Tuple[str, ...], rules: List[IgnoreRule], is_dir: bool = False
) -> bool:
    return bool(parts) and any(rule.matches(parts, is_dir) for rule in rules)


def _segment_matches(segment: str, name: str) -> bool:
    """Match one path component; dot entries need a segment starting with ``.``."""
    if name.startswith(".") and not segment.startswith("."):
        return False
    return fnmatch.fnmatchcase(name, segment)


def _match_parts(pattern: Tuple[str, ...], parts: Tuple[str, ...]) -> bool:
    """Check a path (relative to the walk base) against glob segments."""
    if not pattern:
        return not parts
    head = pattern[0]
    if head == _GLOBSTAR:
        if _match_parts(pattern[1:], parts):
            return True
        return bool(parts) and not parts[0].startswith(".") and _match_parts(pattern, parts[1:])
    return bool(parts) and _segment_matches(head, parts[0]) and _match_parts(pattern[1:], parts[1:])


def _can_descend(pattern: Tuple[str, ...], parts: Tuple[str, ...]) -> bool:
    """Check whether files below directory ``parts`` can still match."""
    if not parts:
        return bool(pattern)
    if not pattern:
        return False
    head = pattern[0]
    if head == _GLOBSTAR:
        if _can_descend(pattern[1:], parts):
            return True
        return not parts[0].startswith(".") and _can_descend(pattern, parts[1:])
    return _segment_matches(head, parts[0]) and _can_descend(pattern[1:], parts[1:])


def _find_brace_group(pattern: str) -> Optional[Tuple[int, int]]:
    depth = 0
    start = -1
    for i, ch in enumerate(pattern):
        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
            if depth == 0:
                return start, i
    return None


def _split_alternatives(body: str) -> List[str]:
    parts: List[str] = []
    depth = 0
    current = []
    for ch in body:
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        if ch == "{":
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
        current.append(ch)
    parts.append("".join(current))
    return parts


def expand_braces(pattern: str) -> List[str]:
    """
    Expand ``{a,b}`` alternatives in a glob pattern.

    Nested groups are expanded recursively; a group without a comma and an
    unbalanced brace are kept literally. Duplicates are dropped while keeping
    the first-seen order.
    """
    group = _find_brace_group(pattern)
    if group is None:
        return [pattern]

    start, end = group
    head, body, tail = pattern[:start], pattern[start + 1:end], pattern[end + 1:]
    alternatives = _split_alternatives(body)

    if len(alternatives) < 2:
        candidates = [
            f"{head}{{{inner}}}{rest}"
            for inner in expand_braces(body)
            for rest in expand_braces(tail)
        ]
    else:
        candidates = [
            expanded
            for alt in alternatives
            for expanded in expand_braces(head + alt + tail)
        ]

    out: List[str] = []
    for candidate in candidates:
        if candidate not in out:
            out.append(candidate)
    return out


def _split_static_base(pattern: str) -> Tuple[PurePath, Tuple[str, ...]]:
    """Split a pattern into the literal directory prefix and the glob segments."""
    parts = PurePath(pattern).parts
    split = len(parts) - 1
    for i, part in enumerate(parts):
        if any(ch in _GLOB_CHARS for ch in part):
            split = i
            break
    return PurePath(*parts[:split]) if split else PurePath(), tuple(parts[split:])


def _scan_directory(path: str) -> List[Tuple[str, bool]]:
    """List ``(name, is_dir)`` for the regular files and real directories in ``path``."""
    entries: List[Tuple[str, bool]] = []
    with os.scandir(path) as it:
        for entry in it:
            if entry.is_dir(follow_symlinks=False):
                entries.append((entry.name, True))
            elif entry.is_file():
                entries.append((entry.name, False))
    entries.sort()
    return entries


async def _walk_base(
    root: Path,
    static_base: PurePath,
    remainders: List[Tuple[str, ...]],
    rules: List[IgnoreRule],
) -> AsyncIterator[str]:
    """Walk one static base directory, pruning directories nothing can match in."""
    base_dir = Path(static_base) if static_base.is_absolute() else root / static_base
    # Ignore rules apply to paths relative to the working directory.
    base_rel = PurePosixPath(PurePath(os.path.relpath(base_dir, root)).as_posix()).parts
    if base_rel == (".",):
        base_rel = ()
    prefix = PurePosixPath(static_base.as_posix())

    stack: List[Tuple[str, ...]] = [()]
    while stack:
        dir_parts = stack.pop()
        directory = base_dir.joinpath(*dir_parts)
        try:
            entries = await to_thread.run_sync(_scan_directory, str(directory))
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            continue

        subdirs: List[Tuple[str, ...]] = []
        for name, is_dir in entries:
            parts = dir_parts + (name,)
            if _is_ignored(base_rel + parts, rules, is_dir=is_dir):
                continue
            if is_dir:
                if any(_can_descend(r, parts) for r in remainders):
                    subdirs.append(parts)
            elif any(_match_parts(r, parts) for r in remainders):
                yield prefix.joinpath(*parts).as_posix()
        stack.extend(reversed(subdirs))


async def iter_source_files(
    pattern: str,
    *,
    cwd: Union[str, Path],
    ignore_patterns: Iterable[str] = (),
) -> AsyncIterator[str]:
    """
    Yield files matching ``pattern``, lazily.

    Relative patterns are evaluated against ``cwd`` and yield POSIX paths
    relative to it; absolute patterns yield absolute paths. Brace
    alternatives sharing a base directory are matched in a single walk, and
    each file is yielded at most once.

    Args:
        pattern: Glob pattern, may contain ``**`` and ``{a,b}``
        cwd: Working directory
        ignore_patterns: Gitignore-style exclusion patterns

    Yields:
        File paths
    """
    root = Path(cwd)
    rules = compile_ignore_patterns(ignore_patterns)

    groups: Dict[PurePath, List[Tuple[str, ...]]] = {}
    for expanded in expand_braces(pattern):
        static_base, remainder = _split_static_base(expanded)
        if remainder:
            groups.setdefault(static_base, []).append(remainder)

    seen: set[str] = set()
    dedupe = len(groups) > 1
    for static_base, remainders in groups.items():
        async for path in _walk_base(root, static_base, remainders, rules):
            if dedupe:
                if path in seen:
                    continue
                seen.add(path)
            yield path
