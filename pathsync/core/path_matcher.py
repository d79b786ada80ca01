"""Lexical path containment checks.

Paths are compared component by component after normalization, without
touching the filesystem (symlinks are not resolved). Both ``/`` and ``\\``
separate components so registries written on either platform behave the same.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NormalizedPath:
    """A path reduced to its anchor and component sequence.

    Attributes:
        anchor: "" for relative paths, "/" for absolute ones, or a drive
            prefix such as "C:" / "C:/".
        parts: Path components with "." removed and ".." collapsed.
    """

    anchor: str
    parts: tuple[str, ...]

    @property
    def is_absolute(self) -> bool:
        return self.anchor.endswith("/")

    def __str__(self) -> str:
        body = "/".join(self.parts)
        if not self.anchor and not body:
            return "."
        return self.anchor + body


def normalize(path: object) -> NormalizedPath | None:
    """Normalize a path lexically.

    Args:
        path: Path string to normalize.

    Returns:
        NormalizedPath, or None when the input is not a usable path
        (not a string, empty, or containing a NUL byte).
    """
    if not isinstance(path, str) or not path or "\x00" in path:
        return None

    unified = path.replace("\\", "/")
    drive = ""
    if len(unified) >= 2 and unified[1] == ":" and unified[0].isalpha():
        drive = unified[0].upper() + ":"
        unified = unified[2:]

    absolute = unified.startswith("/")
    parts: list[str] = []
    for part in unified.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not absolute:
                parts.append(part)
            # ".." at an absolute root stays at the root
            continue
        parts.append(part)

    return NormalizedPath(anchor=drive + ("/" if absolute else ""), parts=tuple(parts))


def is_under(candidate: object, base: object) -> bool:
    """Check whether ``candidate`` is ``base`` or lies below it.

    Comparison is on whole components, so ``/foo2`` is not under ``/foo``.
    An absolute and a relative path never match each other.

    Args:
        candidate: Path that may be inside ``base``.
        base: Directory path.

    Returns:
        True if ``base``'s components are a prefix of ``candidate``'s.
        False otherwise, including for malformed input.
    """
    normalized_candidate = normalize(candidate)
    normalized_base = normalize(base)
    if normalized_candidate is None or normalized_base is None:
        return False
    if normalized_candidate.anchor != normalized_base.anchor:
        return False

    base_parts = normalized_base.parts
    return normalized_candidate.parts[: len(base_parts)] == base_parts


def make_absolute(path: str, cwd: str) -> str:
    """Anchor a path at ``cwd`` (when relative) and normalize it lexically.

    Args:
        path: Path as typed by the user.
        cwd: Absolute working directory.

    Returns:
        Normalized absolute path string. ``path`` is returned unchanged if
        it can't be normalized.
    """
    normalized = normalize(path)
    if normalized is None:
        return path
    if normalized.anchor:
        return str(normalized)
    joined = normalize(cwd.rstrip("/\\") + "/" + path)
    return str(joined) if joined is not None else path
