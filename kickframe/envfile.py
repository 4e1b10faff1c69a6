"""Dotenv loading and prefixed environment-variable reading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from kickframe.errors import KickError


def load_dotenv(path: str | os.PathLike[str], optional: bool = False) -> None:
    """Parse ``path`` as a ``.env`` file and export each entry.

    Variables already present in the environment are not overwritten.
    A missing file is ignored when ``optional`` is true; any other read
    failure raises RK_C_IO and malformed lines raise RK_C_PARSE.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        if optional:
            return
        raise KickError("RK_C_IO", f"could not read dotenv {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise KickError("RK_C_IO", f"could not read dotenv {path}: {exc}") from exc

    for lineno, raw in enumerate(content.split("\n"), start=1):
        line = _strip_inline_comment(raw.strip())
        if not line:
            continue
        key, sep, value = line.partition("=")
        if not sep:
            raise KickError(
                "RK_C_PARSE", f"dotenv {path} line {lineno}: expected KEY=VALUE"
            )
        key = key.strip()
        if not key:
            raise KickError("RK_C_PARSE", f"dotenv {path} line {lineno}: empty key")
        if key not in os.environ:
            os.environ[key] = _unquote(value.strip())


def read_env_with_prefix(prefix: str) -> dict[str, Any]:
    """Build a nested dict from variables starting with ``prefix``.

    The prefix is stripped, the rest lowercased, and ``__`` separates
    nesting levels. All leaf values are strings.
    """
    root: dict[str, Any] = {}
    for name, value in os.environ.items():
        if not name.startswith(prefix):
            continue
        rest = name[len(prefix):]
        if not rest:
            continue
        _insert_path(root, rest.lower().split("__"), value)
    return root


def _insert_path(into: dict[str, Any], path: list[str], leaf: str) -> None:
    *parents, last = path
    node = into
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            # A non-object that arrived first is overwritten: last write wins.
            child = {}
            node[part] = child
        node = child
    node[last] = leaf


def _strip_inline_comment(text: str) -> str:
    # `#` starts a comment only at line start or after whitespace, so values
    # such as URLs with fragments survive.
    prev_ws = True
    for index, char in enumerate(text):
        if char == "#" and prev_ws:
            return text[:index].rstrip()
        prev_ws = char.isspace()
    return text


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return text