"""Load shader source text, expanding ``#include`` lines recursively."""

from __future__ import annotations

from pathlib import Path

INCLUDE_IDENTIFIER = "#include "


def file_directory(path: str) -> str:
    """Return the directory part of ``path`` including its trailing separator."""
    cut = max(path.rfind("/"), path.rfind("\\"))
    return path[: cut + 1]


def _expand(path: str, active: tuple[str, ...]) -> str:
    key = str(Path(path).resolve())
    if key in active:
        raise ValueError(f"include cycle through {path}")
    active = (*active, key)

    parts: list[str] = []
    with open(path, encoding="utf-8", newline="\n") as handle:
        for raw in handle:
            line = raw[:-1] if raw.endswith("\n") else raw
            if INCLUDE_IDENTIFIER in line:
                included = file_directory(path) + line[len(INCLUDE_IDENTIFIER):].strip()
                parts.append(_expand(included, active))
                continue
            parts.append(line + "\n")
    return "".join(parts)


def load_shader_source(path: str) -> str:
    """Return the full source of ``path`` with includes expanded.

    The expanded text is also written next to the file as ``<path>.final``.
    Raises FileNotFoundError when a file cannot be opened and ValueError on
    include cycles.
    """
    path = str(path)
    source = _expand(path, ())
    with open(path + ".final", "w", encoding="utf-8", newline="\n") as out:
        out.write(source)
    return source