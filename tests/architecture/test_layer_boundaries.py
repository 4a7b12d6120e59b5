"""The foundation layer must not import from the engine layer."""

from __future__ import annotations

import ast
from pathlib import Path

SRC_ROOT = Path(__file__).resolve().parents[2] / "src"
FOUNDATION = SRC_ROOT / "moselect" / "foundation"


def _module_from_path(path: Path) -> str:
    parts = list(path.relative_to(SRC_ROOT).with_suffix("").parts)
    if parts[-1] == "__init__":
        parts = parts[:-1]
    return ".".join(parts)


def _imported_modules(path: Path) -> list[tuple[str, int]]:
    tree = ast.parse(path.read_text(encoding="utf-8"))
    current = _module_from_path(path).split(".")
    if path.name != "__init__.py":
        current = current[:-1]
    found: list[tuple[str, int]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            found.extend((alias.name, node.lineno) for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                base = current[: len(current) - node.level + 1]
                module = ".".join(base + ([node.module] if node.module else []))
            else:
                module = node.module or ""
            found.append((module, node.lineno))
    return found


def test_foundation_does_not_import_engine() -> None:
    violations = [
        f"{path.relative_to(SRC_ROOT).as_posix()}:{lineno} imports {module}"
        for path in sorted(FOUNDATION.rglob("*.py"))
        for module, lineno in _imported_modules(path)
        if module.startswith("moselect.engine")
    ]
    assert not violations, "Layer violations:\n" + "\n".join(violations)
