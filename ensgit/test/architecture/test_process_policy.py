from __future__ import annotations

import ast
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parents[2]


def _source_files() -> list[Path]:
    files: list[Path] = []
    for path in sorted(PACKAGE_ROOT.rglob("*.py")):
        rel = path.relative_to(PACKAGE_ROOT)
        if rel.parts[0] == "test" or "__pycache__" in rel.parts:
            continue
        files.append(path)
    return files


def _attribute_calls(path: Path, owner: str, attrs: set[str]) -> list[int]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    lines: list[int] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        func = node.func
        if not isinstance(func, ast.Attribute) or func.attr not in attrs:
            continue
        if isinstance(func.value, ast.Name) and func.value.id == owner:
            lines.append(node.lineno)
    return lines


def test_subprocess_only_in_platform_process() -> None:
    offenders: list[str] = []
    for path in _source_files():
        rel = path.relative_to(PACKAGE_ROOT).as_posix()
        if rel == "platform/process.py":
            continue
        for line in _attribute_calls(path, "subprocess", {"run", "call", "check_output", "Popen"}):
            offenders.append(f"{rel}:{line}")

    assert not offenders, "Direct subprocess calls:\n" + "\n".join(offenders)


def test_no_working_directory_changes() -> None:
    offenders: list[str] = []
    for path in _source_files():
        rel = path.relative_to(PACKAGE_ROOT).as_posix()
        for line in _attribute_calls(path, "os", {"chdir", "fchdir"}):
            offenders.append(f"{rel}:{line}")

    assert not offenders, "Working directory changes:\n" + "\n".join(offenders)
