"""Pytest configuration and shared fixtures."""

import importlib
import sys
import tempfile
import uuid
from pathlib import Path
from typing import Callable, Generator

import pytest


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def resource_dir(temp_dir: Path) -> Path:
    """Create a directory of text resources named 'texts'."""
    texts = temp_dir / "texts"
    texts.mkdir()

    (texts / "SampleResource.txt").write_text("This is a sample resource", encoding="utf-8")
    (texts / "Other.txt").write_text("Some other resource", encoding="utf-8")

    nested = texts / "nested"
    nested.mkdir()
    (nested / "Greeting.md").write_text("# Hello", encoding="utf-8")

    # Code and bytecode are never resources
    (texts / "helpers.py").write_text("VALUE = 1\n", encoding="utf-8")
    pycache = texts / "__pycache__"
    pycache.mkdir()
    (pycache / "helpers.cpython-312.pyc").write_bytes(b"\x00\x01")

    return texts


@pytest.fixture
def make_package(tmp_path: Path, monkeypatch) -> Generator[Callable[..., str], None, None]:
    """Factory creating importable packages holding resource files.

    Calling ``make_package({"Greeting.txt": "Hello"})`` writes a package with
    a unique name under tmp_path, puts it on sys.path, imports it and
    returns its name. Nested paths create sub-directories.
    """
    root = tmp_path / "site"
    root.mkdir()
    monkeypatch.syspath_prepend(str(root))
    created = []

    def factory(files: dict[str, str | bytes], subpackages: tuple[str, ...] = ()) -> str:
        name = f"respkg_{uuid.uuid4().hex[:12]}"
        package_dir = root / name
        package_dir.mkdir()
        (package_dir / "__init__.py").write_text("", encoding="utf-8")

        for subpackage in subpackages:
            sub_dir = package_dir / subpackage
            sub_dir.mkdir(parents=True, exist_ok=True)
            (sub_dir / "__init__.py").write_text("", encoding="utf-8")

        for relpath, content in files.items():
            target = package_dir / relpath
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")

        importlib.invalidate_caches()
        importlib.import_module(name)
        created.append(name)
        return name

    yield factory

    for name in created:
        for module_name in list(sys.modules):
            if module_name == name or module_name.startswith(name + "."):
                del sys.modules[module_name]
