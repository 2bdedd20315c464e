from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

from stache.engine import TemplateEngine


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def jload(s: str):
    return json.loads(s)


def run_cli(root: Path, *args: str, stdin: str | None = None) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    # the package is imported from the source tree when it is not installed
    repo_root = str(Path(__file__).resolve().parent.parent)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (repo_root, env.get("PYTHONPATH")) if p)
    env.pop("STACHE_DEBUG", None)
    return subprocess.run(
        [sys.executable, "-m", "stache.cli", *args],
        cwd=root, env=env, input=stdin, capture_output=True, text=True, encoding="utf-8"
    )


@pytest.fixture
def engine() -> TemplateEngine:
    return TemplateEngine()


@pytest.fixture
def tmpproj(tmp_path: Path) -> Path:
    """Project directory with a template, a context file and stache.yaml."""
    write(tmp_path / "page.tpl", "<h1>{{title}}</h1>{{#each items}}<li>{{this}}</li>{{/each}}")
    write(tmp_path / "data.yaml", "title: Fruits\nitems:\n  - apple\n  - pear\n")
    write(tmp_path / "stache.yaml", "defaults:\n  title: Untitled\n  site: Demo\n")
    return tmp_path


@pytest.fixture(autouse=True)
def _no_debug_env(monkeypatch):
    monkeypatch.delenv("STACHE_DEBUG", raising=False)


@pytest.fixture(autouse=True)
def _restore_stache_logger():
    """The CLI configures the ``stache`` logger; undo it after every test."""
    log = logging.getLogger("stache")
    level, handlers = log.level, list(log.handlers)
    yield
    log.setLevel(level)
    log.handlers[:] = handlers
