from __future__ import annotations

import curses
import json
from pathlib import Path
from typing import Any, Iterable

import pytest


class FakeWindow:
    """Stand-in for a curses window: records text, replays key codes."""

    def __init__(self, keys: Iterable[Any] = (), size: tuple[int, int] = (24, 80)):
        self._keys = [ord(k) if isinstance(k, str) else k for k in keys]
        self.size = size
        self.frames: list[list[str]] = []
        self.attrs: dict[int, int] = {}
        self._lines: dict[int, str] = {}

    def getmaxyx(self) -> tuple[int, int]:
        return self.size

    def erase(self) -> None:
        self._lines = {}
        self.attrs = {}

    def addnstr(self, y: int, x: int, text: str, n: int, attr: int = 0) -> None:
        assert n > 0 and x + n < self.size[1]
        line = self._lines.get(y, "")
        line = line.ljust(x) + text[:n]
        self._lines[y] = line
        self.attrs[y] = attr

    def refresh(self) -> None:
        height = self.size[0]
        self.frames.append([self._lines.get(y, "") for y in range(height)])

    def getch(self) -> int:
        if not self._keys:
            raise AssertionError("session asked for more keys than were scripted")
        return self._keys.pop(0)

    @property
    def last_frame(self) -> list[str]:
        return self.frames[-1]

    def text(self) -> str:
        return "\n".join(line for line in self.last_frame if line)


@pytest.fixture
def fake_window():
    return FakeWindow


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("CAGLE_LOG_ENABLED", "CAGLE_LOG_LEVEL", "CAGLE_LOG_DIR"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def home(tmp_path, monkeypatch) -> Path:
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def project(tmp_path, monkeypatch) -> Path:
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    monkeypatch.chdir(project_dir)
    return project_dir


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


KEY_ENTER = ord("\n")
KEY_UP = curses.KEY_UP
KEY_DOWN = curses.KEY_DOWN
