import pytest

from seashell.history import History
from seashell.session import ShellSession


@pytest.fixture
def history(tmp_path):
    h = History(str(tmp_path / "history")).open()
    yield h
    h.close()


@pytest.fixture
def session(history):
    return ShellSession(history)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Fresh working directory, restored after the test."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work
