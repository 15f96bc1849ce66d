import pytest
from pathlib import Path


@pytest.fixture
def sample_root(tmp_path):
    """A root with one small text file and one subdirectory."""
    root = tmp_path / "root"
    root.mkdir()
    (root / "note.txt").write_bytes(b"hi")
    sub = root / "sub"
    sub.mkdir()
    (sub / "inner.txt").write_bytes(b"nested")
    return root


@pytest.fixture
def deny_read(monkeypatch):
    """
    Makes Path.open raise PermissionError for the given file names.
    Tests may run as root, where chmod 000 does not block reads.
    """
    denied = set()
    original_open = Path.open

    def fake_open(self, *args, **kwargs):
        if self.name in denied:
            raise PermissionError(13, "Permission denied", str(self))
        return original_open(self, *args, **kwargs)

    monkeypatch.setattr(Path, "open", fake_open)
    return denied.add
