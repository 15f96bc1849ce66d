import io
import pytest
from pathlib import Path
from file_inventory import core as core_module
from file_inventory.core import FileListGenerator
from file_inventory.exceptions import RootScanFailures, SinkError
from file_inventory.models import ScanOptions


@pytest.fixture
def two_roots(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.mkdir()
    b.mkdir()
    (a / "one.txt").write_text("1")
    (a / "two.md").write_text("# two")
    (a / "skipme").mkdir()
    (b / "three.csv").write_text("x,y")
    return a, b


def test_multi_root_output(two_roots, tmp_path):
    a, b = two_roots
    out = tmp_path / "out.csv"

    total = FileListGenerator(ScanOptions(roots=[a, b])).generate_file_list(out)

    data = out.read_bytes()
    assert total == len(data)
    lines = data.decode("utf-8").split("\n")
    assert lines[-1] == ""  # trailing terminator
    assert [line.split(",")[0] for line in lines[:-1]] == ["one.txt", "two.md", "three.csv"]


def test_roots_processed_in_given_order(two_roots, tmp_path):
    a, b = two_roots
    out = tmp_path / "out.csv"

    FileListGenerator(ScanOptions(roots=[b, a])).generate_file_list(out)

    names = [line.split(",")[0] for line in out.read_text(encoding="utf-8").splitlines()]
    assert names == ["three.csv", "one.txt", "two.md"]


def test_bad_root_does_not_stop_others(two_roots, tmp_path):
    a, b = two_roots
    missing = tmp_path / "missing"
    out = tmp_path / "out.csv"

    with pytest.raises(RootScanFailures) as exc:
        FileListGenerator(ScanOptions(roots=[a, missing, b])).generate_file_list(out)

    assert [f.root for f in exc.value.failures] == [missing]
    data = out.read_bytes()
    assert exc.value.bytes_written == len(data)
    assert len(data.decode("utf-8").splitlines()) == 3


def test_unwritable_output_is_fatal(two_roots, tmp_path):
    a, _ = two_roots
    with pytest.raises(SinkError):
        FileListGenerator(ScanOptions(roots=[a])).generate_file_list(tmp_path / "no_dir" / "out.csv")


def test_content_flag_is_honored(two_roots, tmp_path):
    a, _ = two_roots
    out = tmp_path / "out.csv"

    FileListGenerator(ScanOptions(roots=[a], include_content=False)).generate_file_list(out)

    for line in out.read_text(encoding="utf-8").splitlines():
        assert line.endswith(",")


def test_run_hands_file_to_importer(two_roots, tmp_path):
    a, b = two_roots
    out = tmp_path / "out.csv"
    seen = []

    result = FileListGenerator(ScanOptions(roots=[a, b])).run(out, importer=lambda p: seen.append(p) or "done")

    assert result == "done"
    assert seen == [out]


def test_run_default_importer_loads_rows(two_roots, tmp_path):
    a, b = two_roots
    rows = FileListGenerator(ScanOptions(roots=[a, b])).run(tmp_path / "out.csv")

    assert [r["fileName"] for r in rows] == ["one.txt", "two.md", "three.csv"]
    assert rows[2]["fileContent"] == "x,y"


def test_options_from_host_json():
    opts = ScanOptions.from_dict({
        "directoryJsonValue": [{"directory": "/data/a"}, {"directory": "/data/b"}],
        "fileContentColumn": False,
    })
    assert opts.roots == [Path("/data/a"), Path("/data/b")]
    assert opts.include_content is False
    assert opts.max_depth == 1


def test_options_reject_bad_values():
    with pytest.raises(ValueError):
        ScanOptions(roots=[], max_depth=0)
    with pytest.raises(ValueError):
        ScanOptions(roots=[], max_workers=0)


class FullDiskSink(io.BytesIO):
    """Accepts writes; fails when buffered data is flushed on close."""

    def close(self):
        raise OSError(28, "No space left on device")


def test_flush_failure_is_sink_error(two_roots, tmp_path, monkeypatch):
    a, _ = two_roots
    monkeypatch.setattr(core_module, "open", lambda path, mode: FullDiskSink(), raising=False)

    with pytest.raises(SinkError):
        FileListGenerator(ScanOptions(roots=[a])).generate_file_list(tmp_path / "out.csv")


@pytest.mark.skipif(not Path("/dev/full").exists(), reason="needs /dev/full")
def test_full_device_is_sink_error(two_roots):
    a, _ = two_roots
    with pytest.raises(SinkError):
        FileListGenerator(ScanOptions(roots=[a])).generate_file_list(Path("/dev/full"))
