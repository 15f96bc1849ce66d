import json
import pytest
from file_inventory.main import main


def test_main_writes_file_list(sample_root, tmp_path):
    out = tmp_path / "out" / "files.csv"
    main([str(sample_root), "-o", str(out), "--load"])

    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("note.txt,1,txt,")


def test_main_reads_options_file(sample_root, tmp_path):
    options = tmp_path / "options.json"
    options.write_text(json.dumps({
        "directoryJsonValue": [{"directory": str(sample_root)}],
        "fileContentColumn": False,
    }))
    out = tmp_path / "files.csv"

    main(["--options", str(options), "-o", str(out)])

    line = out.read_text(encoding="utf-8").strip()
    assert line.startswith("note.txt,")
    assert line.endswith(",")


def test_main_fails_on_missing_root(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "nope"), "-o", str(tmp_path / "files.csv")])
    assert exc.value.code == 1


def test_main_requires_roots(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["-o", str(tmp_path / "files.csv")])
    assert exc.value.code == 1


def test_main_reports_sink_failure(sample_root, tmp_path, monkeypatch):
    import io
    from file_inventory import core as core_module

    class FullDiskSink(io.BytesIO):
        def close(self):
            raise OSError(28, "No space left on device")

    monkeypatch.setattr(core_module, "open", lambda path, mode: FullDiskSink(), raising=False)

    with pytest.raises(SystemExit) as exc:
        main([str(sample_root), "-o", str(tmp_path / "files.csv")])
    assert exc.value.code == 1
