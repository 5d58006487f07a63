"""Tests for request dispatch, persistence and error reporting."""
from pathlib import Path

from drawiogen.config import OUTPUT_DIR_ENV, Config
from drawiogen.handler_registry import registered_types
from drawiogen.main import DiagramResult, run
from drawiogen.models import DiagramRequest

FLOWCHART = {
    "type": "flowchart",
    "filename": "login",
    "data": {
        "steps": [
            {"id": "s", "label": "Start", "type": "terminator"},
            {"id": "e", "label": "End", "type": "terminator"},
        ],
        "connections": [{"from": "s", "to": "e", "label": "go"}],
    },
}


def test_all_diagram_types_registered():
    assert set(registered_types()) == {"flowchart", "sequence", "erd", "network", "custom"}


def test_run_writes_file(tmp_path, modified):
    result = run(FLOWCHART, Config(outdir=tmp_path, modified=modified))
    assert result.ok
    path = Path(result.path)
    assert path == (tmp_path / "login.drawio").resolve()
    text = path.read_text(encoding="utf-8")
    assert f'modified="{modified}"' in text
    assert 'value="go"' in text
    assert "flowchart" in result.message


def test_run_accepts_request_object(tmp_path):
    request = DiagramRequest(type="custom", data={"shapes": []}, filename="blank.drawio")
    result = run(request, Config(outdir=tmp_path))
    assert result.ok
    assert Path(result.path).name == "blank.drawio"


def test_type_tag_is_case_insensitive(tmp_path):
    result = run({**FLOWCHART, "type": " FlowChart "}, Config(outdir=tmp_path))
    assert result.ok


def test_unknown_type_writes_nothing(tmp_path):
    result = run({**FLOWCHART, "type": "gantt"}, Config(outdir=tmp_path))
    assert not result.ok
    assert result.code == "E_UNKNOWN_TYPE"
    assert "gantt" in result.message
    assert list(tmp_path.iterdir()) == []


def test_missing_fields(tmp_path):
    result = run({"type": "flowchart", "filename": "x", "data": {}}, Config(outdir=tmp_path))
    assert (result.ok, result.code) == (False, "E_MISSING_FIELD")

    result = run({"type": "flowchart", "data": {"steps": []}}, Config(outdir=tmp_path))
    assert result.code == "E_MISSING_FIELD"
    assert "filename" in result.message


def test_invalid_request_shape(tmp_path):
    assert run(["not", "a", "mapping"], Config(outdir=tmp_path)).code == "E_INVALID_FIELD"
    bad = {**FLOWCHART, "data": {"steps": "Start"}}
    assert run(bad, Config(outdir=tmp_path)).code == "E_INVALID_FIELD"


def test_filesystem_failure_is_reported(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    result = run(FLOWCHART, Config(outdir=blocker / "out"))
    assert not result.ok
    assert result.code == "E_IO_WRITE"
    assert result.message.startswith("Failed to save file")


def test_result_to_dict_drops_empty_fields():
    assert DiagramResult(ok=False, code="E_X", message="m").to_dict() == {
        "ok": False, "code": "E_X", "message": "m",
    }


class TestConfig:
    def test_env_selects_output_dir(self, tmp_path):
        cfg = Config.from_env({OUTPUT_DIR_ENV: str(tmp_path)})
        assert cfg.outdir == tmp_path

    def test_defaults_to_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert Config.from_env({}).outdir == tmp_path

    def test_explicit_outdir_wins(self, tmp_path):
        cfg = Config.from_env({OUTPUT_DIR_ENV: "/elsewhere"}, outdir=tmp_path)
        assert cfg.outdir == tmp_path


def test_filename_cannot_leave_output_dir(tmp_path):
    outdir = tmp_path / "a" / "out"
    for name in ("../../escaped", str(tmp_path / "absolute")):
        result = run({**FLOWCHART, "filename": name}, Config(outdir=outdir))
        assert (result.ok, result.code) == (False, "E_INVALID_FIELD")
        assert "output directory" in result.message
    assert not (tmp_path / "escaped.drawio").exists()
    assert not (tmp_path / "absolute.drawio").exists()
