from pathlib import Path
from types import SimpleNamespace

import pytest

import ridelog.util.fzf as fzf
from ridelog.errors import FzfNotFoundError, RidelogError


def test_missing_fzf(monkeypatch):
    monkeypatch.setattr(fzf, "which", lambda _cmd: None)
    with pytest.raises(FzfNotFoundError):
        fzf.fzf_select_paths([Path("a.gpx")], header="x")


def test_selection_parsed(monkeypatch, tmp_path):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        return SimpleNamespace(returncode=0, stdout=f"b.tcx\t{tmp_path / 'b.tcx'}\n\n", stderr="")

    monkeypatch.setattr(fzf, "which", lambda _cmd: "/usr/bin/fzf")
    monkeypatch.setattr(fzf.subprocess, "run", fake_run)

    paths = [tmp_path / "a.gpx", tmp_path / "b.tcx"]
    assert fzf.fzf_select_paths(paths, header="Pick", multi=False) == [(tmp_path / "b.tcx").resolve()]

    (cmd, kwargs), = calls
    assert cmd[0] == "fzf"
    assert "--no-multi" in cmd
    assert cmd[cmd.index("--preview") + 1] == fzf.STATS_PREVIEW
    assert kwargs["input"] == f"a.gpx\t{paths[0]}\nb.tcx\t{paths[1]}\n"


@pytest.mark.parametrize("code", [1, 130])
def test_nothing_picked(monkeypatch, code):
    monkeypatch.setattr(fzf, "which", lambda _cmd: "/usr/bin/fzf")
    monkeypatch.setattr(
        fzf.subprocess, "run", lambda cmd, **kw: SimpleNamespace(returncode=code, stdout="", stderr="")
    )
    assert fzf.fzf_select_paths([Path("a.gpx")], header="x", preview=None) == []


def test_fzf_failure(monkeypatch):
    monkeypatch.setattr(fzf, "which", lambda _cmd: "/usr/bin/fzf")
    monkeypatch.setattr(
        fzf.subprocess, "run", lambda cmd, **kw: SimpleNamespace(returncode=2, stdout="", stderr="bad flag")
    )
    with pytest.raises(RidelogError, match="bad flag"):
        fzf.fzf_select_paths([Path("a.gpx")], header="x")
