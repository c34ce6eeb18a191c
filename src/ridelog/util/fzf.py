# ridelog/util/fzf.py
"""
Pick ride files interactively with `fzf`.

fzf gets one "name<TAB>fullpath" line per file, matches on the name only,
and can preview each candidate through ridelog-analyze.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from shutil import which

from ridelog.errors import FzfNotFoundError, RidelogError

# fzf exit codes: 1 = no match, 130 = dismissed (Esc / Ctrl-C)
_NOTHING_PICKED = (1, 130)

STATS_PREVIEW = "ridelog-analyze {2}"


def _fzf_command(header: str, multi: bool, preview: str | None) -> list[str]:
    cmd = [
        "fzf",
        "--delimiter=\t",
        "--nth=1",
        "--with-nth=1",
        "--height=60%",
        "--layout=reverse",
        "--border",
        "--header", header,
        "--multi" if multi else "--no-multi",
    ]
    if preview:
        cmd += ["--preview", preview, "--preview-window", "right:60%:wrap"]
    return cmd


def _selected_paths(stdout: str) -> list[Path]:
    selected: list[Path] = []
    for line in stdout.splitlines():
        line = line.strip()
        if not line:
            continue
        _, _, path_str = line.rpartition("\t")
        selected.append(Path(path_str).expanduser().resolve())
    return selected


def fzf_select_paths(
        paths: list[Path], *,
        header: str,
        multi: bool = True,
        preview: str | None = STATS_PREVIEW,
) -> list[Path]:
    """
    Return the paths the user picked; empty if the picker was dismissed.

    Raises:
      FzfNotFoundError if fzf is not installed, RidelogError if it fails.
    """
    if not which("fzf"):
        raise FzfNotFoundError("fzf not found on PATH. Install fzf or pass ride files explicitly.")

    lines = "".join(f"{p.name}\t{p}\n" for p in paths)
    proc = subprocess.run(
        _fzf_command(header, multi, preview),
        input=lines,
        capture_output=True,
        text=True,
    )

    if proc.returncode in _NOTHING_PICKED:
        return []
    if proc.returncode != 0:
        raise RidelogError(f"fzf failed: {proc.stderr.strip()}")

    return _selected_paths(proc.stdout)
