from __future__ import annotations

import json
import os
import subprocess
import sys
import zipfile
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def _run(*args: str, cwd: Path) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(ROOT), env.get("PYTHONPATH", "")]))
    return subprocess.run(
        [sys.executable, "-m", "keynotegen", *args],
        capture_output=True,
        text=True,
        cwd=str(cwd),
        env=env,
    )


def test_cli_shows_clean_validation_error(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text('{"document": {"slides": []}}', encoding="utf-8")

    result = _run("--input", str(bad), "--output", str(tmp_path / "out.pptx"), cwd=tmp_path)

    assert result.returncode == 1
    assert "Input validation failed" in result.stderr
    assert "must contain at least one slide" in result.stderr
    assert "Traceback" not in result.stderr


def test_cli_writes_derived_filename_into_directory(tmp_path: Path, three_slide_payload) -> None:
    request = tmp_path / "request.json"
    request.write_text(json.dumps(three_slide_payload), encoding="utf-8")
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    result = _run("--input", str(request), "--output", str(out_dir), cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    saved = out_dir / "Q3Review2024_Keynote.pptx"
    assert saved.exists()
    assert "PPTX saved to" in result.stdout


def test_cli_parts_flag_writes_bundle(tmp_path: Path, three_slide_payload) -> None:
    request = tmp_path / "request.json"
    request.write_text(json.dumps(three_slide_payload), encoding="utf-8")
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    result = _run("--input", str(request), "--output", str(out_dir), "--parts", "2", cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    with zipfile.ZipFile(out_dir / "Q3Review2024_Keynote_2_parts.zip") as zf:
        assert len(zf.namelist()) == 2


def test_cli_unknown_theme_fails_when_fallback_disabled(tmp_path: Path, three_slide_payload) -> None:
    request = tmp_path / "request.json"
    request.write_text(json.dumps(three_slide_payload), encoding="utf-8")
    env_file = tmp_path / "custom.env"
    env_file.write_text("KEYNOTEGEN_FALLBACK_THEME=\n", encoding="utf-8")

    result = _run(
        "--input", str(request), "--output", str(tmp_path / "out.pptx"),
        "--theme", "neon", "--env-file", str(env_file),
        cwd=tmp_path,
    )

    assert result.returncode == 1
    assert "style.themeKey 'neon' is unsupported" in result.stderr


def test_cli_list_themes(tmp_path: Path) -> None:
    result = _run("--list-themes", cwd=tmp_path)
    assert result.returncode == 0
    assert "doings_pro\tpremium" in result.stdout
    assert "custom" in result.stdout
