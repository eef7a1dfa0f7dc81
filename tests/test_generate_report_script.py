import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SCRIPT = ROOT / "scripts" / "generate_report.py"


def run_script(*args, cwd):
    return subprocess.run(
        [sys.executable, str(SCRIPT), *args],
        cwd=cwd,
        capture_output=True,
        text=True,
    )


def test_missing_settings_file_exits_cleanly(tmp_path):
    proc = run_script("--settings", str(tmp_path / "absent.yaml"), cwd=tmp_path)
    assert proc.returncode == 1
    assert "Report generation failed" in proc.stderr
    assert "Traceback" not in proc.stderr


def test_unknown_setting_exits_cleanly(tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text("inputdir: typo\n", encoding="utf-8")
    proc = run_script("--settings", str(settings), cwd=tmp_path)
    assert proc.returncode == 1
    assert "Unknown settings" in proc.stderr
    assert "Traceback" not in proc.stderr
