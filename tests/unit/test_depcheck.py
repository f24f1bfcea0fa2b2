from __future__ import annotations

import subprocess
import sys
from pathlib import Path

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "tools" / "depcheck.py"


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, str(SCRIPT_PATH), *args],
        capture_output=True,
        text=True,
        check=False,
    )


def test_depcheck_fails_on_forbidden_import(tmp_path: Path) -> None:
    domain_dir = tmp_path / "domain"
    domain_dir.mkdir(parents=True, exist_ok=True)

    violating_file = domain_dir / "entities.py"
    violating_file.write_text("from sqlalchemy.orm import Session\n", encoding="utf-8")

    result = _run("--path", str(domain_dir))

    combined_output = f"{result.stdout}\n{result.stderr}"
    assert result.returncode != 0
    assert "sqlalchemy" in combined_output
    assert f"{violating_file}:1" in combined_output


def test_depcheck_passes_on_clean_domain(tmp_path: Path) -> None:
    clean_file = tmp_path / "money.py"
    clean_file.write_text("from decimal import Decimal\n", encoding="utf-8")

    result = _run("--path", str(tmp_path))

    assert result.returncode == 0
    assert "depcheck passed" in result.stdout


def test_project_layers_respect_import_policy() -> None:
    result = _run()

    assert result.returncode == 0, result.stdout
