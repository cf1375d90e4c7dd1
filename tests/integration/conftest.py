"""Pytest configuration and fixtures for integration tests.

Integration tests run the command-line runner in a subprocess against a
persona catalog written to a temporary file, so they exercise config
loading, catalog lookup and the full recipe pipeline together.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).parent.parent.parent

CATALOG = {
    "personas": [
        {
            "id": "IT-1001",
            "name": "테스트 우디",
            "description": "통합 테스트용 우디 계열 향수입니다.",
            "categoryScores": {"woody": 8, "musky": 6, "citrus": 3, "floral": 2, "fruity": 1, "spicy": 1},
        },
        {
            "id": "IT-2002",
            "name": "테스트 시트러스",
            "description": "통합 테스트용 시트러스 계열 향수입니다.",
            "categoryScores": {"citrus": 9, "fruity": 5, "floral": 4},
        },
    ]
}


@pytest.fixture
def catalog_path(tmp_path):
    """Persona catalog file with two test personas."""
    path = tmp_path / "personas.json"
    path.write_text(json.dumps(CATALOG, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def run_cli(catalog_path):
    """Run customize.py in a subprocess with the test catalog configured.

    Logging is limited to errors so stdout carries only the command output.
    """
    env = dict(os.environ)
    env.update(
        {
            "CATALOG_PATH": str(catalog_path),
            "LOG_LEVEL": "ERROR",
            "OUTPUT_FORMAT": "markdown",
            "COLUMNS": "1000",
            "PYTHONIOENCODING": "utf-8",
        }
    )

    def run(*args: str) -> subprocess.CompletedProcess:
        return subprocess.run(
            [sys.executable, "customize.py", *args],
            cwd=PROJECT_ROOT,
            env=env,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=60,
        )

    return run
