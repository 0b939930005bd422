import json
import sys
from pathlib import Path

import pytest

# Ensure src package is importable without installation
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))


@pytest.fixture
def pull_request_payload() -> dict:
    return {
        "pull_request": {
            "number": 42,
            "base": {"ref": "main"},
            "user": {"login": "author"},
            "requested_reviewers": [{"login": "already"}],
        },
        "repository": {"name": "widgets", "owner": {"login": "acme"}},
    }


@pytest.fixture
def event_file(tmp_path: Path, pull_request_payload: dict) -> Path:
    path = tmp_path / "event.json"
    path.write_text(json.dumps(pull_request_payload), encoding="utf-8")
    return path
