from __future__ import annotations

import json
from pathlib import Path

import amzdb_py


def test_version_matches_version_json() -> None:
    version_file = Path(__file__).resolve().parents[2] / "src" / "amzdb_py" / "version.json"
    data = json.loads(version_file.read_text(encoding="utf-8"))
    assert amzdb_py.__repo_version__ == data["version"]
    if "-rc." in data["version"]:
        assert "-rc." not in amzdb_py.__version__
        assert "rc" in amzdb_py.__version__
    else:
        assert amzdb_py.__version__ == data["version"]


def test_normalize_release_candidate() -> None:
    assert amzdb_py._normalize_repo_version("1.2.3-rc.4") == "1.2.3rc4"
    assert amzdb_py._normalize_repo_version("1.2.3") == "1.2.3"
