from __future__ import annotations

import json
from pathlib import Path

from practice_form.scripts.write_fixture import main


def test_write_fixture_script(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("E2E_FIXTURES_DIR", str(tmp_path))
    main(["generated/cli", "--seed", "3"])
    written = json.loads((tmp_path / "generated" / "cli.json").read_text())
    printed = json.loads(capsys.readouterr().out)
    assert written == printed
    assert len(written["mobile"]) == 10
