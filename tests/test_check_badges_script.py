"""Tests for scripts/check_badges.py."""

from __future__ import annotations

import importlib.util
import json
import sys
from pathlib import Path

import pytest

_SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "check_badges.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("check_badges", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _write_roster(tmp_path: Path, players: list[dict]) -> Path:
    path = tmp_path / "roster.json"
    path.write_text(json.dumps({"players": players}), encoding="utf-8")
    return path


class TestCheckBadgesScript:
    def test_writes_owned_lists(self, tmp_path: Path, monkeypatch, capsys) -> None:
        roster = _write_roster(
            tmp_path,
            [{"id": "s-1", "name": "Minji", "history": [{"stats": {"hits": 1}}]}],
        )
        output = tmp_path / "awards.json"
        monkeypatch.setattr(sys, "argv", ["check_badges.py", str(roster), "--output", str(output)])

        _load_script().main()

        saved = json.loads(output.read_text(encoding="utf-8"))
        assert saved == {"s-1": ["first_game", "first_hit"]}
        assert "Badge report -- Minji" in capsys.readouterr().out

    def test_player_without_id_or_name_rejected(self, tmp_path: Path, monkeypatch, capsys) -> None:
        roster = _write_roster(tmp_path, [{"history": [{"stats": {"hits": 1}}]}])
        output = tmp_path / "awards.json"
        monkeypatch.setattr(sys, "argv", ["check_badges.py", str(roster), "--output", str(output)])

        with pytest.raises(SystemExit):
            _load_script().main()

        assert "neither an id nor a name" in capsys.readouterr().err
        assert not output.exists()
