# ==============================================
# Tests for the command line entry point
# ==============================================

import json

import pytest

from warc_converter import cli
from warc_converter.config import AppConfig
from warc_converter.storage import JsonLinesSink


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    monkeypatch.setattr(cli, "load_config", lambda: AppConfig())


class TestArguments:
    @pytest.mark.parametrize("argv", [[], ["only-archive.warc"]])
    def test_missing_arguments_exit_non_zero(self, argv):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(argv)
        assert exc_info.value.code != 0

    def test_invalid_workers(self, write_warc, tmp_path):
        assert cli.main([str(write_warc()), str(tmp_path / "out.jsonl"), "--workers", "0"]) == 1


class TestRun:
    def test_successful_conversion(self, write_warc, tmp_path, capsys):
        output = tmp_path / "out.jsonl"
        assert cli.main([str(write_warc()), str(output)]) == 0

        assert len(list(JsonLinesSink.read(output))) == 2
        printed = capsys.readouterr().out
        assert "KEPT: 2" in printed
        assert "FILTERED: 0" in printed

    def test_bad_filter_config(self, write_warc, tmp_path, capsys):
        rules = tmp_path / "rules.json"
        rules.write_text(json.dumps({"rules": [{"field": "url", "mode": "maybe", "pattern": "x"}]}))
        output = tmp_path / "out.jsonl"

        assert cli.main([str(write_warc()), str(output), "--filter-config", str(rules)]) == 1
        assert "invalid filter configuration" in capsys.readouterr().err
        assert not output.exists()
