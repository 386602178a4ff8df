import json

import pytest

from dimparser_cli.cli import build_parser, entrance


def run(capsys, *argv):
    assert entrance(list(argv)) == 0
    out = capsys.readouterr().out
    return [json.loads(line) for line in out.splitlines()]


class TestCommandLine:

    def test_prints_one_json_line_per_entity(self, capsys):
        lines = run(
            capsys,
            "tomorrow at 3pm for $20",
            "--dims", "time", "amount-of-money",
            "--reference-time", "2013-02-12T04:30:00Z",
        )
        assert [line["dim"] for line in lines] == ["time", "amount-of-money"]
        assert lines[0]["value"]["value"] == "2013-02-13T15:00:00"
        assert lines[1]["value"] == {"type": "value", "value": 20.0, "unit": "USD"}

    def test_timezone_option(self, capsys):
        lines = run(
            capsys,
            "tomorrow",
            "--dims", "time",
            "--reference-time", "2013-02-12T04:30:00+00:00",
            "--timezone", "America/New_York",
        )
        assert lines[0]["value"]["value"] == "2013-02-12T00:00:00"

    def test_locale_option(self, capsys):
        lines = run(
            capsys,
            "3/4/2015",
            "--dims", "time",
            "--locale", "en_GB",
            "--reference-time", "2013-02-12T04:30:00Z",
        )
        assert lines[0]["value"]["value"] == "2015-04-03T00:00:00"

    def test_with_latent(self, capsys):
        assert run(capsys, "80", "--dims", "temperature") == []
        lines = run(capsys, "80", "--dims", "temperature", "--with-latent")
        assert lines[0]["latent"] is True

    def test_unknown_dimension_exits(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            entrance(["tomorrow", "--dims", "weather"])
        assert excinfo.value.code == 2
        assert "Unknown dimension" in capsys.readouterr().err

    def test_naive_reference_time_is_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["tomorrow", "--reference-time", "2013-02-12T04:30:00"])
