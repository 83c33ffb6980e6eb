import asyncio

import pytest

from conftest import FakeSource
from propsheet.config import load_settings
from propsheet.entrypoints import export as cli


@pytest.fixture
def settings(tmp_path, monkeypatch):
    monkeypatch.delenv("PROPSHEET_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return load_settings(export={"output_dir": str(tmp_path)})


def _run(argv, settings, source):
    args = cli.build_parser().parse_args(argv)
    return asyncio.run(cli.run(args, settings, source))


def test_events_lists_extracted_events(fake_source, settings, capsys):
    assert _run(["events"], settings, fake_source) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("230549001\tInter v Milan\t24/10/2026 18:45\tSerie A")
    assert out[1].startswith("230549002\tRoma v Lazio")


def test_events_reports_empty_listing(settings, capsys):
    assert _run(["events"], settings, FakeSource(events={})) == 0
    assert "No events found" in capsys.readouterr().out


def test_markets_groups_and_labels(fake_source, settings, capsys):
    assert _run(["markets", "230549001"], settings, fake_source) == 0
    out = capsys.readouterr().out
    assert "[goalscorers]" in out
    assert "[total_shots]" in out
    assert "-> daje gol" in out
    assert "Correct Score" not in out
    assert "Players: Messi, Ronaldo" in out


def test_markets_csv(fake_source, settings, capsys):
    _run(["markets", "230549001", "--csv"], settings, fake_source)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Market,Selection,Odds"
    assert "Player 2 or more shots,Ronaldo,N/A" in lines


def test_export_writes_club_file(fake_source, settings, tmp_path, capsys):
    argv = ["export", "230549001", "--club", "Inter", "--player", "Messi", "--market", "Anytime Goalscorer"]
    assert _run(argv, settings, fake_source) == 0
    path = tmp_path / "Inter_odds.csv"
    assert capsys.readouterr().out.strip() == str(path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[1:] == ["MATCH_NAME:Inter", "LEAGUE_NAME:Messi", "24.10.2026,18:45,,daje gol,DA,2.00,,,,,,,"]


def test_export_all_markets(fake_source, settings, tmp_path):
    argv = ["export", "230549001", "--club", "Inter", "--player", "Messi", "--all-markets"]
    _run(argv, settings, fake_source)
    text = (tmp_path / "Inter_odds.csv").read_text(encoding="utf-8")
    assert "šutevi,2+,1.65" in text


@pytest.mark.parametrize(
    "argv",
    [
        ["export", "230549001", "--club", "Inter", "--market", "Anytime Goalscorer"],
        ["export", "230549001", "--club", "Inter", "--player", "Messi"],
        ["export", "230549001", "--club", "Inter", "--player", "Messi", "--market", "Nope"],
        ["export", "230549001", "--club", "Inter", "--player", "Nobody", "--all-markets"],
        ["export", "230549001", "--club", " ", "--player", "Messi", "--all-markets"],
    ],
)
def test_export_selection_errors(fake_source, settings, argv):
    with pytest.raises(cli.SelectionError):
        _run(argv, settings, fake_source)


def test_main_reports_errors_with_exit_code(monkeypatch, tmp_path, capsys, events_payload, odds_payload):
    monkeypatch.setenv("PROPSHEET_TEST_MODE", "true")
    monkeypatch.chdir(tmp_path)

    class _Client(FakeSource):
        def __init__(self, settings=None):
            super().__init__(events=events_payload, odds=odds_payload)

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return None

    monkeypatch.setattr(cli, "LadbrokesClient", _Client)
    code = cli.main(["export", "230549001", "--club", "Inter", "--player", "Nobody", "--all-markets"])
    assert code == 1
    assert "No outcomes matched" in capsys.readouterr().err

    code = cli.main(["export", "230549001", "--club", "Inter", "--player", "Messi", "--all-markets"])
    assert code == 0
    assert (tmp_path / "Inter_odds.csv").exists()


def test_main_reports_invalid_configuration(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("PROPSHEET_TEST_MODE", "true")
    monkeypatch.setenv("PROPSHEET_EXPORT__TIMEZONE", "Mars/Olympus")
    monkeypatch.chdir(tmp_path)
    code = cli.main(["export", "230549001", "--club", "Inter", "--player", "Messi", "--all-markets"])
    assert code == 1
    assert "invalid configuration" in capsys.readouterr().err
