"""Events payload → odds payload → player markets → CSV, with a fake data source."""

import asyncio

from conftest import FakeSource, market_node, outcome_node, ss_response
from propsheet.export import ExportSession, load_events


def test_anytime_goalscorer_export_for_messi():
    odds = ss_response(
        [
            market_node(
                "m1",
                "Anytime Goalscorer",
                [outcome_node("o1", "Messi", "2.00"), outcome_node("o2", "Ronaldo", "1.80")],
            )
        ],
        event_name="Inter v Milan",
    )
    events = {"modules": [{"data": [{"id": "230549001", "name": "Inter v Milan", "startTime": "2026-10-24T18:45:00Z"}]}]}
    source = FakeSource(events=events, odds=odds)

    async def flow():
        event = (await load_events(source))[0]
        session = ExportSession()
        markets = await session.open_event(source, event)
        session.add_to_export("Messi", markets[0])
        return session.serialize("Inter")

    text = asyncio.run(flow())
    lines = text.splitlines()
    assert "MATCH_NAME:Inter" in lines
    assert "LEAGUE_NAME:Messi" in lines
    assert any(line.endswith(",,daje gol,DA,2.00,,,,,,,") for line in lines)
    assert "Ronaldo" not in text


def test_line_markets_and_generic_selections(fake_source, odds_payload):
    async def flow():
        event = (await load_events(fake_source))[0]
        session = ExportSession()
        markets = await session.open_event(fake_source, event)
        for market in markets:
            session.add_to_export("Ronaldo", market)
        return session.serialize("Milan")

    lines = asyncio.run(flow()).splitlines()
    assert lines[1:] == [
        "MATCH_NAME:Milan",
        "LEAGUE_NAME:Ronaldo",
        "24.10.2026,18:45,,daje gol,DA,1.80,,,,,,,",
        "24.10.2026,18:45,,šutevi,2+,N/A,,,,,,,",
    ]
