from propsheet.props import filter_player_markets, is_generic_selection, is_player_market, players_in_markets
from propsheet.providers.ladbrokes import MarketRecord, OutcomeRecord


def _m(name, outcomes=()):
    return MarketRecord(id=name, name=name, outcomes=[OutcomeRecord(id=o, name=o) for o in outcomes])


def test_keeps_player_markets_in_order():
    markets = [_m("Anytime Goalscorer"), _m("Correct Score"), _m("Player Shots On Target")]
    assert [m.name for m in filter_player_markets(markets)] == ["Anytime Goalscorer", "Player Shots On Target"]


def test_inclusion_is_case_insensitive():
    assert is_player_market("FIRST GOALSCORER")
    assert is_player_market("Player To Be Carded")
    assert is_player_market("To Score 2 Or More Goals")


def test_exclusions_override_inclusion():
    assert not is_player_market("Player Handicap")
    assert not is_player_market("Team To Score First")
    assert not is_player_market("Both Teams To Score")
    assert not is_player_market("Half Time Goalscorer")
    assert not is_player_market("Correct Score Scorer Combo")


def test_non_player_markets_are_dropped():
    assert not is_player_market("Match Betting")
    assert not is_player_market("")
    assert filter_player_markets([]) == []


def test_players_in_markets_skips_generic_outcomes():
    markets = [_m("Anytime Goalscorer", ["Messi", "Ronaldo"]), _m("Messi to be carded", ["Yes", "No"]), _m("Shots", ["messi", "Lautaro"])]
    assert players_in_markets(markets) == ["Messi", "Ronaldo", "Lautaro"]


def test_generic_selections_include_lines():
    assert is_generic_selection("YES")
    assert is_generic_selection("Over 1.5")
    assert is_generic_selection("under 2,5")
    assert not is_generic_selection("Overmars")
    assert not is_generic_selection("Lionel Messi")


def test_players_in_markets_skips_line_outcomes():
    markets = [_m("Messi Shots On Target", ["Over 1.5", "Under 1.5"]), _m("Anytime Goalscorer", ["Messi"])]
    assert players_in_markets(markets) == ["Messi"]
