import pytest

from metardecode.grammar import DECODE_ORDER, GRAMMAR


def test_table_covers_decode_order_and_is_read_only():
    assert set(DECODE_ORDER) == set(GRAMMAR)
    with pytest.raises(TypeError):
        GRAMMAR["station"] = GRAMMAR["time"]  # type: ignore[index]


def test_anchoring_and_repetition_flags():
    scan = {name for name, g in GRAMMAR.items() if not g.anchored}
    assert scan == {"visibility", "weather", "sky"}
    repeated = {name for name, g in GRAMMAR.items() if g.repeated}
    assert repeated == {"weather", "sky"}


def test_wind_slots_are_named():
    slots = GRAMMAR["wind"].slots
    assert slots[:3] == ("direction", "speed", "gust")
    assert "variable_from" in slots and "variable_to" in slots


def test_anchored_match_does_not_search_ahead():
    station = GRAMMAR["station"]
    assert station.match_at("YSSY 101234Z", 0).group("station") == "YSSY"
    assert station.match_at("METAR YSSY 101234Z", 0) is None
    assert station.match_at("METAR YSSY 101234Z", 6).group("station") == "YSSY"


def test_wind_with_gust_and_variable_range():
    match = GRAMMAR["wind"].match_at("24012G25KT 200V280 9999")
    assert match.group("direction") == "240"
    assert match.group("speed") == "12"
    assert match.group("gust") == "25"
    assert (match.group("variable_from"), match.group("variable_to")) == ("200", "280")


def test_weather_rejects_bare_intensity_and_sky_groups():
    weather = GRAMMAR["weather"]
    assert weather.match_at("- ") is None
    assert weather.match_at("FEW020 ") is None
    assert weather.match_at("SCT035 ") is None
    assert weather.match_at("+TSRA ").group("precipitation") == "RA"


def test_sky_height_and_cloud_type():
    match = GRAMMAR["sky"].match_at("BKN100CB 22/14")
    assert match.group("cover") == "BKN"
    assert match.group("height") == "100"
    assert match.group("cloud_type") == "CB"


def test_temperature_allows_missing_dew_point():
    match = GRAMMAR["temperature"].match_at("M05/ Q1013")
    assert match.group("temperature") == "M05"
    assert match.group("dew_point") is None


def test_weather_accepts_descriptor_only_groups():
    weather = GRAMMAR["weather"]
    assert weather.match_at("TS ").group("descriptor") == "TS"
    match = weather.match_at("VCSH FEW020")
    assert (match.group("intensity"), match.group("descriptor")) == ("VC", "SH")


def test_weather_precipitation_with_trailing_obscuration():
    match = GRAMMAR["weather"].match_at("RABR ")
    assert match.group("precipitation") == "RA"
    assert match.group("obscuration") == "BR"
    assert GRAMMAR["weather"].match_at("RA" * 30 + "X ") is None
