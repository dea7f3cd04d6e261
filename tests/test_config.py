from pathlib import Path

import pytest

from metardecode.config import DecoderConfig, load_config, sample_config
from metardecode.errors import ConfigError


def test_defaults_accept_only_hectopascal():
    cfg = DecoderConfig()
    assert cfg.pressure_units == ("Q",)
    assert cfg.collect_skipped is True


def test_load_yaml_config(tmp_path: Path) -> None:
    path = tmp_path / "decoder.yaml"
    path.write_text("pressure_units: [q, A]\ncollect_skipped: false\n")
    cfg = load_config(path)
    assert cfg.pressure_units == ("Q", "A")
    assert cfg.collect_skipped is False


def test_load_json_config_single_unit(tmp_path: Path) -> None:
    path = tmp_path / "decoder.json"
    path.write_text('{"pressure_units": "QNH"}')
    assert load_config(path).pressure_units == ("QNH",)


def test_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("")
    assert load_config(path) == DecoderConfig()


@pytest.mark.parametrize(
    "payload",
    [
        '{"pressure_units": ["SLP"]}',
        '{"pressure_units": []}',
        '{"strict": true}',
        "[1, 2]",
        "{not json",
        '{"collect_skipped": "false"}',
    ],
)
def test_invalid_configs_raise(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "bad.json"
    path.write_text(payload)
    with pytest.raises(ConfigError):
        load_config(path)


def test_sample_config_is_loadable():
    cfg = DecoderConfig.from_mapping(sample_config())
    assert "A" in cfg.pressure_units
