import json

import pytest

import config
from world import Material, MaterialTable


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "CONFIG_DIR", tmp_path)
    monkeypatch.setattr(config, "LAST_FILE", tmp_path / "last.txt")
    monkeypatch.setattr(config, "_CONFIG_INDEX", set())
    return tmp_path


def test_defaults_without_saved_config():
    cfg = config.load_config()
    assert cfg["world"] == {"width": 200, "height": 200}
    assert cfg["seed"] == -1
    assert cfg["materials"] == {}


def test_save_then_load_last(config_dir):
    cfg = config.load_config()
    cfg["tick_rate"] = 30
    cfg["world"]["width"] = 120
    cfg["materials"] = {"sand": {"roll_speed": 2.0}}
    path = config.save_config(cfg, "My pile!")
    assert path == config_dir / "My_pile.json"
    assert config.get_last_config() == "My_pile"
    assert config.list_configs() == ["My_pile"]
    assert config.config_exists("My pile")

    loaded = config.load_config()
    assert loaded["tick_rate"] == 30
    assert loaded["world"] == {"width": 120, "height": 200}
    assert config.materials_from_config(loaded).roll_speed(Material.SAND) == 2.0


def test_refresh_index_reads_disk(config_dir):
    (config_dir / "b.json").write_text("{}")
    (config_dir / "A.json").write_text("{}")
    config.refresh_index()
    assert config.list_configs() == ["A", "b"]


def test_unreadable_config_falls_back_to_defaults(config_dir):
    bad = config_dir / "bad.json"
    bad.write_text("{not json")
    assert config.load_config(bad) == config._default_config()
    bad.write_text(json.dumps([1, 2]))
    assert config.load_config(bad) == config._default_config()


def test_missing_path_falls_back_to_defaults(config_dir):
    assert config.load_config(config_dir / "nope.json") == config._default_config()


def test_unknown_material_in_config():
    with pytest.raises(ValueError):
        config.materials_from_config({"materials": {"mud": {}}})


@pytest.mark.parametrize(
    "data",
    [
        {"materials": [1, 2], "world": 5},
        {"world": 5},
        {"world": {"width": "wide"}},
        {"world": {"height": 0}},
        {"materials": [1, 2]},
        {"materials": {"sand": 5}},
    ],
)
def test_malformed_sections_fall_back_to_defaults(config_dir, caplog, data):
    bad = config_dir / "bad.json"
    bad.write_text(json.dumps(data))
    with caplog.at_level("WARNING", logger="config"):
        assert config.load_config(bad) == config._default_config()
    assert "malformed" in caplog.text


def test_save_writes_full_material_table(config_dir):
    table = MaterialTable.from_data({"coal": {"inertial_resistance": 0.9}})
    path = config.save_config(config._default_config(), "coal", materials=table)
    saved = json.loads(path.read_text())
    assert saved["materials"] == table.to_data()
    assert config.materials_from_config(config.load_config(path)).inertial_resistance(Material.COAL) == 0.9
