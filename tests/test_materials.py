import pytest

from world.materials import (
    DEFAULT_TABLE,
    PARAM_MOVABLE,
    PARAM_RESISTANCE,
    PARAM_ROLL_SPEED,
    PARAM_SOLID,
    Material,
    MaterialTable,
)


def test_default_table_classes():
    assert DEFAULT_TABLE.is_movable_solid(Material.SAND)
    assert DEFAULT_TABLE.is_movable_solid(Material.DIRT)
    assert DEFAULT_TABLE.is_movable_solid(Material.COAL)
    assert DEFAULT_TABLE.is_solid(Material.STONE)
    assert not DEFAULT_TABLE.is_movable_solid(Material.STONE)
    for m in (Material.AIR, Material.WATER, Material.CO2):
        assert not DEFAULT_TABLE.is_solid(m)


def test_every_material_has_an_entry():
    assert [s.material for s in DEFAULT_TABLE] == list(Material)


def test_overrides_merge_over_defaults():
    table = MaterialTable.from_data({"sand": {"roll_speed": 2.0}})
    assert table.roll_speed(Material.SAND) == 2.0
    assert table.inertial_resistance(Material.SAND) == DEFAULT_TABLE.inertial_resistance(Material.SAND)
    assert table.roll_speed(Material.DIRT) == DEFAULT_TABLE.roll_speed(Material.DIRT)


def test_unknown_material_name():
    with pytest.raises(ValueError, match="unknown material"):
        MaterialTable.from_data({"lava": {"roll_speed": 1.0}})


@pytest.mark.parametrize(
    "override",
    [
        {"inertial_resistance": 1.5},
        {"inertial_resistance": -0.1},
        {"roll_speed": -1.0},
        {"is_solid": False},
        {"base_color": [1, 2, 3]},
    ],
)
def test_invalid_parameters_rejected(override):
    with pytest.raises(ValueError):
        MaterialTable.from_data({"sand": override})


def test_palette_indexed_by_tag():
    palette = DEFAULT_TABLE.palette()
    assert palette[Material.SAND] == (252, 186, 3, 255)
    assert palette[Material.AIR] == (0, 0, 0, 255)


def test_to_data_round_trips_through_from_data():
    table = MaterialTable.from_data({"coal": {"inertial_resistance": 0.9}})
    again = MaterialTable.from_data(table.to_data())
    assert list(again) == list(table)


def test_from_name_is_case_insensitive():
    assert Material.from_name(" Sand ") is Material.SAND
    assert Material.from_name("co2") is Material.CO2


@pytest.mark.parametrize("overrides", [{"sand": 5}, {"sand": [1, 2]}, [("sand", {})], {"sand": {"base_color": 7}}])
def test_malformed_overrides_raise_value_error(overrides):
    with pytest.raises(ValueError):
        MaterialTable.from_data(overrides)


def test_params_array_rows_follow_tags():
    table = MaterialTable.from_data({"dirt": {"roll_speed": 3.0}})
    params = table.params_array()
    assert params.shape == (len(Material), 4)
    assert params[Material.DIRT, PARAM_ROLL_SPEED] == 3.0
    assert params[Material.STONE, PARAM_SOLID] == 1.0
    assert params[Material.STONE, PARAM_MOVABLE] == 0.0
    assert params[Material.SAND, PARAM_RESISTANCE] == pytest.approx(0.1)
    assert table.movable_mask().tolist() == [table.is_movable_solid(m) for m in Material]
