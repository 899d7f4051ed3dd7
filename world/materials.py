"""
Material tags and their physical parameters. Cells store only the tag; everything
else is looked up in an immutable MaterialTable built from plain data so the
parameters can come from a config file.
"""

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Iterator, Mapping

import numpy as np


class Material(IntEnum):
    AIR = 0
    SAND = 1
    DIRT = 2
    STONE = 3
    WATER = 4
    COAL = 5
    CO2 = 6

    @classmethod
    def from_name(cls, name: str) -> "Material":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown material: {name!r}") from None


RGBA = tuple[int, int, int, int]

# Columns of MaterialTable.params_array(), the per-tag lookup the tick kernel reads.
PARAM_SOLID, PARAM_MOVABLE, PARAM_RESISTANCE, PARAM_ROLL_SPEED = range(4)


@dataclass(frozen=True)
class MaterialSpec:
    material: Material
    is_solid: bool
    is_movable_solid: bool
    inertial_resistance: float
    roll_speed: float
    base_color: RGBA

    def __post_init__(self) -> None:
        if not 0.0 <= self.inertial_resistance <= 1.0:
            raise ValueError(
                f"{self.material.name.lower()}: inertial_resistance must be in [0, 1], got {self.inertial_resistance}"
            )
        if self.roll_speed < 0:
            raise ValueError(f"{self.material.name.lower()}: roll_speed must be >= 0, got {self.roll_speed}")
        if self.is_movable_solid and not self.is_solid:
            raise ValueError(f"{self.material.name.lower()}: a movable solid must also be solid")
        if len(self.base_color) != 4 or any(not 0 <= c <= 255 for c in self.base_color):
            raise ValueError(f"{self.material.name.lower()}: base_color must be 4 values in 0-255")


# Keyed by lower-case material name; same shape as the "materials" section of a config file.
DEFAULT_MATERIALS: dict[str, dict] = {
    "air": {"is_solid": False, "is_movable_solid": False, "inertial_resistance": 0.0, "roll_speed": 0.0,
            "base_color": [0, 0, 0, 255]},
    "sand": {"is_solid": True, "is_movable_solid": True, "inertial_resistance": 0.1, "roll_speed": 1.0,
             "base_color": [252, 186, 3, 255]},
    "dirt": {"is_solid": True, "is_movable_solid": True, "inertial_resistance": 0.6, "roll_speed": 1.0,
             "base_color": [120, 78, 40, 255]},
    "stone": {"is_solid": True, "is_movable_solid": False, "inertial_resistance": 1.0, "roll_speed": 0.0,
              "base_color": [128, 128, 128, 255]},
    "water": {"is_solid": False, "is_movable_solid": False, "inertial_resistance": 0.0, "roll_speed": 0.0,
              "base_color": [40, 90, 230, 255]},
    "coal": {"is_solid": True, "is_movable_solid": True, "inertial_resistance": 0.3, "roll_speed": 1.0,
             "base_color": [35, 35, 35, 255]},
    "co2": {"is_solid": False, "is_movable_solid": False, "inertial_resistance": 0.0, "roll_speed": 0.0,
            "base_color": [200, 200, 210, 255]},
}


def _spec_from_data(material: Material, data: Mapping) -> MaterialSpec:
    try:
        return MaterialSpec(
            material=material,
            is_solid=bool(data["is_solid"]),
            is_movable_solid=bool(data["is_movable_solid"]),
            inertial_resistance=float(data["inertial_resistance"]),
            roll_speed=float(data["roll_speed"]),
            base_color=tuple(int(c) for c in data["base_color"]),
        )
    except TypeError as e:
        raise ValueError(f"{material.name.lower()}: {e}") from e


class MaterialTable:
    """Read-only tag -> MaterialSpec lookup. Every Material has an entry."""

    __slots__ = ("_specs", "_params")

    def __init__(self, specs: Mapping[Material, MaterialSpec]) -> None:
        missing = [m.name.lower() for m in Material if m not in specs]
        if missing:
            raise ValueError(f"material table is missing: {', '.join(missing)}")
        self._specs = MappingProxyType(dict(specs))
        self._params = np.array(
            [
                (s.is_solid, s.is_movable_solid, s.inertial_resistance, s.roll_speed)
                for s in (self._specs[m] for m in sorted(Material))
            ],
            dtype=np.float64,
        )

    @classmethod
    def from_data(cls, overrides: Mapping[str, Mapping] | None = None) -> "MaterialTable":
        """Defaults merged with per-material overrides, e.g. {"sand": {"roll_speed": 2.0}}."""
        overrides = overrides or {}
        if not isinstance(overrides, Mapping):
            raise ValueError(f"material overrides must be a mapping, got {type(overrides).__name__}")
        for name, entry in overrides.items():
            Material.from_name(name)
            if not isinstance(entry, Mapping):
                raise ValueError(f"{name}: material entry must be a mapping, got {type(entry).__name__}")
        specs = {}
        for material in Material:
            key = material.name.lower()
            data = {**DEFAULT_MATERIALS[key], **overrides.get(key, {})}
            specs[material] = _spec_from_data(material, data)
        return cls(specs)

    def __getitem__(self, material: Material) -> MaterialSpec:
        return self._specs[material]

    def __iter__(self) -> Iterator[MaterialSpec]:
        return iter(self._specs.values())

    def is_solid(self, material: Material) -> bool:
        return self._specs[material].is_solid

    def is_movable_solid(self, material: Material) -> bool:
        return self._specs[material].is_movable_solid

    def inertial_resistance(self, material: Material) -> float:
        return self._specs[material].inertial_resistance

    def roll_speed(self, material: Material) -> float:
        return self._specs[material].roll_speed

    def base_color(self, material: Material) -> RGBA:
        return self._specs[material].base_color

    def palette(self) -> list[RGBA]:
        """Base colors ordered by tag value, for vectorized lookup."""
        return [self._specs[m].base_color for m in sorted(Material)]

    def params_array(self) -> np.ndarray:
        """(n_materials, 4) float64 rows indexed by tag; columns PARAM_SOLID..PARAM_ROLL_SPEED."""
        return self._params

    def movable_mask(self) -> np.ndarray:
        return self._params[:, PARAM_MOVABLE] != 0.0

    def to_data(self) -> dict[str, dict]:
        return {
            spec.material.name.lower(): {
                "is_solid": spec.is_solid,
                "is_movable_solid": spec.is_movable_solid,
                "inertial_resistance": spec.inertial_resistance,
                "roll_speed": spec.roll_speed,
                "base_color": list(spec.base_color),
            }
            for spec in self
        }


DEFAULT_TABLE = MaterialTable.from_data()
