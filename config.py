"""Load/save simulator settings. Configs live in configs/ as {name}.json; grid contents are never saved."""

import json
import logging
import re
from pathlib import Path

from world.materials import MaterialTable

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent / "configs"
LAST_FILE = CONFIG_DIR / "last.txt"

# In-memory index of saved names so the panel dropdown avoids disk access.
_CONFIG_INDEX: set[str] = set()


def refresh_index() -> None:
    """Rebuild _CONFIG_INDEX from disk. Call at startup and after external changes."""
    global _CONFIG_INDEX
    _CONFIG_INDEX = set()
    if not CONFIG_DIR.exists():
        return
    for f in CONFIG_DIR.glob("*.json"):
        _CONFIG_INDEX.add(f.stem)


def _sanitize_name(name: str) -> str:
    s = (name or "").strip()
    s = re.sub(r"[^\w\s-]", "", s)
    s = re.sub(r"[\s-]+", "_", s).strip("_")
    return s[:64] or "unnamed"


def get_config_path(name: str) -> Path:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return CONFIG_DIR / f"{_sanitize_name(name)}.json"


def list_configs() -> list[str]:
    return sorted(_CONFIG_INDEX, key=str.lower)


def config_exists(name: str) -> bool:
    return _sanitize_name(name) in _CONFIG_INDEX


def get_last_config() -> str | None:
    if not LAST_FILE.exists():
        return None
    try:
        raw = LAST_FILE.read_text().strip()
    except OSError:
        return None
    return raw or None


def set_last_config(name: str) -> None:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    LAST_FILE.write_text(_sanitize_name(name))


def _read(path: Path) -> dict:
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not read config %s (%s); using defaults", path, e)
        return _default_config()
    if not isinstance(data, dict):
        logger.warning("Config %s is not a JSON object; using defaults", path)
        return _default_config()
    try:
        merged = _merge_defaults(data)
    except ValueError as e:
        logger.warning("Config %s is malformed (%s); using defaults", path, e)
        return _default_config()
    logger.info("Loaded config %s", path)
    return merged


def load_config(path: Path | str | None = None) -> dict:
    """Explicit path, else the last saved config, else defaults."""
    if path is not None:
        p = Path(path)
        if not p.exists():
            logger.warning("Config %s not found; using defaults", p)
            return _default_config()
        return _read(p)
    last = get_last_config()
    if last is None:
        return _default_config()
    p = CONFIG_DIR / f"{last}.json"
    if not p.exists():
        return _default_config()
    return _read(p)


def save_config(params: dict, name: str, materials: MaterialTable | None = None) -> Path:
    """Write params merged with defaults. With materials, the full table is written so the
    file keeps the parameters the run actually used."""
    path = get_config_path(name)
    out = _merge_defaults(params)
    if materials is not None:
        out["materials"] = materials.to_data()
    with open(path, "w") as f:
        json.dump(out, f, indent=2)
    set_last_config(name)
    _CONFIG_INDEX.add(_sanitize_name(name))
    logger.info("Saved config %s", path)
    return path


def materials_from_config(cfg: dict) -> MaterialTable:
    """MaterialTable from the config's "materials" overrides. Raises ValueError on bad entries."""
    return MaterialTable.from_data(cfg.get("materials") or {})


def _default_config() -> dict:
    return {
        "world": {"width": 200, "height": 200},
        "tick_rate": 60,
        "seed": -1,
        "pixel_scale": 4,
        "tint_settled": False,
        "brush_material": "sand",
        "materials": {},
    }


def _section(data: dict, key: str) -> dict:
    value = data[key]
    if not isinstance(value, dict):
        raise ValueError(f'"{key}" must be an object, got {type(value).__name__}')
    return value


def _merge_defaults(data: dict) -> dict:
    """Raises ValueError when a section has the wrong shape."""
    d = _default_config()
    if "world" in data:
        d["world"] = {**d["world"], **_section(data, "world")}
        for k in ("width", "height"):
            v = d["world"][k]
            if not isinstance(v, int) or isinstance(v, bool) or v < 1:
                raise ValueError(f"world.{k} must be a positive integer, got {v!r}")
    if "materials" in data:
        materials = _section(data, "materials")
        for k, v in materials.items():
            if not isinstance(v, dict):
                raise ValueError(f'materials.{k} must be an object, got {type(v).__name__}')
        d["materials"] = {k: dict(v) for k, v in materials.items()}
    for k in ("tick_rate", "seed", "pixel_scale", "tint_settled", "brush_material"):
        if k in data:
            d[k] = data[k]
    return d
