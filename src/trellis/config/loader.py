import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

from trellis.spec import ConfigError


@dataclass
class TrellisConfig:
    search: str = ""
    replace: str = ""
    replace_file_names: bool = False
    replace_folder_names: bool = False
    verbose: bool = False
    source: Optional[Path] = None


def _find_pyproject_toml(search_path: Path) -> Path:
    current_dir = search_path.resolve()
    while True:
        pyproject_path = current_dir / "pyproject.toml"
        if pyproject_path.is_file():
            return pyproject_path
        if current_dir.parent == current_dir:
            break
        current_dir = current_dir.parent
    raise FileNotFoundError("Could not find pyproject.toml in any parent directory.")


def _validate(data: Dict[str, Any], origin: Path) -> Dict[str, Any]:
    expected = {f.name: f.type for f in fields(TrellisConfig) if f.name != "source"}
    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in expected:
            raise ConfigError(f"{origin}: unknown key 'tool.trellis.{key}'")
        wanted = str if expected[key] in (str, "str") else bool
        if not isinstance(value, wanted):
            raise ConfigError(
                f"{origin}: 'tool.trellis.{key}' must be a {wanted.__name__}, "
                f"got {type(value).__name__}"
            )
        values[key] = value
    return values


def load_config_from_path(search_path: Path) -> TrellisConfig:
    try:
        config_path = _find_pyproject_toml(search_path)
    except FileNotFoundError:
        return TrellisConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{config_path}: {e}") from e

    trellis_data = data.get("tool", {}).get("trellis", {})
    if not isinstance(trellis_data, dict):
        raise ConfigError(f"{config_path}: [tool.trellis] must be a table")

    return TrellisConfig(source=config_path, **_validate(trellis_data, config_path))
