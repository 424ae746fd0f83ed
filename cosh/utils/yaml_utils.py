from pathlib import Path

import yaml


def read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if data is not None else {}


def load_mapping(text: str) -> dict:
    """Parse YAML text whose top level must be a mapping.

    Raises:
        yaml.YAMLError: If the text is not valid YAML
        TypeError: If the top level is not a mapping
    """
    data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise TypeError(f"expected a mapping at top level, got {type(data).__name__}")
    return data
