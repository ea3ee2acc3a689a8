"""Configuration loader for the QSO map tools."""

import yaml
from pathlib import Path
from typing import Any


DEFAULT_CONFIG = {
    "callsign": "",
    "grid": "",          # Home grid for distance/bearing (empty = no home)
    "adif_file": "",     # Default log to load when none is given
    "band": "ALL",       # Band filter
    "mode": "ALL",       # Mode filter
    "log_level": "WARNING",
}


def default_config_paths() -> list[Path]:
    """Config locations searched when no explicit path is given."""
    repo_root = Path(__file__).parent.parent
    return [
        # Local config (gitignored, stays with repo)
        repo_root / "local" / "config" / "config.yaml",
        # XDG config
        Path.home() / ".config" / "qsomap" / "config.yaml",
    ]


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from YAML file with defaults.

    Searches for config in:
    1. Provided path
    2. local/config/config.yaml (user config, gitignored)
    3. ~/.config/qsomap/config.yaml (XDG standard)
    4. Falls back to defaults

    Args:
        config_path: Optional path to config file

    Returns:
        Dict with configuration values
    """
    config = DEFAULT_CONFIG.copy()

    search_paths = [config_path] if config_path else []
    search_paths += default_config_paths()

    # Load first found config
    for path in search_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    user_config = yaml.safe_load(f)
                if isinstance(user_config, dict):
                    config.update(user_config)
                elif user_config is not None:
                    print(f"Warning: Ignoring config {path}: expected a mapping")
                return config
            except (OSError, yaml.YAMLError) as e:
                print(f"Warning: Could not load config from {path}: {e}")

    return config


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration dict to save
        config_path: Optional path to save to (defaults to local/config/config.yaml)
    """
    if config_path is None:
        config_path = default_config_paths()[0]

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
