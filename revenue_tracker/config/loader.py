"""
Configuration management and loading.

Handles ledger, display, logging and seed settings from YAML.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from revenue_tracker.core.metrics import WEEKS_PER_MONTH
from revenue_tracker.demo.seed_demo_data import DEMO_CLIENTS, SeedClient

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class TrackerConfig:
    """Complete tracker configuration."""
    weeks_per_month: int = WEEKS_PER_MONTH
    currency_symbol: str = "$"
    log_level: str = "WARNING"
    seed: Tuple[SeedClient, ...] = DEMO_CLIENTS

    def __post_init__(self):
        """Validate configuration values."""
        if isinstance(self.weeks_per_month, bool) or not isinstance(self.weeks_per_month, int):
            raise ValueError("weeks_per_month must be an integer")
        if self.weeks_per_month <= 0:
            raise ValueError("weeks_per_month must be > 0")
        if not self.currency_symbol:
            raise ValueError("currency_symbol cannot be empty")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {list(LOG_LEVELS)}")


def default_config() -> TrackerConfig:
    """Return the built-in configuration (demo clients seeded)."""
    return TrackerConfig()


def load_tracker_config(path: str) -> TrackerConfig:
    """Load and validate tracker configuration from YAML file.

    Unknown keys are rejected so typos never fall back to defaults
    silently. Every section is optional.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated TrackerConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Tracker config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a mapping")

    allowed_top_keys = {'ledger', 'display', 'logging', 'seed'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    ledger = _section(raw_config, 'ledger', {'weeks_per_month'})
    display = _section(raw_config, 'display', {'currency_symbol'})
    logging_data = _section(raw_config, 'logging', {'level'})

    weeks = ledger.get('weeks_per_month', WEEKS_PER_MONTH)
    if isinstance(weeks, bool) or not isinstance(weeks, int):
        raise ValueError("'ledger.weeks_per_month' must be an integer")

    symbol = display.get('currency_symbol', "$")
    if not isinstance(symbol, str) or not symbol:
        raise ValueError("'display.currency_symbol' must be a non-empty string")

    level = logging_data.get('level', "WARNING")
    if not isinstance(level, str):
        raise ValueError("'logging.level' must be a string")

    if 'seed' in raw_config:
        seed = _parse_seed(raw_config['seed'])
    else:
        seed = DEMO_CLIENTS

    return TrackerConfig(
        weeks_per_month=weeks,
        currency_symbol=symbol,
        log_level=level.upper(),
        seed=seed
    )


def _section(raw_config: Dict, name: str, allowed_keys: set) -> Dict[str, Any]:
    """Return a validated optional config section (empty if absent)."""
    data = raw_config.get(name)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"'{name}' must be a dictionary")

    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown keys in {name}: {unknown_keys}")
    return data


def _parse_seed(data: Any) -> Tuple[SeedClient, ...]:
    """Parse the seed client list.

    Only the shape is checked here. Values go through the same add
    validation as user input when the tracker is seeded.

    Raises:
        ValueError: If the list or an entry is malformed
    """
    if data is None:
        return ()
    if not isinstance(data, list):
        raise ValueError("'seed' must be a list")

    allowed_keys = {'name', 'weekly_hours', 'rate'}
    clients = []
    for index, entry in enumerate(data):
        path = f"seed[{index}]"
        if not isinstance(entry, dict):
            raise ValueError(f"{path} must be a dictionary")

        unknown_keys = set(entry.keys()) - allowed_keys
        if unknown_keys:
            raise ValueError(f"Unknown keys in {path}: {unknown_keys}")

        for key in ('name', 'weekly_hours', 'rate'):
            if key not in entry:
                raise ValueError(f"Missing required '{key}' in {path}")

        if not isinstance(entry['name'], str):
            raise ValueError(f"'name' in {path} must be a string")
        for key in ('weekly_hours', 'rate'):
            value = entry[key]
            if isinstance(value, bool) or not isinstance(value, (int, str)):
                raise ValueError(f"'{key}' in {path} must be an integer")

        clients.append(SeedClient(
            name=entry['name'],
            weekly_hours=entry['weekly_hours'],
            rate=entry['rate']
        ))

    return tuple(clients)


def config_to_dict(config: TrackerConfig) -> Dict[str, Any]:
    """Convert a config back to its YAML mapping form."""
    seed: List[Dict[str, Any]] = [
        {'name': c.name, 'weekly_hours': c.weekly_hours, 'rate': c.rate}
        for c in config.seed
    ]
    return {
        'ledger': {'weeks_per_month': config.weeks_per_month},
        'display': {'currency_symbol': config.currency_symbol},
        'logging': {'level': config.log_level},
        'seed': seed,
    }


def dump_tracker_config(config: TrackerConfig, path: str) -> None:
    """Write configuration to a YAML file."""
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(config_to_dict(config), f, sort_keys=False)
