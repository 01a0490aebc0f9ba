"""
Configuration management.
"""

import json
import re
from pathlib import Path

# Default paths (can be overridden)
_DATA_DIR = Path(__file__).parent.parent
CONFIG_FILE = _DATA_DIR / "config.json"

DEFAULTS = {
    'data_file': "roamatlas_data.json",
    'default_currency': "USD",
    'check_in_time': "15:00",
    'check_out_time': "11:00",
    'report_dir': "reports",
    'log_level': "WARNING",
}

_TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')
_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


def _apply_defaults(config):
    for key, value in DEFAULTS.items():
        config.setdefault(key, value)

    # Times must be HH:MM, they end up inside stored timestamps
    for key in ('check_in_time', 'check_out_time'):
        if not isinstance(config[key], str) or not _TIME_PATTERN.match(config[key]):
            print(f"Warning: Invalid {key} '{config[key]}' in config, using {DEFAULTS[key]}")
            config[key] = DEFAULTS[key]

    if str(config['log_level']).upper() not in _LOG_LEVELS:
        print(f"Warning: Unknown log_level '{config['log_level']}', using {DEFAULTS['log_level']}")
        config['log_level'] = DEFAULTS['log_level']
    config['log_level'] = config['log_level'].upper()
    config['default_currency'] = str(config['default_currency']).upper()
    return config


def load_config(config_file=None):
    """Load configuration from file with error handling.

    A missing or unreadable file gives the defaults, so the importer works
    without any setup.

    Args:
        config_file: Path to config file. Defaults to config.json.

    Returns:
        Config dict
    """
    if config_file is None:
        config_file = CONFIG_FILE

    config_path = Path(config_file)
    if not config_path.exists():
        return _apply_defaults({})

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        print(f"Warning: {config_path.name} is corrupted ({e}), using defaults")
        return _apply_defaults({})
    except OSError as e:
        print(f"Warning: Could not read {config_path.name} ({e}), using defaults")
        return _apply_defaults({})

    if not isinstance(config, dict):
        print(f"Warning: {config_path.name} has invalid format, using defaults")
        return _apply_defaults({})

    return _apply_defaults(config)


def save_config(config, config_file=None):
    """Save configuration to file.

    Args:
        config: Config dict to save.
        config_file: Path to config file. Defaults to config.json.
    """
    if config_file is None:
        config_file = CONFIG_FILE

    with open(config_file, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)


def resolve_data_file(config, config_file=None):
    """Absolute path of the store file; relative paths sit next to the config."""
    data_path = Path(config['data_file'])
    if data_path.is_absolute():
        return data_path
    base = Path(config_file).parent if config_file else _DATA_DIR
    return base / data_path
