"""
Configuration file support for the cliquegraph CLI.

Supports YAML and JSON config files with CLI argument override.

Example config:

    input: graphs/collaboration.csv
    output: results/cliques.json
    graph:
      directed: false
      symmetrize: false
    search:
      timeout_seconds: 30
      max_frames: 5000000
      n_workers: 4
      min_size: 3
"""

import json
from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from cliquegraph.cliques.limits import SearchLimits


@dataclass
class SearchConfig:
    """Search bounds and execution options."""
    timeout_seconds: Optional[float] = None
    max_frames: Optional[int] = None
    max_depth: Optional[int] = None
    n_workers: int = 1
    min_size: int = 1

    def to_limits(self) -> SearchLimits:
        return SearchLimits(
            timeout_seconds=self.timeout_seconds,
            max_frames=self.max_frames,
            max_depth=self.max_depth,
        )


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Load configuration from YAML or JSON file.

    Parameters:
        config_path: Path to config file (.yaml, .yml, or .json)

    Returns:
        Dictionary with configuration values

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is unsupported or invalid

    Examples:
        >>> config = load_config(Path("search.yaml"))
        >>> print(config['search']['timeout_seconds'])
        30
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()

    try:
        with open(config_path, 'r') as f:
            if suffix in ('.yaml', '.yml'):
                config = yaml.safe_load(f)
            elif suffix == '.json':
                config = json.load(f)
            else:
                raise ValueError(
                    f"Unsupported config format: {suffix}. "
                    f"Use .yaml, .yml, or .json"
                )
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}")

    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ValueError("Config file must contain a dictionary/mapping at top level")

    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Raises:
        ValueError: If configuration is invalid
    """
    for section in ('graph', 'search'):
        if section in config and not isinstance(config[section], dict):
            raise ValueError(f"Config section '{section}' must be a mapping")

    search = config.get('search', {})
    known = set(SearchConfig.__dataclass_fields__)
    unknown = set(search) - known
    if unknown:
        raise ValueError(
            f"Unknown search options: {', '.join(sorted(unknown))}. "
            f"Choose from: {', '.join(sorted(known))}"
        )

    timeout = search.get('timeout_seconds')
    if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
        raise ValueError(f"search.timeout_seconds must be a positive number, got: {timeout}")

    for key in ('max_frames', 'max_depth', 'n_workers', 'min_size'):
        value = search.get(key)
        if value is not None and (not isinstance(value, int) or value < 1):
            raise ValueError(f"search.{key} must be a positive integer, got: {value}")


def _merge_value(cli_value: Any, config_value: Any, was_explicitly_set: bool) -> Any:
    """
    Merge a single config value with CLI argument.

    Rules:
    - CLI args ALWAYS override config if explicitly set
    - If CLI arg not set, use config value
    - If neither set, keep CLI default
    """
    if was_explicitly_set:
        return cli_value

    if config_value is not None:
        return config_value

    return cli_value


def _explicit_args(cli_args: Optional[List[str]]) -> set:
    """
    Destination names of the options that appear on the command line.

    Long options are matched by their full name; the parsers are built with
    allow_abbrev=False so a prefix such as --max-fr never reaches here.
    """
    short_to_long = {
        'i': 'input',
        'o': 'output',
        'k': 'k',
    }
    explicit = set()
    for arg in cli_args or []:
        if arg.startswith('--'):
            explicit.add(arg[2:].split('=', 1)[0].replace('-', '_'))
        elif arg.startswith('-') and len(arg) == 2 and arg[1] in short_to_long:
            explicit.add(short_to_long[arg[1]])
    return explicit


# config section → {config key: argparse dest}
SECTION_MAPPINGS = {
    'graph': {
        'directed': 'directed',
        'symmetrize': 'symmetrize',
    },
    'search': {
        'timeout_seconds': 'timeout',
        'max_frames': 'max_frames',
        'max_depth': 'max_depth',
        'n_workers': 'workers',
        'min_size': 'min_size',
    },
}


def merge_config_with_args(
    config: Dict[str, Any],
    args: Namespace,
    cli_args: Optional[List[str]] = None,
) -> Namespace:
    """
    Merge config file values with CLI arguments.

    Priority (highest to lowest):
    1. Explicitly provided CLI arguments
    2. Config file values
    3. CLI argument defaults

    Parameters:
        config: Configuration dictionary from load_config()
        args: Parsed CLI arguments (argparse.Namespace)
        cli_args: Raw CLI arguments list (for detecting explicit values).
                  If None, assumes all args are defaults

    Returns:
        Updated Namespace with merged values. Options a subcommand does not
        define are left untouched.
    """
    explicit = _explicit_args(cli_args)
    merged = Namespace(**vars(args))

    for key in ('input', 'output'):
        if key in config and hasattr(merged, key):
            value = config[key]
            if value is not None:
                value = Path(value)
            setattr(merged, key, _merge_value(getattr(merged, key), value, key in explicit))

    for section, mapping in SECTION_MAPPINGS.items():
        values = config.get(section) or {}
        for config_key, dest in mapping.items():
            if config_key in values and hasattr(merged, dest):
                setattr(
                    merged,
                    dest,
                    _merge_value(getattr(merged, dest), values[config_key], dest in explicit),
                )

    return merged


def search_config_from_args(args: Namespace) -> SearchConfig:
    """Build a SearchConfig from (merged) CLI arguments."""
    return SearchConfig(
        timeout_seconds=getattr(args, 'timeout', None),
        max_frames=getattr(args, 'max_frames', None),
        max_depth=getattr(args, 'max_depth', None),
        n_workers=getattr(args, 'workers', 1) or 1,
        min_size=getattr(args, 'min_size', 1) or 1,
    )
