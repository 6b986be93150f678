"""
YAML configuration loader with validation.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Union
from dataclasses import fields, is_dataclass

from loguru import logger

from .schema import (
    SimulationConfig, GridConfig, FlowConfig, NumericsConfig, SolverSettings,
    lid_driven_cavity_preset, natural_convection_preset, fluid_trap_preset,
)

PRESETS = {
    'lid-driven-cavity': lid_driven_cavity_preset,
    'natural-convection': natural_convection_preset,
    'fluid-trap': fluid_trap_preset,
}

SECTIONS = {
    'grid': GridConfig,
    'flow': FlowConfig,
    'numerics': NumericsConfig,
    'solver': SolverSettings,
}


def _merge_dict(base: dict, override: dict) -> dict:
    """Recursively merge override into base dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dict(result[key], value)
        else:
            result[key] = value
    return result


def _coerce_type(value, field_type):
    """Coerce value to the expected field type."""
    # Handle string representations of numbers (e.g., "1.0e3")
    if field_type in (float, 'float') and isinstance(value, (str, int)) and not isinstance(value, bool):
        try:
            return float(value)
        except ValueError:
            return value
    if field_type in (int, 'int') and isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return value
    if field_type in (bool, 'bool') and isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ('true', 'yes', 'on', '1'):
            return True
        if lowered in ('false', 'no', 'off', '0'):
            return False
    return value


def _dict_to_dataclass(cls, data: dict):
    """Convert a dictionary to a dataclass instance."""
    if not is_dataclass(cls):
        return data

    field_types = {f.name: f.type for f in fields(cls)}
    kwargs = {}

    for key, value in data.items():
        if key not in field_types:
            logger.warning(f"Ignoring unknown {cls.__name__} key: {key}")
            continue

        kwargs[key] = _coerce_type(value, field_types[key])

    return cls(**kwargs)


def load_yaml(path: Union[str, Path]) -> SimulationConfig:
    """
    Load simulation configuration from a YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        SimulationConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    logger.info(f"Loaded configuration from: {path}")
    return from_dict(data)


def from_dict(data: Dict[str, Any]) -> SimulationConfig:
    """
    Create SimulationConfig from a dictionary.

    Handles nested structures and applies defaults for missing values.
    A 'preset' key selects a named base configuration that the remaining
    sections override.
    """
    data = dict(data)
    preset = data.pop('preset', None)
    if preset:
        if preset not in PRESETS:
            raise ValueError(f"Unknown preset '{preset}', expected one of {sorted(PRESETS)}")
        data = _merge_dict(PRESETS[preset]().to_dict(), data)

    config_dict = {}
    for section, cls in SECTIONS.items():
        if section in data and data[section] is not None:
            config_dict[section] = _dict_to_dataclass(cls, data[section])

    return SimulationConfig(**config_dict)


def apply_cli_overrides(config: SimulationConfig, args) -> SimulationConfig:
    """
    Apply command-line argument overrides to a configuration.

    Only overrides values that were explicitly set (not None).

    Args:
        config: Base configuration
        args: argparse.Namespace with CLI arguments

    Returns:
        Updated SimulationConfig
    """
    config_dict = config.to_dict()

    # Map CLI args to config paths
    cli_mapping = {
        # Grid
        'imax': ('grid', 'imax'),
        'jmax': ('grid', 'jmax'),
        'xlength': ('grid', 'xlength'),
        'ylength': ('grid', 'ylength'),

        # Flow
        'reynolds': ('flow', 'reynolds'),
        'prandtl': ('flow', 'prandtl'),
        'gx': ('flow', 'gx'),
        'gy': ('flow', 'gy'),
        'beta': ('flow', 'beta'),

        # Numerics
        'alpha': ('numerics', 'alpha'),
        'tau': ('numerics', 'tau'),
        'dt': ('numerics', 'dt'),

        # Solver
        't_end': ('solver', 't_end'),
        'max_iter': ('solver', 'max_iter'),
        'print_freq': ('solver', 'print_freq'),
    }

    for cli_name, config_path in cli_mapping.items():
        if hasattr(args, cli_name):
            value = getattr(args, cli_name)
            if value is not None:
                target = config_dict
                for key in config_path[:-1]:
                    target = target[key]
                target[config_path[-1]] = value

    return from_dict(config_dict)


def save_yaml(config: SimulationConfig, path: Union[str, Path]) -> None:
    """Save configuration to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
