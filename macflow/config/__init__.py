"""
Configuration module for the staggered-grid solver.

Provides YAML-based configuration with dataclass schema.
"""

from .schema import (
    SimulationConfig,
    GridConfig,
    FlowConfig,
    NumericsConfig,
    SolverSettings,
    lid_driven_cavity_preset,
    natural_convection_preset,
    fluid_trap_preset,
)

from .loader import (
    load_yaml,
    from_dict,
    apply_cli_overrides,
    save_yaml,
)

__all__ = [
    # Schema classes
    'SimulationConfig',
    'GridConfig',
    'FlowConfig',
    'NumericsConfig',
    'SolverSettings',
    # Presets
    'lid_driven_cavity_preset',
    'natural_convection_preset',
    'fluid_trap_preset',
    # Loader functions
    'load_yaml',
    'from_dict',
    'apply_cli_overrides',
    'save_yaml',
]
