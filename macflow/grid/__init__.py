"""
Grid and field module.

This module provides:
- Uniform staggered grid extents and spacings
- Field allocation and extent checks
- Cell flags (fluid/obstacle classification)
"""

from .fields import (
    Grid,
    FlowFields,
    allocate_field,
    check_fields,
    check_grid,
)

from .flags import (
    CellFlag,
    CellFlags,
)

from ..constants import Direction

__all__ = [
    # Fields
    'Grid',
    'FlowFields',
    'allocate_field',
    'check_fields',
    'check_grid',
    # Flags
    'CellFlag',
    'CellFlags',
    'Direction',
]
