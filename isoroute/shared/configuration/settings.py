"""Application settings dataclasses."""
from dataclasses import dataclass, field
from typing import Dict, List

from ..exceptions import ValidationError
from ..utils.validation_utils import (
    validate_grid_dimension, validate_positive_number,
    validate_non_negative_number, validate_log_level
)


def _collect(errors: List[str], check, *args) -> None:
    try:
        check(*args)
    except ValidationError as e:
        errors.append(str(e))


@dataclass
class GridSettings:
    """Size of the walkable tile grid (cells 0..map_width, 0..map_height)."""
    map_width: int = 5
    map_height: int = 5

    def validate(self) -> List[str]:
        errors = []
        _collect(errors, validate_grid_dimension, self.map_width, "map_width")
        _collect(errors, validate_grid_dimension, self.map_height, "map_height")
        return errors


@dataclass
class TracerSettings:
    """Route tracing settings."""
    velocity: float = 30.0  # world units per second

    def validate(self) -> List[str]:
        errors = []
        _collect(errors, validate_positive_number, self.velocity, "velocity")
        return errors


@dataclass
class WorldSettings:
    """Grid to world space transform settings."""
    cell_size: float = 50.0
    tile_thickness: float = 5.0
    entity_height: float = 50.0

    @property
    def vertical_offset(self) -> float:
        """Height at which an entity standing on a tile is centred."""
        return self.tile_thickness / 2 + self.entity_height / 2

    def validate(self) -> List[str]:
        errors = []
        _collect(errors, validate_positive_number, self.cell_size, "cell_size")
        _collect(errors, validate_non_negative_number, self.tile_thickness, "tile_thickness")
        _collect(errors, validate_non_negative_number, self.entity_height, "entity_height")
        return errors


@dataclass
class LoggingSettings:
    """Logging settings."""
    level: str = "INFO"
    format_string: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    console_output: bool = True
    file_output: bool = False
    log_file: str = "logs/isoroute.log"
    max_file_size_mb: int = 10
    backup_count: int = 3
    component_levels: Dict[str, str] = field(default_factory=dict)

    def validate(self) -> List[str]:
        errors = []
        _collect(errors, validate_log_level, self.level)
        for component, level in self.component_levels.items():
            try:
                validate_log_level(level)
            except ValidationError as e:
                errors.append(f"{component}: {e}")
        _collect(errors, validate_positive_number, self.max_file_size_mb, "max_file_size_mb")
        _collect(errors, validate_non_negative_number, self.backup_count, "backup_count")
        return errors


@dataclass
class ApplicationSettings:
    """Top-level application settings."""
    version: str = "1.0.0"
    config_version: int = 1
    grid: GridSettings = field(default_factory=GridSettings)
    tracer: TracerSettings = field(default_factory=TracerSettings)
    world: WorldSettings = field(default_factory=WorldSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def validate(self) -> Dict[str, List[str]]:
        """Validate every settings category.

        Returns:
            Mapping of category name to its list of error messages
        """
        return {
            "grid": self.grid.validate(),
            "tracer": self.tracer.validate(),
            "world": self.world.validate(),
            "logging": self.logging.validate(),
        }
