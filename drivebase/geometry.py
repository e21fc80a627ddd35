"""
Drive module layout calculations
"""

from dataclasses import dataclass
import logging
import numbers
from typing import Iterable, Iterator, Tuple
import numpy as np

from drivebase.errors import ConfigurationError
from drivebase.params import require_positive

logger = logging.getLogger(__name__)


def _is_real(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class Translation2d:
    """Point in the robot frame (+x forward, +y left), in meters"""

    x: float = 0.0
    y: float = 0.0

    def norm(self) -> float:
        """Distance from the robot center (m)"""
        return float(np.hypot(self.x, self.y))


class ModuleLayout:
    """Ordered, immutable set of drive module locations"""

    def __init__(self, locations: Iterable[Translation2d]) -> None:
        """
        Initialize module layout

        Args:
            locations: Robot-relative module locations. Order defines the
                module index used by every per-module sequence.
        """
        self._locations: Tuple[Translation2d, ...] = tuple(locations)

        if len(self._locations) < 2:
            msg = f"A drivetrain needs at least 2 modules, got {len(self._locations)}"
            logger.error(msg)
            raise ConfigurationError(msg)
        for loc in self._locations:
            if not isinstance(loc, Translation2d):
                msg = f"Module location must be a Translation2d, got {loc!r}"
            elif not all(_is_real(v) for v in (loc.x, loc.y)):
                msg = f"Module location coordinates must be numbers, got {loc}"
            elif not (np.isfinite(loc.x) and np.isfinite(loc.y)):
                msg = f"Module location must be finite, got {loc}"
            else:
                continue
            logger.error(msg)
            raise ConfigurationError(msg)

    @classmethod
    def holonomic(cls, trackwidth_meters: float, wheelbase_meters: float) -> "ModuleLayout":
        """
        Rectangular four-module layout

        Args:
            trackwidth_meters: Distance between the left and right modules (m)
            wheelbase_meters: Distance between the front and back modules (m)

        Returns:
            Layout ordered front-left, front-right, back-left, back-right
        """
        require_positive("trackwidth_meters", trackwidth_meters)
        require_positive("wheelbase_meters", wheelbase_meters)

        half_wheelbase = wheelbase_meters / 2.0
        half_trackwidth = trackwidth_meters / 2.0
        return cls([
            Translation2d(half_wheelbase, half_trackwidth),  # Front left
            Translation2d(half_wheelbase, -half_trackwidth),  # Front right
            Translation2d(-half_wheelbase, half_trackwidth),  # Back left
            Translation2d(-half_wheelbase, -half_trackwidth),  # Back right
        ])

    @classmethod
    def differential(cls, trackwidth_meters: float) -> "ModuleLayout":
        """
        Two-sided layout, left side first

        Args:
            trackwidth_meters: Distance between the left and right wheels (m)
        """
        require_positive("trackwidth_meters", trackwidth_meters)

        half_trackwidth = trackwidth_meters / 2.0
        return cls([
            Translation2d(0.0, half_trackwidth),
            Translation2d(0.0, -half_trackwidth),
        ])

    @property
    def locations(self) -> Tuple[Translation2d, ...]:
        return self._locations

    def __len__(self) -> int:
        return len(self._locations)

    def __iter__(self) -> Iterator[Translation2d]:
        return iter(self._locations)

    def as_array(self) -> np.ndarray:
        """
        Module locations as an array

        Returns:
            Array of shape (num_modules, 2) holding (x, y) rows
        """
        return np.array([[loc.x, loc.y] for loc in self._locations], dtype=float)

    def pivot_distances(self) -> Tuple[float, ...]:
        """
        Distance from the robot center to each module, in module order

        Returns:
            Tuple of distances (m)
        """
        return tuple(loc.norm() for loc in self._locations)
