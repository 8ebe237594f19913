"""
Lazy cache of the vertical and horizontal path matrices.

Each matrix is ABSENT until first requested, VALID once computed and STALE
after the image changes. get() is the only place that computes a matrix and
invalidate() the only place that marks one out of date.
"""

import enum
import logging

import torch

from .seam import DIRECTIONS, check_direction, cumulative_energy

logger = logging.getLogger(__name__)


class PathState(enum.Enum):
    ABSENT = 'absent'
    STALE = 'stale'
    VALID = 'valid'


class PathCache:
    """
    Path matrices for both seam directions, stored in (H0, W0) arenas sized
    for the original image. The live matrix is the top-left corner matching
    the energy map passed to get().
    """

    def __init__(self, height: int, width: int, dtype: torch.dtype = torch.float64):
        self._paths = {d: torch.zeros(height, width, dtype=dtype) for d in DIRECTIONS}
        self._states = {d: PathState.ABSENT for d in DIRECTIONS}

    def state(self, direction: str) -> PathState:
        check_direction(direction)
        return self._states[direction]

    def is_valid(self, direction: str) -> bool:
        return self.state(direction) is PathState.VALID

    def get(self, direction: str, energy: torch.Tensor) -> torch.Tensor:
        """
        Return the path matrix for direction, recomputing it from energy unless VALID.

        Args:
            direction: 'vertical' or 'horizontal'
            energy: Current energy map (H, W)

        Returns:
            Live (H, W) view of the cached path matrix
        """
        check_direction(direction)
        H, W = energy.shape
        path = self._paths[direction][:H, :W]

        if self._states[direction] is not PathState.VALID:
            logger.debug("Recomputing %s path matrix (%s, %dx%d)",
                         direction, self._states[direction].value, W, H)
            cumulative_energy(energy, direction, out=path)
            self._states[direction] = PathState.VALID

        return path

    def invalidate(self):
        """Mark every computed matrix STALE. Never-computed ones stay ABSENT."""
        for direction in DIRECTIONS:
            if self._states[direction] is PathState.VALID:
                self._states[direction] = PathState.STALE
