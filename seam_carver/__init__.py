"""
Content-aware image resizing by seam carving.

Energy is the dual-gradient magnitude with toroidal neighbors; seams are
found by dynamic programming and removed one at a time.
"""

__version__ = "0.1.0"

from .image import Image, Pixel
from .energy import dual_gradient_energy, pixel_energy_at, wrap_index
from .seam import (cumulative_energy, backtrack_seam, clamp_step, validate_seam,
                   remove_seam_inplace)
from .cache import PathCache, PathState
from .carver import SeamCarver, carve_image
from .exceptions import SeamCarvingError, InvalidSeam, DegenerateImage

__all__ = [
    'Image',
    'Pixel',
    'dual_gradient_energy',
    'pixel_energy_at',
    'wrap_index',
    'cumulative_energy',
    'backtrack_seam',
    'clamp_step',
    'validate_seam',
    'remove_seam_inplace',
    'PathCache',
    'PathState',
    'SeamCarver',
    'carve_image',
    'SeamCarvingError',
    'InvalidSeam',
    'DegenerateImage',
]
