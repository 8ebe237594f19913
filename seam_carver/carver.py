"""
Seam carving engine with incrementally maintained energy and lazy path matrices.

Energy is computed once for the whole image and then patched after each
seam removal. Path matrices are rebuilt only when a seam is requested after
the image changed.
"""

import logging
from typing import List, Sequence, Set, Tuple

import torch

from .cache import PathCache, PathState
from .energy import dual_gradient_energy, pixel_energy_at, wrap_index
from .exceptions import DegenerateImage
from .image import Image
from .seam import backtrack_seam, check_direction, remove_seam_inplace, validate_seam

logger = logging.getLogger(__name__)


def _changed_neighbourhood(seam: Sequence[int], new_size: int) -> Set[Tuple[int, int]]:
    """
    Cells whose neighbor set changed after removing seam.

    Works in seam coordinates: (line, index) where line runs along the seam
    (row for a vertical seam) and index across it, in the shrunk image.

    Two kinds of cells are affected:
    - the surviving neighbors on either side of each removed pixel
    - where the seam steps diagonally between two adjacent lines, the cells
      between the two seam positions, which now face a different pixel on
      the other line. The last and first lines are adjacent too.
    """
    cells = set()
    for line, index in enumerate(seam):
        cells.add((line, wrap_index(index - 1, new_size)))
        cells.add((line, wrap_index(index, new_size)))

    n_lines = len(seam)
    if n_lines > 1:
        for line in range(n_lines):
            next_line = (line + 1) % n_lines
            lo, hi = sorted((seam[line], seam[next_line]))
            for index in range(lo, hi):
                cells.add((line, index))
                cells.add((next_line, index))

    return cells


class SeamCarver:
    """
    Content-aware image shrinking, one seam at a time.

    The carver works on its own copy of the image passed in. Seam queries may
    recompute the cached path matrices, so neither queries nor removals are
    safe to call concurrently on the same instance.

    Args:
        image: Image to carve
        dtype: Floating point type of the energy and path matrices
    """

    def __init__(self, image: Image, dtype: torch.dtype = torch.float64):
        if image.width < 1 or image.height < 1:
            raise DegenerateImage(f"Cannot carve a {image.width}x{image.height} image")

        self._image = image.copy()
        self._dtype = dtype
        self._energy = torch.zeros(image.height, image.width, dtype=dtype)
        self._paths = PathCache(image.height, image.width, dtype=dtype)
        self._recompute_energy()

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def energy(self) -> torch.Tensor:
        """Copy of the current energy map (height, width)."""
        return self._energy_view().clone()

    def path_state(self, direction: str) -> PathState:
        """Cache state of the path matrix for direction."""
        return self._paths.state(direction)

    def get_image(self) -> Image:
        """Copy of the current image."""
        return self._image.copy()

    def pixel_energy(self, column: int, row: int) -> float:
        if not (0 <= column < self.width and 0 <= row < self.height):
            raise IndexError(
                f"Pixel ({column}, {row}) outside {self.width}x{self.height} image")
        return self._energy[row, column].item()

    def find_vertical_seam(self) -> torch.Tensor:
        """Column index for each row, length = height."""
        path = self._paths.get('vertical', self._energy_view())
        return backtrack_seam(path, 'vertical')

    def find_horizontal_seam(self) -> torch.Tensor:
        """Row index for each column, length = width."""
        path = self._paths.get('horizontal', self._energy_view())
        return backtrack_seam(path, 'horizontal')

    def find_seam(self, direction: str = 'vertical') -> torch.Tensor:
        check_direction(direction)
        if direction == 'vertical':
            return self.find_vertical_seam()
        return self.find_horizontal_seam()

    def remove_vertical_seam(self, seam: Sequence[int]):
        """
        Remove one pixel from every row, shrinking the width by one.

        Raises:
            DegenerateImage: if the image is one column wide
            InvalidSeam: if the seam does not fit the current image
        """
        if self.width == 1:
            raise DegenerateImage("Cannot remove a vertical seam from a one-column image",
                                  'vertical')
        columns = validate_seam(seam, self.height, self.width, 'vertical')
        self._remove(columns, 'vertical')

    def remove_horizontal_seam(self, seam: Sequence[int]):
        """
        Remove one pixel from every column, shrinking the height by one.

        Raises:
            DegenerateImage: if the image is one row high
            InvalidSeam: if the seam does not fit the current image
        """
        if self.height == 1:
            raise DegenerateImage("Cannot remove a horizontal seam from a one-row image",
                                  'horizontal')
        rows = validate_seam(seam, self.width, self.height, 'horizontal')
        self._remove(rows, 'horizontal')

    def remove_seam(self, seam: Sequence[int], direction: str = 'vertical'):
        check_direction(direction)
        if direction == 'vertical':
            self.remove_vertical_seam(seam)
        else:
            self.remove_horizontal_seam(seam)

    def carve(self, target_width: int, target_height: int):
        """
        Shrink the image to target_width x target_height.

        Vertical seams are removed first, then horizontal ones.
        """
        if not (1 <= target_width <= self.width and 1 <= target_height <= self.height):
            raise ValueError(
                f"Target size {target_width}x{target_height} must be between 1x1 "
                f"and the current size {self.width}x{self.height}")

        logger.info("Carving %dx%d image to %dx%d",
                    self.width, self.height, target_width, target_height)

        while self.width > target_width:
            self.remove_vertical_seam(self.find_vertical_seam())
        while self.height > target_height:
            self.remove_horizontal_seam(self.find_horizontal_seam())

        logger.info("Carving finished at %dx%d", self.width, self.height)

    def _energy_view(self) -> torch.Tensor:
        return self._energy[:self.height, :self.width]

    def _recompute_energy(self):
        self._energy_view().copy_(dual_gradient_energy(self._image.pixels, self._dtype))

    def _remove(self, seam: List[int], direction: str):
        H, W = self.height, self.width
        remove_seam_inplace(self._energy, seam, direction, H, W)
        self._image.remove_seam(seam, direction)

        if direction == 'vertical':
            cells = _changed_neighbourhood(seam, self.width)
            rows = [line for line, _ in cells]
            cols = [index for _, index in cells]
        else:
            cells = _changed_neighbourhood(seam, self.height)
            cols = [line for line, _ in cells]
            rows = [index for _, index in cells]

        self._patch_energy(torch.tensor(cols, dtype=torch.long),
                           torch.tensor(rows, dtype=torch.long))
        self._paths.invalidate()

        logger.debug("Removed %s seam: %dx%d -> %dx%d, %d energy cells patched",
                     direction, W, H, self.width, self.height, len(cells))

    def _patch_energy(self, columns: torch.Tensor, rows: torch.Tensor):
        self._energy[rows, columns] = pixel_energy_at(self._image.pixels, columns, rows,
                                                      self._dtype)


def carve_image(image: Image, n_seams: int, direction: str = 'vertical') -> Image:
    """
    Remove n_seams seams from a copy of image.

    Args:
        image: Image to carve (left untouched)
        n_seams: Number of seams to remove
        direction: 'vertical' (narrower) or 'horizontal' (shorter)

    Returns:
        Carved image
    """
    check_direction(direction)
    carver = SeamCarver(image)

    for i in range(n_seams):
        seam = carver.find_seam(direction)
        carver.remove_seam(seam, direction)

    return carver.get_image()
