"""
Pixel grid owned by the seam carver.

Pixels are stored in an integer tensor arena of shape (3, H0, W0). Removing a
seam shifts pixels inside the arena and shrinks the live (height, width)
window; the arena itself is never reallocated.
"""

from typing import List, NamedTuple, Sequence, Tuple

import numpy as np
import torch
from PIL import Image as PILImage

from .exceptions import DegenerateImage
from .seam import remove_seam_inplace


class Pixel(NamedTuple):
    """RGB pixel. Channels are conventionally in [0, 255] but never range-checked."""
    red: int
    green: int
    blue: int


class Image:
    """
    Rectangular grid of RGB pixels addressed by (column, row).

    Args:
        columns: Sequence of columns, each a sequence of pixels (Pixel or any
                 3-item sequence of ints). Every column must have the same length.
    """

    def __init__(self, columns: Sequence[Sequence[Tuple[int, int, int]]]):
        if len(columns) == 0 or len(columns[0]) == 0:
            raise DegenerateImage("Image must have at least one column and one row")

        height = len(columns[0])
        for column_id, column in enumerate(columns):
            if len(column) != height:
                raise ValueError(
                    f"Image must be rectangular: column {column_id} has "
                    f"{len(column)} rows, expected {height}")

        # (W, H, 3) -> (3, H, W)
        table = torch.tensor([[list(pixel) for pixel in column] for column in columns],
                             dtype=torch.int64)
        if table.shape[2] != 3:
            raise ValueError(f"Pixels must have 3 channels, got {table.shape[2]}")
        self._init_arena(table.permute(2, 1, 0).contiguous())

    def _init_arena(self, pixels: torch.Tensor):
        self._pixels = pixels
        self._height = pixels.shape[1]
        self._width = pixels.shape[2]

    @classmethod
    def from_tensor(cls, pixels: torch.Tensor) -> 'Image':
        """Build an image from an integer tensor (3, H, W). The tensor is copied."""
        if pixels.dim() != 3 or pixels.shape[0] != 3:
            raise ValueError(f"Expected a (3, H, W) tensor, got shape {tuple(pixels.shape)}")
        if pixels.is_floating_point():
            raise ValueError("Pixel tensor must hold integer channel values")
        if pixels.shape[1] == 0 or pixels.shape[2] == 0:
            raise DegenerateImage("Image must have at least one column and one row")

        image = cls.__new__(cls)
        image._init_arena(pixels.detach().to(device='cpu', dtype=torch.int64)
                          .clone(memory_format=torch.contiguous_format))
        return image

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'Image':
        """Build an image from an (H, W, 3) numpy array."""
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) array, got shape {array.shape}")
        if not np.issubdtype(array.dtype, np.integer):
            raise ValueError(f"Pixel array must hold integer channel values, got {array.dtype}")
        tensor = torch.from_numpy(np.ascontiguousarray(array, dtype=np.int64))
        return cls.from_tensor(tensor.permute(2, 0, 1))

    @classmethod
    def from_pil(cls, image: PILImage.Image) -> 'Image':
        return cls.from_array(np.array(image.convert('RGB')))

    @classmethod
    def open(cls, path) -> 'Image':
        """Load an image file with Pillow."""
        with PILImage.open(path) as img:
            return cls.from_pil(img)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def pixels(self) -> torch.Tensor:
        """Live (3, height, width) view of the pixel arena. Do not keep it across removals."""
        return self._pixels[:, :self._height, :self._width]

    def get_pixel(self, column: int, row: int) -> Pixel:
        if not (0 <= column < self._width and 0 <= row < self._height):
            raise IndexError(
                f"Pixel ({column}, {row}) outside {self._width}x{self._height} image")
        red, green, blue = self._pixels[:, row, column].tolist()
        return Pixel(red, green, blue)

    def remove_seam(self, seam: Sequence[int], direction: str = 'vertical'):
        """
        Remove one pixel per row (vertical) or per column (horizontal).

        The seam is trusted here; SeamCarver validates it first.
        """
        remove_seam_inplace(self._pixels, seam, direction, self._height, self._width)
        if direction == 'vertical':
            self._width -= 1
        else:
            self._height -= 1

    def copy(self) -> 'Image':
        return Image.from_tensor(self.pixels)

    def to_tensor(self) -> torch.Tensor:
        """Copy of the pixels as an int64 tensor (3, H, W)."""
        return self.pixels.clone()

    def to_columns(self) -> List[List[Pixel]]:
        table = self.pixels.permute(2, 1, 0).tolist()
        return [[Pixel(*pixel) for pixel in column] for column in table]

    def to_array(self) -> np.ndarray:
        """Pixels as an (H, W, 3) uint8 array, clipped to [0, 255]."""
        array = self.pixels.permute(1, 2, 0).numpy()
        return array.clip(0, 255).astype(np.uint8)

    def to_pil(self) -> PILImage.Image:
        return PILImage.fromarray(self.to_array())

    def save(self, path):
        self.to_pil().save(path)

    def __eq__(self, other):
        if not isinstance(other, Image):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height) and \
            torch.equal(self.pixels, other.pixels)

    def __repr__(self):
        return f"Image(width={self._width}, height={self._height})"
