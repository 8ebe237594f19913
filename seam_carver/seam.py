"""
Seam computation algorithms.

Dynamic programming over the energy map:
1. cumulative_energy builds the path matrix, wrapping around the edges
2. backtrack_seam walks it back from the cheapest end, clamping at the edges

The two boundary policies differ on purpose: the recurrence treats the grid
as a torus, but a seam never jumps across the image.
"""

from typing import List, Optional, Sequence

import torch

from .exceptions import InvalidSeam

DIRECTIONS = ('vertical', 'horizontal')

# Backtracking candidate order; the first strictly smaller value wins.
BACKTRACK_STEPS = (0, -1, 1)


def check_direction(direction: str):
    if direction not in DIRECTIONS:
        raise ValueError(f"Invalid direction: {direction}")


def clamp_step(index: int, step: int, size: int) -> int:
    """Move index by step, staying inside [0, size - 1]."""
    return min(max(index + step, 0), size - 1)


def cumulative_energy(energy: torch.Tensor, direction: str = 'vertical',
                      out: Optional[torch.Tensor] = None) -> torch.Tensor:
    """
    Minimum cumulative energy of a monotone path reaching each pixel.

    For vertical seams:
        M[0, j] = E[0, j]
        M[i, j] = E[i, j] + min(M[i-1, j], M[i-1, j-1 mod W], M[i-1, j+1 mod W])

    Horizontal seams use the same recurrence column by column.

    Args:
        energy: Energy map (H, W)
        direction: 'vertical' or 'horizontal'
        out: Optional (H, W) tensor to fill in place

    Returns:
        Path matrix (H, W)
    """
    check_direction(direction)
    if out is None:
        out = torch.empty_like(energy)

    if direction == 'horizontal':
        cumulative_energy(energy.t(), 'vertical', out=out.t())
        return out

    H, W = energy.shape
    out[0] = energy[0]

    for i in range(1, H):
        prev = out[i - 1]
        # roll(1)[j] = prev[j-1], roll(-1)[j] = prev[j+1], both wrapped
        from_left = torch.roll(prev, shifts=1)
        from_right = torch.roll(prev, shifts=-1)
        out[i] = energy[i] + torch.min(torch.min(prev, from_left), from_right)

    return out


def backtrack_seam(path: torch.Tensor, direction: str = 'vertical') -> torch.Tensor:
    """
    Extract the minimal seam from a path matrix.

    The seam ends at the first minimum of the last row (vertical) or last
    column (horizontal). Each earlier position is the cheapest of the same,
    previous and next index, in that order, clamped at the edges.

    Args:
        path: Path matrix (H, W) from cumulative_energy
        direction: 'vertical' or 'horizontal'

    Returns:
        Seam indices - for vertical: (H,) with column index per row
                      for horizontal: (W,) with row index per column
    """
    check_direction(direction)
    if direction == 'horizontal':
        return backtrack_seam(path.t(), 'vertical')

    H, W = path.shape
    seam = torch.zeros(H, dtype=torch.long)
    # argmin returns the first minimal index
    seam[H - 1] = torch.argmin(path[H - 1]).item()

    for i in range(H - 1, 0, -1):
        col = seam[i].item()
        best_col = col
        best_value = float('inf')
        for step in BACKTRACK_STEPS:
            candidate = clamp_step(col, step, W)
            value = path[i - 1, candidate].item()
            if value < best_value:
                best_value = value
                best_col = candidate
        seam[i - 1] = best_col

    return seam


def validate_seam(seam: Sequence[int], length: int, bound: int,
                  direction: str = 'vertical') -> List[int]:
    """
    Check that a seam fits the current image and return it as a list of ints.

    Args:
        seam: Seam indices
        length: Required seam length (height for vertical, width for horizontal)
        bound: Exclusive upper bound for each index
        direction: 'vertical' or 'horizontal', used in error messages

    Raises:
        InvalidSeam: on wrong shape or type, out-of-range index, or a step larger than 1
    """
    try:
        values = torch.as_tensor(seam)
    except (TypeError, ValueError, RuntimeError) as e:
        raise InvalidSeam(f"Seam is not a sequence of indices: {e}", direction) from e
    if values.dim() != 1:
        raise InvalidSeam(f"Seam must be one-dimensional, got shape {tuple(values.shape)}",
                          direction)
    if values.numel() > 0 and (values.is_floating_point() or values.is_complex()
                               or values.dtype == torch.bool):
        raise InvalidSeam(f"Seam indices must be integers, got {values.dtype}", direction)

    indices = values.tolist()
    if len(indices) != length:
        raise InvalidSeam(f"Seam length {len(indices)} does not match expected {length}",
                          direction)

    for position, index in enumerate(indices):
        if not 0 <= index < bound:
            raise InvalidSeam(f"Seam index {index} outside [0, {bound - 1}]",
                              direction, position)
        if position > 0 and abs(index - indices[position - 1]) > 1:
            raise InvalidSeam(
                f"Seam jumps from {indices[position - 1]} to {index}",
                direction, position)

    return indices


def remove_seam_inplace(data: torch.Tensor, seam: Sequence[int], direction: str,
                        height: int, width: int):
    """
    Remove a seam from the live (height, width) window of a tensor, in place.

    Elements after the seam shift one step towards it; the freed last column
    (vertical) or last row (horizontal) is left as stale storage.

    Args:
        data: Tensor (..., H0, W0) with H0 >= height, W0 >= width
        seam: Seam indices, assumed valid
        direction: 'vertical' or 'horizontal'
        height: Current live height
        width: Current live width
    """
    check_direction(direction)

    if direction == 'vertical':
        # Remove one element from each row
        for i, col in enumerate(seam):
            data[..., i, col:width - 1] = data[..., i, col + 1:width].clone()
    else:
        # Remove one element from each column
        for j, row in enumerate(seam):
            data[..., row:height - 1, j] = data[..., row + 1:height, j].clone()
