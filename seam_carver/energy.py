"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

We use the dual-gradient energy: for a pixel at (column c, row r),

    Δx² = Σ_channels (I(c+1, r) - I(c-1, r))²
    Δy² = Σ_channels (I(c, r+1) - I(c, r-1))²
    E(c, r) = sqrt(Δx² + Δy²)

Neighbors wrap around the opposite edge (toroidal boundary), always using
the current image dimensions.
"""

import torch


def wrap_index(index: int, size: int) -> int:
    """Toroidal neighbor index: -1 maps to size - 1, size maps to 0."""
    return index % size


def dual_gradient_energy(pixels: torch.Tensor,
                         dtype: torch.dtype = torch.float64) -> torch.Tensor:
    """
    Compute the energy of every pixel.

    Channel differences are accumulated in int64 and converted once before the
    square root, so the result matches pixel_energy_at bit for bit.

    Args:
        pixels: Integer image tensor (3, H, W)
        dtype: Floating point type of the result

    Returns:
        Energy map (H, W)
    """
    p = pixels.to(torch.int64)

    # roll(-1) brings the next neighbor into place, roll(1) the previous one
    dy = torch.roll(p, shifts=-1, dims=1) - torch.roll(p, shifts=1, dims=1)
    dx = torch.roll(p, shifts=-1, dims=2) - torch.roll(p, shifts=1, dims=2)

    squared = (dx * dx + dy * dy).sum(dim=0)
    return squared.to(dtype).sqrt()


def pixel_energy_at(pixels: torch.Tensor, columns: torch.Tensor, rows: torch.Tensor,
                    dtype: torch.dtype = torch.float64) -> torch.Tensor:
    """
    Compute the energy of selected pixels only.

    Args:
        pixels: Integer image tensor (3, H, W)
        columns: Column indices (N,)
        rows: Row indices (N,)
        dtype: Floating point type of the result

    Returns:
        Energy values (N,)
    """
    _, H, W = pixels.shape
    p = pixels.to(torch.int64)

    row_next = p[:, (rows + 1) % H, columns]
    row_prev = p[:, (rows + H - 1) % H, columns]
    col_next = p[:, rows, (columns + 1) % W]
    col_prev = p[:, rows, (columns + W - 1) % W]

    dy = row_next - row_prev
    dx = col_next - col_prev

    squared = (dx * dx + dy * dy).sum(dim=0)
    return squared.to(dtype).sqrt()
