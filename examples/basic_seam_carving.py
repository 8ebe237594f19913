"""
Basic seam carving example.

Loads an image (or draws a synthetic one), shrinks it with SeamCarver and
saves the result. With --show, plots the energy map and the first seams.

    python examples/basic_seam_carving.py photo.jpg --width 300 --output carved.png
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import torch

from seam_carver import Image, SeamCarver


def create_ring_image(height: int, width: int) -> Image:
    """Bright ring on a dark background with a little noise."""
    y = torch.arange(height, dtype=torch.float32)
    x = torch.arange(width, dtype=torch.float32)
    yy, xx = torch.meshgrid(y, x, indexing='ij')

    cx, cy = width / 2, height / 2
    outer = min(height, width) * 0.4
    dist = torch.sqrt((xx - cx)**2 + (yy - cy)**2)
    ring = (dist >= outer * 0.5) & (dist <= outer)

    torch.manual_seed(42)
    base = torch.where(ring, torch.tensor(200.0), torch.tensor(40.0))
    noise = torch.randint(-10, 11, (3, height, width)).float()
    pixels = (base.unsqueeze(0) + noise).clamp(0, 255).to(torch.int64)
    return Image.from_tensor(pixels)


def show_seams(carver: SeamCarver, n_seams: int):
    """Plot the energy map with the next vertical and horizontal seam."""
    import matplotlib.pyplot as plt

    vertical = carver.find_vertical_seam()
    horizontal = carver.find_horizontal_seam()

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    axes[0].imshow(carver.get_image().to_array())
    axes[0].set_title(f"Image {carver.width}x{carver.height}")
    axes[1].imshow(carver.energy.numpy(), cmap='gray')
    axes[1].plot(vertical.numpy(), range(carver.height), 'r-', linewidth=1)
    axes[1].plot(range(carver.width), horizontal.numpy(), 'c-', linewidth=1)
    axes[1].set_title(f"Energy, next seams ({n_seams} to remove)")
    for ax in axes:
        ax.axis('off')
    plt.tight_layout()
    plt.show()


def main():
    parser = argparse.ArgumentParser(description="Shrink an image by seam carving")
    parser.add_argument('input', nargs='?', help="Image to carve (default: synthetic ring)")
    parser.add_argument('--width', type=int, help="Target width")
    parser.add_argument('--height', type=int, help="Target height")
    parser.add_argument('--output', default='carved.png', help="Where to save the result")
    parser.add_argument('--show', action='store_true', help="Plot energy and seams")
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    if args.input:
        print(f"Loading {args.input}...")
        image = Image.open(args.input)
    else:
        print("No input given, drawing a synthetic ring image...")
        image = create_ring_image(120, 160)

    carver = SeamCarver(image)
    target_width = args.width or carver.width * 3 // 4
    target_height = args.height or carver.height

    if args.show:
        show_seams(carver, (carver.width - target_width) + (carver.height - target_height))

    carver.carve(target_width, target_height)

    carver.get_image().save(args.output)
    print(f"Saved: {args.output} ({carver.width}x{carver.height})")


if __name__ == '__main__':
    main()
