"""Shared test fixtures for the seam carving test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seam_carver.image import Image


def make_random_image(W, H, seed=42):
    """Random RGB image with channels in [0, 255]."""
    generator = torch.Generator().manual_seed(seed)
    return Image.from_tensor(torch.randint(0, 256, (3, H, W), generator=generator))


def make_constant_image(W, H, value=(90, 120, 30)):
    """Solid-color image."""
    pixels = torch.tensor(value, dtype=torch.int64).view(3, 1, 1).expand(3, H, W)
    return Image.from_tensor(pixels)


def make_gray_image(values):
    """Image from a nested (H, W) list of gray levels, same value in every channel."""
    gray = torch.tensor(values, dtype=torch.int64)
    return Image.from_tensor(gray.unsqueeze(0).expand(3, -1, -1))


@pytest.fixture
def center_dot_image():
    """3x3 dark image with one bright pixel in the middle."""
    return make_gray_image([[0, 0, 0],
                            [0, 255, 0],
                            [0, 0, 0]])


@pytest.fixture
def random_image():
    """Random 12x9 image."""
    return make_random_image(12, 9)
