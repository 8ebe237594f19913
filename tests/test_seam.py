"""Tests for seam computation algorithms."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seam_carver.exceptions import InvalidSeam
from seam_carver.seam import (clamp_step, cumulative_energy, backtrack_seam,
                              validate_seam, remove_seam_inplace)


class TestClampStep:
    @pytest.mark.parametrize("index, step, size, expected", [
        (0, -1, 5, 0),
        (0, 0, 5, 0),
        (0, 1, 5, 1),
        (4, 1, 5, 4),
        (4, -1, 5, 3),
        (2, 1, 5, 3),
        (0, 1, 1, 0),
        (0, -1, 1, 0),
    ])
    def test_stays_inside_bounds(self, index, step, size, expected):
        assert clamp_step(index, step, size) == expected


class TestCumulativeEnergy:
    def test_first_row_is_energy(self):
        torch.manual_seed(42)
        energy = torch.rand(6, 8, dtype=torch.float64)
        path = cumulative_energy(energy, direction='vertical')
        assert torch.equal(path[0], energy[0])

    def test_recurrence_wraps_around_edges(self):
        """The last column can continue from the first column of the row above."""
        energy = torch.tensor([[0.0, 5.0, 9.0],
                               [1.0, 1.0, 1.0]], dtype=torch.float64)
        path = cumulative_energy(energy, direction='vertical')
        assert path[1].tolist() == [1.0, 1.0, 1.0]

    def test_horizontal_matches_transposed_vertical(self):
        torch.manual_seed(42)
        energy = torch.rand(5, 7, dtype=torch.float64)
        horizontal = cumulative_energy(energy, direction='horizontal')
        vertical = cumulative_energy(energy.t().contiguous(), direction='vertical')
        assert torch.equal(horizontal, vertical.t())
        assert torch.equal(horizontal[:, 0], energy[:, 0])

    def test_fills_out_in_place(self):
        energy = torch.ones(4, 4, dtype=torch.float64)
        arena = torch.zeros(6, 6, dtype=torch.float64)
        cumulative_energy(energy, direction='vertical', out=arena[:4, :4])
        assert arena[3, :4].tolist() == [4.0, 4.0, 4.0, 4.0]
        assert (arena[4:] == 0).all()

    def test_invalid_direction(self):
        with pytest.raises(ValueError):
            cumulative_energy(torch.ones(3, 3), direction='diagonal')


class TestBacktrackSeam:
    def test_seam_follows_zero_energy_column(self):
        H, W = 20, 20
        energy = torch.ones(H, W, dtype=torch.float64)
        energy[:, 10] = 0.0
        seam = backtrack_seam(cumulative_energy(energy), direction='vertical')
        assert (seam == 10).all(), f"Expected all 10, got {seam.tolist()}"

    def test_seam_follows_zero_energy_row(self):
        H, W = 20, 20
        energy = torch.ones(H, W, dtype=torch.float64)
        energy[10, :] = 0.0
        path = cumulative_energy(energy, direction='horizontal')
        seam = backtrack_seam(path, direction='horizontal')
        assert (seam == 10).all()

    def test_seam_follows_diagonal_valley(self):
        H, W = 15, 20
        energy = torch.ones(H, W, dtype=torch.float64) * 10.0
        for i in range(H):
            energy[i, 3 + i] = 0.0
        seam = backtrack_seam(cumulative_energy(energy), direction='vertical')
        assert seam.tolist() == [3 + i for i in range(H)]

    def test_uniform_energy_picks_first_minimum(self):
        energy = torch.ones(5, 6, dtype=torch.float64)
        seam = backtrack_seam(cumulative_energy(energy), direction='vertical')
        assert seam.tolist() == [0] * 5

    def test_candidate_order_prefers_left_over_right(self):
        """Equal cheaper candidates on both sides: the -1 step is checked first."""
        path = torch.tensor([[0.0, 5.0, 0.0],
                             [9.0, 1.0, 9.0]], dtype=torch.float64)
        seam = backtrack_seam(path, direction='vertical')
        assert seam.tolist() == [0, 1]

    def test_same_index_wins_ties(self):
        path = torch.tensor([[2.0, 2.0, 2.0],
                             [9.0, 1.0, 9.0]], dtype=torch.float64)
        seam = backtrack_seam(path, direction='vertical')
        assert seam.tolist() == [1, 1]

    def test_backtracking_clamps_at_edges(self):
        """The recurrence reaches column 0 through the wrapped last column,
        but the seam itself never jumps across the image."""
        energy = torch.tensor([[9.0, 9.0, 0.0],
                               [0.0, 9.0, 9.0],
                               [0.0, 9.0, 9.0]], dtype=torch.float64)
        path = cumulative_energy(energy)
        assert path[2, 0].item() == 0.0
        seam = backtrack_seam(path, direction='vertical')
        assert seam.tolist() == [0, 0, 0]

    def test_seam_continuity(self):
        torch.manual_seed(42)
        energy = torch.rand(50, 40, dtype=torch.float64)
        for direction in ('vertical', 'horizontal'):
            seam = backtrack_seam(cumulative_energy(energy, direction), direction)
            diffs = torch.abs(seam[1:] - seam[:-1])
            assert diffs.max() <= 1

    def test_seam_lengths(self):
        energy = torch.rand(30, 40, dtype=torch.float64)
        assert backtrack_seam(cumulative_energy(energy, 'vertical'), 'vertical').shape == (30,)
        assert backtrack_seam(cumulative_energy(energy, 'horizontal'),
                              'horizontal').shape == (40,)

    def test_single_column(self):
        energy = torch.rand(6, 1, dtype=torch.float64)
        seam = backtrack_seam(cumulative_energy(energy), direction='vertical')
        assert seam.tolist() == [0] * 6


class TestValidateSeam:
    def test_returns_plain_ints(self):
        indices = validate_seam(torch.tensor([1, 2, 2, 1]), length=4, bound=3)
        assert indices == [1, 2, 2, 1]
        assert all(isinstance(i, int) for i in indices)

    def test_accepts_lists(self):
        assert validate_seam([0, 0, 1], length=3, bound=2) == [0, 0, 1]

    def test_wrong_length(self):
        with pytest.raises(InvalidSeam, match="length"):
            validate_seam([0, 0], length=3, bound=5)

    @pytest.mark.parametrize("seam, position", [
        ([0, -1, 0], 1),
        ([3, 4, 5], 2),
    ])
    def test_out_of_range(self, seam, position):
        with pytest.raises(InvalidSeam) as exc_info:
            validate_seam(seam, length=3, bound=5, direction='horizontal')
        assert exc_info.value.position == position
        assert exc_info.value.direction == 'horizontal'

    def test_jump_larger_than_one(self):
        with pytest.raises(InvalidSeam, match="jumps") as exc_info:
            validate_seam([0, 1, 3], length=3, bound=5)
        assert exc_info.value.position == 2

    def test_rejects_float_indices(self):
        with pytest.raises(InvalidSeam):
            validate_seam([0.0, 1.0], length=2, bound=3)

    def test_index_too_large_for_int64(self):
        with pytest.raises(InvalidSeam):
            validate_seam([2 ** 70, 0], length=2, bound=3)

    def test_rejects_two_dimensional_input(self):
        with pytest.raises(InvalidSeam):
            validate_seam([[0, 1], [1, 1]], length=2, bound=3)

    def test_invalid_seam_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_seam([9], length=1, bound=2)


class TestRemoveSeamInplace:
    def test_with_varying_positions(self):
        """Seam that zigzags removes correct element from each row."""
        data = torch.arange(6, dtype=torch.int64).unsqueeze(0).expand(3, 6).clone()
        remove_seam_inplace(data, [2, 3, 2], 'vertical', height=3, width=6)

        assert data[0, :5].tolist() == [0, 1, 3, 4, 5]
        assert data[1, :5].tolist() == [0, 1, 2, 4, 5]
        assert data[2, :5].tolist() == [0, 1, 3, 4, 5]

    def test_horizontal_with_channels(self):
        data = torch.arange(4, dtype=torch.int64).view(1, 4, 1).expand(3, 4, 3).clone()
        remove_seam_inplace(data, [0, 1, 3], 'horizontal', height=4, width=3)

        assert data[0, :3, 0].tolist() == [1, 2, 3]
        assert data[1, :3, 1].tolist() == [0, 2, 3]
        assert data[2, :3, 2].tolist() == [0, 1, 2]

    def test_only_touches_live_window(self):
        data = torch.zeros(4, 6, dtype=torch.int64)
        data[:, 4:] = -1
        data[:3, :4] = torch.arange(4)
        remove_seam_inplace(data, [1, 1, 1], 'vertical', height=3, width=4)
        assert data[0, :3].tolist() == [0, 2, 3]
        assert (data[:, 4:] == -1).all()
        assert data[3, :4].tolist() == [0, 0, 0, 0]
