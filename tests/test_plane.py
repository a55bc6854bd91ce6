"""Tests for sampling planes and their grids."""

import numpy as np
import pytest

from sonicfield.core.geometry import Point3D
from sonicfield.sampling.plane import SamplingPlane
from sonicfield.sources import RoomDimensions


class TestSamplingPlane:
    def test_defaults(self):
        plane = SamplingPlane()
        assert plane.kind == "top_down"
        assert plane.resolution == 0.5
        assert plane.listener_height == 1.4

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown plane kind"):
            SamplingPlane("front")

    @pytest.mark.parametrize("resolution", [0.0, -0.5])
    def test_non_positive_resolution(self, resolution):
        with pytest.raises(ValueError, match="resolution"):
            SamplingPlane(resolution=resolution)


class TestTopDownGrid:
    def test_shape_and_cell_centers(self, room):
        grid = SamplingPlane("top_down", resolution=0.5).grid_for(room)
        assert grid.shape == (40, 30)
        assert grid.num_cells == 1200
        np.testing.assert_allclose(grid.u_coords[:2], [0.25, 0.75])
        np.testing.assert_allclose(grid.v_coords[-1], 19.75)

    def test_point_at_maps_rows_to_depth(self, room):
        grid = SamplingPlane("top_down", resolution=1.0).grid_for(room)
        assert grid.point_at(0, 0) == Point3D(0.5, 1.4, 0.5)
        assert grid.point_at(3, 7) == Point3D(7.5, 1.4, 3.5)

    def test_cells_stretch_to_tile_the_room(self):
        grid = SamplingPlane(resolution=0.4).grid_for(RoomDimensions(1.0, 1.0, 1.0))
        # ceil(1.0 / 0.4) = 3 cells of 1/3 m
        assert grid.shape == (3, 3)
        np.testing.assert_allclose(grid.u_coords, [1 / 6, 0.5, 5 / 6])

    def test_listener_height(self, room):
        grid = SamplingPlane(listener_height=1.7).grid_for(room)
        assert grid.point_at(0, 0).y == 1.7


class TestSideElevationGrid:
    def test_axes(self, room):
        grid = SamplingPlane("side_elevation", resolution=0.5).grid_for(room)
        # rows follow height, columns follow depth
        assert grid.shape == (12, 40)

    def test_point_at_uses_centerline(self, room):
        grid = SamplingPlane("side_elevation", resolution=1.0).grid_for(room)
        assert grid.point_at(2, 5) == Point3D(7.5, 2.5, 5.5)

    def test_section_x(self, room):
        grid = SamplingPlane("side_elevation", resolution=1.0, section_x=3.0).grid_for(room)
        assert grid.point_at(0, 0).x == 3.0


class TestCellLookup:
    def test_cell_for_round_trips_point_at(self, room):
        grid = SamplingPlane(resolution=1.0).grid_for(room)
        point = grid.point_at(4, 9)
        assert grid.cell_for(point.x, point.z) == (4, 9)

    def test_cell_for_clamps(self, room):
        grid = SamplingPlane(resolution=1.0).grid_for(room)
        assert grid.cell_for(-5.0, 100.0) == (grid.shape[0] - 1, 0)
