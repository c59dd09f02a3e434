"""
Tests for attitude conversions, rake, intersections and view rotations.
"""

import numpy as np
import pytest

from fabricanalysis.core import mat3
from fabricanalysis.core.conversions import (
    NADIR,
    dcos_to_line,
    dcos_to_plane,
    line_on_plane,
    line_to_dcos,
    lines_to_dcos,
    minimal_rotation,
    plane_intersection_line,
    plane_to_dcos,
    planes_to_dcos,
    rake_to_line,
    rotate_dcos,
    rotate_dcos_array,
    rotation_from_center,
    rotation_from_north_pole,
    strike_to_dip_direction,
)
from fabricanalysis.model.primitives import Line, Plane


# =============================================================================
# Planes and lines
# =============================================================================

class TestPlaneConversion:

    def test_known_pole(self):
        np.testing.assert_allclose(plane_to_dcos(90, 45), [-np.sqrt(0.5), 0, -np.sqrt(0.5)], atol=1e-12)

    def test_horizontal_plane_pole_is_nadir(self):
        np.testing.assert_allclose(plane_to_dcos(0, 0), NADIR, atol=1e-12)

    def test_pole_is_unit_lower_hemisphere(self):
        for dd in range(0, 360, 30):
            for dip in range(0, 91, 15):
                d = plane_to_dcos(dd, dip)
                assert np.linalg.norm(d) == pytest.approx(1.0)
                assert d[2] <= 1e-12

    def test_round_trip(self):
        for dd in range(0, 360, 15):
            for dip in range(5, 90, 10):
                back_dd, back_dip = dcos_to_plane(plane_to_dcos(dd, dip))
                assert back_dd == pytest.approx(dd, abs=1e-9)
                assert back_dip == pytest.approx(dip, abs=1e-9)

    def test_upper_hemisphere_input_is_folded(self):
        dd, dip = dcos_to_plane(-plane_to_dcos(200, 30))
        assert dd == pytest.approx(200)
        assert dip == pytest.approx(30)

    def test_strike_to_dip_direction(self):
        assert strike_to_dip_direction(0, 30) == (90, 30)
        assert strike_to_dip_direction(300, 10) == (30, 10)


class TestLineConversion:

    def test_known_line(self):
        np.testing.assert_allclose(line_to_dcos(0, 0), [0, 1, 0], atol=1e-12)
        np.testing.assert_allclose(line_to_dcos(90, 30), [np.cos(np.pi / 6), 0, -0.5], atol=1e-12)

    def test_round_trip(self):
        for trend in range(0, 360, 15):
            for plunge in range(0, 90, 10):
                back_trend, back_plunge = dcos_to_line(line_to_dcos(trend, plunge))
                assert back_trend == pytest.approx(trend, abs=1e-9)
                assert back_plunge == pytest.approx(plunge, abs=1e-9)

    def test_upward_vector_is_folded(self):
        trend, plunge = dcos_to_line([0, 0.5, np.sqrt(0.75)])
        assert trend == pytest.approx(180)
        assert plunge == pytest.approx(60)

    def test_batch(self):
        planes = planes_to_dcos([(90, 45), (180, 10)])
        lines = lines_to_dcos([(0, 0), (90, 30), (45, 60)])
        assert planes.shape == (2, 3)
        assert lines.shape == (3, 3)
        np.testing.assert_allclose(planes[1], plane_to_dcos(180, 10))
        assert planes_to_dcos([]).shape == (0, 3)


class TestPrimitives:

    def test_plane_round_trip(self):
        plane = Plane.from_dcos(Plane(135, 40).to_dcos())
        assert plane.dip_direction == pytest.approx(135)
        assert plane.dip == pytest.approx(40)

    def test_line_round_trip(self):
        line = Line.from_dcos(Line(310, 25).to_dcos())
        assert line.trend == pytest.approx(310)
        assert line.plunge == pytest.approx(25)

    def test_plane_intersection(self):
        line = Plane(90, 45).intersection(Plane(0, 45))
        assert isinstance(line, Line)
        assert Plane(90, 45).intersection(Plane(90, 45)) is None

    def test_frozen(self):
        with pytest.raises(AttributeError):
            Plane(10, 20).dip = 30


# =============================================================================
# Rake
# =============================================================================

class TestRake:

    def test_zero_rake_is_strike(self):
        trend, plunge = rake_to_line(90, 30, 0)
        assert trend == pytest.approx(0, abs=1e-9)
        assert plunge == pytest.approx(0, abs=1e-9)

    def test_ninety_rake_is_down_dip(self):
        trend, plunge = rake_to_line(90, 30, 90)
        assert trend == pytest.approx(90)
        assert plunge == pytest.approx(30)

    def test_line_lies_on_plane(self):
        pole = plane_to_dcos(120, 50)
        for rake in (10, 45, 80, 135):
            line = line_to_dcos(*rake_to_line(120, 50, rake))
            assert abs(np.dot(pole, line)) < 1e-12

    def test_line_on_plane_inverts_rake(self):
        for rake in (15, 45, 75):
            trend, plunge = rake_to_line(120, 50, rake)
            assert line_on_plane(120, 50, trend, plunge) == pytest.approx(rake, abs=1e-9)


# =============================================================================
# Intersections and rotations
# =============================================================================

class TestIntersection:

    def test_parallel_planes(self):
        assert plane_intersection_line(90, 45, 90, 45) is None

    def test_opposite_dips_meet_along_strike(self):
        trend, plunge = plane_intersection_line(90, 45, 270, 45)
        assert min(trend % 180.0, 180.0 - trend % 180.0) < 1e-9
        assert plunge == pytest.approx(0, abs=1e-9)

    def test_intersection_lies_on_both_planes(self):
        trend, plunge = plane_intersection_line(30, 60, 150, 40)
        line = line_to_dcos(trend, plunge)
        assert abs(np.dot(line, plane_to_dcos(30, 60))) < 1e-12
        assert abs(np.dot(line, plane_to_dcos(150, 40))) < 1e-12


class TestRotations:

    def test_rotate_dcos_degrees(self):
        np.testing.assert_allclose(rotate_dcos([1, 0, 0], [0, 0, 1], 90), [0, 1, 0], atol=1e-12)

    def test_rotate_dcos_array_matches_single(self):
        data = lines_to_dcos([(10, 20), (200, 70), (300, 5)])
        axis = [0, 0, 1]
        rotated = rotate_dcos_array(data, axis, 35)
        for row, source in zip(rotated, data):
            np.testing.assert_allclose(row, rotate_dcos(source, axis, 35), atol=1e-12)

    def test_minimal_rotation_maps_source_to_target(self):
        source = line_to_dcos(40, 20)
        target = line_to_dcos(220, 70)
        r = minimal_rotation(source, target)
        np.testing.assert_allclose(r @ source, target, atol=1e-12)

    def test_minimal_rotation_parallel_is_identity(self):
        np.testing.assert_array_equal(minimal_rotation([0, 0, -1], [0, 0, -1]), np.eye(3))

    def test_minimal_rotation_antipodal_is_half_turn(self):
        r = minimal_rotation([0, 0, 1], [0, 0, -1])
        np.testing.assert_allclose(r @ [0, 0, 1], [0, 0, -1], atol=1e-12)
        np.testing.assert_allclose(r @ r.T, np.eye(3), atol=1e-12)

    def test_center_goes_to_nadir(self):
        for trend, plunge in ((0, 0), (75, 30), (250, 60)):
            r = rotation_from_center(trend, plunge)
            np.testing.assert_allclose(r @ line_to_dcos(trend, plunge), NADIR, atol=1e-12)

    def test_center_at_nadir_is_identity(self):
        np.testing.assert_allclose(rotation_from_center(0, 90), np.eye(3), atol=1e-12)

    def test_north_pole_placement(self):
        for spin in (0, 30, 90):
            r = rotation_from_north_pole(120, 40, spin)
            np.testing.assert_allclose(r @ [0, 1, 0], line_to_dcos(120, 40), atol=1e-12)
            np.testing.assert_allclose(r @ r.T, np.eye(3), atol=1e-12)

    def test_spin_changes_rotation(self):
        a = rotation_from_north_pole(120, 40, 0)
        b = rotation_from_north_pole(120, 40, 45)
        assert not np.allclose(a, b)
        np.testing.assert_allclose(mat3.orthonormalize(b), b, atol=1e-12)
