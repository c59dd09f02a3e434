"""
Tests for attitude text parsing.
"""

import logging

import numpy as np
import pytest

from fabricanalysis.core.conversions import line_to_dcos, plane_to_dcos
from fabricanalysis.model import io


# =============================================================================
# Single tokens
# =============================================================================

class TestParseDirection:

    @pytest.mark.parametrize("token, expected", [
        ("120", 120.0),
        ("120.5", 120.5),
        ("400", 40.0),
        ("-30", 330.0),
        ("N45E", 45.0),
        ("n45e", 45.0),
        ("N30W", 330.0),
        ("S30W", 210.0),
        ("S30E", 150.0),
        ("N10", 10.0),
        ("S20", 160.0),
        ("N0W", 0.0),
    ])
    def test_valid(self, token, expected):
        assert io.parse_direction(token) == pytest.approx(expected)

    @pytest.mark.parametrize("token", ["", "E45N", "X12", "N45Q", "12a"])
    def test_invalid(self, token):
        with pytest.raises(ValueError, match="Cannot parse direction"):
            io.parse_direction(token)


class TestParseDip:

    def test_plain(self):
        assert io.parse_dip("45") == (45.0, "")

    def test_with_quadrant(self):
        assert io.parse_dip("45ne") == (45.0, "NE")
        assert io.parse_dip("12.5W") == (12.5, "W")

    @pytest.mark.parametrize("token", ["", "abc", "45NNE", "-10"])
    def test_invalid(self, token):
        with pytest.raises(ValueError, match="Cannot parse dip"):
            io.parse_dip(token)

    def test_unknown_quadrant(self):
        with pytest.raises(ValueError):
            io.quadrant_to_azimuth("EN")


class TestTranslateAttitude:

    def test_dip_direction_passthrough(self):
        assert io.translate_attitude(370, 30) == (10, 30)

    def test_strike_right_hand_rule(self):
        assert io.translate_attitude(0, 30, strike=True) == (90, 30)
        assert io.translate_attitude(300, 30, strike=True) == (30, 30)

    def test_strike_with_quadrant(self):
        assert io.translate_attitude(45, 20, "SE", strike=True) == (135, 20)
        assert io.translate_attitude(45, 20, "NW", strike=True) == (315, 20)
        assert io.translate_attitude(45, 20, "W", strike=True) == (315, 20)

    def test_quadrant_tie_goes_right_hand(self):
        assert io.translate_attitude(0, 20, "N", strike=True) == (90, 20)


# =============================================================================
# Text blocks
# =============================================================================

class TestParseBlocks:

    TEXT = """
    # station 12
    120/45
    200, 30

    310\t80
    bad line
    15
    """

    def test_parse_pairs(self):
        assert io.parse(self.TEXT) == [(120.0, 45.0), (200.0, 30.0), (310.0, 80.0)]

    def test_parse_reads_leading_number(self):
        assert io.parse("120 45NE") == [(120.0, 45.0)]
        assert io.parse("N45E/30") == []

    def test_parse_planes(self):
        poles = io.parse_planes(self.TEXT)
        assert poles.shape == (3, 3)
        np.testing.assert_allclose(poles[0], plane_to_dcos(120, 45))
        np.testing.assert_allclose(poles[2], plane_to_dcos(310, 80))

    def test_parse_planes_strike(self):
        poles = io.parse_planes("0 30\nN45E 20SE", strike=True)
        np.testing.assert_allclose(poles[0], plane_to_dcos(90, 30))
        np.testing.assert_allclose(poles[1], plane_to_dcos(135, 20))

    def test_parse_planes_quadrant_notation(self):
        poles = io.parse_planes("S30W/40")
        np.testing.assert_allclose(poles[0], plane_to_dcos(210, 40))

    def test_parse_lines(self):
        lines = io.parse_lines("10/20\n190/70")
        np.testing.assert_allclose(lines, [line_to_dcos(10, 20), line_to_dcos(190, 70)])

    def test_empty_text(self):
        assert io.parse("") == []
        assert io.parse_planes("").shape == (0, 3)
        assert io.parse_lines("# only a comment").shape == (0, 3)

    def test_skipped_lines_are_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="fabricanalysis"):
            poles = io.parse_planes("120/45\nX12/30\n200/abc")
        assert len(poles) == 1
        assert "Cannot parse direction" in caplog.text
        assert "Cannot parse dip" in caplog.text
