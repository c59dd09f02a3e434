"""
Tests for the analysis state container and its contour cache.
"""

import logging

import numpy as np
import pytest

from fabricanalysis.core import mat3
from fabricanalysis.core.conversions import NADIR, line_to_dcos
from fabricanalysis.model.state import AnalysisState, ContourCacheState, ContourOptions, IdCounter


@pytest.fixture
def state(cluster):
    s = AnalysisState(id_counter=IdCounter("test"))
    s.set_data(cluster)
    s.set_contour_options(grid_size=21, levels=[2, 4])
    return s


# =============================================================================
# Identifiers
# =============================================================================

class TestIdCounter:

    def test_sequence(self):
        counter = IdCounter("site")
        assert counter.next_id() == "site-0"
        assert counter.next_id() == "site-1"

    def test_shared_counter(self):
        counter = IdCounter("demo")
        first = AnalysisState(id_counter=counter)
        second = AnalysisState(id_counter=counter)
        assert first.uid == "demo-0"
        assert second.uid == "demo-1"

    def test_private_counters_are_independent(self):
        assert AnalysisState().uid == "fabric-0"
        assert AnalysisState().uid == "fabric-0"


# =============================================================================
# Cache state machine
# =============================================================================

class TestContourCache:

    def test_new_state_is_stale_and_empty(self):
        s = AnalysisState()
        assert s.cache_state is ContourCacheState.STALE
        assert s.is_stale
        assert s.contours == []
        assert s.dcos.shape == (0, 3)

    def test_recompute_marks_clean(self, state):
        result = state.recompute()
        assert state.cache_state is ContourCacheState.CLEAN
        assert [c.level for c in result] == [2, 4]
        assert [c.level for c in state.contours] == [2, 4]

    @pytest.mark.parametrize("mutate", [
        lambda s: s.set_data(np.array([line_to_dcos(10, 80)])),
        lambda s: s.set_projection("equal-angle"),
        lambda s: s.set_rotation(mat3.rotation_from_axis_angle([0, 0, 1], 0.3)),
        lambda s: s.set_rotation(None),
        lambda s: s.set_center(90, 45),
        lambda s: s.set_north_pole(0, 10, spin=20),
        lambda s: s.compose_rotation(mat3.rotation_from_axis_angle([1, 0, 0], 0.1)),
        lambda s: s.set_contour_options(levels=[3]),
    ])
    def test_every_mutation_marks_stale(self, state, mutate):
        state.recompute()
        mutate(state)
        assert state.cache_state is ContourCacheState.STALE

    def test_reading_does_not_recompute(self, state):
        state.recompute()
        before = state.contours
        state.set_contour_options(levels=[1, 2, 3])
        after = state.contours
        assert state.is_stale
        assert [c.level for c in after] == [c.level for c in before]

    def test_contours_returns_copy(self, state):
        state.recompute()
        state.contours.clear()
        assert len(state.contours) == 2

    def test_empty_data_recompute(self):
        s = AnalysisState()
        result = s.recompute()
        assert all(c.paths == [] for c in result)
        assert not s.is_stale

    def test_stale_transition_is_logged(self, state, caplog):
        state.recompute()
        with caplog.at_level(logging.INFO, logger="fabricanalysis"):
            state.set_projection("equal-angle")
            state.set_projection("equal-area")
        assert caplog.text.count("Contours stale") == 1
        assert "[test-0]" in caplog.text


# =============================================================================
# Projection, rotation and options
# =============================================================================

class TestConfiguration:

    def test_unknown_projection_on_create(self):
        with pytest.raises(KeyError):
            AnalysisState(projection="mercator")

    def test_unknown_projection_keeps_previous(self, state):
        with pytest.raises(KeyError):
            state.set_projection("mercator")
        assert state.projection == "equal-area"

    def test_set_center(self, state):
        state.set_center(120, 30)
        np.testing.assert_allclose(state.rotation @ line_to_dcos(120, 30), NADIR, atol=1e-12)

    def test_compose_rotation(self, state):
        a = mat3.rotation_from_axis_angle([0, 0, 1], 0.2)
        b = mat3.rotation_from_axis_angle([1, 0, 0], 0.5)
        state.compose_rotation(a)
        state.compose_rotation(b)
        np.testing.assert_allclose(state.rotation, b @ a, atol=1e-12)

    def test_reorthonormalize(self, state):
        r = mat3.rotation_from_axis_angle([0, 1, 0], 0.7)
        for _ in range(200):
            state.compose_rotation(r)
        state.rotation = state.rotation * (1.0 + 1e-6)
        state.reorthonormalize()
        np.testing.assert_allclose(state.rotation @ state.rotation.T, np.eye(3), atol=1e-12)
        assert state.is_stale

    def test_reorthonormalize_without_rotation(self, state):
        state.recompute()
        state.reorthonormalize()
        assert state.rotation is None
        assert not state.is_stale

    def test_contour_options(self, state):
        state.set_contour_options(sigma=15.0)
        assert state.contour_options == ContourOptions(grid_size=21, levels=(2.0, 4.0), sigma=15.0)
        state.set_contour_options(grid_size=31)
        assert state.contour_options.sigma is None
        assert state.contour_options.grid_size == 31

    def test_rotation_is_used_by_recompute(self, state):
        plain = state.recompute()
        state.set_center(0, 30)
        rotated = state.recompute()
        assert not np.allclose(plain[0].paths[0][0], rotated[0].paths[0][0])


# =============================================================================
# Statistics shortcuts
# =============================================================================

class TestStatistics:

    def test_fisher(self, state):
        assert state.fisher().n == 8

    def test_principal_axes(self, state):
        assert state.principal_axes().K > 1

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            AnalysisState().fisher()
