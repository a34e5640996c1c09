"""
Unit tests for the ghost-cell extrapolation
"""

import jax.numpy as jnp
import numpy as np
import pytest

import boundary_conditions as bc
from grid import Grid


@pytest.fixture(params=[2, 4])
def grid(request):
    return Grid(3, 3, 8, 100.0, 100.0, z=np.array([20.0, 70.0, 150.0, 250.0, 370.0, 500.0, 650.0, 800.0]),
                swspatialorder=request.param)


class TestProfileGhosts:
    """Test the extrapolation of full- and half-level profiles"""

    def test_surface_top_of_linear_profile(self, grid):
        profile = 300.0 + 0.005 * grid.z
        bottom, top = bc.extrapolate_surface_top(profile, grid)
        assert bottom == pytest.approx(300.0)
        assert top == pytest.approx(300.0 + 0.005 * grid.zsize)

    def test_first_ghost_invariant(self, grid):
        ks, ke = grid.kstart, grid.kend
        profile = np.cos(grid.z / 300.0)
        filled = bc.set_profile_ghosts(profile, 1.5, 0.5, grid)
        assert filled[ks - 1] == pytest.approx(2.0 * 1.5 - filled[ks])
        assert filled[ke] == pytest.approx(2.0 * 0.5 - filled[ke - 1])
        # the values inside the domain are kept
        assert np.array_equal(filled[ks:ke], profile[ks:ke])

    def test_linear_profile_is_exact(self, grid):
        ks, ke = grid.kstart, grid.kend
        exact = 300.0 + 0.005 * grid.z
        profile = exact.copy()
        profile[:ks] = 0.0
        profile[ke:] = 0.0
        bottom, top = bc.extrapolate_surface_top(profile, grid)
        assert np.allclose(bc.set_profile_ghosts(profile, bottom, top, grid), exact)

    def test_half_profile(self, grid):
        ks, ke = grid.kstart, grid.kend
        exact = 1.0e5 - 11.0 * grid.zh
        profileh = exact.copy()
        profileh[:ks] = 0.0
        profileh[ke + 1:] = 0.0
        assert np.allclose(bc.set_half_profile_ghosts(profileh, grid), exact)


class TestFieldGhosts:
    """Test the vertical ghost cells of 3-D fields"""

    def test_linear_field(self, grid):
        ks, ke = grid.kstart, grid.kend
        exact = jnp.broadcast_to(jnp.asarray(290.0 + 0.003 * grid.z), grid.field_shape())
        data = jnp.zeros(grid.field_shape()).at[:, :, ks:ke].set(exact[:, :, ks:ke])
        databot = jnp.full(grid.plane_shape(), 290.0)
        assert jnp.allclose(bc.set_field_ghosts(data, databot, grid), exact)
