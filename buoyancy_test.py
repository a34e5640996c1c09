"""
Unit tests for the buoyancy kernels
"""

import jax.numpy as jnp
import numpy as np
import pytest

import buoyancy as bu
import namelist_n_constants as nl
import thermo_functions as tf
from grid import Grid


def column_profiles(grid, gamma=0.003, qt_sfc=0.0):
    z = grid.z[grid.kstart:grid.kend]
    return 300.0 + gamma * z, np.full(grid.ktot, qt_sfc)


def tendency(tm):
    grid, rs, fields = tm.grid, tm.refstate, tm.fields
    wt = jnp.zeros(grid.field_shape())
    thl, qt = fields.sp["thl"].data, fields.sp["qt"].data
    if grid.swspatialorder == 2:
        return bu.calc_buoyancy_tend_2nd(wt, thl, qt, rs.prefh, rs.exnrefh, rs.thvrefh, grid)
    return bu.calc_buoyancy_tend_4th(wt, thl, qt, rs.pref, rs.thvrefh, grid)


@pytest.fixture(params=[2, 4])
def grid(request):
    return Grid(4, 3, 10, 100.0, 100.0, dz=100.0, swspatialorder=request.param)


class TestBuoyancyTendency:
    """Test the buoyancy term of the w equation"""

    def test_reference_state_is_neutral(self, grid, make_thermo):
        """Fields equal to the reference profiles have no buoyancy"""
        tm = make_thermo(grid, *column_profiles(grid, qt_sfc=5.0e-3))
        wt = tendency(tm)
        assert jnp.allclose(wt, 0.0, atol=1.0e-10)

    def test_saturated_reference_state_is_neutral(self, grid, make_thermo):
        """A uniform column that is cloudy in its upper part has no buoyancy relative to its own reference state"""
        tm = make_thermo(grid, *column_profiles(grid, gamma=0.003, qt_sfc=18.0e-3))
        ks, ke = grid.kstart, grid.kend
        thl, qt = tm.fields.sp["thl"].data, tm.fields.sp["qt"].data
        ql = bu.calc_ql_field(thl, qt, tm.refstate.pref, grid)[grid.istart, grid.jstart, ks:ke]
        assert ql[0] == 0.0
        assert ql[-1] > 0.0

        wt = tendency(tm)
        assert jnp.max(jnp.abs(wt)) <= 1.0e-12

    def test_warm_anomaly_rises(self, grid, make_thermo):
        tm = make_thermo(grid, *column_profiles(grid))
        ks = grid.kstart
        i, j, k = grid.istart + 1, grid.jstart + 1, ks + 4
        thl = tm.fields.sp["thl"]
        thl.data = thl.data.at[i, j, k].add(1.0)
        wt = tendency(tm)
        assert wt[i, j, k] > 0.0
        assert wt[i, j, k + 1] > 0.0
        assert jnp.allclose(wt[i + 1, j, :], 0.0, atol=1.0e-10)

        thl.data = thl.data.at[i, j, k].add(-2.0)
        wt = tendency(tm)
        assert wt[i, j, k] < 0.0

    def test_only_interior_updated(self, grid, make_thermo):
        tm = make_thermo(grid, *column_profiles(grid))
        thl = tm.fields.sp["thl"]
        thl.data = thl.data + 2.0
        wt = tendency(tm)
        ks, ke = grid.kstart, grid.kend
        assert jnp.all(wt[grid.istart:grid.iend, grid.jstart:grid.jend, ks + 1:ke] > 0.0)
        assert jnp.all(wt[:, :, :ks + 1] == 0.0)
        assert jnp.all(wt[:, :, ke:] == 0.0)
        assert jnp.all(wt[:grid.istart, :, :] == 0.0)
        assert jnp.all(wt[:, grid.jend:, :] == 0.0)

    def test_tendency_is_added(self, grid, make_thermo):
        tm = make_thermo(grid, *column_profiles(grid))
        rs = tm.refstate
        wt = jnp.ones(grid.field_shape())
        thl, qt = tm.fields.sp["thl"].data, tm.fields.sp["qt"].data
        if grid.swspatialorder == 2:
            wt = bu.calc_buoyancy_tend_2nd(wt, thl, qt, rs.prefh, rs.exnrefh, rs.thvrefh, grid)
        else:
            wt = bu.calc_buoyancy_tend_4th(wt, thl, qt, rs.pref, rs.thvrefh, grid)
        assert jnp.allclose(wt, 1.0, atol=1.0e-10)

    def test_condensation_warms(self, make_thermo):
        """A saturated parcel is lighter than an unsaturated parcel with the same thl and qt"""
        grid = Grid(4, 3, 10, 100.0, 100.0, dz=100.0)
        tm = make_thermo(grid, *column_profiles(grid, qt_sfc=10.0e-3))
        thl = tm.fields.sp["thl"].data
        qt = tm.fields.sp["qt"]
        i, j, k = grid.istart, grid.jstart, grid.kstart + 5
        qt.data = qt.data.at[i, j, k - 1:k + 1].set(40.0e-3)
        wt_cloud = tendency(tm)
        thl_h = tf.interp2(thl[i, j, k - 1], thl[i, j, k])
        assert wt_cloud[i, j, k] > tf.buoyancy_no_ql(thl_h, 40.0e-3, tm.refstate.thvrefh[k]) > 0.0
        ql = bu.calc_ql_field(thl, qt.data, tm.refstate.pref, grid)
        assert ql[i, j, k] > 0.0


class TestDiagnostics:
    """Test the diagnostic buoyancy, liquid water and stability fields"""

    def test_buoyancy_zero_for_reference_state(self, grid, make_thermo):
        tm = make_thermo(grid, *column_profiles(grid, qt_sfc=8.0e-3))
        rs = tm.refstate
        b = bu.calc_buoyancy(tm.fields.sp["thl"].data, tm.fields.sp["qt"].data, rs.pref, rs.thvref, grid)
        ks, ke = grid.kstart, grid.kend
        assert b.shape == grid.field_shape()
        assert jnp.allclose(b[:, :, ks:ke], 0.0, atol=1.0e-10)

    def test_ql_field_dry(self, grid, make_thermo):
        tm = make_thermo(grid, *column_profiles(grid, qt_sfc=1.0e-3))
        ql = bu.calc_ql_field(tm.fields.sp["thl"].data, tm.fields.sp["qt"].data, tm.refstate.pref, grid)
        assert jnp.all(ql == 0.0)

    def test_ql_field_saturated(self, grid, make_thermo):
        tm = make_thermo(grid, np.full(grid.ktot, 290.0), np.full(grid.ktot, 20.0e-3))
        ql = bu.calc_ql_field(tm.fields.sp["thl"].data, tm.fields.sp["qt"].data, tm.refstate.pref, grid)
        ks, ke = grid.kstart, grid.kend
        inner = ql[grid.istart:grid.iend, grid.jstart:grid.jend, ks:ke]
        assert jnp.all(inner > 0.0)
        # cloud water increases with height in a well-mixed layer
        assert jnp.all(jnp.diff(inner, axis=2) > 0.0)
        assert jnp.all(ql[:, :, :ks] == 0.0)

    def test_n2_linear_profile(self, grid, make_thermo):
        gamma = 0.003
        tm = make_thermo(grid, *column_profiles(grid, gamma=gamma))
        n2 = bu.calc_n2(tm.fields.sp["thl"].data, tm.refstate.thvref, grid)
        ks, ke = grid.kstart, grid.kend
        expected = nl.g / tm.refstate.thvref[ks:ke] * gamma
        inner = n2[grid.istart:grid.iend, grid.jstart:grid.jend, ks:ke]
        assert jnp.allclose(inner, expected[np.newaxis, np.newaxis, :])


class TestSurfaceBuoyancy:
    """Test the surface buoyancy and its flux"""

    def test_buoyancy_bot(self, grid2, make_thermo):
        tm = make_thermo(grid2, *column_profiles(grid2))
        rs = tm.refstate
        thlbot = jnp.full(grid2.plane_shape(), 301.0)
        qtbot = jnp.zeros(grid2.plane_shape())
        bbot, b_first = bu.calc_buoyancy_bot(tm.fields.sp["thl"].data, thlbot, tm.fields.sp["qt"].data, qtbot,
                                             rs.thvref, rs.thvrefh, grid2)
        assert bbot.shape == grid2.plane_shape()
        assert jnp.allclose(bbot, nl.g * (301.0 - rs.thvrefh[grid2.kstart]) / rs.thvrefh[grid2.kstart])
        assert jnp.allclose(b_first, 0.0, atol=1.0e-12)

    def test_buoyancy_fluxbot(self, grid2):
        thvrefh = np.full(grid2.kcells, 300.0)
        flux = bu.calc_buoyancy_fluxbot(jnp.full(grid2.plane_shape(), 300.0), jnp.full(grid2.plane_shape(), 0.06),
                                        jnp.zeros(grid2.plane_shape()), jnp.zeros(grid2.plane_shape()), thvrefh, grid2)
        assert jnp.allclose(flux, nl.g / 300.0 * 0.06)
