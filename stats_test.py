"""
Unit tests for the statistics operators
"""

import jax.numpy as jnp
import numpy as np
import pytest

from stats import Stats
from thermo_errors import ConfigurationError


def linear_field(grid, slope=0.01, offset=1.0):
    return jnp.broadcast_to(jnp.asarray(offset + slope * grid.z), grid.field_shape())


class TestRegistration:
    """Test the registration of profiles and time series"""

    def test_add_prof(self, grid2):
        stats = Stats(grid2)
        stats.add_prof("b", "Buoyancy", "m s-2", "z")
        assert stats.profs["b"]["zloc"] == "z"
        assert stats.profs["b"]["data"].shape == (grid2.kcells,)

    def test_invalid_location(self, grid2):
        with pytest.raises(ConfigurationError):
            Stats(grid2).add_prof("b", "Buoyancy", "m s-2", "zf")

    def test_duplicates(self, grid2):
        stats = Stats(grid2)
        stats.add_tseries("lwp", "Liquid water path", "kg m-2")
        with pytest.raises(ConfigurationError):
            stats.add_tseries("lwp", "Liquid water path", "kg m-2")

    def test_record(self, grid2):
        stats = Stats(grid2)
        stats.add_tseries("lwp", "Liquid water path", "kg m-2")
        stats.tseries["lwp"]["data"] = 0.5
        stats.record(60.0)
        stats.tseries["lwp"]["data"] = 0.7
        stats.record(120.0)
        assert stats.times == [60.0, 120.0]
        assert [series["lwp"] for _, series in stats.history] == [0.5, 0.7]


class TestOperators:
    """Test the profile operators"""

    def test_mean_and_moments(self, grid2):
        stats = Stats(grid2)
        data = jnp.zeros(grid2.field_shape())
        data = data.at[grid2.istart:grid2.iend:2, :, :].set(1.0)
        data = data.at[grid2.istart + 1:grid2.iend:2, :, :].set(-1.0)
        mean = stats.calc_mean(data)
        assert jnp.allclose(mean, 0.0)
        assert jnp.allclose(stats.calc_moment(data, mean, 2), 1.0)
        assert jnp.allclose(stats.calc_moment(data, mean, 3), 0.0)
        assert jnp.allclose(stats.calc_moment(data, mean, 4), 1.0)

    def test_grad_2nd(self, grid2):
        stats = Stats(grid2)
        grad = stats.calc_grad_2nd(linear_field(grid2), grid2.dzhi)
        assert jnp.allclose(grad[grid2.kstart:grid2.kend + 1], 0.01)

    def test_grad_4th(self, grid4):
        stats = Stats(grid4)
        grad = stats.calc_grad_4th(linear_field(grid4), grid4.dzhi4)
        assert jnp.allclose(grad[grid4.kstart:grid4.kend + 1], 0.01)

    def test_diff_4th(self, grid4):
        stats = Stats(grid4)
        diff = stats.calc_diff_4th(linear_field(grid4), grid4.dzhi4, 2.0e-5)
        assert jnp.allclose(diff[grid4.kstart:grid4.kend + 1], -2.0e-5 * 0.01)

    @pytest.mark.parametrize("order", [2, 4])
    def test_flux(self, order, grid2, grid4):
        grid = grid2 if order == 2 else grid4
        stats = Stats(grid)
        w = jnp.full(grid.field_shape(), 0.5)
        data = linear_field(grid, slope=0.0, offset=3.0)
        flux = stats.calc_flux_2nd(data, w) if order == 2 else stats.calc_flux_4th(data, w)
        assert jnp.allclose(flux[grid.kstart:grid.kend + 1], 1.5)

    def test_diff_2nd(self, grid2):
        stats = Stats(grid2)
        ks, ke = grid2.kstart, grid2.kend
        evisc = jnp.full(grid2.field_shape(), 3.0)
        fluxbot = jnp.full(grid2.plane_shape(), 0.2)
        fluxtop = jnp.zeros(grid2.plane_shape())
        diff = stats.calc_diff_2nd(linear_field(grid2), evisc, grid2.dzhi, fluxbot, fluxtop, 1.0/3.0)
        assert jnp.allclose(diff[ks + 1:ke], -9.0 * 0.01)
        assert diff[ks] == pytest.approx(0.2)
        assert diff[ke] == 0.0

    def test_add_fluxes(self):
        assert jnp.allclose(Stats.add_fluxes(jnp.ones(3), 2.0 * jnp.ones(3)), 3.0)

    def test_count_cover_path(self, grid2):
        stats = Stats(grid2)
        ks = grid2.kstart
        ql = jnp.zeros(grid2.field_shape())
        # one of the twelve columns has cloud water at two levels
        ql = ql.at[grid2.istart, grid2.jstart, ks + 2:ks + 4].set(1.0e-3)
        count = stats.calc_count(ql, 0.0)
        assert count[ks + 2] == pytest.approx(1.0 / 12.0)
        assert count[ks] == 0.0
        assert stats.calc_cover(ql, 0.0) == pytest.approx(1.0 / 12.0)

        rhoref = np.ones(grid2.kcells)
        assert stats.calc_path(ql, rhoref) == pytest.approx(2.0 * 100.0 * 1.0e-3 / 12.0)
