""" Horizontally averaged statistics: vertical profiles and time series

Profiles live on full levels ("z") or half levels ("zh") and hold kcells values. All domain averages go through
grid.global_sum.
"""

import logging

import jax.numpy as jnp

from thermo_errors import ConfigurationError

_LOG = logging.getLogger(__name__)

# 4th-order gradient stencil, scaled by 1/24 to go with grid.dzhi4
cg0, cg1, cg2, cg3 = 1.0/24.0, -27.0/24.0, 27.0/24.0, -1.0/24.0
# 4th-order interpolation stencil
ci0, ci1, ci2, ci3 = -1.0/16.0, 9.0/16.0, 9.0/16.0, -1.0/16.0


class Stats:
    """ Registry of the statistics and the operators that compute them """

    def __init__(self, grid, swstats=True):
        self.grid = grid
        self.swstats = swstats
        self.profs = {}
        self.tseries = {}
        self.times = []
        self.history = []

    def add_prof(self, name, longname, unit, zloc):
        if zloc not in ("z", "zh"):
            raise ConfigurationError("Profile \"%s\" must be located at z or zh, not %s" % (name, zloc))
        if name in self.profs:
            raise ConfigurationError("Profile \"%s\" already exists" % name)
        self.profs[name] = {"longname": longname, "unit": unit, "zloc": zloc, "data": jnp.zeros(self.grid.kcells)}

    def add_tseries(self, name, longname, unit):
        if name in self.tseries:
            raise ConfigurationError("Time series \"%s\" already exists" % name)
        self.tseries[name] = {"longname": longname, "unit": unit, "data": 0.0}

    def _plane_mean(self, data):
        return self.grid.global_mean_plane(data)

    def calc_mean(self, data):
        """ Mean of every level """
        return self._plane_mean(data)

    def calc_moment(self, data, mean, power):
        """ Central moment of the given power at every level """
        return self._plane_mean((data - mean[jnp.newaxis, jnp.newaxis, :]) ** power)

    def calc_grad_2nd(self, data, dzhi):
        """ Vertical gradient at the half levels kstart .. kend """
        ks, ke = self.grid.kstart, self.grid.kend
        mean = self._plane_mean(data)
        grad = (mean[ks:ke + 1] - mean[ks - 1:ke]) * jnp.asarray(dzhi[ks:ke + 1])
        return jnp.zeros(self.grid.kcells).at[ks:ke + 1].set(grad)

    def calc_grad_4th(self, data, dzhi4):
        ks, ke = self.grid.kstart, self.grid.kend
        mean = self._plane_mean(data)
        grad = (cg0 * mean[ks - 2:ke - 1] + cg1 * mean[ks - 1:ke] + cg2 * mean[ks:ke + 1]
                + cg3 * mean[ks + 1:ke + 2]) * jnp.asarray(dzhi4[ks:ke + 1])
        return jnp.zeros(self.grid.kcells).at[ks:ke + 1].set(grad)

    def calc_flux_2nd(self, data, w):
        """ Turbulent flux at the half levels, data interpolated to the w points """
        ks, ke = self.grid.kstart, self.grid.kend
        datah = 0.5 * (data[:, :, ks - 1:ke] + data[:, :, ks:ke + 1])
        flux = self._plane_mean(datah * w[:, :, ks:ke + 1])
        return jnp.zeros(self.grid.kcells).at[ks:ke + 1].set(flux)

    def calc_flux_4th(self, data, w):
        ks, ke = self.grid.kstart, self.grid.kend
        datah = (ci0 * data[:, :, ks - 2:ke - 1] + ci1 * data[:, :, ks - 1:ke]
                 + ci2 * data[:, :, ks:ke + 1] + ci3 * data[:, :, ks + 1:ke + 2])
        flux = self._plane_mean(datah * w[:, :, ks:ke + 1])
        return jnp.zeros(self.grid.kcells).at[ks:ke + 1].set(flux)

    def calc_diff_2nd(self, data, evisc, dzhi, fluxbot, fluxtop, tPr):
        """ Diffusive flux with the eddy diffusivity evisc/tPr; the boundary fluxes are prescribed """
        ks, ke = self.grid.kstart, self.grid.kend
        diff = -0.5 * (evisc[:, :, ks:ke - 1] + evisc[:, :, ks + 1:ke]) / tPr \
            * (data[:, :, ks + 1:ke] - data[:, :, ks:ke - 1]) * jnp.asarray(dzhi[ks + 1:ke])
        prof = jnp.zeros(self.grid.kcells).at[ks + 1:ke].set(self._plane_mean(diff))
        prof = prof.at[ks].set(self._plane_mean(fluxbot))
        return prof.at[ke].set(self._plane_mean(fluxtop))

    def calc_diff_4th(self, data, dzhi4, visc):
        """ Molecular diffusive flux with a 4th-order gradient """
        return -visc * self.calc_grad_4th(data, dzhi4)

    @staticmethod
    def add_fluxes(*fluxes):
        return sum(fluxes[1:], fluxes[0])

    def calc_count(self, data, threshold):
        """ Fraction of the points above the threshold at every level """
        return self._plane_mean(jnp.where(data > threshold, 1.0, 0.0))

    def calc_cover(self, data, threshold):
        """ Fraction of the columns with at least one point above the threshold """
        ks, ke = self.grid.kstart, self.grid.kend
        column = jnp.any(self.grid.interior(data)[:, :, ks:ke] > threshold, axis=2)
        return float(self.grid.global_sum(column.astype(jnp.float64)) / (self.grid.itot * self.grid.jtot))

    def calc_path(self, data, rhoref):
        """ Density-weighted vertical integral of the mean profile """
        ks, ke = self.grid.kstart, self.grid.kend
        mean = self._plane_mean(data)
        return float(jnp.sum(jnp.asarray(rhoref[ks:ke]) * mean[ks:ke] * jnp.asarray(self.grid.dz[ks:ke])))

    def record(self, model_time):
        """ Keep a copy of all statistics of the current time """
        self.times.append(model_time)
        self.history.append(({name: prof["data"] for name, prof in self.profs.items()},
                             {name: ts["data"] for name, ts in self.tseries.items()}))
        _LOG.debug("Statistics recorded at t = %.1f s", model_time)
