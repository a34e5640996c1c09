""" Hydrostatic reference (base) state of the moist atmosphere

Solves dpi/dz = -g/thv with pi = Cp*(p/p00)**(Rd/Cp), marching upward from the surface pressure and alternating
between half and full levels. Pressures are combined as p**(Rd/Cp), which keeps the integration exact for a
constant thv within each half grid spacing.
"""

import logging

import numpy as np

import namelist_n_constants as nl
import boundary_conditions as bc
import thermo_functions as tf

_LOG = logging.getLogger(__name__)

PROFILE_NAMES = ("pref", "prefh", "exnref", "exnrefh", "thvref", "thvrefh", "rhoref", "rhorefh")


def prepare_input_profile(profile, grid):
    """ Put an initial profile (ktot values) on the full levels and fill its ghost cells """
    full = np.zeros(grid.kcells)
    full[grid.kstart:grid.kend] = profile
    bottom, top = bc.extrapolate_surface_top(full, grid)
    return bc.set_profile_ghosts(full, bottom, top, grid)


class ReferenceState:
    """ Base-state profiles on full and half levels

    The state is stale after construction and after mark_stale(); update() recomputes a stale state and leaves it
    fresh.
    """

    def __init__(self, grid, ps, max_iter=nl.sat_adjust_max_iter):
        self.grid = grid
        self.ps = ps
        self.max_iter = max_iter
        if grid.swspatialorder == 2:
            self.interp_half = self._interp_half_2nd
        else:
            self.interp_half = self._interp_half_4th
        for name in PROFILE_NAMES:
            setattr(self, name, np.zeros(grid.kcells))
        self.stale = True
        self.n_solves = 0

    @property
    def fresh(self):
        return not self.stale

    def mark_stale(self):
        self.stale = True

    def update(self, thlmean, qtmean):
        """ Recompute the profiles if the state is stale """
        if self.stale:
            self.calc_hydrostatic_pressure(thlmean, qtmean)
        return self

    @staticmethod
    def _interp_half_2nd(profile, k):
        return tf.interp2(profile[k - 1], profile[k])

    @staticmethod
    def _interp_half_4th(profile, k):
        return tf.interp4(profile[k - 2], profile[k - 1], profile[k], profile[k + 1])

    def _ql(self, thl, qt, p, exn):
        return float(tf.calc_ql(thl, qt, p, exn, max_iter=self.max_iter))

    def calc_hydrostatic_pressure(self, thlmean, qtmean):
        """ March the hydrostatic equation upward from the surface for the mean profiles of thl and qt

        thlmean and qtmean are full-level profiles including the ghost cells.
        """
        grid = self.grid
        ks, ke = grid.kstart, grid.kend
        thl = np.asarray(thlmean, dtype=np.float64)
        qt = np.asarray(qtmean, dtype=np.float64)
        rdcp = nl.Rd / nl.Cp
        p00_rdcp = nl.p00 ** rdcp

        pref, prefh = np.zeros(grid.kcells), np.zeros(grid.kcells)
        exn, exnh = np.zeros(grid.kcells), np.zeros(grid.kcells)
        thv, thvh = np.zeros(grid.kcells), np.zeros(grid.kcells)
        rho, rhoh = np.zeros(grid.kcells), np.zeros(grid.kcells)

        # surface values, assuming no liquid water
        thl_sfc = self.interp_half(thl, ks)
        qt_sfc = self.interp_half(qt, ks)
        thvh[ks] = tf.virtual_temperature_no_ql(thl_sfc, qt_sfc)
        prefh[ks] = self.ps
        exnh[ks] = tf.exner(self.ps)
        rhoh[ks] = self.ps / (nl.Rd * exnh[ks] * thvh[ks])

        # first full level
        pref[ks] = (self.ps ** rdcp - nl.g * p00_rdcp * grid.z[ks] / (nl.Cp * thvh[ks])) ** (1.0 / rdcp)

        for k in range(ks + 1, ke + 1):
            # 1. full level below zh[k]
            exn[k - 1] = tf.exner(pref[k - 1])
            ql = self._ql(thl[k - 1], qt[k - 1], pref[k - 1], exn[k - 1])
            thv[k - 1] = tf.virtual_temperature(thl[k - 1], qt[k - 1], ql, exn[k - 1])
            rho[k - 1] = pref[k - 1] / (nl.Rd * exn[k - 1] * thv[k - 1])

            # 2. half level pressure at zh[k] from the values at z[k-1]
            prefh[k] = (prefh[k - 1] ** rdcp - nl.g * p00_rdcp * grid.dz[k - 1] / (nl.Cp * thv[k - 1])) ** (1.0 / rdcp)

            # 3. conserved variables interpolated to zh[k]
            thl_h = self.interp_half(thl, k)
            qt_h = self.interp_half(qt, k)
            exnh[k] = tf.exner(prefh[k])
            ql_h = self._ql(thl_h, qt_h, prefh[k], exnh[k])
            thvh[k] = tf.virtual_temperature(thl_h, qt_h, ql_h, exnh[k])
            rhoh[k] = prefh[k] / (nl.Rd * exnh[k] * thvh[k])

            # 4. full level pressure at z[k]
            pref[k] = (pref[k - 1] ** rdcp - nl.g * p00_rdcp * grid.dzh[k] / (nl.Cp * thvh[k])) ** (1.0 / rdcp)

        # ghost cells are extrapolated, never integrated
        for name, full, half in (("pref", pref, prefh), ("exnref", exn, exnh),
                                 ("thvref", thv, thvh), ("rhoref", rho, rhoh)):
            setattr(self, name, bc.set_profile_ghosts(full, half[ks], half[ke], grid))
            setattr(self, name + "h", bc.set_half_profile_ghosts(half, grid))
        if grid.swspatialorder == 4:
            self.thvrefh = self._calc_thvrefh_4th(thl, qt)

        self.stale = False
        self.n_solves += 1
        _LOG.info("Reference state solved: p = %.1f Pa at the surface, %.1f Pa at the top", prefh[ks], prefh[ke])
        return self

    def _calc_thvrefh_4th(self, thl, qt):
        """ thv at the half levels inside the domain, from the 4-point pressure and the polynomial Exner function

        These are the pressure and Exner function of the 4th-order buoyancy tendency, so that a horizontally uniform
        column has no buoyancy.
        """
        grid = self.grid
        thvh = np.array(self.thvrefh)
        pref = self.pref
        for k in range(grid.kstart + 1, grid.kend):
            p = tf.interp4(pref[k - 2], pref[k - 1], pref[k], pref[k + 1])
            exn = tf.exner_poly(p)
            thl_h = self.interp_half(thl, k)
            qt_h = self.interp_half(qt, k)
            thvh[k] = tf.virtual_temperature(thl_h, qt_h, self._ql(thl_h, qt_h, p, exn), exn)
        return bc.set_half_profile_ghosts(thvh, grid)

    def profiles(self):
        return {name: getattr(self, name) for name in PROFILE_NAMES}
