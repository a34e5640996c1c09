""" Thermodynamic functions: Exner function, saturation, liquid water and buoyancy

All functions work element-wise on arrays of any shape, or on scalars.
"""

import logging
from functools import partial

import jax
import jax.numpy as jnp

import namelist_n_constants as nl
from thermo_errors import NumericalDivergence

jax.config.update("jax_enable_x64", True)

_LOG = logging.getLogger(__name__)

# Taylor expansion of (p/p00)**(Rd/Cp) in p - p00
ex1 = 2.85611940298507510698e-06
ex2 = -1.02018879928714644313e-11
ex3 = 5.82999832046362073082e-17
ex4 = -3.95621945728655163954e-22
ex5 = 2.93898686274077761686e-27
ex6 = -2.30925409555411170635e-32
ex7 = 1.88513914720731231360e-37

# Polynomial fit of the saturation vapor pressure over liquid water (Pa) in T - tmelt
c0 = 0.6105851e+03
c1 = 0.4440316e+02
c2 = 0.1430341e+01
c3 = 0.2641412e-01
c4 = 0.2995057e-03
c5 = 0.2031998e-05
c6 = 0.6936113e-08
c7 = 0.2564861e-11
c8 = -.3704404e-13

sat_tolerance = 1.0e-5    # relative change of the temperature in the Newton-Raphson iteration


def exner(p):
    """ Exner function (p/p00)**(Rd/Cp) """
    return (p / nl.p00) ** (nl.Rd / nl.Cp)


def exner_poly(p):
    """ 7th-order polynomial approximation of the Exner function around p00 """
    dp = p - nl.p00
    return 1.0 + dp * (ex1 + dp * (ex2 + dp * (ex3 + dp * (ex4 + dp * (ex5 + dp * (ex6 + ex7 * dp))))))


def esl(t):
    """ Saturation vapor pressure over liquid water (Pa); the fit is clipped at -80 degC """
    x = jnp.maximum(-80.0, t - nl.tmelt)
    return c0 + x * (c1 + x * (c2 + x * (c3 + x * (c4 + x * (c5 + x * (c6 + x * (c7 + x * c8)))))))


def qsat(p, t):
    """ Saturation mixing ratio over liquid water """
    es = esl(t)
    return nl.eps * es / (p - (1.0 - nl.eps) * es)


def interp2(a, b):
    return 0.5 * (a + b)


def interp4(a, b, c, d):
    return (-a + 9.0 * b + 9.0 * c - d) / 16.0


def virtual_temperature(thl, qt, ql, exn):
    """ Virtual potential temperature from liquid water potential temperature, total water and liquid water """
    return (thl + nl.lat_vap * ql / (nl.Cp * exn)) * (1.0 + nl.repsm1 * qt - (1.0 + nl.repsm1) * ql)


def virtual_temperature_no_ql(thl, qt):
    return thl * (1.0 + nl.repsm1 * qt)


def buoyancy(exn, thl, qt, ql, thvref):
    return nl.g * (virtual_temperature(thl, qt, ql, exn) - thvref) / thvref


def buoyancy_no_ql(thl, qt, thvref):
    """ Buoyancy of unsaturated air """
    return nl.g * (thl * (1.0 + nl.repsm1 * qt) - thvref) / thvref


def buoyancy_flux_no_ql(thl, thlflux, qt, qtflux, thvref):
    """ Buoyancy flux of unsaturated air, linearized in the fluxes of thl and qt """
    return nl.g / thvref * (thlflux * (1.0 + nl.repsm1 * qt) + nl.repsm1 * thl * qtflux)


@partial(jax.jit, static_argnames=["max_iter"])
def sat_adjust(thl, qt, p, exn, max_iter=nl.sat_adjust_max_iter):
    """ Saturation adjustment: solve T = Tl + Lv/Cp*(qt - qs(T)) for T with Newton-Raphson iterations

    Returns the liquid water max(0, qt - qs(T)) and, per point, whether the iteration converged within max_iter steps.
    A point stops iterating as soon as it has converged, so its result does not depend on the other points.
    """
    tl = thl * exn

    def not_converged(carry):
        niter, active, _, _, _ = carry
        return (niter < max_iter) & jnp.any(active)

    def newton_step(carry):
        niter, active, tnr_old, tnr, qs = carry
        qs_new = qsat(p, tnr)
        tnr_new = tnr - (tnr + (nl.lat_vap / nl.Cp) * qs_new - tl - (nl.lat_vap / nl.Cp) * qt) / (
                1.0 + nl.lat_vap ** 2 * qs_new / (nl.Rv * nl.Cp * tnr ** 2))

        tnr_old = jnp.where(active, tnr, tnr_old)
        tnr = jnp.where(active, tnr_new, tnr)
        qs = jnp.where(active, qs_new, qs)
        active = active & (jnp.abs(tnr - tnr_old) / tnr_old > sat_tolerance)
        return niter + 1, active, tnr_old, tnr, qs

    init = (jnp.asarray(0), jnp.ones_like(tl, dtype=bool), jnp.full_like(tl, 1.0e9), tl, jnp.zeros_like(tl))
    _, active, _, _, qs = jax.lax.while_loop(not_converged, newton_step, init)

    ql = jnp.maximum(0.0, qt - qs)
    return ql, ~active


def ql_estimate(thl, qt, p, exn):
    """ First estimate of the liquid water using Tl; only where it is positive the saturation adjustment is needed """
    return qt - qsat(p, thl * exn)


def refine_ql(ql_est, thl, qt, p, exn, max_iter=nl.sat_adjust_max_iter):
    """ Replace the estimate by the saturation adjustment where it is positive, and by zero elsewhere

    The iterative solve runs on the gathered supersaturated points only. They are padded to a power of two, so that the
    compiled solver is reused between calls.
    """
    shape = jnp.shape(ql_est)
    flat = [jnp.ravel(jnp.broadcast_to(v, shape)) for v in (thl, qt, p, exn)]
    saturated = jnp.ravel(ql_est) > 0.0
    n_sat = int(jnp.count_nonzero(saturated))
    ql = jnp.zeros(saturated.shape)
    _LOG.debug("Saturation adjustment on %i of %i points", n_sat, saturated.size)
    if n_sat == 0:
        return jnp.reshape(ql, shape)

    idx = jnp.flatnonzero(saturated)
    size = _bucket_size(n_sat)
    thl_s, qt_s, p_s, exn_s = [jnp.pad(v[idx], (0, size - n_sat), mode="edge") for v in flat]
    ql_s, converged = sat_adjust(thl_s, qt_s, p_s, exn_s, max_iter=max_iter)

    n_failed = int(jnp.count_nonzero(~converged[:n_sat]))
    if n_failed > 0:
        raise NumericalDivergence(n_failed, max_iter)

    ql = ql.at[idx].set(ql_s[:n_sat])
    return jnp.reshape(ql, shape)


def calc_ql(thl, qt, p, exn, max_iter=nl.sat_adjust_max_iter):
    """ Liquid water in two passes: the cheap unsaturated test, then the selective iterative solve """
    shape = jnp.broadcast_shapes(jnp.shape(thl), jnp.shape(qt), jnp.shape(p), jnp.shape(exn))
    ql_est = jnp.broadcast_to(ql_estimate(thl, qt, p, exn), shape)
    return refine_ql(ql_est, thl, qt, p, exn, max_iter)


def _bucket_size(n):
    return max(16, 1 << (n - 1).bit_length())
