""" Buoyancy of moist air: the tendency of w and the diagnostic fields b, ql and N2

The kernels work on the horizontal interior of (x, y, z) fields and return new arrays.
"""

import jax.numpy as jnp

import namelist_n_constants as nl
import thermo_functions as tf


def _interior_slices(grid):
    return slice(grid.istart, grid.iend), slice(grid.jstart, grid.jend)


def calc_buoyancy_tend_2nd(wt, thl, qt, prefh, exnrefh, thvrefh, grid, max_iter=nl.sat_adjust_max_iter):
    """ Add the buoyancy at the half levels kstart+1 .. kend-1 to the tendency of w, 2nd-order interpolation """
    ks, ke = grid.kstart, grid.kend
    si, sj = _interior_slices(grid)

    ph = jnp.asarray(prefh[ks + 1:ke])
    exnh = jnp.asarray(exnrefh[ks + 1:ke])
    thl_h = tf.interp2(thl[si, sj, ks:ke - 1], thl[si, sj, ks + 1:ke])
    qt_h = tf.interp2(qt[si, sj, ks:ke - 1], qt[si, sj, ks + 1:ke])

    ql = tf.calc_ql(thl_h, qt_h, ph, exnh, max_iter)
    b = tf.buoyancy(exnh, thl_h, qt_h, ql, jnp.asarray(thvrefh[ks + 1:ke]))
    return wt.at[si, sj, ks + 1:ke].add(b)


def calc_buoyancy_tend_4th(wt, thl, qt, pref, thvrefh, grid, max_iter=nl.sat_adjust_max_iter):
    """ Add the buoyancy at the half levels kstart+1 .. kend-1 to the tendency of w, 4th-order interpolation

    The half-level pressure is interpolated from four full levels and the Exner function is the polynomial one.
    """
    ks, ke = grid.kstart, grid.kend
    si, sj = _interior_slices(grid)

    pref = jnp.asarray(pref)
    ph = tf.interp4(pref[ks - 1:ke - 2], pref[ks:ke - 1], pref[ks + 1:ke], pref[ks + 2:ke + 1])
    exnh = tf.exner_poly(ph)
    thl_h = tf.interp4(thl[si, sj, ks - 1:ke - 2], thl[si, sj, ks:ke - 1], thl[si, sj, ks + 1:ke], thl[si, sj, ks + 2:ke + 1])
    qt_h = tf.interp4(qt[si, sj, ks - 1:ke - 2], qt[si, sj, ks:ke - 1], qt[si, sj, ks + 1:ke], qt[si, sj, ks + 2:ke + 1])

    ql = tf.calc_ql(thl_h, qt_h, ph, exnh, max_iter)
    b = tf.buoyancy(exnh, thl_h, qt_h, ql, jnp.asarray(thvrefh[ks + 1:ke]))
    return wt.at[si, sj, ks + 1:ke].add(b)


def calc_buoyancy(thl, qt, pref, thvref, grid, max_iter=nl.sat_adjust_max_iter):
    """ Buoyancy at all full levels, ghost levels included """
    si, sj = _interior_slices(grid)
    p = jnp.asarray(pref)
    exn = tf.exner_poly(p)
    thl_i, qt_i = thl[si, sj, :], qt[si, sj, :]

    ql = tf.calc_ql(thl_i, qt_i, p, exn, max_iter)
    b = jnp.zeros(grid.field_shape())
    return b.at[si, sj, :].set(tf.buoyancy(exn, thl_i, qt_i, ql, jnp.asarray(thvref)))


def calc_ql_field(thl, qt, pref, grid, max_iter=nl.sat_adjust_max_iter):
    """ Liquid water at the full levels inside the domain """
    ks, ke = grid.kstart, grid.kend
    si, sj = _interior_slices(grid)
    p = jnp.asarray(pref[ks:ke])

    ql = tf.calc_ql(thl[si, sj, ks:ke], qt[si, sj, ks:ke], p, tf.exner_poly(p), max_iter)
    return jnp.zeros(grid.field_shape()).at[si, sj, ks:ke].set(ql)


def calc_n2(thl, thvref, grid):
    """ Squared Brunt-Vaisala frequency from the centered gradient of thl """
    ks, ke = grid.kstart, grid.kend
    si, sj = _interior_slices(grid)
    dthl = 0.5 * (thl[si, sj, ks + 1:ke + 1] - thl[si, sj, ks - 1:ke - 1]) * jnp.asarray(grid.dzi[ks:ke])
    n2 = nl.g / jnp.asarray(thvref[ks:ke]) * dthl
    return jnp.zeros(grid.field_shape()).at[si, sj, ks:ke].set(n2)


def calc_buoyancy_bot(thl, thlbot, qt, qtbot, thvref, thvrefh, grid):
    """ Buoyancy at the surface and at the first level, assuming no liquid water there

    Returns (bbot, b at kstart), both as (icells, jcells) planes.
    """
    ks = grid.kstart
    bbot = tf.buoyancy_no_ql(thlbot, qtbot, thvrefh[ks])
    b_first = tf.buoyancy_no_ql(thl[:, :, ks], qt[:, :, ks], thvref[ks])
    return bbot, b_first


def calc_buoyancy_fluxbot(thlbot, thlfluxbot, qtbot, qtfluxbot, thvrefh, grid):
    """ Surface buoyancy flux, assuming no liquid water at the surface """
    return tf.buoyancy_flux_no_ql(thlbot, thlfluxbot, qtbot, qtfluxbot, thvrefh[grid.kstart])
