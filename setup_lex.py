""" Functions for setting up the model grid, the moist thermodynamics and the initial conditions """

import jax
import jax.numpy as jnp
import numpy as np

import namelist_n_constants as nl
import boundary_conditions as bc
from cross import Cross
from fields import Fields
from grid import Grid
from input_config import Input
from stats import Stats
from thermo_errors import ConfigurationError
from thermo_moist import ThermoMoist


def setup_model(ic_option=nl.ic_option, overrides=None):
    """ Set up the grid, the fields, the thermodynamics and the initial condition """
    inp = Input.from_namelist(nl, overrides)
    grid = Grid.from_input(inp)
    fields = Fields.from_input(grid, inp)
    stats = Stats(grid)
    cross = Cross.from_input(grid, inp)
    thermo = ThermoMoist(grid, fields, inp, stats=stats, cross=cross)

    x3d, y3d, z3d = np.meshgrid(grid.x, grid.y, grid.z, indexing="ij")
    z = grid.z[grid.kstart:grid.kend]

    # Setup I.C.
    if ic_option == 1:
        thl0, qt0, thl_p, qt_p, sfc = setup_ic_option1(z, z3d)
    elif ic_option == 2:
        thl0, qt0, thl_p, qt_p, sfc = setup_ic_option2(z, x3d, y3d, z3d, grid)
    else:
        raise ConfigurationError('Undefined I.C. option %r' % ic_option)

    thermo.create(thl0, qt0)

    for name, prof, pert in (("thl", thermo.thl0, thl_p), ("qt", thermo.qt0, qt_p)):
        fld = fields.sp[name]
        fld.databot = jnp.full(grid.plane_shape(), sfc[name + "bot"])
        fld.datafluxbot = jnp.full(grid.plane_shape(), sfc[name + "fluxbot"])
        data = jnp.asarray(prof)[jnp.newaxis, jnp.newaxis, :] + pert
        data = grid.set_horizontal_ghosts(data)
        fld.data = bc.set_field_ghosts(data, fld.databot, grid)

    return inp, grid, fields, stats, cross, thermo


def setup_ic_option1(z, z3d):
    """ Set up the I.C. of option 1: a trade-wind cumulus boundary layer """
    thl0 = np.interp(z, [0.0, 520.0, 1480.0, 2000.0, 3000.0], [298.7, 298.7, 302.4, 308.2, 311.85])
    qt0 = 1.0e-3 * np.interp(z, [0.0, 520.0, 1480.0, 2000.0, 3000.0], [17.0, 16.3, 10.7, 4.2, 3.0])

    thl_p = np.zeros(z3d.shape)
    qt_p = np.zeros(z3d.shape)
    if nl.rand_opt:
        # add random perturbations to thl and qt below 1600 m
        seed = 2025
        key_thl, key_qt = jax.random.split(jax.random.key(seed))
        mask = np.where(z3d < 1600.0, 1.0, 0.0)
        thl_p = 0.1 * jax.random.uniform(key_thl, shape=z3d.shape, minval=-1.0, maxval=1.0) * mask
        qt_p = 2.5e-5 * jax.random.uniform(key_qt, shape=z3d.shape, minval=-1.0, maxval=1.0) * mask

    sfc = {"thlbot": 299.1, "thlfluxbot": 8.0e-3, "qtbot": 22.45e-3, "qtfluxbot": 5.2e-5}
    return thl0, qt0, thl_p, qt_p, sfc


def setup_ic_option2(z, x3d, y3d, z3d, grid):
    """ Set up the I.C. of option 2: a warm, moist bubble in a neutral layer """
    thl0 = np.full(z.shape, 300.0)
    qt0 = 1.0e-3 * np.interp(z, [0.0, 1000.0, 3000.0], [14.0, 12.0, 6.0])

    # initial center location of the bubble
    xc = 0.5 * grid.itot * grid.dx
    yc = 0.5 * grid.jtot * grid.dy
    zc = 0.25 * grid.zsize
    # initial bubble radius
    xr = 0.25 * grid.itot * grid.dx
    yr = 0.25 * grid.jtot * grid.dy
    zr = 0.2 * grid.zsize
    r = jnp.sqrt(((x3d - xc) / xr)**2 + ((y3d - yc) / yr)**2 + ((z3d - zc) / zr)**2)    # bubble
    shape = jnp.where(r > 1.0, 0.0, (jnp.cos(r * np.pi/2.0))**2)
    thl_p = 1.0 * shape
    qt_p = 4.0e-3 * shape
    if nl.rand_opt:
        # add random perturbations to the bubble
        seed = 2025
        key = jax.random.key(seed)
        noise = jax.random.uniform(key, shape=shape.shape, minval=0.5, maxval=1.5)
        thl_p = thl_p * noise

    sfc = {"thlbot": 300.0, "thlfluxbot": 0.0, "qtbot": 14.0e-3, "qtfluxbot": 0.0}
    return thl0, qt0, thl_p, qt_p, sfc
