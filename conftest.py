import jax
import jax.numpy as jnp
import numpy as np
import pytest

jax.config.update("jax_enable_x64", True)

from fields import Fields
from grid import Grid
from input_config import Input
from stats import Stats
from thermo_moist import ThermoMoist


@pytest.fixture
def grid2():
    return Grid(4, 3, 10, 100.0, 100.0, dz=100.0)


@pytest.fixture
def grid4():
    return Grid(4, 3, 10, 100.0, 100.0, dz=100.0, swspatialorder=4)


@pytest.fixture
def make_input():
    def _make_input(**thermo):
        items = {"thermo": {"ps": 100000.0, "swupdatebasestate": True}}
        items["thermo"].update(thermo)
        return Input(items)
    return _make_input


@pytest.fixture
def make_thermo(make_input):
    """ A ThermoMoist on a given grid whose 3-D fields are the initial profiles everywhere """
    def _make_thermo(grid, thl0, qt0, stats=False, cross=None, **thermo):
        fields = Fields(grid)
        st = Stats(grid) if stats else None
        tm = ThermoMoist(grid, fields, make_input(**thermo), stats=st, cross=cross)
        tm.create(np.asarray(thl0, dtype=np.float64), np.asarray(qt0, dtype=np.float64))
        shape = grid.field_shape()
        fields.sp["thl"].data = jnp.broadcast_to(jnp.asarray(tm.thl0), shape)
        fields.sp["qt"].data = jnp.broadcast_to(jnp.asarray(tm.qt0), shape)
        return tm
    return _make_thermo
