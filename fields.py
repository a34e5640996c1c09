""" Container of the 3-D fields, their surface values and their mean profiles """

import logging

import jax.numpy as jnp

from thermo_errors import ConfigurationError

_LOG = logging.getLogger(__name__)


class Field3d:
    """ One 3-D field with its bottom value, bottom flux and horizontal mean profile """

    def __init__(self, grid, name, longname, unit, visc=0.0):
        self.name = name
        self.longname = longname
        self.unit = unit
        self.visc = visc
        self.data = jnp.zeros(grid.field_shape())
        self.databot = jnp.zeros(grid.plane_shape())
        self.datafluxbot = jnp.zeros(grid.plane_shape())
        self.datafluxtop = jnp.zeros(grid.plane_shape())
        self.datamean = jnp.zeros(grid.kcells)


class Fields:
    """ Named fields: momentum (mp, mt), prognostic scalars (sp, st) and diagnostic scalars (sd)

    s is the lookup over all scalars. The scratch fields tmp1 and tmp2 always exist.
    """

    def __init__(self, grid, visc=1.0e-5, svisc=1.0e-5, tPr=1.0/3.0):
        self.grid = grid
        self.visc = visc
        self.svisc = svisc
        self.tPr = tPr
        self.mp, self.mt = {}, {}
        self.sp, self.st, self.sd = {}, {}, {}
        self.s = {}

        for name in ("u", "v", "w"):
            self.init_momentum_field(name, "%s velocity" % name.upper(), "m s-1")
        self.init_diagnostic_field("p", "Pressure", "Pa")
        self.init_diagnostic_field("evisc", "Eddy viscosity", "m2 s-1")
        self.init_diagnostic_field("tmp1", "Scratch field 1", "-")
        self.init_diagnostic_field("tmp2", "Scratch field 2", "-")

    @classmethod
    def from_input(cls, grid, inp):
        return cls(grid, svisc=inp.get_item("fields", "svisc", 1.0e-5), tPr=inp.get_item("fields", "tPr", 1.0/3.0))

    def init_momentum_field(self, name, longname, unit):
        if name in self.mp:
            raise ConfigurationError("Field \"%s\" already exists" % name)
        self.mp[name] = Field3d(self.grid, name, longname, unit, self.visc)
        self.mt[name] = Field3d(self.grid, name + "t", "Tendency of " + longname, unit + " s-1")

    def init_prognostic_field(self, name, longname, unit):
        if name in self.s:
            raise ConfigurationError("Field \"%s\" already exists" % name)
        self.sp[name] = Field3d(self.grid, name, longname, unit, self.svisc)
        self.st[name] = Field3d(self.grid, name + "t", "Tendency of " + longname, unit + " s-1")
        self.s[name] = self.sp[name]

    def init_diagnostic_field(self, name, longname, unit):
        if name in self.s:
            raise ConfigurationError("Field \"%s\" already exists" % name)
        self.sd[name] = Field3d(self.grid, name, longname, unit)
        self.s[name] = self.sd[name]

    @property
    def wt(self):
        return self.mt["w"]

    @property
    def w(self):
        return self.mp["w"]

    def calc_mean_profiles(self):
        """ Horizontally averaged profiles of the prognostic scalars, ghost levels included """
        for fld in self.sp.values():
            fld.datamean = self.grid.global_mean_plane(fld.data)

    def add_mean_profile(self, name, profile):
        """ Add a vertical profile (length ktot) to the interior levels of a prognostic field """
        grid = self.grid
        fld = self.sp[name]
        profile = jnp.asarray(profile)
        fld.data = fld.data.at[:, :, grid.kstart:grid.kend].add(profile[jnp.newaxis, jnp.newaxis, :])
