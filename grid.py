""" The model grid: coordinates of full and half levels, ghost cells and domain reductions

Arrays are ordered (x, y, z). Full levels z[k] lie between the half levels zh[k] and zh[k+1]. The surface is
zh[kstart] = 0 and the model top is zh[kend] = zsize. Ghost levels mirror the levels inside the domain.
"""

import jax.numpy as jnp
import numpy as np

from thermo_errors import ConfigurationError


class Grid:
    """ Grid dimensions and vertical coordinates """

    def __init__(self, itot, jtot, ktot, dx, dy, dz=None, z=None, igc=1, jgc=1, swspatialorder=2):
        swspatialorder = int(swspatialorder)
        if swspatialorder not in (2, 4):
            raise ConfigurationError("swspatialorder must be 2 or 4, got %r" % swspatialorder)
        if igc < 1 or jgc < 1:
            raise ConfigurationError("At least one horizontal ghost cell is needed")

        self.swspatialorder = swspatialorder
        self.itot, self.jtot, self.ktot = itot, jtot, ktot
        self.dx, self.dy = dx, dy
        self.igc, self.jgc = igc, jgc
        self.kgc = 1 if swspatialorder == 2 else 2

        self.icells = itot + 2 * igc
        self.jcells = jtot + 2 * jgc
        self.kcells = ktot + 2 * self.kgc
        self.istart, self.iend = igc, igc + itot
        self.jstart, self.jend = jgc, jgc + jtot
        self.kstart, self.kend = self.kgc, self.kgc + ktot

        if z is None:
            if dz is None:
                raise ConfigurationError("Either dz or the full level heights z must be given")
            z = (np.arange(ktot) + 0.5) * dz
        z = np.asarray(z, dtype=np.float64)
        if z.shape != (ktot,):
            raise ConfigurationError("Expected %i full level heights, got %i" % (ktot, z.size))
        self._calc_coordinates(z)

    @classmethod
    def from_input(cls, inp):
        """ Build the grid from the [grid] section of the input """
        return cls(inp.get_item("grid", "itot"), inp.get_item("grid", "jtot"), inp.get_item("grid", "ktot"),
                   inp.get_item("grid", "dx"), inp.get_item("grid", "dy"), dz=inp.get_item("grid", "dz"),
                   igc=inp.get_item("grid", "igc", 1), jgc=inp.get_item("grid", "jgc", 1),
                   swspatialorder=inp.get_item("grid", "swspatialorder", 2))

    def _calc_coordinates(self, z_in):
        """ Compute the full and half level heights, spacings and their reciprocals """
        ks, ke, kgc = self.kstart, self.kend, self.kgc

        z = np.zeros(self.kcells)
        zh = np.zeros(self.kcells)
        z[ks:ke] = z_in
        zh[ks] = 0.0
        zh[ks + 1:ke] = 0.5 * (z[ks:ke - 1] + z[ks + 1:ke])
        zh[ke] = 2.0 * z[ke - 1] - zh[ke - 1]
        self.zsize = zh[ke]

        # mirror the levels in the ghost cells
        for n in range(1, kgc + 1):
            z[ks - n] = -z[ks + n - 1]
            z[ke + n - 1] = 2.0 * self.zsize - z[ke - n]
            zh[ks - n] = -zh[ks + n]
        for n in range(1, kgc):
            zh[ke + n] = 2.0 * self.zsize - zh[ke - n]

        dz = np.zeros(self.kcells)
        dzh = np.zeros(self.kcells)
        dz[:-1] = zh[1:] - zh[:-1]
        dz[-1] = dz[-2]
        dzh[1:] = z[1:] - z[:-1]
        dzh[0] = dzh[1]

        self.z, self.zh = z, zh
        self.dz, self.dzh = dz, dzh
        self.dzi, self.dzhi = 1.0 / dz, 1.0 / dzh

        # 4th-order gradient spacings, (a - 27b + 27c - d)/24 of the neighbouring levels
        dzi4 = np.ones(self.kcells)
        dzhi4 = np.ones(self.kcells)
        if kgc == 2:
            dzi4[ks:ke] = 24.0 / (zh[ks - 1:ke - 1] - 27.0 * zh[ks:ke] + 27.0 * zh[ks + 1:ke + 1] - zh[ks + 2:ke + 2])
            dzhi4[ks:ke + 1] = 24.0 / (z[ks - 2:ke - 1] - 27.0 * z[ks - 1:ke] + 27.0 * z[ks:ke + 1] - z[ks + 1:ke + 2])
        else:
            dzi4[:] = self.dzi
            dzhi4[:] = self.dzhi
        self.dzi4, self.dzhi4 = dzi4, dzhi4

        self.x = (np.arange(self.icells) - self.igc + 0.5) * self.dx
        self.y = (np.arange(self.jcells) - self.jgc + 0.5) * self.dy

    def field_shape(self):
        return (self.icells, self.jcells, self.kcells)

    def plane_shape(self):
        return (self.icells, self.jcells)

    def interior(self, arr):
        """ Horizontal interior of a field or a surface array """
        return arr[self.istart:self.iend, self.jstart:self.jend, ...]

    def global_sum(self, arr, axis=None):
        """ Sum over all partitions of the domain

        The domain is held by a single partition, so the reduction is the local sum. Any error is raised to the caller.
        """
        return jnp.sum(arr, axis=axis)

    def global_mean_plane(self, arr):
        """ Horizontal mean over the interior of each vertical level (or of a surface array) """
        return self.global_sum(self.interior(arr), axis=(0, 1)) / (self.itot * self.jtot)

    def set_horizontal_ghosts(self, arr):
        """ Periodic boundary conditions in x and y """
        interior = self.interior(arr)
        igc, jgc = self.igc, self.jgc
        arr_x = jnp.concatenate((interior[-igc:, ...], interior, interior[0:igc, ...]), axis=0)
        arr_xy = jnp.concatenate((arr_x[:, -jgc:, ...], arr_x, arr_x[:, 0:jgc, ...]), axis=1)
        return arr_xy
