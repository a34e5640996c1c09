""" Cross sections of 3-D fields and surface planes

Vertical (xz) sections are taken at the y indices in xz, horizontal (xy) sections at the level indices in xy.
Indices count from the first point inside the domain.
"""

import logging

import jax.numpy as jnp

import namelist_n_constants as nl
import write_zarr
from stats import cg0, cg1, cg2, cg3, ci0, ci1, ci2, ci3
from thermo_errors import ConfigurationError

_LOG = logging.getLogger(__name__)


class Cross:
    """ Writes named cross sections, one Zarr store per variable and output time """

    def __init__(self, grid, xz=(), xy=(), file_format=nl.cross_file_format):
        for j in xz:
            if not 0 <= j < grid.jtot:
                raise ConfigurationError("xz cross section at j = %i is outside the domain" % j)
        for k in xy:
            if not 0 <= k < grid.ktot:
                raise ConfigurationError("xy cross section at k = %i is outside the domain" % k)
        self.grid = grid
        self.xz = list(xz)
        self.xy = list(xy)
        self.file_format = file_format
        self.model_time = 0.0
        self.iotime = 0
        self.files = []

    @classmethod
    def from_input(cls, grid, inp):
        return cls(grid, xz=[int(j) for j in inp.get_list("cross", "xz", [])],
                   xy=[int(k) for k in inp.get_list("cross", "xy", [])])

    def set_time(self, model_time, iotime):
        self.model_time = model_time
        self.iotime = iotime

    def _write(self, name, sections):
        filename = self.file_format % (name, self.iotime)
        write_zarr.save2zarr_cross(filename, sections, self.model_time,
                                   attrs={"name": name, "xz": self.xz, "xy": self.xy})
        self.files.append(filename)
        return filename

    def cross_simple(self, data, name):
        """ xz and xy sections of a full-level field """
        grid = self.grid
        inner = grid.interior(data)
        sections = {}
        if self.xz:
            sections["xz"] = jnp.stack([inner[:, j, grid.kstart:grid.kend] for j in self.xz])
        if self.xy:
            sections["xy"] = jnp.stack([inner[:, :, grid.kstart + k] for k in self.xy])
        return self._write(name, sections)

    def cross_plane(self, plane, name):
        """ A single horizontal plane, such as a surface value """
        return self._write(name, {"xy": self.grid.interior(plane)[jnp.newaxis, :, :]})

    def cross_lngrad(self, data, name):
        """ Natural logarithm of the squared gradient magnitude, taken at the xy levels and xz planes

        The gradients are 4th order: the field is interpolated to the cell faces with 4 points and differentiated
        with the (1, -27, 27, -1)/24 stencil, using dzi4 in the vertical. Needs two vertical ghost levels.
        """
        grid = self.grid
        ks, ke = grid.kstart, grid.kend
        inner = grid.interior(data)
        dadx = _grad4_periodic(inner, 0) / grid.dx
        dady = _grad4_periodic(inner, 1) / grid.dy

        datah = jnp.zeros_like(inner)
        datah = datah.at[:, :, ks:ke + 1].set(ci0 * inner[:, :, ks - 2:ke - 1] + ci1 * inner[:, :, ks - 1:ke]
                                              + ci2 * inner[:, :, ks:ke + 1] + ci3 * inner[:, :, ks + 1:ke + 2])
        # the outermost faces lie between two ghost levels
        datah = datah.at[:, :, ks - 1].set(0.5 * (inner[:, :, ks - 2] + inner[:, :, ks - 1]))
        datah = datah.at[:, :, ke + 1].set(0.5 * (inner[:, :, ke] + inner[:, :, ke + 1]))
        dadz = jnp.zeros_like(inner).at[:, :, ks:ke].set(
            (cg0 * datah[:, :, ks - 1:ke - 1] + cg1 * datah[:, :, ks:ke] + cg2 * datah[:, :, ks + 1:ke + 1]
             + cg3 * datah[:, :, ks + 2:ke + 2]) * jnp.asarray(grid.dzi4[ks:ke]))
        lngrad = jnp.log(dadx ** 2 + dady ** 2 + dadz ** 2 + jnp.finfo(jnp.float64).tiny)

        sections = {}
        if self.xz:
            sections["xz"] = jnp.stack([lngrad[:, j, ks:ke] for j in self.xz])
        if self.xy:
            sections["xy"] = jnp.stack([lngrad[:, :, ks + k] for k in self.xy])
        return self._write(name, sections)

    def cross_path(self, data, rhoref, name):
        """ Density-weighted vertical integral of every column """
        grid = self.grid
        ks, ke = grid.kstart, grid.kend
        weights = jnp.asarray(rhoref[ks:ke]) * jnp.asarray(grid.dz[ks:ke])
        path = jnp.sum(grid.interior(data)[:, :, ks:ke] * weights, axis=2)
        return self._write(name, {"xy": path[jnp.newaxis, :, :]})


def _grad4_periodic(data, axis):
    """ 4th-order derivative along a periodic horizontal axis, per unit grid spacing """
    face = (ci0 * jnp.roll(data, 2, axis=axis) + ci1 * jnp.roll(data, 1, axis=axis) + ci2 * data
            + ci3 * jnp.roll(data, -1, axis=axis))
    return (cg0 * jnp.roll(face, 1, axis=axis) + cg1 * face + cg2 * jnp.roll(face, -1, axis=axis)
            + cg3 * jnp.roll(face, -2, axis=axis))
