""" Save the reference state and the statistics to NetCDF files """

import logging

import netCDF4 as nc4
import numpy as np

import namelist_n_constants as nl

_LOG = logging.getLogger(__name__)

_BASE_LONG_NAMES = {
    "pref": "reference pressure (Pa)",
    "exnref": "reference Exner function",
    "thvref": "reference virtual potential temperature (K)",
    "rhoref": "reference density (kg m-3)",
}


def _create_levels(nc_file, grid):
    nc_file.createDimension("z", grid.ktot)
    nc_file.createDimension("zh", grid.ktot + 1)

    z_nc = nc_file.createVariable("z", np.float64, ("z",))
    z_nc.long_name = "height of the full levels (m)"
    zh_nc = nc_file.createVariable("zh", np.float64, ("zh",))
    zh_nc.long_name = "height of the half levels (m)"

    z_nc[:] = grid.z[grid.kstart:grid.kend]
    zh_nc[:] = grid.zh[grid.kstart:grid.kend + 1]


def save2nc_base(refstate, grid, filename=nl.base_file_name):
    """ Write the reference profiles to a NetCDF file """
    nc_file = nc4.Dataset(filename, mode="w", format="NETCDF4")
    _create_levels(nc_file, grid)
    ks, ke = grid.kstart, grid.kend

    ps_nc = nc_file.createVariable("ps", np.float64)
    ps_nc.long_name = "surface pressure (Pa)"
    ps_nc.assignValue(refstate.ps)

    for name, long_name in _BASE_LONG_NAMES.items():
        full = nc_file.createVariable(name, np.float64, ("z",), fill_value=1.0e36, zlib=True, complevel=2)
        full.long_name = long_name + " at the full levels"
        full[:] = np.asarray(getattr(refstate, name))[ks:ke]

        half = nc_file.createVariable(name + "h", np.float64, ("zh",), fill_value=1.0e36, zlib=True, complevel=2)
        half.long_name = long_name + " at the half levels"
        half[:] = np.asarray(getattr(refstate, name + "h"))[ks:ke + 1]

    nc_file.close()
    _LOG.info("Reference state written to %s", filename)

    return filename


def save2nc_stats(stats, grid, filename=nl.stats_file_name):
    """ Write all recorded profiles and time series to a NetCDF file """
    nc_file = nc4.Dataset(filename, mode="w", format="NETCDF4")
    _create_levels(nc_file, grid)
    nc_file.createDimension("time", None)
    ks, ke = grid.kstart, grid.kend

    itime = nc_file.createVariable("time", np.float64, ("time",))
    itime.long_name = "time (s)"
    itime[:] = np.asarray(stats.times, dtype=np.float64)

    for name, prof in stats.profs.items():
        kend = ke if prof["zloc"] == "z" else ke + 1
        var = nc_file.createVariable(name, np.float64, ("time", prof["zloc"]), fill_value=1.0e36, zlib=True, complevel=2)
        var.long_name = prof["longname"]
        var.units = prof["unit"]
        for n, (profiles, _) in enumerate(stats.history):
            var[n, :] = np.asarray(profiles[name])[ks:kend]

    for name, ts in stats.tseries.items():
        var = nc_file.createVariable(name, np.float64, ("time",), fill_value=1.0e36)
        var.long_name = ts["longname"]
        var.units = ts["unit"]
        var[:] = np.asarray([series[name] for _, series in stats.history], dtype=np.float64)

    nc_file.close()
    _LOG.info("Statistics written to %s", filename)

    return filename
