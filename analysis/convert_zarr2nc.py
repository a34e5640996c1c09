""" Convert the cross sections in Zarr to netCDF """

import netCDF4 as nc4
import numpy as np
import zarr
import namelist_n_constants as nl


file_nums = [0, 1, 2, 3]

x = (np.arange(nl.nx) + 0.5) * nl.dx
y = (np.arange(nl.ny) + 0.5) * nl.dy
z = (np.arange(nl.nz) + 0.5) * nl.dz

for name in nl.crosslist:
    file_name_format = "../" + nl.cross_file_format
    stores = [zarr.open_group(file_name_format % (name, file_num), mode="r") for file_num in file_nums]

    filename = "lex_cross_%s.nc" % name
    nc_file = nc4.Dataset(filename, mode="w", format="NETCDF4")
    nc_file.createDimension("time", None)
    nc_file.createDimension("x", nl.nx)
    nc_file.createDimension("y", nl.ny)
    nc_file.createDimension("z", nl.nz)

    itime = nc_file.createVariable("time", np.float64, ("time",))
    itime.long_name = "time (s)"
    x_nc = nc_file.createVariable("x", np.float64, ("x",))
    x_nc.long_name = "x (m)"
    y_nc = nc_file.createVariable("y", np.float64, ("y",))
    y_nc.long_name = "y (m)"
    z_nc = nc_file.createVariable("z", np.float64, ("z",))
    z_nc.long_name = "z (m)"

    itime[:] = [np.copy(zarr_store["time"])[0] for zarr_store in stores]
    x_nc[:] = x
    y_nc[:] = y
    z_nc[:] = z

    if "xz" in stores[0]:
        # one variable per y index of the xz sections
        for n, j in enumerate(nl.cross_xz):
            xz = np.stack([np.copy(zarr_store["xz"])[n] for zarr_store in stores])
            xz_nc = nc_file.createVariable("%s_xz_%0.4i" % (name, j), np.float64, ("time", "x", "z"),
                                           fill_value=1.0e36, zlib=True, complevel=2)
            xz_nc[:] = xz

    # surface planes and vertical integrals hold a single xy section
    xy_levels = nl.cross_xy if name in ("b", "ql", "blngrad") else [0]
    for n, k in enumerate(xy_levels):
        xy = np.stack([np.copy(zarr_store["xy"])[n] for zarr_store in stores])
        xy_nc = nc_file.createVariable("%s_xy_%0.4i" % (name, k), np.float64, ("time", "x", "y"),
                                       fill_value=1.0e36, zlib=True, complevel=2)
        xy_nc[:] = xy

    nc_file.close()
