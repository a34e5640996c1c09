""" Save cross sections to Zarr stores """

import logging

import numpy as np
import zarr

_LOG = logging.getLogger(__name__)


def save2zarr_cross(filename, sections, model_time, attrs=None):
    """ Write the cross sections of one variable at one time to a Zarr store

    sections maps the orientation ("xy", "xz") to an array of stacked 2-D slices.
    """
    zarr_store = zarr.storage.LocalStore(filename)
    root = zarr.create_group(store=zarr_store, overwrite=True)
    time = root.create_array(name="time", shape=(1,), dtype="float64")
    time[:] = model_time

    compressors = zarr.codecs.BloscCodec(cname='zstd', clevel=3, shuffle=zarr.codecs.BloscShuffle.bitshuffle)

    for orientation, data in sections.items():
        data = np.asarray(data, dtype=np.float64)
        arr = root.create_array(name=orientation, shape=data.shape, chunks=data.shape, dtype="float64", compressors=compressors)
        arr[:] = data

    if attrs:
        root.attrs.update(attrs)

    _LOG.info("Cross sections written to %s", filename)
    return filename


def load_zarr_cross(filename):
    """ Read back a cross-section store as a dict of numpy arrays """
    root = zarr.open_group(store=zarr.storage.LocalStore(filename, read_only=True), mode="r")
    return {name: arr[:] for name, arr in root.arrays()}
