""" Functions for the vertical boundary (ghost) values of profiles and fields

The ghost values are always linear extrapolations of the boundary value and the nearest value inside the domain.
The first ghost level sits at the mirror image of the first full level, so its value is 2*boundary - inside.
"""

import numpy as np


def extrapolate_surface_top(profile, grid):
    """ Linearly extrapolate a full-level profile to the surface and to the model top """
    ks, ke = grid.kstart, grid.kend
    bottom = profile[ks] - grid.z[ks] * (profile[ks + 1] - profile[ks]) * grid.dzhi[ks + 1]
    top = profile[ke - 1] + (grid.zh[ke] - grid.z[ke - 1]) * (profile[ke - 1] - profile[ke - 2]) * grid.dzhi[ke - 1]
    return bottom, top


def ghost_factors(grid):
    """ Weights of the inside value for each ghost level, f_ghost = bnd + w * (f_inside - bnd) """
    ks, ke = grid.kstart, grid.kend
    w_bot = [(grid.z[ks - n] - grid.zh[ks]) / (grid.z[ks] - grid.zh[ks]) for n in range(1, grid.kgc + 1)]
    w_top = [(grid.z[ke + n - 1] - grid.zh[ke]) / (grid.z[ke - 1] - grid.zh[ke]) for n in range(1, grid.kgc + 1)]
    return w_bot, w_top


def set_profile_ghosts(profile, bottom, top, grid):
    """ Fill the ghost cells of a full-level profile from its surface and top values """
    ks, ke = grid.kstart, grid.kend
    profile = np.array(profile, dtype=np.float64)
    profile[ks - 1] = 2.0 * bottom - profile[ks]
    profile[ke] = 2.0 * top - profile[ke - 1]
    if grid.kgc == 2:
        w_bot, w_top = ghost_factors(grid)
        profile[ks - 2] = bottom + w_bot[1] * (profile[ks] - bottom)
        profile[ke + 1] = top + w_top[1] * (profile[ke - 1] - top)
    return profile


def set_half_profile_ghosts(profileh, grid):
    """ Fill the ghost cells of a half-level profile from the two nearest half levels """
    ks, ke = grid.kstart, grid.kend
    zh = grid.zh
    profileh = np.array(profileh, dtype=np.float64)
    for n in range(1, grid.kgc + 1):
        profileh[ks - n] = profileh[ks] + (zh[ks - n] - zh[ks]) * (
                profileh[ks + 1] - profileh[ks]) / (zh[ks + 1] - zh[ks])
    for n in range(1, grid.kgc):
        profileh[ke + n] = profileh[ke] + (zh[ke + n] - zh[ke]) * (
                profileh[ke] - profileh[ke - 1]) / (zh[ke] - zh[ke - 1])
    return profileh


def set_field_ghosts(data, databot, grid):
    """ Fill the vertical ghost cells of a 3-D scalar field

    The bottom value is given (databot); the top value is extrapolated from the two highest levels.
    """
    ks, ke = grid.kstart, grid.kend
    top = data[:, :, ke - 1] + (grid.zh[ke] - grid.z[ke - 1]) * (data[:, :, ke - 1] - data[:, :, ke - 2]) * grid.dzhi[ke - 1]
    data = data.at[:, :, ks - 1].set(2.0 * databot - data[:, :, ks])
    data = data.at[:, :, ke].set(2.0 * top - data[:, :, ke - 1])
    if grid.kgc == 2:
        w_bot, w_top = ghost_factors(grid)
        data = data.at[:, :, ks - 2].set(databot + w_bot[1] * (data[:, :, ks] - databot))
        data = data.at[:, :, ke + 1].set(top + w_top[1] * (data[:, :, ke - 1] - top))
    return data
