""" Moist thermodynamics with liquid water potential temperature (thl) and total water (qt) as prognostic variables

ThermoMoist owns the reference state, adds the buoyancy to the tendency of w and provides the buoyancy and
liquid water for the statistics and the cross sections.
"""

import logging

import namelist_n_constants as nl
import buoyancy as bu
from reference_state import ReferenceState, prepare_input_profile
from thermo_errors import UnsupportedOperation

_LOG = logging.getLogger(__name__)

THERMO_FIELDS = ("b", "ql", "N2")
PROG_VARS = ("thl", "qt")


class ThermoMoist:
    """ Thermodynamics of a moist atmosphere without ice

    The spatial order (2 or 4) of the grid selects the buoyancy kernels once, at construction.
    """

    def __init__(self, grid, fields, inp, stats=None, cross=None):
        self.grid = grid
        self.fields = fields
        self.stats = stats
        self.cross = cross

        self.ps = inp.get_item("thermo", "ps")
        self.swupdatebasestate = bool(inp.get_item("thermo", "swupdatebasestate", True))
        self.crosslist = inp.get_list("thermo", "crosslist", [])
        self.max_iter = int(inp.get_item("thermo", "sat_adjust_max_iter", nl.sat_adjust_max_iter))
        self.swdiff = str(inp.get_item("diff", "swdiff", "les2s"))

        fields.init_prognostic_field("thl", "Liquid water potential temperature", "K")
        fields.init_prognostic_field("qt", "Total water mixing ratio", "kg kg-1")

        self.refstate = ReferenceState(grid, self.ps, self.max_iter)

        self.allowed_cross = ["b", "bbot", "bfluxbot"]
        if grid.swspatialorder == 4:
            self.allowed_cross.append("blngrad")
        self.allowed_cross += ["ql", "qlpath"]

        if grid.swspatialorder == 2:
            self._buoyancy_tend = self._buoyancy_tend_2nd
        else:
            self._buoyancy_tend = self._buoyancy_tend_4th

        self.thl0 = None
        self.qt0 = None

    def create(self, thl0, qt0):
        """ Solve the reference state of the initial profiles (ktot values each), register the statistics and
        check the list of cross sections
        """
        self.thl0 = prepare_input_profile(thl0, self.grid)
        self.qt0 = prepare_input_profile(qt0, self.grid)
        self.refstate.calc_hydrostatic_pressure(self.thl0, self.qt0)

        if self.stats is not None and self.stats.swstats:
            self._add_stats()

        crosslist = []
        for name in self.crosslist:
            if name in self.allowed_cross:
                crosslist.append(name)
            else:
                _LOG.warning("Field %s in [thermo][crosslist] is illegal and is skipped", name)
        self.crosslist = sorted(crosslist)

    def _add_stats(self):
        stats = self.stats
        stats.add_prof("b", "Buoyancy", "m s-2", "z")
        for n in range(2, 5):
            stats.add_prof("b%i" % n, "Moment %i of the buoyancy" % n, "(m s-2)%i" % n, "z")
        stats.add_prof("bgrad", "Gradient of the buoyancy", "m s-3", "zh")
        stats.add_prof("bw", "Turbulent flux of the buoyancy", "m2 s-3", "zh")
        stats.add_prof("bdiff", "Diffusive flux of the buoyancy", "m2 s-3", "zh")
        stats.add_prof("bflux", "Total flux of the buoyancy", "m2 s-3", "zh")
        stats.add_prof("ql", "Liquid water mixing ratio", "kg kg-1", "z")
        stats.add_prof("cfrac", "Cloud fraction", "-", "z")
        stats.add_tseries("lwp", "Liquid water path", "kg m-2")
        stats.add_tseries("ccover", "Projected cloud cover", "-")

    def get_prog_vars(self):
        return list(PROG_VARS)

    def update_base_state(self):
        """ Recompute the reference state from the current mean profiles, if it is updated during the run """
        if not self.swupdatebasestate:
            return
        self.refstate.mark_stale()
        self.fields.calc_mean_profiles()
        self.refstate.update(self.fields.sp["thl"].datamean, self.fields.sp["qt"].datamean)

    def _buoyancy_tend_2nd(self, wt):
        rs = self.refstate
        return bu.calc_buoyancy_tend_2nd(wt, self.fields.sp["thl"].data, self.fields.sp["qt"].data,
                                         rs.prefh, rs.exnrefh, rs.thvrefh, self.grid, self.max_iter)

    def _buoyancy_tend_4th(self, wt):
        rs = self.refstate
        return bu.calc_buoyancy_tend_4th(wt, self.fields.sp["thl"].data, self.fields.sp["qt"].data,
                                         rs.pref, rs.thvrefh, self.grid, self.max_iter)

    def exec(self):
        """ Add the buoyancy to the tendency of w """
        self.update_base_state()
        wt = self.fields.wt
        wt.data = self._buoyancy_tend(wt.data)

    def check_thermo_field(self, name):
        return name in THERMO_FIELDS

    def get_thermo_field(self, name, fld=None):
        """ Compute the 3-D field b, ql or N2, store it in fld if given and return it """
        if not self.check_thermo_field(name):
            raise UnsupportedOperation("Thermo field \"%s\" is not available in the moist thermodynamics" % name)
        self.update_base_state()

        rs = self.refstate
        thl = self.fields.sp["thl"].data
        qt = self.fields.sp["qt"].data
        if name == "b":
            data = bu.calc_buoyancy(thl, qt, rs.pref, rs.thvref, self.grid, self.max_iter)
        elif name == "ql":
            data = bu.calc_ql_field(thl, qt, rs.pref, self.grid, self.max_iter)
        else:
            data = bu.calc_n2(thl, rs.thvref, self.grid)

        if fld is not None:
            fld.data = data
        return data

    def get_buoyancy_surf(self, bfield):
        """ Surface buoyancy, buoyancy at the first level and surface buoyancy flux, stored in bfield """
        thl, qt = self.fields.sp["thl"], self.fields.sp["qt"]
        rs = self.refstate
        bbot, b_first = bu.calc_buoyancy_bot(thl.data, thl.databot, qt.data, qt.databot, rs.thvref, rs.thvrefh,
                                             self.grid)
        bfield.databot = bbot
        bfield.data = bfield.data.at[:, :, self.grid.kstart].set(b_first)
        self.get_buoyancy_fluxbot(bfield)
        return bfield

    def get_buoyancy_fluxbot(self, bfield):
        thl, qt = self.fields.sp["thl"], self.fields.sp["qt"]
        bfield.datafluxbot = bu.calc_buoyancy_fluxbot(thl.databot, thl.datafluxbot, qt.databot, qt.datafluxbot,
                                                      self.refstate.thvrefh, self.grid)
        return bfield

    def exec_stats(self, model_time=None):
        """ Buoyancy and liquid water statistics of the current fields """
        stats, grid, fields = self.stats, self.grid, self.fields
        rs = self.refstate
        thl, qt = fields.sp["thl"], fields.sp["qt"]
        tmp1 = fields.sd["tmp1"]
        profs = stats.profs

        tmp1.data = bu.calc_buoyancy(thl.data, qt.data, rs.pref, rs.thvref, grid, self.max_iter)
        self.get_buoyancy_fluxbot(tmp1)

        profs["b"]["data"] = stats.calc_mean(tmp1.data)
        for n in range(2, 5):
            profs["b%i" % n]["data"] = stats.calc_moment(tmp1.data, profs["b"]["data"], n)

        if grid.swspatialorder == 2:
            profs["bgrad"]["data"] = stats.calc_grad_2nd(tmp1.data, grid.dzhi)
            profs["bw"]["data"] = stats.calc_flux_2nd(tmp1.data, fields.w.data)
        else:
            profs["bgrad"]["data"] = stats.calc_grad_4th(tmp1.data, grid.dzhi4)
            profs["bw"]["data"] = stats.calc_flux_4th(tmp1.data, fields.w.data)

        if self.swdiff == "les2s":
            profs["bdiff"]["data"] = stats.calc_diff_2nd(tmp1.data, fields.sd["evisc"].data, grid.dzhi,
                                                         tmp1.datafluxbot, tmp1.datafluxtop, fields.tPr)
        else:
            # the diffusivity of thl is taken for the buoyancy
            profs["bdiff"]["data"] = stats.calc_diff_4th(tmp1.data, grid.dzhi4, thl.visc)

        profs["bflux"]["data"] = stats.add_fluxes(profs["bw"]["data"], profs["bdiff"]["data"])

        tmp1.data = bu.calc_ql_field(thl.data, qt.data, rs.pref, grid, self.max_iter)
        profs["ql"]["data"] = stats.calc_mean(tmp1.data)
        profs["cfrac"]["data"] = stats.calc_count(tmp1.data, 0.0)
        stats.tseries["ccover"]["data"] = stats.calc_cover(tmp1.data, 0.0)
        stats.tseries["lwp"]["data"] = stats.calc_path(tmp1.data, rs.rhoref)

        if model_time is not None:
            stats.record(model_time)

    def exec_cross(self):
        """ Write the cross sections in the crosslist """
        tmp1 = self.fields.sd["tmp1"]
        files = []
        for name in self.crosslist:
            if name in ("b", "ql"):
                files.append(self.cross.cross_simple(self.get_thermo_field(name, tmp1), name))
            elif name == "blngrad":
                files.append(self.cross.cross_lngrad(self.get_thermo_field("b", tmp1), name))
            elif name == "qlpath":
                files.append(self.cross.cross_path(self.get_thermo_field("ql", tmp1), self.refstate.rhoref, name))
            elif name in ("bbot", "bfluxbot"):
                self.get_buoyancy_surf(tmp1)
                plane = tmp1.databot if name == "bbot" else tmp1.datafluxbot
                files.append(self.cross.cross_plane(plane, name))
        return files
