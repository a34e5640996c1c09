""" Named configuration values with defaults, read from a namelist module """

import logging

from thermo_errors import ConfigurationError

_LOG = logging.getLogger(__name__)

# namelist variable -> (section, item)
_SECTIONS = {
    "dx": ("grid", "dx"),
    "dy": ("grid", "dy"),
    "dz": ("grid", "dz"),
    "nx": ("grid", "itot"),
    "ny": ("grid", "jtot"),
    "nz": ("grid", "ktot"),
    "ngx": ("grid", "igc"),
    "ngy": ("grid", "jgc"),
    "swspatialorder": ("grid", "swspatialorder"),
    "ps": ("thermo", "ps"),
    "swupdatebasestate": ("thermo", "swupdatebasestate"),
    "crosslist": ("thermo", "crosslist"),
    "sat_adjust_max_iter": ("thermo", "sat_adjust_max_iter"),
    "svisc": ("fields", "svisc"),
    "tPr": ("fields", "tPr"),
    "diff_opt": ("diff", "swdiff"),
    "cross_xz": ("cross", "xz"),
    "cross_xy": ("cross", "xy"),
}

_REQUIRED = object()


class Input:
    """ Sectioned input items, e.g. input.get_item("thermo", "ps") """

    def __init__(self, items=None):
        self.items = {}
        for section, values in (items or {}).items():
            self.items[section] = dict(values)

    @classmethod
    def from_namelist(cls, nl, overrides=None):
        """ Build the input from a namelist module; overrides is {section: {item: value}} """
        items = {}
        for var_name, (section, item) in _SECTIONS.items():
            if hasattr(nl, var_name):
                items.setdefault(section, {})[item] = getattr(nl, var_name)
        for section, values in (overrides or {}).items():
            items.setdefault(section, {}).update(values)
        return cls(items)

    def get_item(self, section, name, default=_REQUIRED):
        """ Return an item, the default if it is absent, or raise if it is required """
        try:
            return self.items[section][name]
        except KeyError:
            if default is _REQUIRED:
                raise ConfigurationError("Item [%s][%s] is required but not in the input" % (section, name))
            _LOG.debug("[%s][%s] not set, using default %r", section, name, default)
            return default

    def get_list(self, section, name, default=()):
        """ Return an item as a list of strings """
        value = self.get_item(section, name, list(default))
        if isinstance(value, str):
            value = [v.strip() for v in value.split(",") if v.strip()]
        return list(value)
