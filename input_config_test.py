"""
Unit tests for the input configuration
"""

import logging
import types

import pytest

import namelist_n_constants as nl
from input_config import Input
from thermo_errors import ConfigurationError


class TestInput:
    """Test the named configuration values"""

    def test_required_item(self):
        inp = Input({"thermo": {"swupdatebasestate": False}})
        with pytest.raises(ConfigurationError, match="ps"):
            inp.get_item("thermo", "ps")

    def test_default(self, caplog):
        inp = Input()
        with caplog.at_level(logging.DEBUG, logger="input_config"):
            assert inp.get_item("thermo", "swupdatebasestate", True) is True
        assert "swupdatebasestate" in caplog.text

    def test_list(self):
        inp = Input({"thermo": {"crosslist": "b, ql,,qlpath"}})
        assert inp.get_list("thermo", "crosslist") == ["b", "ql", "qlpath"]
        assert inp.get_list("thermo", "missing") == []

    def test_from_namelist(self):
        inp = Input.from_namelist(nl)
        assert inp.get_item("thermo", "ps") == nl.ps
        assert inp.get_item("grid", "itot") == nl.nx
        assert inp.get_item("diff", "swdiff") == nl.diff_opt

    def test_overrides(self):
        namelist = types.SimpleNamespace(ps=95000.0, nz=20)
        inp = Input.from_namelist(namelist, {"grid": {"ktot": 40}, "thermo": {"crosslist": ["b"]}})
        assert inp.get_item("grid", "ktot") == 40
        assert inp.get_item("thermo", "ps") == 95000.0
        assert inp.get_list("thermo", "crosslist") == ["b"]
