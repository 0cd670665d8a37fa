# tests/test_mosfet.py
import pytest

from biascalc_core.analysis import mosfet
from biascalc_core.analysis.enums import PhaseRelation
from biascalc_core.analysis.exceptions import OperatingPointError, ParameterValidationError

REL = 1e-5

DRAIN_FEEDBACK = dict(Vdd=12, Rg=1e7, Rd=2000, Idon=0.006, Vgson=8, Vgsth=3)


class TestDrainFeedback:

    def test_dc_golden_values(self):
        r = mosfet.dc_drain_feedback(**DRAIN_FEEDBACK)
        assert r.k == pytest.approx(2.4e-4)
        assert r.Id == pytest.approx(2.794004e-3, rel=REL)
        assert r.Vgs == pytest.approx(6.411991, rel=REL)
        assert r.Vds == r.Vgs
        assert r.Vg == r.Vd
        assert r.Vs == 0.0

    def test_dc_operating_point_satisfies_square_law(self):
        r = mosfet.dc_drain_feedback(**DRAIN_FEEDBACK)
        assert r.Id == pytest.approx(r.k * (r.Vgs - 3) ** 2, rel=1e-9)
        assert r.Vgs > 3

    def test_ac_golden_values(self):
        r = mosfet.ac_drain_feedback(**DRAIN_FEEDBACK, rd=5e4)
        assert r.gm == pytest.approx(1.637756e-3, rel=REL)
        assert r.Zi == pytest.approx(2410375, rel=REL)
        assert r.Zo == pytest.approx(1922.707, rel=REL)
        assert r.Av == pytest.approx(-3.148925, rel=REL)
        assert r.phase is PhaseRelation.OUT_OF_PHASE


class TestVoltageDivider:

    def test_dc_golden_values(self):
        r = mosfet.dc_voltage_divider(Vdd=40, Rg1=22e6, Rg2=18e6, Rd=3000, Rs=820, Idon=0.003, Vgson=10, Vgsth=5)
        assert r.k == pytest.approx(1.2e-4)
        assert r.Vg == pytest.approx(18.0)
        assert r.Id == pytest.approx(6.724565e-3, rel=REL)
        assert r.Vgs == pytest.approx(12.485856, rel=REL)
        assert r.Vds == pytest.approx(14.31216, rel=REL)
        assert r.Vs == pytest.approx(r.Id * 820)

    def test_ac_golden_values(self):
        r = mosfet.ac_voltage_divider(
            Vdd=24, Rg1=1e7, Rg2=6.8e6, Rd=2200, Rs=750, Idon=0.005, Vgson=6, Vgsth=3, rd=1e6
        )
        assert r.gm == pytest.approx(3.321982e-3, rel=REL)
        assert r.Zi == pytest.approx(4047619, rel=REL)
        assert r.Zo == pytest.approx(2195.17, rel=REL)
        assert r.Av == pytest.approx(-7.292316, rel=REL)


class TestDeviceContract:

    def test_vgson_equal_to_threshold_raises(self):
        with pytest.raises(ParameterValidationError) as excinfo:
            mosfet.dc_drain_feedback(Vdd=12, Rg=1e7, Rd=2000, Idon=0.006, Vgson=3, Vgsth=3)
        assert excinfo.value.parameter == "Vgson"

    @pytest.mark.parametrize("name", ["Rg", "Rd", "Idon"])
    def test_non_positive_parameter_fails_fast(self, name):
        with pytest.raises(ParameterValidationError) as excinfo:
            mosfet.ac_drain_feedback(**{**DRAIN_FEEDBACK, name: -1.0}, rd=5e4)
        assert excinfo.value.parameter == name

    @pytest.mark.parametrize("name", ["Rg1", "Rg2", "Rd", "Rs", "rd"])
    def test_divider_non_positive_parameter_fails_fast(self, name):
        params = dict(Vdd=24, Rg1=1e7, Rg2=6.8e6, Rd=2200, Rs=750, Idon=0.005, Vgson=6, Vgsth=3, rd=1e6)
        with pytest.raises(ParameterValidationError):
            mosfet.ac_voltage_divider(**{**params, name: 0})


class TestCutOff:

    BELOW_THRESHOLD = dict(Vdd=10, Rg1=8e6, Rg2=2e6, Rd=2000, Rs=100, Idon=3e-3, Vgson=8, Vgsth=3)

    def test_divider_gate_below_threshold_raises(self):
        with pytest.raises(OperatingPointError) as excinfo:
            mosfet.dc_voltage_divider(**self.BELOW_THRESHOLD)
        assert excinfo.value.topology == "mosfet.dc_voltage_divider"
        assert "cut off" in str(excinfo.value)

    def test_ac_divider_gate_below_threshold_raises(self):
        with pytest.raises(OperatingPointError):
            mosfet.ac_voltage_divider(**self.BELOW_THRESHOLD, rd=1e6)

    def test_drain_feedback_supply_below_threshold_raises(self):
        with pytest.raises(OperatingPointError):
            mosfet.ac_drain_feedback(Vdd=2, Rg=1e7, Rd=2000, Idon=0.006, Vgson=8, Vgsth=3, rd=5e4)
