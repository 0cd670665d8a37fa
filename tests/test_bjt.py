# tests/test_bjt.py
import dataclasses

import pytest

from biascalc_core.analysis import bjt
from biascalc_core.analysis.enums import BypassMode, PhaseRelation
from biascalc_core.analysis.exceptions import OperatingPointError, ParameterValidationError
from biascalc_core.analysis.results import BJTACResult, BJTDCResult

REL = 1e-5


class TestFixedBias:

    def test_dc_golden_values(self):
        r = bjt.dc_fixed_bias(Vcc=12, Rb=240000, Rc=2200, beta=50)
        assert isinstance(r, BJTDCResult)
        assert r.Ib == pytest.approx(4.708333e-5, rel=REL)
        assert r.Ic == pytest.approx(2.354167e-3, rel=REL)
        assert r.Ie == pytest.approx(2.40125e-3, rel=REL)
        assert r.Icsat == pytest.approx(5.454545e-3, rel=REL)
        assert r.Vce == pytest.approx(6.820833, rel=REL)
        assert r.Vbc == pytest.approx(-6.120833, rel=REL)
        assert r.Vbe == 0.7
        assert r.Ve == 0.0

    def test_ac_golden_values(self):
        r = bjt.ac_fixed_bias(Vcc=12, Rb=470000, Rc=3000, beta=100, ro=50000)
        assert isinstance(r, BJTACResult)
        assert r.re == pytest.approx(10.707088, rel=REL)
        assert r.Zi == pytest.approx(1068.275, rel=REL)
        assert r.Zo == pytest.approx(2830.189, rel=REL)
        assert r.Av == pytest.approx(-264.3285, rel=REL)
        assert r.phase is PhaseRelation.OUT_OF_PHASE

    def test_results_are_immutable(self):
        r = bjt.dc_fixed_bias(Vcc=12, Rb=240000, Rc=2200, beta=50)
        with pytest.raises(dataclasses.FrozenInstanceError):
            r.Ib = 0.0

    def test_calls_do_not_share_records(self):
        first = bjt.dc_fixed_bias(Vcc=12, Rb=240000, Rc=2200, beta=50)
        second = bjt.dc_fixed_bias(Vcc=20, Rb=240000, Rc=2200, beta=50)
        assert first is not second
        assert first.Ib == pytest.approx(4.708333e-5, rel=REL)


class TestEmitterBias:

    def test_dc_golden_values(self):
        r = bjt.dc_emitter_bias(Vcc=20, Rb=430000, Rc=2000, Re=1000, beta=50)
        assert r.Ib == pytest.approx(4.012474e-5, rel=REL)
        assert r.Vce == pytest.approx(13.981289, rel=REL)
        assert r.Vc == pytest.approx(16.027651, rel=REL)
        assert r.Ve == pytest.approx(2.046362, rel=REL)
        assert r.Vb == pytest.approx(2.746362, rel=REL)

    def test_ac_golden_values(self):
        r = bjt.ac_emitter_bias(Vcc=20, Rb=470000, Rc=2200, Re=560, beta=120, ro=40000)
        assert r.re == pytest.approx(5.987136, rel=REL)
        assert r.Zi == pytest.approx(56433.07, rel=REL)
        assert r.Zo == pytest.approx(2197.744, rel=REL)
        assert r.Av == pytest.approx(-3.850258, rel=REL)


class TestVoltageDivider:

    PARAMS = dict(Vcc=16, Rb1=90000, Rb2=10000, Rc=2200, Re=680, beta=210, ro=50000)

    def test_dc_golden_values(self):
        r = bjt.dc_voltage_divider(Vcc=22, Rb1=39000, Rb2=3900, Rc=10000, Re=1500, beta=100)
        assert r.Ib == pytest.approx(8.384638e-6, rel=REL)
        assert r.Vce == pytest.approx(12.357666, rel=REL)
        assert r.Ve == pytest.approx(1.270273, rel=REL)

    def test_ac_bypassed(self):
        r = bjt.ac_voltage_divider(**self.PARAMS, bypass=BypassMode.BYPASSED)
        assert r.re == pytest.approx(20.876673, rel=REL)
        assert r.Zi == pytest.approx(2948.043, rel=REL)
        assert r.Zo == pytest.approx(2107.280, rel=REL)
        assert r.Av == pytest.approx(-100.9394, rel=REL)

    def test_ac_unbypassed_uses_distinct_formulas(self):
        r = bjt.ac_voltage_divider(**self.PARAMS, bypass="unbypassed")
        assert r.Zi == pytest.approx(8456.66, rel=REL)
        assert r.Zo == pytest.approx(2196.691, rel=REL)
        assert r.Av == pytest.approx(-3.118332, rel=REL)

    def test_tag_string_and_member_are_equivalent(self):
        assert bjt.ac_voltage_divider(**self.PARAMS, bypass="bypassed") == \
            bjt.ac_voltage_divider(**self.PARAMS, bypass=BypassMode.BYPASSED)

    @pytest.mark.parametrize("bypass", ["Bypassed", "partial", "", None])
    def test_unknown_bypass_tag_raises(self, bypass):
        with pytest.raises(ParameterValidationError) as excinfo:
            bjt.ac_voltage_divider(**self.PARAMS, bypass=bypass)
        assert excinfo.value.parameter == "bypass"


class TestCollectorFeedback:

    def test_dc_golden_values(self):
        r = bjt.dc_collector_feedback(Vcc=10, Rf=250000, Rc=4700, Re=1200, beta=90)
        assert r.Ib == pytest.approx(1.190781e-5, rel=REL)
        assert r.Vce == pytest.approx(3.676953, rel=REL)

    def test_ac_golden_values(self):
        r = bjt.ac_collector_feedback(Vcc=9, Rf=180000, Rc=2700, beta=200, ro=1e6)
        assert r.re == pytest.approx(11.221004, rel=REL)
        assert r.Zi == pytest.approx(565.582, rel=REL)
        assert r.Zo == pytest.approx(2660.098, rel=REL)
        assert r.Av == pytest.approx(-237.0642, rel=REL)

    def test_dc_feedback_golden_values(self):
        r = bjt.dc_collector_dc_feedback(Vcc=12, Rf1=120000, Rf2=68000, Rc=3000, beta=140)
        assert r.Ib == pytest.approx(1.858553e-5, rel=REL)
        assert r.Ic == pytest.approx(2.601974e-3, rel=REL)
        assert r.Vce == pytest.approx(4.194079, rel=REL)
        assert r.Icsat == pytest.approx(4e-3)

    def test_ac_dc_feedback_golden_values(self):
        r = bjt.ac_collector_dc_feedback(Vcc=12, Rf1=120000, Rf2=68000, Rc=3000, beta=140, ro=30000)
        assert r.re == pytest.approx(9.921547, rel=REL)
        assert r.Zi == pytest.approx(1373.122, rel=REL)
        assert r.Zo == pytest.approx(2622.108, rel=REL)
        assert r.Av == pytest.approx(-264.2842, rel=REL)

    def test_dc_and_ac_share_operating_point(self):
        dc = bjt.dc_collector_dc_feedback(Vcc=12, Rf1=120000, Rf2=68000, Rc=3000, beta=140)
        ac = bjt.ac_collector_dc_feedback(Vcc=12, Rf1=120000, Rf2=68000, Rc=3000, beta=140, ro=30000)
        assert ac.re == pytest.approx(0.026 / dc.Ie)


class TestEmitterFollower:

    def test_dc_marks_saturation_current_not_applicable(self):
        r = bjt.dc_emitter_follower(Vee=20, Rb=240000, Re=2000, beta=90)
        assert r.Icsat is None
        assert r.Ib == pytest.approx(4.57346e-5, rel=REL)
        assert r.Ie == pytest.approx(4.161848e-3, rel=REL)
        assert r.Vce == pytest.approx(11.676303, rel=REL)
        assert r.Vc == pytest.approx(40.0, rel=REL)
        assert r.Ve == pytest.approx(28.323696, rel=REL)

    def test_ac_golden_values(self):
        r = bjt.ac_emitter_follower(Vcc=12, Rb=220000, Re=3300, beta=100, ro=1e6)
        assert r.re == pytest.approx(12.604749, rel=REL)
        assert r.Zi == pytest.approx(132550.8, rel=REL)
        assert r.Zo == pytest.approx(12.432776, rel=REL)
        assert r.Av == pytest.approx(0.996220, rel=REL)
        assert r.phase is PhaseRelation.IN_PHASE


class TestCommonBase:

    @pytest.mark.parametrize("Vcc,Vee", [(10, 4), (20, 2), (5, 12)])
    def test_dc_node_voltages_never_calculated(self, Vcc, Vee):
        r = bjt.dc_common_base(Vcc=Vcc, Vee=Vee, Rc=2400, Re=1200, beta=60)
        assert r.Vc is None
        assert r.Ve is None
        assert r.Vb is None
        assert r.Icsat is None

    def test_dc_golden_values(self):
        r = bjt.dc_common_base(Vcc=10, Vee=4, Rc=2400, Re=1200, beta=60)
        assert r.Ie == pytest.approx(2.75e-3)
        assert r.Ib == pytest.approx(4.508197e-5, rel=REL)
        assert r.Vce == pytest.approx(4.1)
        assert r.Vbc == pytest.approx(-3.508196, rel=REL)

    def test_ac_golden_values(self):
        r = bjt.ac_common_base(Vcc=8, Vee=2, Rc=5000, Re=1000, alpha=0.98)
        assert r.re == pytest.approx(20.0)
        assert r.Zi == pytest.approx(19.607843, rel=REL)
        assert r.Zo == pytest.approx(5000.0)
        assert r.Av == pytest.approx(245.0)
        assert r.phase is PhaseRelation.IN_PHASE

    def test_ac_cutoff_raises(self):
        # Vee below the base-emitter drop leaves no emitter current.
        with pytest.raises(OperatingPointError):
            bjt.ac_common_base(Vcc=8, Vee=0.5, Rc=5000, Re=1000, alpha=0.98)


class TestMiscellaneousBias:

    def test_dc_golden_values(self):
        r = bjt.dc_miscellaneous_bias(Vcc=20, Rb=680000, Rc=4700, beta=120)
        assert r.Ib == pytest.approx(1.551447e-5, rel=REL)
        assert r.Vce == pytest.approx(11.176921, rel=REL)
        assert r.Icsat is None


VALID_CALLS = [
    (bjt.dc_fixed_bias, dict(Vcc=12, Rb=240000, Rc=2200, beta=50)),
    (bjt.ac_fixed_bias, dict(Vcc=12, Rb=470000, Rc=3000, beta=100, ro=50000)),
    (bjt.dc_emitter_bias, dict(Vcc=20, Rb=430000, Rc=2000, Re=1000, beta=50)),
    (bjt.ac_emitter_bias, dict(Vcc=20, Rb=470000, Rc=2200, Re=560, beta=120, ro=40000)),
    (bjt.dc_voltage_divider, dict(Vcc=22, Rb1=39000, Rb2=3900, Rc=10000, Re=1500, beta=100)),
    (bjt.ac_voltage_divider, dict(Vcc=16, Rb1=90000, Rb2=10000, Rc=2200, Re=680, beta=210, ro=50000, bypass="bypassed")),
    (bjt.dc_collector_feedback, dict(Vcc=10, Rf=250000, Rc=4700, Re=1200, beta=90)),
    (bjt.ac_collector_feedback, dict(Vcc=9, Rf=180000, Rc=2700, beta=200, ro=1e6)),
    (bjt.dc_collector_dc_feedback, dict(Vcc=12, Rf1=120000, Rf2=68000, Rc=3000, beta=140)),
    (bjt.ac_collector_dc_feedback, dict(Vcc=12, Rf1=120000, Rf2=68000, Rc=3000, beta=140, ro=30000)),
    (bjt.dc_emitter_follower, dict(Vee=20, Rb=240000, Re=2000, beta=90)),
    (bjt.ac_emitter_follower, dict(Vcc=12, Rb=220000, Re=3300, beta=100, ro=1e6)),
    (bjt.dc_common_base, dict(Vcc=10, Vee=4, Rc=2400, Re=1200, beta=60)),
    (bjt.ac_common_base, dict(Vcc=8, Vee=2, Rc=5000, Re=1000, alpha=0.98)),
    (bjt.dc_miscellaneous_bias, dict(Vcc=20, Rb=680000, Rc=4700, beta=120)),
]

POSITIVE_PARAMS = {"Rb", "Rc", "Re", "Rb1", "Rb2", "Rf", "Rf1", "Rf2", "beta", "alpha", "ro"}


@pytest.mark.parametrize(
    "func,params,name",
    [
        (func, params, name)
        for func, params in VALID_CALLS
        for name in params
        if name in POSITIVE_PARAMS
    ],
)
@pytest.mark.parametrize("bad_value", [0, -100.0])
def test_non_positive_parameter_fails_fast(func, params, name, bad_value):
    with pytest.raises(ParameterValidationError) as excinfo:
        func(**{**params, name: bad_value})
    assert excinfo.value.parameter == name
    assert excinfo.value.topology == f"bjt.{func.__name__}"
