# tests/test_reporting.py
import pytest

from biascalc_core.analysis import bjt, jfet, mosfet
from biascalc_core.analysis.systems import cascaded_system, two_port_system
from biascalc_core.reporting import (
    NOT_CALCULATED,
    format_ac_report,
    format_dc_report,
    format_result,
    format_value,
)


class TestFormatValue:

    def test_fixed_and_exponential_notation(self):
        assert format_value("Vce", 6.820833333, "V") == "Vce: 6.820833 V"
        assert format_value("Ib", 4.708333e-5, "A", exponential=True) == "Ib: 4.708333e-05 A"
        assert format_value("Av", -264.32851) == "Av: -264.328510"

    def test_none_renders_not_calculated(self):
        assert format_value("Icsat", None, "A", exponential=True) == f"Icsat: {NOT_CALCULATED}"


class TestReports:

    def test_bjt_dc_report(self):
        report = format_dc_report(bjt.dc_fixed_bias(Vcc=12, Rb=240000, Rc=2200, beta=50))
        lines = report.splitlines()
        assert lines[0] == "Ib: 4.708333e-05 A"
        assert "Vce: 6.820833 V" in lines
        assert lines[-1] == "Vbe: 0.700000 V"

    def test_common_base_report_marks_node_voltages(self):
        report = format_result(bjt.dc_common_base(Vcc=10, Vee=4, Rc=2400, Re=1200, beta=60))
        for name in ("Icsat", "Vc", "Ve", "Vb"):
            assert f"{name}: not calculated" in report
        assert "Vce: 4.100000 V" in report

    def test_negative_values_are_not_confused_with_not_calculated(self):
        report = format_result(bjt.ac_fixed_bias(Vcc=12, Rb=470000, Rc=3000, beta=100, ro=50000))
        assert "Av: -264.32" in report
        assert NOT_CALCULATED not in report
        assert report.splitlines()[-1] == "Phase: Out of phase"

    def test_mosfet_dc_report_includes_k(self):
        report = format_result(mosfet.dc_drain_feedback(Vdd=12, Rg=1e7, Rd=2000, Idon=0.006, Vgson=8, Vgsth=3))
        assert report.splitlines()[0] == "k: 2.400000e-04 A/V^2"

    def test_jfet_reports(self):
        assert "k:" not in format_dc_report(jfet.dc_fixed_bias(Vdd=16, Vgg=2, Rd=2000, Idss=0.01, Vp=-8))
        ac = format_ac_report(jfet.ac_fixed_bias(Vdd=16, Vgg=2, Rg=1e6, Rd=2000, Idss=0.01, Vp=-8, rd=25000))
        assert ac.splitlines()[0] == "gm: 1.875000e-03 S"

    def test_system_reports(self):
        two_port = format_result(two_port_system(Avnl=-480, Zi=4000, Zo=2000, Rs=200, Rl=5600))
        assert two_port.splitlines() == ["Avl: -353.684211", "Avs: -336.842105", "Ail: 252.631579"]

        cascade = format_result(cascaded_system([1, 250, 100], [500, 26, 100], [1000, 5100, 100], Rs=10000, Rl=820))
        names = [line.split(":")[0] for line in cascade.splitlines()]
        assert names == ["Av1", "Av2", "Av3", "Avt", "Avs", "Ait"]

    def test_unknown_record_type_raises(self):
        with pytest.raises(TypeError):
            format_result({"Av": 1.0})
