# tests/conftest.py
import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def two_stage_job_yaml():
    """A job with one DC analysis, two AC stages, a two-port and a cascade."""
    return textwrap.dedent("""
        name: two_stage_amp
        analyses:
          - id: bias
            analysis: bjt.dc_fixed_bias
            parameters: {Vcc: 12 V, Rb: 240 kohm, Rc: 2.2 kohm, beta: 50}
          - id: stage1
            analysis: bjt.ac_voltage_divider
            parameters:
              Vcc: 16 V
              Rb1: 90 kohm
              Rb2: 10 kohm
              Rc: 2.2 kohm
              Re: 680 ohm
              beta: 210
              ro: 50 kohm
              bypass: bypassed
          - id: stage2
            analysis: jfet.ac_fixed_bias
            parameters: {Vdd: 16, Vgg: 2, Rg: 1 Mohm, Rd: 2 kohm, Idss: 10 mA, Vp: -8 V, rd: 25 kohm}
        systems:
          - id: single
            type: two_port
            stages: [stage1]
            Rs: 200 ohm
            Rl: 5.6 kohm
          - id: chain
            type: cascaded
            stages: [stage1, stage2]
            Rs: 10 kohm
            Rl: 820 ohm
    """)


@pytest.fixture
def write_job_file(tmp_path):
    """Writes YAML text to a file in tmp_path and returns its path."""
    def _write(content: str, filename: str = "job.yaml") -> Path:
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")
        return path
    return _write
