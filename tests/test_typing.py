# -*- coding: utf-8 -*-
# Tincta: Typed color encodings and exact conversions between them.
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Static checks: a type checker must reject arithmetic on display colors."""

import re
import textwrap
from pathlib import Path

import pytest
from mypy import api

ROOT = Path(__file__).resolve().parents[1]

USAGE = textwrap.dedent("""\
    from tincta_color import (
        LinearSrgb,
        LinearSrgba,
        Oklab,
        SrgbaPremultipliedU8,
        SrgbaU8,
        SrgbF32,
        SrgbU8,
    )

    a = SrgbU8(1, 2, 3)
    lin = a.convert(LinearSrgb)
    lab = a.convert(Oklab)
    lit = lin * 0.5 + lin
    mixed = lin.lerp(lin, 0.25).saturate()
    blended = lab.perceptual_blend(lab, 0.5)
    composed = LinearSrgba(0.1, 0.2, 0.3, 0.5).alpha_over(LinearSrgba(0.0, 0.0, 1.0, 1.0))
    packed = SrgbaPremultipliedU8(1, 2, 3, 4).alpha_over(SrgbaPremultipliedU8(0, 0, 9, 255))
    red: float = a.r
    lightness: float = lab.l
    opacity: float = composed.a
    bad_sum = a + a  # rejected
    bad_scale = a * 0.5  # rejected
    bad_lerp = a.lerp(a, 0.5)  # rejected
    bad_saturate = SrgbF32(0.1, 0.2, 0.3).saturate()  # rejected
    bad_over = SrgbaU8(1, 2, 3, 4).alpha_over(SrgbaU8(1, 2, 3, 4))  # rejected
    bad_blend = a.perceptual_blend(a, 0.5)  # rejected
    bad_mix = lin + lab  # rejected
    bad_alpha = a.a  # rejected
    bad_channel = lin.l  # rejected
""")


@pytest.fixture(scope="module")
def usage_errors(tmp_path_factory):
    """Line numbers mypy reports as errors in the usage module."""
    tmp = tmp_path_factory.mktemp("typing")
    path = tmp / "usage.py"
    path.write_text(USAGE)
    with pytest.MonkeyPatch.context() as mp:
        mp.setenv("MYPYPATH", str(ROOT))
        stdout, stderr, _ = api.run([
            "--config-file", str(ROOT / "pyproject.toml"),
            "--cache-dir", str(tmp / ".mypy_cache"),
            "--no-error-summary",
            str(path),
        ])
    assert "error: " not in stderr, stderr
    pattern = re.compile(r"usage\.py:(\d+)(?::\d+)?: error:")
    lines = set()
    for line in stdout.splitlines():
        match = pattern.search(line)
        if match:
            lines.add(int(match.group(1)))
    return lines, stdout


def _marked_lines(marker):
    return {
        number for number, text in enumerate(USAGE.splitlines(), start=1)
        if text.endswith(marker)
    }


class TestStaticGating:
    """mypy sees operators and blends on working encodings only."""

    def test_misuse_is_flagged(self, usage_errors):
        lines, stdout = usage_errors
        missing = _marked_lines("# rejected") - lines
        assert not missing, f"no error on lines {sorted(missing)}:\n{stdout}"

    def test_valid_usage_is_clean(self, usage_errors):
        lines, stdout = usage_errors
        unexpected = lines - _marked_lines("# rejected")
        assert not unexpected, f"errors on lines {sorted(unexpected)}:\n{stdout}"
