# -*- coding: utf-8 -*-
# Tincta: Typed color encodings and exact conversions between them.
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Tests for the encoding catalog and descriptor invariants."""

import pytest

from tincta_components import RGB_F32, RGB_U8, RGBA_F32, AlphaState
from tincta_encodings import ENCODINGS, LINEAR_SRGB, OKLAB, ColorEncoding
from tincta_perceptual import OKLAB_MODEL
from tincta_spaces import SRGB
from tincta_transfer import SRGB_TRANSFER


class TestCatalog:
    """The closed set of encodings."""

    def test_names_unique(self):
        names = [e.name for e in ENCODINGS]
        assert len(names) == len(set(names))

    @pytest.mark.parametrize("encoding", ENCODINGS, ids=lambda e: e.name)
    def test_working_invariants(self, encoding):
        if encoding.working:
            assert encoding.space is not None
            assert not encoding.is_integer
            assert encoding.transfer is None

    @pytest.mark.parametrize("encoding", ENCODINGS, ids=lambda e: e.name)
    def test_alpha_matches_layout(self, encoding):
        assert encoding.has_alpha == encoding.layout.has_alpha

    def test_oklab_is_perceptual_working(self):
        assert OKLAB.working
        assert OKLAB.perceptual is OKLAB_MODEL
        assert OKLAB.space == OKLAB_MODEL.reference_space

    def test_identity_comparison(self):
        twin = ColorEncoding("linear_srgb", RGB_F32, SRGB, working=True)
        assert twin != LINEAR_SRGB
        assert twin not in ENCODINGS


class TestDescriptorInvariants:
    """Inconsistent descriptors are rejected at construction."""

    def test_working_needs_space(self):
        with pytest.raises(ValueError):
            ColorEncoding("bad", RGB_F32, None, working=True)

    def test_working_needs_float_storage(self):
        with pytest.raises(ValueError):
            ColorEncoding("bad", RGB_U8, SRGB, working=True)

    def test_working_cannot_carry_transfer(self):
        with pytest.raises(ValueError):
            ColorEncoding("bad", RGB_F32, SRGB, transfer=SRGB_TRANSFER, working=True)

    def test_alpha_state_must_match_layout(self):
        with pytest.raises(ValueError):
            ColorEncoding("bad", RGB_F32, SRGB, alpha=AlphaState.SEPARATE)
        with pytest.raises(ValueError):
            ColorEncoding("bad", RGBA_F32, SRGB)

    def test_transfer_and_perceptual_exclusive(self):
        with pytest.raises(ValueError):
            ColorEncoding("bad", RGB_F32, OKLAB_MODEL.reference_space,
                          transfer=SRGB_TRANSFER, perceptual=OKLAB_MODEL)

    def test_linear_space_without_space_raises(self):
        enc = ColorEncoding("detached", RGB_F32, SRGB, working=True)
        assert enc.linear_space is SRGB
        # frozen dataclass: bypass to simulate a descriptor missing its space
        object.__setattr__(enc, "space", None)
        with pytest.raises(ValueError, match="no linear space"):
            enc.linear_space
