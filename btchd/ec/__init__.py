#!/usr/bin/env python3

# Copyright (C) The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module btchd.ec."""

from btchd.ec.curve import (
    CurveConfig,
    ScalarMath,
    assert_valid_pubkey,
    compress,
    curve_from_name,
    pubkey_from_prvkey,
    pubkey_tweak_add,
    scalar_math,
    sec_from_pubkey,
)

__all__ = [
    "CurveConfig",
    "ScalarMath",
    "assert_valid_pubkey",
    "compress",
    "curve_from_name",
    "pubkey_from_prvkey",
    "pubkey_tweak_add",
    "scalar_math",
    "sec_from_pubkey",
]
