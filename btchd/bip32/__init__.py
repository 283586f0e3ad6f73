#!/usr/bin/env python3

# Copyright (C) The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module btchd.bip32."""

from btchd.bip32.bip32 import (
    BIP32Key,
    ExtendedKey,
    derive,
    derive_child,
    derive_children,
    derive_from_account,
    fingerprint,
    rootxprv_from_hex_seed,
    rootxprv_from_seed,
    xpub_from_xprv,
)
from btchd.bip32.der_path import (
    HARDENED,
    BIP32DerPath,
    bytes_from_bip32_path,
    indexes_from_bip32_path,
    int_from_index_str,
    str_from_bip32_path,
    str_from_index_int,
)

__all__ = [
    "BIP32Key",
    "ExtendedKey",
    "derive",
    "derive_child",
    "derive_children",
    "derive_from_account",
    "fingerprint",
    "rootxprv_from_hex_seed",
    "rootxprv_from_seed",
    "xpub_from_xprv",
    "HARDENED",
    "BIP32DerPath",
    "bytes_from_bip32_path",
    "indexes_from_bip32_path",
    "int_from_index_str",
    "str_from_bip32_path",
    "str_from_index_int",
]
