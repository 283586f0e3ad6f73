#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from io import BytesIO
from typing import Union

# Octets are a sequence of eight-bit bytes or a hex-string (not text string)
#
# hex-strings are strings that can be converted to bytes using bytes.fromhex,
# e.g.:
# "000102030405060708090a0b0c0d0e0f"
# "0339a36013301597daef41fbe593a02cc513d0b55527ec2df1050e2e8ff49c85c2"
#
# use btchd.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for seeds, chain codes, fingerprints,
# BIP32 versions (4 bytes), SEC public keys, etc.
Octets = Union[bytes, str]

# bytes or text string (not hex-string)
#
# this is for 'ascii' strings like bech32 strings or
# base58 encoded BIP32 keys:
# "xprv9s21ZrQH143K3QTDL4LXw2F7HEK3wJUD2nW2nRk4stbPy6cq3jPPqjiChkVvvNKmPGJxWUtg6LnF5kejMRNNU3TGtRBeJgk33yuGBxrMPHi"
# "bc1qg9stkxrszkdqsuj92lm4c7akvk36zvhqw7p6ck"
#
# leading/trailing blanks should always be stripped
#     if isinstance(bech, str):
#         bech = bech.strip()
String = Union[bytes, str]

# binary data, usually to be cosumed as byte stream,
# but possibily provided as Octets too
BinaryData = Union[BytesIO, Octets]
