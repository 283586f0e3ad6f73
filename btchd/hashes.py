#!/usr/bin/env python3

# Copyright (C) The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hash based helper functions."""

import hashlib
import hmac

from Crypto.Hash import RIPEMD160

from btchd.alias import Octets
from btchd.utils import bytes_from_octets

# With OpenSSL 3.x, hashlib may still list ripemd160
# but it is not usable unless the legacy provider is loaded:
# pycryptodome is used in that case.
try:
    hashlib.new("ripemd160")
    _HASHLIB_RIPEMD160 = True
except ValueError:  # pragma: no cover
    _HASHLIB_RIPEMD160 = False


def ripemd160(octets: Octets) -> bytes:
    """Return the RIPEMD160(*) of the input octet sequence."""
    octets = bytes_from_octets(octets)
    if _HASHLIB_RIPEMD160:
        return hashlib.new("ripemd160", octets).digest()
    return RIPEMD160.new(octets).digest()  # pragma: no cover


def sha256(octets: Octets) -> bytes:
    """Return the SHA256(*) of the input octet sequence."""
    octets = bytes_from_octets(octets)
    return hashlib.sha256(octets).digest()


def hash160(octets: Octets) -> bytes:
    """Return the HASH160=RIPEMD160(SHA256) of the input octet sequence."""
    return ripemd160(sha256(octets))


def hmac_sha512(key: bytes, msg: bytes) -> bytes:
    "Return the HMAC-SHA512 of msg keyed by key."
    return hmac.new(key, msg, "sha512").digest()
