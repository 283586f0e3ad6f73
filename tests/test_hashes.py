#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `btchd.hashes` module."

from btchd.hashes import hash160, hmac_sha512, ripemd160, sha256


def test_empty_string() -> None:
    exp = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    assert sha256(b"").hex() == exp
    assert sha256("").hex() == exp
    assert ripemd160(b"").hex() == "9c1185a5c5e9fc54612808977ee8f548b2258d31"
    assert hash160(b"") == ripemd160(sha256(b""))


def test_hash160_of_pub_key() -> None:
    # BIP32 test vector 1 master key identifier
    pub_key = "0339a36013301597daef41fbe593a02cc513d0b55527ec2df1050e2e8ff49c85c2"
    exp = "3442193e1bb70916e914552172cd4e2dbc9df811"
    assert hash160(pub_key).hex() == exp


def test_hmac_sha512() -> None:
    # RFC 4231 test case 2
    key = b"Jefe"
    msg = b"what do ya want for nothing?"
    exp = (
        "164b7a7bfcf819e2e395fbe73b56e0a387bd64222e831fd610270cd7ea250554"
        "9758bf75c05a994a6d034f65f8f0e6fdcaeab1a34d4a6b4b636e070a38bce737"
    )
    assert hmac_sha512(key, msg).hex() == exp
