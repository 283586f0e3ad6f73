#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `btchd.ec.curve` module."

import pytest

from btchd.ec import libsecp256k1
from btchd.ec.curve import (
    CurveConfig,
    assert_valid_pubkey,
    compress,
    curve_from_name,
    pubkey_from_prvkey,
    pubkey_tweak_add,
    scalar_math,
    sec_from_pubkey,
)
from btchd.exceptions import BTCHDValueError, InvalidChild, InvalidParameter

G_X = "79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
G_Y = "483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8"
G_COMPRESSED = bytes.fromhex("02" + G_X)
G_UNCOMPRESSED = bytes.fromhex("04" + G_X + G_Y)
TWO_G = bytes.fromhex(
    "02c6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5"
)
N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


def test_curve_from_name() -> None:
    assert curve_from_name("secp256k1").order == N
    assert curve_from_name("SECP256K1") is curve_from_name("secp256k1")
    assert curve_from_name("NIST256p").baselen == 32

    with pytest.raises(InvalidParameter, match="unknown curve: "):
        curve_from_name("secp256k2")


def test_scalar_math() -> None:
    scalars = scalar_math()
    assert scalars.n == N
    assert scalars.size == 32
    assert scalars.add(N - 1, 2) == 1
    assert scalars.reduce(N) == 0
    assert scalars.reduce(N + 5) == 5
    assert scalars.compare(1, 2) == -1
    assert scalars.compare(2, 2) == 0
    assert scalars.compare(N, 2) == 1
    assert not scalars.is_valid(0)
    assert scalars.is_valid(1)
    assert scalars.is_valid(N - 1)
    assert not scalars.is_valid(N)

    assert scalars.to_bytes(1) == b"\x00" * 31 + b"\x01"
    assert scalars.from_bytes(b"\x00" * 31 + b"\x01") == 1
    assert scalars.from_bytes("ff") == 255

    with pytest.raises(BTCHDValueError, match="too many bytes for a scalar: "):
        scalars.from_bytes(b"\x01" * 33)

    with pytest.raises(BTCHDValueError, match="scalar does not fit 32 bytes: "):
        scalars.to_bytes(1 << 256)


def test_curve_config() -> None:
    config = CurveConfig()
    assert config.curve_name == "secp256k1"
    assert config.key_length == 32
    assert config.compress_public_point
    assert config.scalars is scalar_math("secp256k1")
    assert config.curve.order == N

    assert CurveConfig.from_json(config.to_json()) == config
    config = CurveConfig(compress_public_point=False)
    assert CurveConfig.from_dict(config.to_dict()) == config

    with pytest.raises(InvalidParameter, match="invalid key length for secp256k1: "):
        CurveConfig(key_length=33)


def test_pubkey_from_prvkey() -> None:
    assert pubkey_from_prvkey(1) == G_COMPRESSED
    assert pubkey_from_prvkey(1, False) == G_UNCOMPRESSED
    assert pubkey_from_prvkey(2) == TWO_G

    # P-256 generator, odd y-coordinate
    exp = "036b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296"
    assert pubkey_from_prvkey(1, True, "NIST256p").hex() == exp

    for prv_key in (0, N):
        with pytest.raises(BTCHDValueError, match="private key not in 1..n-1"):
            pubkey_from_prvkey(prv_key)


def test_pubkey_from_prvkey_without_libsecp256k1(monkeypatch) -> None:
    monkeypatch.setattr(libsecp256k1, "is_available", lambda: False)
    assert pubkey_from_prvkey(1) == G_COMPRESSED
    assert pubkey_from_prvkey(1, False) == G_UNCOMPRESSED
    assert pubkey_from_prvkey(2) == TWO_G


def test_sec_serialization() -> None:
    assert compress(G_UNCOMPRESSED) == G_COMPRESSED
    assert compress(G_COMPRESSED) == G_COMPRESSED
    assert sec_from_pubkey(G_COMPRESSED, False) == G_UNCOMPRESSED
    assert sec_from_pubkey(G_UNCOMPRESSED, False) == G_UNCOMPRESSED
    assert sec_from_pubkey(G_COMPRESSED.hex()) == G_COMPRESSED

    assert_valid_pubkey(G_COMPRESSED)
    assert_valid_pubkey(G_UNCOMPRESSED)

    with pytest.raises(BTCHDValueError, match="not a SEC public key: "):
        assert_valid_pubkey(b"\x05" + G_COMPRESSED[1:])

    with pytest.raises(BTCHDValueError, match="not a SEC public key: "):
        assert_valid_pubkey(G_COMPRESSED[:-1])

    # y-coordinate off the curve
    bad_y = (int(G_Y, 16) + 1).to_bytes(32, byteorder="big", signed=False)
    with pytest.raises(BTCHDValueError, match="invalid public key: "):
        assert_valid_pubkey(b"\x04" + bytes.fromhex(G_X) + bad_y)


def test_pubkey_tweak_add() -> None:
    assert pubkey_tweak_add(G_COMPRESSED, 1) == TWO_G
    assert pubkey_tweak_add(G_UNCOMPRESSED, 1) == TWO_G
    assert pubkey_tweak_add(G_COMPRESSED, 1, False) == pubkey_from_prvkey(2, False)

    with pytest.raises(InvalidChild, match="infinity point"):
        pubkey_tweak_add(G_COMPRESSED, N - 1)
