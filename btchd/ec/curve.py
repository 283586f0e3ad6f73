#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve facilities needed by BIP32 derivation.

Point arithmetic is delegated to the ecdsa package
(or to libsecp256k1, if available, for secp256k1 generator
multiplication); public keys are only exposed as SEC serialized bytes:

- 33 bytes compressed: [0x02 or 0x03][x-coordinate]
- 65 bytes uncompressed: [0x04][x-coordinate][y-coordinate]

Scalars are Python integers, handled through the ScalarMath
interface bound to the curve group order.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from dataclasses_json import DataClassJsonMixin
from ecdsa import VerifyingKey
from ecdsa.curves import Curve
from ecdsa.curves import curves as _ECDSA_CURVES
from ecdsa.ellipticcurve import INFINITY
from ecdsa.errors import MalformedPointError

from btchd.alias import Octets
from btchd.ec import libsecp256k1
from btchd.exceptions import BTCHDValueError, InvalidChild, InvalidParameter
from btchd.utils import bytes_from_octets

logger = logging.getLogger(__name__)


@lru_cache()
def curve_from_name(curve_name: str) -> Curve:
    """Return the named curve.

    The name is matched case-insensitively against
    both the ecdsa and the OpenSSL curve names,
    e.g. "secp256k1" or "NIST256p".
    """

    name = curve_name.strip().lower()
    for curve in _ECDSA_CURVES:
        if name in (curve.name.lower(), (curve.openssl_name or "").lower()):
            return curve
    raise InvalidParameter(f"unknown curve: {curve_name}")


class ScalarMath:
    """Modular arithmetic over the group order n of a curve.

    It is all the big-integer arithmetic BIP32 derivation needs:
    modular addition and reduction, comparison, range check,
    and fixed-width big-endian (de)serialization.
    """

    def __init__(self, order: int, size: int) -> None:
        self.n = order
        self.size = size

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.n

    def reduce(self, a: int) -> int:
        return a % self.n

    @staticmethod
    def compare(a: int, b: int) -> int:
        return (a > b) - (a < b)

    def is_valid(self, a: int) -> bool:
        "Return True if the scalar is in [1, n-1]."
        return 0 < a < self.n

    def from_bytes(self, octets: Octets) -> int:
        octets = bytes_from_octets(octets)
        if len(octets) > self.size:
            err_msg = f"too many bytes for a scalar: {len(octets)}"
            err_msg += f" instead of {self.size}"
            raise BTCHDValueError(err_msg)
        return int.from_bytes(octets, byteorder="big", signed=False)

    def to_bytes(self, a: int) -> bytes:
        if not 0 <= a < 1 << (8 * self.size):
            raise BTCHDValueError(f"scalar does not fit {self.size} bytes: {hex(a)}")
        return a.to_bytes(self.size, byteorder="big", signed=False)


@lru_cache()
def scalar_math(curve_name: str = "secp256k1") -> ScalarMath:
    "Return the ScalarMath for the named curve group order."

    curve = curve_from_name(curve_name)
    return ScalarMath(curve.order, curve.baselen)


@dataclass(frozen=True)
class CurveConfig(DataClassJsonMixin):
    """Curve parameters used by extended keys.

    Instances are passed explicitly to key construction,
    instead of relying on process-wide settings.
    """

    curve_name: str = "secp256k1"
    # private key size in bytes
    key_length: int = 32
    # SEC serialization of the public keys obtained from private ones
    compress_public_point: bool = True

    def __post_init__(self) -> None:
        self.assert_valid()

    def assert_valid(self) -> None:
        curve = curve_from_name(self.curve_name)
        if self.key_length != curve.baselen:
            err_msg = f"invalid key length for {self.curve_name}: "
            err_msg += f"{self.key_length} instead of {curve.baselen}"
            raise InvalidParameter(err_msg)

    @property
    def curve(self) -> Curve:
        return curve_from_name(self.curve_name)

    @property
    def scalars(self) -> ScalarMath:
        return scalar_math(self.curve_name)


def _is_secp256k1(curve: Curve) -> bool:
    return curve.openssl_name == "secp256k1"


def _point_from_octets(pubkey: Octets, curve: Curve) -> Any:
    "Return the ecdsa point of a SEC serialized public key."

    pubkey = bytes_from_octets(pubkey)
    size = curve.baselen
    if not (
        len(pubkey) == size + 1
        and pubkey[0] in (2, 3)
        or len(pubkey) == 2 * size + 1
        and pubkey[0] == 4
    ):
        raise BTCHDValueError(f"not a SEC public key: 0x{pubkey.hex()}")
    try:
        return VerifyingKey.from_string(pubkey, curve=curve).pubkey.point
    except MalformedPointError as e:
        raise BTCHDValueError(f"invalid public key: 0x{pubkey.hex()}") from e


def _bytes_from_point(point: Any, curve: Curve, compressed: bool) -> bytes:
    "Return the SEC serialization of an ecdsa point."

    verifying_key = VerifyingKey.from_public_point(
        point, curve=curve, validate_point=False
    )
    return verifying_key.to_string("compressed" if compressed else "uncompressed")


def assert_valid_pubkey(pubkey: Octets, curve_name: str = "secp256k1") -> None:
    "Raise BTCHDValueError if not a valid SEC public key."
    _point_from_octets(pubkey, curve_from_name(curve_name))


def sec_from_pubkey(
    pubkey: Octets, compressed: bool = True, curve_name: str = "secp256k1"
) -> bytes:
    "Return the compressed or uncompressed SEC serialization of a public key."

    pubkey = bytes_from_octets(pubkey)
    curve = curve_from_name(curve_name)
    point = _point_from_octets(pubkey, curve)
    if (len(pubkey) == curve.baselen + 1) == compressed:
        return pubkey
    return _bytes_from_point(point, curve, compressed)


def compress(pubkey: Octets, curve_name: str = "secp256k1") -> bytes:
    "Return the compressed SEC serialization of a public key."
    return sec_from_pubkey(pubkey, True, curve_name)


def pubkey_from_prvkey(
    prv_key: int, compressed: bool = True, curve_name: str = "secp256k1"
) -> bytes:
    "Return the SEC serialized public key prv_key * G."

    curve = curve_from_name(curve_name)
    if not 0 < prv_key < curve.order:
        raise BTCHDValueError("private key not in 1..n-1")

    if _is_secp256k1(curve) and libsecp256k1.is_available():
        return libsecp256k1.pubkey_from_prvkey(prv_key, compressed)

    return _bytes_from_point(curve.generator * prv_key, curve, compressed)


def pubkey_tweak_add(
    pubkey: Octets, tweak: int, compressed: bool = True, curve_name: str = "secp256k1"
) -> bytes:
    """Return the SEC serialized public key pubkey + tweak * G.

    The result being the point at infinity is an InvalidChild error,
    as this is only needed by public BIP32 derivation.
    """

    curve = curve_from_name(curve_name)
    point = _point_from_octets(pubkey, curve)
    result = point + curve.generator * tweak
    if result == INFINITY:
        raise InvalidChild("public derivation resulted in the infinity point")
    return _bytes_from_point(result, curve, compressed)


if libsecp256k1.is_available():  # pragma: no cover
    logger.debug("secp256k1 generator multiplication: libsecp256k1")
else:
    logger.debug("secp256k1 generator multiplication: ecdsa")
