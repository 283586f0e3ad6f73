# Copyright (c) 2017 Pieter Wuille
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.

# Copyright (C) 2019-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.


"""Bech32 encoding and decoding functions.

BIP173: https://github.com/bitcoin/bips/blob/master/bip-0173.mediawiki

The checksum functions are originally from
https://github.com/sipa/bech32/tree/master/ref/python.

The payload is not repacked in 5-bit groups as in BIP173 segwit
addresses: the byte string is read as a single big-endian integer
and written in base 32 with the bech32 alphabet.
Each leading zero byte is preserved as one leading 'q' (zero digit),
so that any byte string, including the empty one, round-trips.

A bech32 string is:

- the human-readable part (hrp), 1 to 83 characters in 0x21..0x7E
- the '1' separator (the last one, as the hrp may include '1')
- the data part, at least the 6 checksum characters

It is at most 90 characters long and all lowercase or all uppercase.
"""

from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from btchd.alias import String
from btchd.exceptions import (
    Bech32ChecksumError,
    Bech32Error,
    Bech32FormatError,
)

ALPHABET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_ALPHABET_MAP = {char: value for value, char in enumerate(ALPHABET)}
CHECKSUM_SIZE = 6
MAX_LENGTH = 90
_M = 1  # 0x2bc830a3 for bech32m


def polymod(values: Iterable[int]) -> int:
    "Compute the BCH checksum accumulator of a 5-bit values sequence."
    generator = [0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3]
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1FFFFFF) << 5 ^ value
        for i in range(5):
            chk ^= generator[i] if ((top >> i) & 1) else 0
    return chk


def hrp_expand(hrp: str) -> List[int]:
    "Expand the HRP into values for checksum computation."
    return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def _values_from_chars(data: str) -> List[int]:
    return [_ALPHABET_MAP[x] for x in data]


def create_checksum(hrp: str, data: str) -> str:
    "Return the 6 checksum characters for the HRP and data characters."
    values = hrp_expand(hrp) + _values_from_chars(data)
    chk = polymod(values + [0] * CHECKSUM_SIZE) ^ _M
    return "".join(ALPHABET[(chk >> 5 * (5 - i)) & 31] for i in range(CHECKSUM_SIZE))


def verify_checksum(hrp: str, data: str) -> bool:
    "Verify the checksum of the data characters, checksum included."
    return polymod(hrp_expand(hrp) + _values_from_chars(data)) == _M


# each validator returns None or the error to be raised;
# split_bech32 raises the first one


def _check_length(bech: str, hrp: str, data: str) -> Optional[Bech32Error]:
    if len(bech) > MAX_LENGTH:
        return Bech32FormatError("bech32 string too long")
    return None


def _check_case(bech: str, hrp: str, data: str) -> Optional[Bech32Error]:
    if bech.lower() != bech and bech.upper() != bech:
        return Bech32FormatError("bech32 string has mixed case")
    return None


def _check_separator(bech: str, hrp: str, data: str) -> Optional[Bech32Error]:
    # a trailing separator does not separate anything
    if "1" not in bech or not data:
        return Bech32FormatError("bech32 separator character missing")
    return None


def _check_hrp_length(bech: str, hrp: str, data: str) -> Optional[Bech32Error]:
    if not 1 <= len(hrp) <= 83:
        return Bech32FormatError("incorrect length of bech32 human readable part")
    return None


def _check_hrp_chars(bech: str, hrp: str, data: str) -> Optional[Bech32Error]:
    if any(not 0x21 <= ord(x) <= 0x7E for x in hrp):
        return Bech32FormatError("illegal characters in bech32 human readable part")
    return None


def _check_data_length(bech: str, hrp: str, data: str) -> Optional[Bech32Error]:
    if len(data) < CHECKSUM_SIZE:
        return Bech32FormatError("incorrect length of bech32 data part")
    return None


def _check_data_chars(bech: str, hrp: str, data: str) -> Optional[Bech32Error]:
    if any(x not in _ALPHABET_MAP for x in data):
        return Bech32FormatError("illegal characters in bech32 data part")
    return None


def _check_checksum(bech: str, hrp: str, data: str) -> Optional[Bech32Error]:
    if not verify_checksum(hrp, data):
        return Bech32ChecksumError("incorrect bech32 checksum")
    return None


_Validator = Callable[[str, str, str], Optional[Bech32Error]]

_VALIDATORS: Sequence[_Validator] = (
    _check_length,
    _check_case,
    _check_separator,
    _check_hrp_length,
    _check_hrp_chars,
    _check_data_length,
    _check_data_chars,
    _check_checksum,
)


def _str_from_string(bech: String) -> str:

    if isinstance(bech, (bytes, bytearray)):
        try:
            bech = bytes(bech).decode("ascii")
        except UnicodeDecodeError as e:
            raise Bech32FormatError("non-ascii bech32 string") from e

    return bech.strip()


def split_bech32(bech: String) -> Tuple[str, str]:
    """Validate a bech32 string, and return its HRP and data part.

    The data part still includes the 6 checksum characters.
    An all-uppercase string is lowercased before processing.
    """

    bech = _str_from_string(bech)
    if bech.upper() == bech:
        bech = bech.lower()

    # the last separator marks the data part, as the hrp may include '1'
    hrp, _, data = bech.rpartition("1")
    for validator in _VALIDATORS:
        error = validator(bech, hrp, data)
        if error is not None:
            raise error

    return hrp, data


def _check_hrp(hrp: str) -> str:

    hrp = hrp.strip()
    for validator in (_check_hrp_length, _check_hrp_chars):
        error = validator(hrp, hrp, "")
        if error is not None:
            raise error
    return hrp.lower()


def encode_bech32(hrp: str, data: bytes) -> str:
    "Return the bech32 string encoding the HRP and the data bytes."

    hrp = _check_hrp(hrp)
    data = bytes(data)

    # leading zero bytes would be lost in the integer conversion
    n_zeros = len(data) - len(data.lstrip(b"\x00"))
    number = int.from_bytes(data, byteorder="big", signed=False)
    digits = []
    while number > 0:
        number, digit = divmod(number, 32)
        digits.append(ALPHABET[digit])
    result = ALPHABET[0] * n_zeros + "".join(reversed(digits))

    bech = hrp + "1" + result + create_checksum(hrp, result)
    if len(bech) > MAX_LENGTH:
        err_msg = f"bech32 string too long: {len(bech)} characters"
        raise Bech32FormatError(err_msg)
    return bech


def decode_bech32(bech: String) -> bytes:
    "Return the data bytes from a bech32 string."

    _, data = split_bech32(bech)

    values = _values_from_chars(data[:-CHECKSUM_SIZE])
    n_zeros = 0
    while n_zeros < len(values) and values[n_zeros] == 0:
        n_zeros += 1

    number = 0
    for value in values[n_zeros:]:
        number = number * 32 + value
    n_bytes = (number.bit_length() + 7) // 8
    return b"\x00" * n_zeros + number.to_bytes(n_bytes, byteorder="big", signed=False)
