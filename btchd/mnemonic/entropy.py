#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Entropy conversion functions.

The internal representation of entropy is the binary 0/1 string,
as it makes explicit both the bit length and the leading zeros:
leading zeros in bytes entropy are never considered redundant padding.
"""

import math
import secrets
from typing import Callable, List

from btchd.alias import Octets
from btchd.exceptions import InvalidParameter
from btchd.utils import bytes_from_octets

# allowed BIP39 entropy sizes
BITS = (128, 160, 192, 224, 256)

BinStr = str

RandBytes = Callable[[int], bytes]


def _check_bits(n_bits: int) -> None:
    if n_bits not in BITS:
        err_msg = f"invalid number of bits: {n_bits} instead of {BITS}"
        raise InvalidParameter(err_msg)


def wordlist_indexes_from_bin_str_entropy(entropy: BinStr, base: int) -> List[int]:
    """Return the digit indexes for the provided raw entropy.

    Return the list of integer indexes into a digit set,
    usually a language word-list,
    for the provided raw (i.e. binary 0/1 string) entropy;
    leading zeros are not considered redundant padding.
    """

    bits = len(entropy)
    int_entropy = int(entropy, 2)
    indexes = []
    while int_entropy:
        int_entropy, index = divmod(int_entropy, base)
        indexes.append(index)

    # do not lose leading zeros entropy
    bits_per_digit = int(math.log(base, 2))
    nwords = math.ceil(bits / bits_per_digit)
    indexes += [0] * (nwords - len(indexes))

    return list(reversed(indexes))


def bin_str_entropy_from_wordlist_indexes(indexes: List[int], base: int) -> BinStr:
    """Return the raw entropy from a list of word-list indexes.

    Return the raw (i.e. binary 0/1 string) entropy
    from the provided list of integer indexes into
    a given language word-list.
    """

    entropy = 0
    for index in indexes:
        entropy = entropy * base + index

    binentropy = bin(entropy)[2:]  # remove '0b'

    # do not lose leading zeros entropy
    bits_per_digit = int(math.log(base, 2))
    bits = len(indexes) * bits_per_digit
    return binentropy.zfill(bits)


def bin_str_entropy_from_bytes(bytes_entropy: Octets) -> BinStr:
    """Return raw entropy from bytes (or hex-string) entropy.

    Entropy is never padded nor truncated:
    it must be 128, 160, 192, 224, or 256 bits.
    """

    bytes_entropy = bytes_from_octets(bytes_entropy)
    n_bits = len(bytes_entropy) * 8
    _check_bits(n_bits)

    int_entropy = int.from_bytes(bytes_entropy, byteorder="big", signed=False)
    return bin(int_entropy)[2:].zfill(n_bits)


def bytes_entropy_from_str(bin_str_entropy: BinStr) -> bytes:
    "Return the bytes of a raw entropy."

    n_bits = len(bin_str_entropy)
    _check_bits(n_bits)
    int_entropy = int(bin_str_entropy, 2)
    return int_entropy.to_bytes(n_bits // 8, byteorder="big", signed=False)


def random_entropy(bits: int = 128, randbytes: RandBytes = secrets.token_bytes) -> bytes:
    """Return bytes entropy drawn from the randbytes source.

    The number of bits is checked before any randomness is drawn.
    """

    _check_bits(bits)
    n_bytes = bits // 8
    bytes_entropy = randbytes(n_bytes)
    if len(bytes_entropy) != n_bytes:
        err_msg = f"invalid random source output: {len(bytes_entropy)} bytes"
        err_msg += f" instead of {n_bytes}"
        raise InvalidParameter(err_msg)
    return bytes(bytes_entropy)
