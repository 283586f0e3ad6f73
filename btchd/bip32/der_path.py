#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Parsing and normalization of derivation paths.

derive() accepts a path as a text like "m/84h/0'/0H/1/7",
as integer indexes, or as the concatenation of 4-bytes
little-endian indexes (the PSBT key origin layout).

Text paths tolerate blanks, a missing leading "m" and empty steps
("M // 0/"); any of "h", "H" or "'" marks a hardened index.
Normalized text uses "h" unless told otherwise.
"""

from typing import List, Sequence, Union

from btchd.exceptions import InvalidParameter

HARDENED = 0x80000000
_MAX_INDEX = 0xFFFFFFFF
_MAX_DEPTH = 255

_HARDENING = "h"
_HARDENING_SYMBOLS = ("'", "h", "H")

BIP32DerPath = Union[str, Sequence[int], int, bytes]


def _check_index(i: int) -> int:
    if not 0 <= i <= _MAX_INDEX:
        raise InvalidParameter(f"invalid index: {i}")
    return i


def int_from_index_str(s: str) -> int:
    "Return the integer index of a single path step, e.g. 44 + HARDENED for '44h'."

    step = s.strip()
    offset = 0
    if step[-1:] in _HARDENING_SYMBOLS:
        step = step[:-1].strip()
        offset = HARDENED

    # int() would also accept signs and underscores
    if not (step.isascii() and step.isdigit()):
        raise InvalidParameter(f"invalid index: {s!r}")
    index = int(step)
    if index >= HARDENED:
        raise InvalidParameter(f"invalid index: {index}")
    return index + offset


def str_from_index_int(i: int, hardening: str = _HARDENING) -> str:
    "Return the path step of an integer index, e.g. '44h' for 44 + HARDENED."

    if hardening not in _HARDENING_SYMBOLS:
        raise InvalidParameter(f"invalid hardening symbol: {hardening}")
    _check_index(i)
    return str(i) if i < HARDENED else f"{i - HARDENED}{hardening}"


def _indexes_from_bip32_path_str(der_path: str, skip_m: bool = True) -> List[int]:

    steps = [step.strip() for step in der_path.split("/")]
    if skip_m and steps[0] in ("m", "M"):
        steps = steps[1:]

    indexes = [int_from_index_str(step) for step in steps if step]
    if len(indexes) > _MAX_DEPTH:
        raise InvalidParameter(f"depth greater than 255: {len(indexes)}")
    return indexes


def _indexes_from_bytes(der_path: bytes) -> List[int]:

    if len(der_path) % 4:
        err_msg = f"index are not a multiple of 4-bytes: {len(der_path)}"
        raise InvalidParameter(err_msg)
    return [
        int.from_bytes(der_path[n : n + 4], byteorder="little", signed=False)
        for n in range(0, len(der_path), 4)
    ]


def indexes_from_bip32_path(der_path: BIP32DerPath) -> List[int]:
    "Return the list of integer indexes of any path representation."

    if isinstance(der_path, str):
        return _indexes_from_bip32_path_str(der_path)
    if isinstance(der_path, bytes):
        return _indexes_from_bytes(der_path)
    if isinstance(der_path, int):
        return [_check_index(der_path)]
    return [_check_index(int(i)) for i in der_path]


def str_from_bip32_path(der_path: BIP32DerPath, hardening: str = _HARDENING) -> str:
    "Return the normalized text of a path, always starting with 'm'."

    steps = [str_from_index_int(i, hardening) for i in indexes_from_bip32_path(der_path)]
    return "/".join(["m"] + steps)


def bytes_from_bip32_path(der_path: BIP32DerPath) -> bytes:
    "Return the concatenated 4-bytes little-endian indexes of a path."

    indexes = indexes_from_bip32_path(der_path)
    return b"".join(i.to_bytes(4, byteorder="little", signed=False) for i in indexes)
