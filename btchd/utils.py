#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Assorted conversion utilities."

from collections.abc import Iterable as IterableCollection
from io import BytesIO
from typing import Iterable, Optional, Union

from btchd.alias import BinaryData, Octets
from btchd.exceptions import BTCHDTypeError, BTCHDValueError

NoneOneOrMoreInt = Optional[Union[int, Iterable[int]]]


def bytes_from_octets(octets: Octets, out_size: NoneOneOrMoreInt = None) -> bytes:
    """Return bytes from a hex-string, stripping leading/trailing spaces.

    If the input is not a string, then it goes untouched.
    Optionally, it also ensures required output size.
    """

    if isinstance(octets, str):  # hex string
        octets = bytes.fromhex(octets)
    elif not isinstance(octets, (bytes, bytearray)):
        raise BTCHDTypeError(f"not bytes nor hex-string: {type(octets).__name__}")

    octets = bytes(octets)
    if (
        out_size is None
        or isinstance(out_size, int)
        and len(octets) == out_size
        or isinstance(out_size, IterableCollection)
        and len(octets) in out_size
    ):
        return octets

    err_msg = f"invalid size: {len(octets)} bytes instead of {out_size}"
    raise BTCHDValueError(err_msg)


def bytes_from_hex_padded(hex_str: str) -> bytes:
    """Return bytes from a hex-string of any length.

    Odd-length strings are left-padded with a zero nibble,
    i.e. "fff" is read as "0fff".
    """

    hex_str = "".join(hex_str.split())
    if hex_str[:2].lower() == "0x":
        hex_str = hex_str[2:]
    if len(hex_str) % 2:
        hex_str = "0" + hex_str
    return bytes.fromhex(hex_str)


def bytesio_from_binarydata(stream: BinaryData) -> BytesIO:
    """Return a BytesIO stream object from BinaryIO or Octets.

    If the input is not Octets (i.e. str or bytes),
    then it goes untouched.
    """

    if isinstance(stream, str):  # hex string
        stream = bytes_from_octets(stream)

    if isinstance(stream, (bytes, bytearray)):
        stream = BytesIO(stream)

    return stream


def hex_string(octets: Octets) -> str:
    """Return a hex-string from bytes, truncated for error messages.

    Long byte sequences only show their first and last eight bytes,
    so that secrets are never echoed in full.
    """

    a_str = bytes_from_octets(octets).hex()
    if len(a_str) > 40:
        return a_str[:16] + "..." + a_str[-16:]
    return a_str
