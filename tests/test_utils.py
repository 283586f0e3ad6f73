#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `btchd.utils` module."

import pytest

from btchd.exceptions import BTCHDTypeError, BTCHDValueError
from btchd.utils import (
    bytes_from_hex_padded,
    bytes_from_octets,
    bytesio_from_binarydata,
    hex_string,
)


def test_bytes_from_octets() -> None:
    assert bytes_from_octets("00ff") == b"\x00\xff"
    assert bytes_from_octets(" 00ff ") == b"\x00\xff"
    assert bytes_from_octets(bytearray(b"\x01")) == b"\x01"
    assert bytes_from_octets(b"\x01\x02", 2) == b"\x01\x02"
    assert bytes_from_octets(b"\x01\x02", (1, 2)) == b"\x01\x02"

    with pytest.raises(BTCHDValueError, match="invalid size: "):
        bytes_from_octets(b"\x01\x02", 3)

    with pytest.raises(BTCHDTypeError, match="not bytes nor hex-string: "):
        bytes_from_octets(1)  # type: ignore


def test_bytes_from_hex_padded() -> None:
    assert bytes_from_hex_padded("fff") == b"\x0f\xff"
    assert bytes_from_hex_padded("0fff") == b"\x0f\xff"
    assert bytes_from_hex_padded("0x1") == b"\x01"
    assert bytes_from_hex_padded(" 01 02 ") == b"\x01\x02"
    assert bytes_from_hex_padded("") == b""

    with pytest.raises(ValueError):
        bytes_from_hex_padded("0g")


def test_bytesio_from_binarydata() -> None:
    assert bytesio_from_binarydata("0102").read() == b"\x01\x02"
    stream = bytesio_from_binarydata(b"\x01\x02")
    assert bytesio_from_binarydata(stream) is stream


def test_hex_string() -> None:
    assert hex_string(b"\x01\x02") == "0102"
    long_str = hex_string(bytes(range(64)))
    assert long_str.startswith("0001020304050607")
    assert long_str.endswith("38393a3b3c3d3e3f")
    assert "..." in long_str
