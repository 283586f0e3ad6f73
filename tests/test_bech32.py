#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `btchd.bech32` module."

import pytest

from btchd.bech32 import (
    ALPHABET,
    create_checksum,
    decode_bech32,
    encode_bech32,
    split_bech32,
    verify_checksum,
)
from btchd.exceptions import (
    Bech32ChecksumError,
    Bech32Error,
    Bech32FormatError,
)

VALID_BECH32 = [
    "A12UEL5L",
    "a12uel5l",
    "an83characterlonghumanreadablepartthatcontainsthenumber1andtheexcludedcharactersbio1tt5tgs",
    "abcdef1qpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqxw",
    "11qqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqc8247j",
    "split1checkupstagehandshakeupstreamerranterredcaperred2y9e3w",
    "?1ezyfcl",
]


def test_valid_checksums() -> None:
    for bech in VALID_BECH32:
        hrp, data = split_bech32(bech)
        assert verify_checksum(hrp, data)
        assert create_checksum(hrp, data[:-6]) == data[-6:]
        # the decoded payload re-encodes to the same (lowercase) string
        assert encode_bech32(hrp, decode_bech32(bech)) == bech.lower()


def test_split() -> None:
    assert split_bech32("A12UEL5L") == ("a", "2uel5l")
    # the last '1' is the separator
    assert split_bech32(VALID_BECH32[4])[0] == "1"
    assert split_bech32(" a12uel5l\n") == ("a", "2uel5l")
    assert split_bech32(b"a12uel5l") == ("a", "2uel5l")


def test_invalid_format() -> None:
    vectors = [
        ("\x7f1axkwrx", "illegal characters in bech32 human readable part"),
        ("\x801eym55h", "illegal characters in bech32 human readable part"),
        ("pzry9x0s0muk", "bech32 separator character missing"),
        # a trailing separator is no separator
        ("abc1", "bech32 separator character missing"),
        ("1", "bech32 separator character missing"),
        ("1pzry9x0s0muk", "incorrect length of bech32 human readable part"),
        ("x1b4n0q5v", "illegal characters in bech32 data part"),
        ("li1dgmt3", "incorrect length of bech32 data part"),
        ("de1lg7wt\xff", "illegal characters in bech32 data part"),
        ("10a06t8", "incorrect length of bech32 human readable part"),
        ("1qzzfhee", "incorrect length of bech32 human readable part"),
        # surrounding blanks are stripped, leaving an empty hrp
        ("\x201nwldj5", "incorrect length of bech32 human readable part"),
        ("A12uEL5L", "bech32 string has mixed case"),
        (
            "an84characterslonghumanreadablepartthatcontainsthenumber1andtheexcludedcharactersbio1569pvx",
            "bech32 string too long",
        ),
    ]
    for bech, err_msg in vectors:
        with pytest.raises(Bech32FormatError, match=err_msg) as excinfo:
            decode_bech32(bech)
        assert excinfo.value.reason == "bech32_input_format"
        assert excinfo.value.message.startswith(err_msg)


def test_invalid_checksum() -> None:
    for bech in ("A1G7SGD8", "a12uel5m", "split1checkupstagehandshakeupstreamerranterredcaperred2y9e2w"):
        with pytest.raises(Bech32ChecksumError, match="incorrect bech32 checksum") as excinfo:
            decode_bech32(bech)
        assert excinfo.value.reason == "bech32_input_checksum"
        # all bech32 errors are ValueError
        assert isinstance(excinfo.value, Bech32Error)
        assert isinstance(excinfo.value, ValueError)


def test_checksum_sensitivity() -> None:
    bech = encode_bech32("bc", b"\x01\x02\x03\x04\x05")
    hrp, data = split_bech32(bech)
    for i, char in enumerate(data):
        for other in ALPHABET:
            if other == char:
                continue
            modified = data[:i] + other + data[i + 1 :]
            assert not verify_checksum(hrp, modified)


def test_round_trip() -> None:
    payloads = [
        b"",
        b"\x00",
        b"\x00\x00\x01",
        b"\xff" * 20,
        bytes(range(32)),
        b"\x00\x00" + bytes.fromhex("deadbeef"),
    ]
    for hrp in ("bc", "tb", "bcrt", "a", "?"):
        for payload in payloads:
            bech = encode_bech32(hrp, payload)
            assert bech == bech.lower()
            assert decode_bech32(bech) == payload
            assert decode_bech32(bech.upper()) == payload


def test_leading_zeros() -> None:
    # one 'q' for each leading zero byte
    bech = encode_bech32("bc", b"\x00\x00\x01")
    hrp, data = split_bech32(bech)
    assert hrp == "bc"
    assert data[:-6] == "qqp"
    assert encode_bech32("bc", b"") == "bc1" + create_checksum("bc", "")


def test_encode() -> None:

    # hrp is lower-cased
    assert encode_bech32("BC", b"\x01") == encode_bech32("bc", b"\x01")

    with pytest.raises(Bech32FormatError, match="incorrect length of bech32 human readable part"):
        encode_bech32("", b"\x01")

    with pytest.raises(Bech32FormatError, match="incorrect length of bech32 human readable part"):
        encode_bech32("a" * 84, b"")

    with pytest.raises(Bech32FormatError, match="illegal characters in bech32 human readable part"):
        encode_bech32("b\x7fc", b"\x01")

    with pytest.raises(Bech32FormatError, match="bech32 string too long: "):
        encode_bech32("a" * 83, b"\x01")

    # 83 + 1 + 6 characters: the longest bech32 string
    assert len(encode_bech32("a" * 83, b"")) == 90


def test_non_ascii_bytes() -> None:
    with pytest.raises(Bech32FormatError, match="non-ascii bech32 string"):
        decode_bech32(b"\xff1qqqqqq")
