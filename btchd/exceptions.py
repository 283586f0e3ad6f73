#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

All exceptions raised by btchd derive from BTCHDValueError or
BTCHDTypeError, which in turn derive from the regular ValueError and
TypeError: users are usually fine just dealing with those.

The more specific classes discriminate between the different failure
kinds of seed handling, key derivation, and bech32 parsing.
"""


class BTCHDValueError(ValueError):
    pass


class BTCHDTypeError(TypeError):
    pass


class InvalidParameter(BTCHDValueError):
    "Out of range argument, e.g. entropy bits or child index."


class InvalidMnemonic(BTCHDValueError):
    "Mnemonic not matching the language word-list or its checksum."


class InvalidSeed(BTCHDValueError):
    "Master private key out of the 1..n-1 range."


class InvalidChild(BTCHDValueError):
    "Child derivation resulting in an invalid key."


class DepthOverflow(InvalidChild):
    "Child derivation beyond depth 255."


class InvalidDerivation(BTCHDValueError):
    "Hardened derivation requested from a public key."


class Bech32Error(BTCHDValueError):
    """Base class for bech32 parsing errors.

    The reason attribute is meant for programmatic handling,
    the message is for humans.
    """

    reason = "bech32_input"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Bech32FormatError(Bech32Error):
    reason = "bech32_input_format"


class Bech32ChecksumError(Bech32Error):
    reason = "bech32_input_checksum"
