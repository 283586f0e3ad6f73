#!/usr/bin/env python3

# Copyright (C) The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module btchd.mnemonic."""

from btchd.mnemonic.bip39 import (
    Mnemonic,
    entropy_from_mnemonic,
    generate_mnemonic,
    mnemonic_from_entropy,
    rootxprv_from_mnemonic,
    seed_from_mnemonic,
)
from btchd.mnemonic.entropy import BITS, random_entropy
from btchd.mnemonic.wordlists import WORDLISTS, WordLists

__all__ = [
    "BITS",
    "Mnemonic",
    "WORDLISTS",
    "WordLists",
    "entropy_from_mnemonic",
    "generate_mnemonic",
    "mnemonic_from_entropy",
    "random_entropy",
    "rootxprv_from_mnemonic",
    "seed_from_mnemonic",
]
