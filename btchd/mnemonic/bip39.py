#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP39 entropy / mnemonic / seed functions.

https://github.com/bitcoin/bips/blob/master/bip-0039.mediawiki.

Checksummed entropy (**ENT+CS**) is converted from/to mnemonic.

* bits per word = bpw = 11
* **ENT** = raw entropy
* **CS** = checksum = **ENT** / 32
* **MS** = words in the mnemonic sentence = (**ENT+CS**) / bpw

+-----+----+--------+----+
| ENT | CS | ENT+CS | MS |
+=====+====+========+====+
| 128 |  4 |    132 | 12 |
+-----+----+--------+----+
| 160 |  5 |    165 | 15 |
+-----+----+--------+----+
| 192 |  6 |    198 | 18 |
+-----+----+--------+----+
| 224 |  7 |    231 | 21 |
+-----+----+--------+----+
| 256 |  8 |    264 | 24 |
+-----+----+--------+----+
"""

import logging
import secrets
from hashlib import pbkdf2_hmac
from typing import List, Optional

from btchd.alias import Octets
from btchd.bip32.bip32 import ExtendedKey, rootxprv_from_seed
from btchd.ec.curve import CurveConfig
from btchd.exceptions import InvalidMnemonic
from btchd.hashes import sha256
from btchd.mnemonic.entropy import (
    BITS,
    BinStr,
    RandBytes,
    bin_str_entropy_from_bytes,
    bin_str_entropy_from_wordlist_indexes,
    bytes_entropy_from_str,
    random_entropy,
    wordlist_indexes_from_bin_str_entropy,
)
from btchd.mnemonic.wordlists import WORDLISTS, normalize_string
from btchd.network import NetworkLike

logger = logging.getLogger(__name__)

Mnemonic = str

# number of words for each allowed entropy size
_WORDS = {bits * 33 // 32 // 11: bits for bits in BITS}


def _separator(lang: str) -> str:
    # ideographic space for Japanese
    return "\u3000" if lang == "ja" else " "


def _words(mnemonic: Mnemonic) -> List[str]:
    # NFKD maps the ideographic space to a plain space
    return normalize_string(mnemonic).split()


def _entropy_checksum(bytes_entropy: bytes) -> BinStr:
    "Return the checksum bits of the bytes entropy."

    int_checksum = int.from_bytes(sha256(bytes_entropy), byteorder="big", signed=False)
    checksum = bin(int_checksum)[2:].zfill(256)
    # leftmost bits
    return checksum[: len(bytes_entropy) // 4]


def mnemonic_from_entropy(entropy: Octets, lang: str = "en") -> Mnemonic:
    """Convert input entropy to BIP39 checksummed mnemonic sentence.

    Input entropy can be expressed as bytes or hex-string;
    it must be 128, 160, 192, 224, or 256 bits.
    """

    bin_str_entropy = bin_str_entropy_from_bytes(entropy)
    checksum = _entropy_checksum(bytes_entropy_from_str(bin_str_entropy))
    base = WORDLISTS.language_length(lang)
    indexes = wordlist_indexes_from_bin_str_entropy(bin_str_entropy + checksum, base)
    wordlist = WORDLISTS.wordlist(lang)
    return _separator(lang).join(wordlist[i] for i in indexes)


def generate_mnemonic(
    bits: int = 128, lang: str = "en", randbytes: RandBytes = secrets.token_bytes
) -> Mnemonic:
    """Return a new random BIP39 mnemonic sentence.

    The randomness source is injectable, e.g. for deterministic tests;
    it is called once with the number of bytes to be returned.
    """

    # fail on invalid bits or unknown language before drawing randomness
    WORDLISTS.load_lang(lang)
    entropy = random_entropy(bits, randbytes)
    return mnemonic_from_entropy(entropy, lang)


def entropy_from_mnemonic(mnemonic: Mnemonic, lang: str = "en") -> bytes:
    "Return the entropy from the BIP39 checksummed mnemonic sentence."

    words = _words(mnemonic)
    if len(words) not in _WORDS:
        err_msg = f"invalid number of words: {len(words)} not in {sorted(_WORDS)}"
        raise InvalidMnemonic(err_msg)

    indexes = []
    for word in words:
        try:
            indexes.append(WORDLISTS.index(word, lang))
        except KeyError as e:
            raise InvalidMnemonic(f"unknown word for '{lang}': {word}") from e

    base = WORDLISTS.language_length(lang)
    cs_entropy = bin_str_entropy_from_wordlist_indexes(indexes, base)

    bits = _WORDS[len(words)]
    # entropy is only the first part of cs_entropy
    # the second part being the checksum, to be verified
    bytes_entropy = bytes_entropy_from_str(cs_entropy[:bits])
    checksum = _entropy_checksum(bytes_entropy)
    if cs_entropy[bits:] != checksum:
        err_msg = f"invalid checksum: {cs_entropy[bits:]}; expected: {checksum}"
        raise InvalidMnemonic(err_msg)

    return bytes_entropy


def seed_from_mnemonic(
    mnemonic: Mnemonic, passphrase: str = "", lang: Optional[str] = None
) -> bytes:
    """Return the 64 bytes seed from the provided BIP39 mnemonic sentence.

    Mnemonic and passphrase are NFKD normalized.
    If the language is provided, the mnemonic is verified
    against the language word-list and the BIP39 checksum;
    otherwise any sentence is accepted.
    """

    if lang is None:
        logger.debug("seed from a mnemonic without word-list verification")
    else:
        entropy_from_mnemonic(mnemonic, lang)

    # whitespaces are part of the password: no clean-up
    hf_name = "sha512"
    password = normalize_string(mnemonic).encode("utf-8")
    salt = normalize_string("mnemonic" + passphrase).encode("utf-8")
    iterations = 2048
    dksize = 64
    return pbkdf2_hmac(hf_name, password, salt, iterations, dksize)


def rootxprv_from_mnemonic(
    mnemonic: Mnemonic,
    passphrase: str = "",
    lang: Optional[str] = None,
    network: NetworkLike = "mainnet",
    curve_config: Optional[CurveConfig] = None,
) -> ExtendedKey:
    "Return BIP32 root master extended private key from BIP39 mnemonic."

    seed = seed_from_mnemonic(mnemonic, passphrase, lang)
    return rootxprv_from_seed(seed, network, curve_config)
