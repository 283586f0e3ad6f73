#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Network constants and associated functions.

Only the parameters affecting serialization are tabulated here:
BIP32 extended key versions and the bech32 human-readable part.
"""

import json
from dataclasses import dataclass, field
from os import path
from typing import Dict, List, Optional, Union

from dataclasses_json import DataClassJsonMixin, config

from btchd.exceptions import BTCHDValueError

_KEY_SIZE = [
    ("bip32_prv", 4),
    ("bip32_pub", 4),
]


@dataclass(frozen=True)
class Network(DataClassJsonMixin):
    name: str
    # "xprv" for mainnet, "tprv" for testnet/regtest
    bip32_prv: bytes = field(
        metadata=config(encoder=lambda v: v.hex(), decoder=bytes.fromhex)
    )
    # "xpub" for mainnet, "tpub" for testnet/regtest
    bip32_pub: bytes = field(
        metadata=config(encoder=lambda v: v.hex(), decoder=bytes.fromhex)
    )
    # bech32 strings start with "bc1" for mainnet
    hrp: str

    def __post_init__(self) -> None:
        self.assert_valid()

    def assert_valid(self) -> None:

        for key, size in _KEY_SIZE:
            value = getattr(self, key)
            if not isinstance(value, bytes) or len(value) != size:
                err_msg = f"invalid {key}: {value!r}"
                err_msg += f" instead of {size} bytes"
                raise BTCHDValueError(err_msg)

        if self.bip32_prv == self.bip32_pub:
            raise BTCHDValueError(f"same private and public version: {self.name}")

        if not 1 <= len(self.hrp) <= 83 or self.hrp.lower() != self.hrp:
            raise BTCHDValueError(f"invalid hrp: {self.hrp!r}")


NETWORKS: Dict[str, Network] = {}
datadir = path.join(path.dirname(__file__), "_data")
for net in ("mainnet", "testnet", "regtest"):
    filename = path.join(datadir, net + ".json")
    with open(filename, "r", encoding="ascii") as file_:
        NETWORKS[net] = Network.from_dict(json.load(file_))


NetworkLike = Union[Network, str]


def get_network(network: NetworkLike = "mainnet") -> Network:
    "Return the Network, either provided as such or by its name."

    if isinstance(network, Network):
        return network
    name = network.strip().lower()
    if name not in NETWORKS:
        raise BTCHDValueError(f"unknown network: {network}")
    return NETWORKS[name]


def network_from_key_value(key: str, value: Union[str, bytes]) -> Optional[Network]:
    """Return the first network matching the (key, value) pair.

    Warning: regtest shares the BIP32 versions of testnet,
    so version lookups never return regtest.
    """
    for network in NETWORKS.values():
        if getattr(network, key) == value:
            return network
    return None


XPRV_VERSIONS_ALL: List[bytes] = [net.bip32_prv for net in NETWORKS.values()]
XPUB_VERSIONS_ALL: List[bytes] = [net.bip32_pub for net in NETWORKS.values()]


def network_from_xkeyversion(xkeyversion: bytes) -> Network:
    "Return the Network from a BIP32 extended key version."

    network = network_from_key_value("bip32_prv", xkeyversion)
    if network is None:
        network = network_from_key_value("bip32_pub", xkeyversion)
    if network is None:
        raise BTCHDValueError(f"unknown extended key version: 0x{xkeyversion.hex()}")
    return network
