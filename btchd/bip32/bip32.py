#!/usr/bin/env python3

# Copyright (C) 2017-2022 The btchd developers
#
# This file is part of btchd. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of btchd including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP32 Hierarchical Deterministic Wallet functions.

A deterministic wallet is a hash-chain of private/public key pairs that
derives from a single root, which is the only element requiring backup.
Moreover, there are schemes where public keys can be calculated without
accessing private keys.

A hierarchical deterministic wallet is a tree of multiple hash-chains,
derived from a single root, allowing for selective sharing of keypair
chains.

Here, the HD wallet is implemented according to BIP32 bitcoin standard
https://github.com/bitcoin/bips/blob/master/bip-0032.mediawiki.

A BIP32 extended key is serialized as 78 bytes:

- [  : 4] version
- [ 4: 5] depth in the derivation path
- [ 5: 9] parent fingerprint
- [ 9:13] index
- [13:45] chain code
- [45:78] compressed pub_key or [0x00][prv_key]

Base58Check wrapping of the 78 bytes is provided by the base58 package.

Extended keys are immutable: derivation and the with_* methods
always return new instances.
"""

import dataclasses
import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type, TypeVar, Union

import base58

from btchd.alias import BinaryData, Octets, String
from btchd.bip32.der_path import (
    HARDENED,
    BIP32DerPath,
    indexes_from_bip32_path,
    int_from_index_str,
    str_from_index_int,
)
from btchd.ec.curve import (
    CurveConfig,
    assert_valid_pubkey,
    compress,
    pubkey_from_prvkey,
    pubkey_tweak_add,
    sec_from_pubkey,
)
from btchd.exceptions import (
    BTCHDValueError,
    DepthOverflow,
    InvalidChild,
    InvalidDerivation,
    InvalidParameter,
    InvalidSeed,
)
from btchd.hashes import hash160, hmac_sha512
from btchd.network import (
    NETWORKS,
    Network,
    NetworkLike,
    get_network,
    network_from_xkeyversion,
)
from btchd.utils import (
    bytes_from_hex_padded,
    bytes_from_octets,
    bytesio_from_binarydata,
    hex_string,
)

logger = logging.getLogger(__name__)

_REQUIRED_LENGTH = 78

_ExtendedKey = TypeVar("_ExtendedKey", bound="ExtendedKey")


@dataclass(frozen=True)
class ExtendedKey:
    # 32 bytes private key, or SEC serialized public key
    key: bytes = field(repr=False)
    chain_code: bytes = field(repr=False)
    depth: int
    # index is an int, not bytes, to avoid any byteorder ambiguity
    index: int
    parent_fingerprint: bytes
    network: Network
    curve_config: CurveConfig

    def __init__(
        self,
        key: Octets,
        chain_code: Octets,
        depth: int = 0,
        index: int = 0,
        parent_fingerprint: Octets = b"\x00" * 4,
        network: NetworkLike = "mainnet",
        curve_config: Optional[CurveConfig] = None,
        check_validity: bool = True,
    ) -> None:

        object.__setattr__(self, "key", bytes_from_octets(key))
        object.__setattr__(self, "chain_code", bytes_from_octets(chain_code))
        object.__setattr__(self, "depth", depth)
        object.__setattr__(self, "index", index)
        object.__setattr__(
            self, "parent_fingerprint", bytes_from_octets(parent_fingerprint)
        )
        object.__setattr__(self, "network", get_network(network))
        object.__setattr__(self, "curve_config", curve_config or CurveConfig())

        if check_validity:
            self.assert_valid()

    @property
    def is_private(self) -> bool:
        return len(self.key) == self.curve_config.key_length

    @property
    def is_hardened(self) -> bool:
        return self.index >= HARDENED

    @property
    def is_root(self) -> bool:
        return (
            self.depth == 0
            and self.index == 0
            and self.parent_fingerprint == b"\x00" * 4
        )

    @property
    def compressed(self) -> bool:
        "Return True if the public key is (or would be) compressed."
        if self.is_private:
            return self.curve_config.compress_public_point
        return len(self.key) == self.curve_config.key_length + 1

    @property
    def version(self) -> bytes:
        if self.is_private:
            return self.network.bip32_prv
        return self.network.bip32_pub

    @property
    def prv_key_int(self) -> int:
        if not self.is_private:
            raise BTCHDValueError("not a private key")
        return self.curve_config.scalars.from_bytes(self.key)

    @cached_property
    def pub_key(self) -> bytes:
        "Return the compressed SEC serialization of the public key."
        if self.is_private:
            return pubkey_from_prvkey(
                self.prv_key_int, True, self.curve_config.curve_name
            )
        return compress(self.key, self.curve_config.curve_name)

    def fingerprint(self, length: int = 4) -> bytes:
        "Return the fingerprint identifying this key as parent."
        _check_fingerprint_length(length)
        # pub_key is already compressed and on the key curve
        return hash160(self.pub_key)[:length]

    def assert_valid(self) -> None:

        if len(self.chain_code) != 32:
            err_msg = "invalid chain_code length: "
            err_msg += f"{len(self.chain_code)} bytes instead of 32"
            raise BTCHDValueError(err_msg)

        if not isinstance(self.depth, int) or not 0 <= self.depth <= 255:
            raise BTCHDValueError(f"invalid depth: {self.depth}")

        if not isinstance(self.index, int) or not 0 <= self.index <= 0xFFFFFFFF:
            raise BTCHDValueError(f"invalid index: {self.index}")

        if len(self.parent_fingerprint) != 4:
            err_msg = "invalid parent_fingerprint length: "
            err_msg += f"{len(self.parent_fingerprint)} bytes instead of 4"
            raise BTCHDValueError(err_msg)

        if self.depth == 0:
            if self.parent_fingerprint != b"\x00" * 4:
                err_msg = "zero depth with non-zero parent fingerprint: "
                err_msg += f"0x{self.parent_fingerprint.hex()}"
                raise BTCHDValueError(err_msg)
            if self.index != 0:
                raise BTCHDValueError(f"zero depth with non-zero index: {self.index}")

        if self.is_private:
            q = self.curve_config.scalars.from_bytes(self.key)
            if not self.curve_config.scalars.is_valid(q):
                raise BTCHDValueError("invalid private key not in 1..n-1")
        else:
            assert_valid_pubkey(self.key, self.curve_config.curve_name)

    def serialize(self, check_validity: bool = True) -> bytes:
        "Return the 78 bytes BIP32 serialization."

        if check_validity:
            self.assert_valid()

        key_data = b"\x00" + self.key if self.is_private else self.pub_key
        return b"".join(
            [
                self.version,
                self.depth.to_bytes(1, byteorder="big", signed=False),
                self.parent_fingerprint,
                self.index.to_bytes(4, byteorder="big", signed=False),
                self.chain_code,
                key_data,
            ]
        )

    def b58encode(self, check_validity: bool = True) -> str:
        "Return the Base58Check encoded serialization."
        return base58.b58encode_check(self.serialize(check_validity)).decode("ascii")

    @classmethod
    def parse(
        cls: Type[_ExtendedKey],
        xkey_bin: BinaryData,
        network: Optional[NetworkLike] = None,
        curve_config: Optional[CurveConfig] = None,
        check_validity: bool = True,
    ) -> _ExtendedKey:
        """Return an ExtendedKey by parsing 78 bytes from binary data.

        If not provided, the network is inferred from the version:
        testnet is returned for the versions shared with regtest.
        """

        stream = bytesio_from_binarydata(xkey_bin)
        xkey_bin = stream.read(_REQUIRED_LENGTH)

        if len(xkey_bin) != _REQUIRED_LENGTH:
            err_msg = f"invalid decoded length: {len(xkey_bin)}"
            err_msg += f" instead of {_REQUIRED_LENGTH}"
            raise BTCHDValueError(err_msg)

        version = xkey_bin[0:4]
        if network is None:
            net = network_from_xkeyversion(version)
        else:
            net = get_network(network)
            if version not in (net.bip32_prv, net.bip32_pub):
                err_msg = f"invalid version for {net.name}: 0x{version.hex()}"
                raise BTCHDValueError(err_msg)

        key_data = xkey_bin[45:78]
        if version == net.bip32_prv:
            if key_data[0] != 0:
                raise BTCHDValueError(
                    f"invalid private key prefix: 0x{key_data[:1].hex()}"
                )
            key = key_data[1:]
        else:
            if key_data[0] not in (2, 3):
                err_msg = "invalid public key prefix not in (0x02, 0x03): "
                err_msg += f"0x{key_data[:1].hex()}"
                raise BTCHDValueError(err_msg)
            key = key_data

        return cls(
            key=key,
            chain_code=xkey_bin[13:45],
            depth=xkey_bin[4],
            index=int.from_bytes(xkey_bin[9:13], byteorder="big", signed=False),
            parent_fingerprint=xkey_bin[5:9],
            network=net,
            curve_config=curve_config,
            check_validity=check_validity,
        )

    @classmethod
    def b58decode(
        cls: Type[_ExtendedKey],
        xkey: String,
        network: Optional[NetworkLike] = None,
        curve_config: Optional[CurveConfig] = None,
        check_validity: bool = True,
    ) -> _ExtendedKey:
        "Return an ExtendedKey from its Base58Check encoded serialization."

        if isinstance(xkey, str):
            xkey = xkey.strip()
        else:
            xkey = bytes(xkey).strip()

        try:
            xkey_bin = base58.b58decode_check(xkey)
        except ValueError as e:
            raise BTCHDValueError(f"invalid base58 extended key: {e}") from e
        return cls.parse(xkey_bin, network, curve_config, check_validity)

    def to_dict(self, check_validity: bool = True) -> Dict[str, Any]:

        if check_validity:
            self.assert_valid()

        return {
            "key": self.key.hex(),
            "chain_code": self.chain_code.hex(),
            "depth": self.depth,
            "index": str_from_index_int(self.index),
            "parent_fingerprint": self.parent_fingerprint.hex(),
            "network": self.network.name,
            "curve_config": self.curve_config.to_dict(),
        }

    @classmethod
    def from_dict(
        cls: Type[_ExtendedKey], dict_: Mapping[str, Any], check_validity: bool = True
    ) -> _ExtendedKey:

        return cls(
            key=dict_["key"],
            chain_code=dict_["chain_code"],
            depth=dict_["depth"],
            index=int_from_index_str(dict_["index"]),
            parent_fingerprint=dict_["parent_fingerprint"],
            network=dict_["network"],
            curve_config=CurveConfig.from_dict(dict_["curve_config"]),
            check_validity=check_validity,
        )

    def to_json(self, check_validity: bool = True) -> str:
        return json.dumps(self.to_dict(check_validity))

    @classmethod
    def from_json(
        cls: Type[_ExtendedKey], json_str: str, check_validity: bool = True
    ) -> _ExtendedKey:
        return cls.from_dict(json.loads(json_str), check_validity)

    def with_network(self: _ExtendedKey, network: NetworkLike) -> _ExtendedKey:
        "Return a copy of the key for a different network."
        return dataclasses.replace(self, network=get_network(network))

    def with_compressed(self: _ExtendedKey, compressed: bool = True) -> _ExtendedKey:
        "Return a copy of the key with the given public key serialization."

        curve_config = dataclasses.replace(
            self.curve_config, compress_public_point=compressed
        )
        if self.is_private:
            return dataclasses.replace(self, curve_config=curve_config)

        key = sec_from_pubkey(self.key, compressed, self.curve_config.curve_name)
        return dataclasses.replace(self, key=key, curve_config=curve_config)

    def derive_child(self, index: int) -> "ExtendedKey":
        return derive_child(self, index)

    def to_public(self) -> "ExtendedKey":
        return xpub_from_xprv(self)


BIP32Key = Union[ExtendedKey, String]


def _extended_key_from(xkey: BIP32Key) -> ExtendedKey:
    if isinstance(xkey, ExtendedKey):
        return xkey
    return ExtendedKey.b58decode(xkey)


def _check_fingerprint_length(length: int) -> None:
    if not 1 <= length <= 20:
        raise InvalidParameter(f"invalid fingerprint length: {length}")


def fingerprint(pub_key: Octets, length: int = 4, curve_name: str = "secp256k1") -> bytes:
    """Return the first bytes of HASH160 of the compressed public key.

    The four bytes fingerprint of a key is the parent fingerprint
    of its children.
    """

    _check_fingerprint_length(length)
    return hash160(compress(pub_key, curve_name))[:length]


def rootxprv_from_seed(
    seed: Octets,
    network: NetworkLike = "mainnet",
    curve_config: Optional[CurveConfig] = None,
) -> ExtendedKey:
    """Return BIP32 root master extended private key from seed.

    The seed can be any byte sequence, usually the 64 bytes
    obtained from a BIP39 mnemonic.
    """

    seed = bytes_from_octets(seed)
    curve_config = curve_config or CurveConfig()
    scalars = curve_config.scalars
    size = curve_config.key_length

    hmac_ = hmac_sha512(b"Bitcoin seed", seed)
    q = scalars.from_bytes(hmac_[:size])
    if not scalars.is_valid(q):
        raise InvalidSeed(f"invalid master key from seed: '{hex_string(seed)}'")

    xkey = ExtendedKey(
        key=hmac_[:size],
        chain_code=hmac_[size : size + 32],
        depth=0,
        index=0,
        parent_fingerprint=b"\x00" * 4,
        network=network,
        curve_config=curve_config,
    )
    logger.debug("root key %s on %s", xkey.fingerprint().hex(), xkey.network.name)
    return xkey


def rootxprv_from_hex_seed(
    seed: str,
    network: NetworkLike = "mainnet",
    curve_config: Optional[CurveConfig] = None,
) -> ExtendedKey:
    """Return BIP32 root master extended private key from hex seed.

    Odd-length hex-strings are left-padded with a zero nibble.
    """

    try:
        seed_bytes = bytes_from_hex_padded(seed)
    except ValueError as e:
        raise InvalidParameter(f"invalid hex seed: {e}") from e
    return rootxprv_from_seed(seed_bytes, network, curve_config)


def xpub_from_xprv(xprv: BIP32Key) -> ExtendedKey:
    """Neutered Derivation (ND).

    Derivation of the extended public key corresponding to an extended
    private key (“neutered” as it removes the ability to sign transactions).

    The public key is serialized according to the curve configuration
    of the private key (compressed by default).
    """

    xkey = _extended_key_from(xprv)
    if not xkey.is_private:
        raise BTCHDValueError(f"not a private key: {xkey.b58encode()}")

    config = xkey.curve_config
    if config.compress_public_point:
        pub_key = xkey.pub_key
    else:
        pub_key = pubkey_from_prvkey(xkey.prv_key_int, False, config.curve_name)

    return ExtendedKey(
        key=pub_key,
        chain_code=xkey.chain_code,
        depth=xkey.depth,
        index=xkey.index,
        parent_fingerprint=xkey.parent_fingerprint,
        network=xkey.network,
        curve_config=config,
    )


def derive_child(xkey: BIP32Key, index: int) -> ExtendedKey:
    """Child Key Derivation (CKD) of a single level.

    Indexes in 0x80000000..0xFFFFFFFF are hardened derivations,
    only possible from a private key.

    The (cryptographically negligible) case of an invalid child key
    raises InvalidChild: it is up to the caller to move on
    to the next index, see derive(skip_invalid=True).
    """

    parent = _extended_key_from(xkey)

    if not 0 <= index <= 0xFFFFFFFF:
        raise InvalidParameter(f"invalid index: {index}")
    if parent.depth == 255:
        raise DepthOverflow("invalid derivation beyond depth 255")

    hardened = (index & HARDENED) != 0
    config = parent.curve_config
    scalars = config.scalars
    size = config.key_length
    index_bytes = index.to_bytes(4, byteorder="big", signed=False)

    if parent.is_private:
        if hardened:
            hmac_msg = b"\x00" + parent.key + index_bytes
        else:
            hmac_msg = parent.pub_key + index_bytes
    else:
        if hardened:
            raise InvalidDerivation("invalid hardened derivation from public key")
        hmac_msg = parent.pub_key + index_bytes

    hmac_ = hmac_sha512(parent.chain_code, hmac_msg)
    offset = scalars.from_bytes(hmac_[:size])
    if scalars.compare(offset, scalars.n) >= 0:
        raise InvalidChild(f"invalid child at index {str_from_index_int(index)}")

    if parent.is_private:
        q = scalars.add(offset, parent.prv_key_int)
        if q == 0:
            raise InvalidChild(f"invalid child at index {str_from_index_int(index)}")
        key = scalars.to_bytes(q)
    else:
        key = pubkey_tweak_add(parent.key, offset, parent.compressed, config.curve_name)

    return ExtendedKey(
        key=key,
        chain_code=hmac_[size : size + 32],
        depth=parent.depth + 1,
        index=index,
        parent_fingerprint=parent.fingerprint(),
        network=parent.network,
        curve_config=config,
    )


def _next_valid_child(parent: ExtendedKey, index: int) -> ExtendedKey:

    first_index = index
    while True:
        try:
            return derive_child(parent, index)
        except DepthOverflow:
            raise
        except InvalidChild:
            next_index = index + 1
            # never cross the normal/hardened boundary
            if (next_index & HARDENED) != (first_index & HARDENED):
                raise
            if next_index > 0xFFFFFFFF:
                raise
            logger.debug("skipping invalid child %s", str_from_index_int(index))
            index = next_index


def derive(
    xkey: BIP32Key, der_path: BIP32DerPath, skip_invalid: bool = False
) -> ExtendedKey:
    """Derive a BIP32 key across a path spanning multiple depth levels.

    Valid BIP32DerPath examples:

    - string like "m/44h/0'/1H/0/10"
    - iterable integer indexes
    - one single integer index
    - bytes in multiples of the 4-bytes index

    BIP32DerPath is case/blank/extra-slash insensitive
    (e.g. "M /44h / 0' /1H // 0/ 10 / ").

    With skip_invalid, an invalid child is replaced by the next index,
    as suggested by BIP32; otherwise InvalidChild is raised.
    """

    xkey = _extended_key_from(xkey)
    indexes = indexes_from_bip32_path(der_path)

    final_depth = xkey.depth + len(indexes)
    if final_depth > 255:
        raise DepthOverflow(f"final depth greater than 255: {final_depth}")

    for index in indexes:
        if skip_invalid:
            xkey = _next_valid_child(xkey, index)
        else:
            xkey = derive_child(xkey, index)
    return xkey


def derive_children(
    xkey: BIP32Key, indexes: Iterable[int], max_workers: Optional[int] = None
) -> List[ExtendedKey]:
    """Derive the children at the given indexes, in parallel.

    Derivations are independent of each other, so they are mapped
    over a thread pool; results are in the same order as the indexes.
    Any failure is raised as it would be by derive_child.
    """

    parent = _extended_key_from(xkey)
    indexes = list(indexes)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda i: derive_child(parent, i), indexes))


def derive_from_account(
    mxkey: BIP32Key,
    branch: int,
    address_index: int,
    branches_0_1_only: bool = True,
    max_index: int = 0xFFFF,
) -> ExtendedKey:
    """Derive a key with public derivation at the given branch and index.

    It also ensures that the account key is hardened,
    that the branch is a standard receive or change,
    and that the index is not arbitrarily high.
    """

    mxkey = _extended_key_from(mxkey)

    if not mxkey.is_hardened:
        raise InvalidParameter("unhardened account/master key")

    if not 0 <= branch < HARDENED:
        raise InvalidParameter(f"invalid branch: {branch}")
    if branch > max_index:
        raise InvalidParameter(f"too high branch: {branch}")
    if branches_0_1_only and branch not in (0, 1):
        raise InvalidParameter(f"invalid branch: {branch} not in (0, 1)")

    if not 0 <= address_index < HARDENED:
        raise InvalidParameter(f"invalid address index: {address_index}")
    if address_index > max_index:
        raise InvalidParameter(f"too high address index: {address_index}")

    return derive(mxkey, [branch, address_index])


__all__ = [
    "NETWORKS",
    "BIP32Key",
    "ExtendedKey",
    "derive",
    "derive_child",
    "derive_children",
    "derive_from_account",
    "fingerprint",
    "rootxprv_from_hex_seed",
    "rootxprv_from_seed",
    "xpub_from_xprv",
]
