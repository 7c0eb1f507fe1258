# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
AccountKey types and their canonical tagged RLP encoding.

An account's authorization policy is one of four variants, each with a fixed
one-byte type tag that prefixes its wire encoding:

- :class:`AccountKeyNil` (``0x80``): no key data. Used inside a role-based key
  for a role that keeps its current key during an account update.
- :class:`AccountKeyPublic` (``0x02``): a single public key, encoded as the
  RLP string of its 33-byte compressed form.
- :class:`AccountKeyWeightedMultiSig` (``0x04``): a threshold and up to 10
  weighted public keys, encoded as ``rlp([threshold, [[weight, key], ...]])``.
- :class:`AccountKeyRoleBased` (``0x05``): up to three of the variants above,
  one per :class:`RoleGroup`, encoded as the RLP list of each inner key's full
  tagged encoding.

Construction validates every count bound, so an instance that exists is always
encodable. Decoding a role-based key accepts fewer than three inner entries and
keeps the decoded count as is.

Examples:
    Build, encode and decode a 2-of-3 multisig key::

        from klaytn_sdk.account_key import (
            AccountKeyDecoder,
            AccountKeyWeightedMultiSig,
            WeightedMultiSigOptions,
        )

        options = WeightedMultiSigOptions(2, [1, 1, 1])
        key = AccountKeyWeightedMultiSig.from_public_keys_and_options(
            [pub1, pub2, pub3], options
        )
        encoded = key.get_rlp_encoding()
        assert AccountKeyDecoder.decode(encoded) == key

    Per-role keys for an account update::

        from klaytn_sdk.account_key import AccountKeyRoleBased

        key = AccountKeyRoleBased.from_role_based_public_keys_and_options(
            [[pub1], [], [pub2, pub3]],
            [
                WeightedMultiSigOptions(),
                WeightedMultiSigOptions(),
                WeightedMultiSigOptions(1, [1, 1]),
            ],
        )
"""

from __future__ import annotations

import unittest
from enum import IntEnum
from typing import List, Optional, Sequence, Union

import rlp
from rlp.exceptions import RLPException
from rlp.sedes import big_endian_int
from typing_extensions import Protocol

from . import utils
from .errors import (
    InvalidAccountKey,
    InvalidOptions,
    InvalidPublicKey,
    InvalidTag,
    KeyCountExceeded,
    RoleCountExceeded,
    WeightCountMismatch,
)
from .secp256k1_ecdsa import PublicKey

MAX_ROLE_BASED_KEY_COUNT = 3
MAX_ACCOUNT_KEY_COUNT = 10


class RoleGroup(IntEnum):
    """Transaction roles; the ordinal indexes every role-partitioned array."""

    TRANSACTION = 0
    ACCOUNT_UPDATE = 1
    FEE_PAYER = 2


class AccountKey(Protocol):
    TYPE: int

    def to_bytes(self) -> bytes:
        ...

    def get_rlp_encoding(self) -> str:
        ...


def _check_tag(data: bytes, expected: int):
    if len(data) == 0:
        raise InvalidTag()
    if data[0] != expected:
        raise InvalidTag(data[0], expected)


def _decode_payload(data: bytes, expected: int):
    _check_tag(data, expected)
    try:
        return rlp.decode(data[1:])
    except RLPException as e:
        raise InvalidAccountKey(str(e)) from e


def _to_public_key(value: Union[str, bytes, PublicKey]) -> PublicKey:
    if isinstance(value, PublicKey):
        return value
    if isinstance(value, str):
        return PublicKey.from_str(value)
    return PublicKey.from_bytes(value)


class AccountKeyNil(AccountKey):
    TYPE: int = 0x80
    RLP: bytes = b"\x80"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AccountKeyNil)

    def __hash__(self) -> int:
        return hash(AccountKeyNil.RLP)

    def __repr__(self) -> str:
        return "AccountKeyNil()"

    def to_bytes(self) -> bytes:
        return AccountKeyNil.RLP

    def get_rlp_encoding(self) -> str:
        return f"0x{self.to_bytes().hex()}"

    @staticmethod
    def decode(data: Union[str, bytes]) -> AccountKeyNil:
        data = utils.to_bytes(data)
        _check_tag(data, AccountKeyNil.TYPE)
        if data != AccountKeyNil.RLP:
            raise InvalidTag(data[0], AccountKeyNil.TYPE)
        return AccountKeyNil()


class AccountKeyPublic(AccountKey):
    """A single secp256k1 public key."""

    TYPE: int = 0x02

    public_key: PublicKey

    def __init__(self, public_key: Union[str, bytes, PublicKey]):
        self.public_key = _to_public_key(public_key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccountKeyPublic):
            return NotImplemented
        return self.public_key == other.public_key

    def __hash__(self) -> int:
        return hash(self.public_key)

    def __repr__(self) -> str:
        return f"AccountKeyPublic({self.public_key.hex(compressed=True)})"

    @staticmethod
    def from_public_key(public_key: str) -> AccountKeyPublic:
        """Accepts a compressed (33 bytes) or uncompressed (64 or 65 bytes) hex key."""
        return AccountKeyPublic(PublicKey.from_str(public_key))

    @staticmethod
    def from_xy_point(x: Union[int, str], y: Union[int, str]) -> AccountKeyPublic:
        return AccountKeyPublic(PublicKey.from_xy_point(x, y))

    def get_xy_point(self) -> List[str]:
        return [
            f"0x{self.public_key.x.to_bytes(32, 'big').hex()}",
            f"0x{self.public_key.y.to_bytes(32, 'big').hex()}",
        ]

    def to_bytes(self) -> bytes:
        return bytes([AccountKeyPublic.TYPE]) + rlp.encode(
            self.public_key.to_compressed_bytes()
        )

    def get_rlp_encoding(self) -> str:
        return f"0x{self.to_bytes().hex()}"

    @staticmethod
    def decode(data: Union[str, bytes]) -> AccountKeyPublic:
        data = utils.to_bytes(data)
        payload = _decode_payload(data, AccountKeyPublic.TYPE)
        if not isinstance(payload, bytes):
            raise InvalidPublicKey("expected an RLP string")
        return AccountKeyPublic(PublicKey.from_bytes(payload))


class WeightedPublicKey:
    weight: int
    public_key: PublicKey

    def __init__(self, weight: int, public_key: Union[str, bytes, PublicKey]):
        self.weight = weight
        self.public_key = _to_public_key(public_key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightedPublicKey):
            return NotImplemented
        return self.weight == other.weight and self.public_key == other.public_key

    def __repr__(self) -> str:
        return f"WeightedPublicKey({self.weight}, {self.public_key.hex(compressed=True)})"

    def to_list(self) -> List:
        return [self.weight, self.public_key.to_compressed_bytes()]


class WeightedMultiSigOptions:
    """Threshold and per-key weights for a weighted multisig key.

    An options object with neither threshold nor weights is *empty*; empty
    options mean "no multisig" when building role-based keys.
    """

    threshold: Optional[int]
    weights: List[int]

    def __init__(self, threshold: Optional[int] = None, weights: Optional[List[int]] = None):
        weights = list(weights) if weights is not None else []
        if len(weights) > MAX_ACCOUNT_KEY_COUNT:
            raise KeyCountExceeded(
                "The number of weights in WeightedMultiSigOptions has up to 10.",
                len(weights),
            )
        if threshold is not None and threshold < 1:
            raise InvalidOptions("Threshold must be a positive integer.")
        if any(weight < 1 for weight in weights):
            raise InvalidOptions("Weights must be positive integers.")
        if (threshold is None) != (len(weights) == 0):
            raise InvalidOptions("Threshold and weights must be defined together.")
        self.threshold = threshold
        self.weights = weights

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightedMultiSigOptions):
            return NotImplemented
        return self.threshold == other.threshold and self.weights == other.weights

    def __repr__(self) -> str:
        return f"WeightedMultiSigOptions({self.threshold}, {self.weights})"

    def is_empty(self) -> bool:
        return self.threshold is None and len(self.weights) == 0

    @staticmethod
    def get_default_options_for_weighted_multisig(
        key_count: int,
    ) -> WeightedMultiSigOptions:
        return WeightedMultiSigOptions(1, [1] * key_count)

    @staticmethod
    def get_default_options_for_role_based(
        key_counts: Sequence[int],
    ) -> List[WeightedMultiSigOptions]:
        """Empty options for roles with at most one key, 1-of-n otherwise."""
        return [
            WeightedMultiSigOptions.get_default_options_for_weighted_multisig(count)
            if count > 1
            else WeightedMultiSigOptions()
            for count in key_counts
        ]


class AccountKeyWeightedMultiSig(AccountKey):
    """A threshold over 1 to 10 weighted public keys.

    Whether the weights can ever reach the threshold is checked by
    :meth:`is_satisfiable`, not at construction.
    """

    TYPE: int = 0x04

    threshold: int
    weighted_public_keys: List[WeightedPublicKey]

    def __init__(self, threshold: int, weighted_public_keys: List[WeightedPublicKey]):
        if not 0 < len(weighted_public_keys) <= MAX_ACCOUNT_KEY_COUNT:
            raise KeyCountExceeded(
                "WeightedMultiSig must have between 1 and 10 keys.",
                len(weighted_public_keys),
            )
        if threshold < 1:
            raise InvalidOptions("Threshold must be a positive integer.")
        self.threshold = threshold
        self.weighted_public_keys = list(weighted_public_keys)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccountKeyWeightedMultiSig):
            return NotImplemented
        return (
            self.threshold == other.threshold
            and self.weighted_public_keys == other.weighted_public_keys
        )

    def __repr__(self) -> str:
        return f"AccountKeyWeightedMultiSig({self.threshold}, {self.weighted_public_keys})"

    @staticmethod
    def from_public_keys_and_options(
        public_keys: Sequence[Union[str, bytes, PublicKey]],
        options: WeightedMultiSigOptions,
    ) -> AccountKeyWeightedMultiSig:
        if len(public_keys) > MAX_ACCOUNT_KEY_COUNT:
            raise KeyCountExceeded(
                "It exceeds maximum public key count.", len(public_keys)
            )
        if options.is_empty():
            raise InvalidOptions("Invalid options for AccountKeyWeightedMultiSig.")
        if len(public_keys) != len(options.weights):
            raise WeightCountMismatch(len(public_keys), len(options.weights))

        weighted = [
            WeightedPublicKey(weight, public_key)
            for public_key, weight in zip(public_keys, options.weights)
        ]
        assert options.threshold is not None
        return AccountKeyWeightedMultiSig(options.threshold, weighted)

    def is_satisfiable(self) -> bool:
        return sum(key.weight for key in self.weighted_public_keys) >= self.threshold

    def to_bytes(self) -> bytes:
        return bytes([AccountKeyWeightedMultiSig.TYPE]) + rlp.encode(
            [self.threshold, [key.to_list() for key in self.weighted_public_keys]]
        )

    def get_rlp_encoding(self) -> str:
        return f"0x{self.to_bytes().hex()}"

    @staticmethod
    def decode(data: Union[str, bytes]) -> AccountKeyWeightedMultiSig:
        data = utils.to_bytes(data)
        payload = _decode_payload(data, AccountKeyWeightedMultiSig.TYPE)
        try:
            threshold, entries = payload
            pairs = [
                (big_endian_int.deserialize(weight), public_key)
                for weight, public_key in entries
            ]
            threshold = big_endian_int.deserialize(threshold)
        except (RLPException, TypeError, ValueError) as e:
            raise InvalidAccountKey(f"expected [threshold, [[weight, key], ...]]: {e}") from e
        if not all(isinstance(public_key, bytes) for _, public_key in pairs):
            raise InvalidAccountKey("public keys must be RLP strings")
        return AccountKeyWeightedMultiSig(
            threshold, [WeightedPublicKey(weight, key) for weight, key in pairs]
        )


class AccountKeyRoleBased(AccountKey):
    """One inner key per :class:`RoleGroup`, in role order.

    ``None`` entries are stored as :class:`AccountKeyNil`.
    """

    TYPE: int = 0x05

    account_keys: List[AccountKey]

    def __init__(self, account_keys: Sequence[Optional[AccountKey]]):
        if len(account_keys) > MAX_ROLE_BASED_KEY_COUNT:
            raise RoleCountExceeded(len(account_keys))
        keys: List[AccountKey] = []
        for key in account_keys:
            if key is None:
                key = AccountKeyNil()
            if not isinstance(
                key, (AccountKeyNil, AccountKeyPublic, AccountKeyWeightedMultiSig)
            ):
                raise InvalidTag(getattr(key, "TYPE", None))
            keys.append(key)
        self.account_keys = keys

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccountKeyRoleBased):
            return NotImplemented
        return self.account_keys == other.account_keys

    def __repr__(self) -> str:
        return f"AccountKeyRoleBased({self.account_keys})"

    def __len__(self) -> int:
        return len(self.account_keys)

    def get_role_key(self, role: Union[RoleGroup, int]) -> AccountKey:
        return self.account_keys[role]

    @staticmethod
    def from_role_based_public_keys_and_options(
        public_keys: Sequence[Sequence[Union[str, bytes, PublicKey]]],
        options: Optional[Sequence[WeightedMultiSigOptions]] = None,
    ) -> AccountKeyRoleBased:
        """Pick Nil, Public or WeightedMultiSig for each role.

        An empty role becomes Nil and must have empty options. A single key
        with empty options becomes Public. Anything else requires options and
        becomes a WeightedMultiSig.
        """
        if len(public_keys) > MAX_ROLE_BASED_KEY_COUNT:
            raise RoleCountExceeded(len(public_keys))
        if options is None:
            options = [WeightedMultiSigOptions() for _ in public_keys]
        if len(options) != len(public_keys):
            raise InvalidOptions(
                "The length of public key array and the length of weighted multisig options array should be the same."
            )

        keys: List[AccountKey] = []
        for role_keys, role_options in zip(public_keys, options):
            if len(role_keys) == 0:
                if not role_options.is_empty():
                    raise InvalidOptions(
                        "Invalid options: AccountKeyNil cannot have options."
                    )
                keys.append(AccountKeyNil())
            elif len(role_keys) == 1 and role_options.is_empty():
                keys.append(AccountKeyPublic(_to_public_key(role_keys[0])))
            elif role_options.is_empty():
                raise InvalidOptions(
                    "weightedMultiSigOptions should be specified for multiple public keys."
                )
            else:
                keys.append(
                    AccountKeyWeightedMultiSig.from_public_keys_and_options(
                        role_keys, role_options
                    )
                )
        return AccountKeyRoleBased(keys)

    def to_bytes(self) -> bytes:
        return bytes([AccountKeyRoleBased.TYPE]) + rlp.encode(
            [key.to_bytes() for key in self.account_keys]
        )

    def get_rlp_encoding(self) -> str:
        return f"0x{self.to_bytes().hex()}"

    @staticmethod
    def decode(data: Union[str, bytes]) -> AccountKeyRoleBased:
        data = utils.to_bytes(data)
        entries = _decode_payload(data, AccountKeyRoleBased.TYPE)
        if not isinstance(entries, list) or not all(
            isinstance(entry, bytes) for entry in entries
        ):
            raise InvalidAccountKey("expected a list of encoded role keys")
        return AccountKeyRoleBased(
            [AccountKeyDecoder.decode_role_key(entry) for entry in entries]
        )


class AccountKeyDecoder:
    """Decodes any AccountKey blob by dispatching on its leading tag."""

    @staticmethod
    def decode(data: Union[str, bytes]) -> AccountKey:
        data = utils.to_bytes(data)
        if len(data) == 0:
            raise InvalidTag()

        tag = data[0]
        if tag == AccountKeyRoleBased.TYPE:
            return AccountKeyRoleBased.decode(data)
        return AccountKeyDecoder.decode_role_key(data)

    @staticmethod
    def decode_role_key(data: bytes) -> AccountKey:
        """Decode a key that may appear inside a role-based key."""
        if len(data) == 0:
            raise InvalidTag()

        tag = data[0]
        if tag == AccountKeyNil.TYPE:
            key: AccountKey = AccountKeyNil.decode(data)
        elif tag == AccountKeyPublic.TYPE:
            key = AccountKeyPublic.decode(data)
        elif tag == AccountKeyWeightedMultiSig.TYPE:
            key = AccountKeyWeightedMultiSig.decode(data)
        else:
            raise InvalidTag(tag)
        return key


class Test(unittest.TestCase):
    PRIVATE_KEYS = [
        "0x45a915e4d060149eb4365960e6a7a45f334393093061116b197e3240065ff2d8",
        "0x36e0a792553f94a7660e5484cfc8367e7d56a383261175b9abced7416a5d87df",
        "0xd1e9f8f00ef9f93365f5eabccccb3f3c5783001b61a40f0f74270e50158c163d",
        "0x4bd8d0b0c1575a7a35915f9af3ef8beb11ad571337ec9b6aca7c88ca7458ef5c",
    ]

    def public_keys(self, count: int) -> List[PublicKey]:
        from .secp256k1_ecdsa import PrivateKey

        return [PrivateKey.from_hex(key).public_key() for key in self.PRIVATE_KEYS[:count]]

    def test_nil(self):
        self.assertEqual(AccountKeyNil().get_rlp_encoding(), "0x80")
        self.assertEqual(AccountKeyDecoder.decode("0x80"), AccountKeyNil())
        with self.assertRaises(InvalidTag):
            AccountKeyNil.decode("0x02")

    def test_public(self):
        public_key = self.public_keys(1)[0]
        key = AccountKeyPublic(public_key)
        encoded = key.to_bytes()

        # tag, RLP string header for 33 bytes, compressed point
        self.assertEqual(encoded[0], 0x02)
        self.assertEqual(encoded[1], 0xA1)
        self.assertEqual(encoded[2:], public_key.to_compressed_bytes())

        self.assertEqual(AccountKeyDecoder.decode(encoded), key)
        self.assertEqual(AccountKeyPublic.from_public_key(public_key.hex()), key)
        self.assertEqual(
            AccountKeyPublic.from_public_key(public_key.hex(compressed=True)), key
        )
        x, y = key.get_xy_point()
        self.assertEqual(AccountKeyPublic.from_xy_point(x, y), key)

    def test_weighted_multisig(self):
        public_keys = self.public_keys(3)
        options = WeightedMultiSigOptions(2, [1, 1, 2])
        key = AccountKeyWeightedMultiSig.from_public_keys_and_options(public_keys, options)

        self.assertEqual(key.threshold, 2)
        self.assertEqual([k.weight for k in key.weighted_public_keys], [1, 1, 2])
        self.assertEqual([k.public_key for k in key.weighted_public_keys], public_keys)
        self.assertTrue(key.is_satisfiable())

        encoded = key.to_bytes()
        self.assertEqual(encoded[0], 0x04)
        threshold, entries = rlp.decode(encoded[1:])
        self.assertEqual(threshold, b"\x02")
        self.assertEqual(entries[2], [b"\x02", public_keys[2].to_compressed_bytes()])
        self.assertEqual(AccountKeyDecoder.decode(key.get_rlp_encoding()), key)

    def test_weighted_multisig_unsatisfiable_is_constructible(self):
        key = AccountKeyWeightedMultiSig.from_public_keys_and_options(
            self.public_keys(2), WeightedMultiSigOptions(5, [1, 1])
        )
        self.assertFalse(key.is_satisfiable())

    def test_weighted_multisig_invalid(self):
        public_keys = self.public_keys(3)
        with self.assertRaises(WeightCountMismatch):
            AccountKeyWeightedMultiSig.from_public_keys_and_options(
                public_keys, WeightedMultiSigOptions(1, [1, 1])
            )
        with self.assertRaises(KeyCountExceeded):
            AccountKeyWeightedMultiSig.from_public_keys_and_options(
                public_keys * 4, WeightedMultiSigOptions(1, [1] * 10)
            )
        with self.assertRaises(KeyCountExceeded):
            AccountKeyWeightedMultiSig(1, [])
        with self.assertRaises(InvalidOptions):
            AccountKeyWeightedMultiSig.from_public_keys_and_options(
                public_keys, WeightedMultiSigOptions()
            )

    def test_options(self):
        self.assertTrue(WeightedMultiSigOptions().is_empty())
        self.assertEqual(
            WeightedMultiSigOptions.get_default_options_for_weighted_multisig(3),
            WeightedMultiSigOptions(1, [1, 1, 1]),
        )
        self.assertEqual(
            WeightedMultiSigOptions.get_default_options_for_role_based([0, 1, 2]),
            [
                WeightedMultiSigOptions(),
                WeightedMultiSigOptions(),
                WeightedMultiSigOptions(1, [1, 1]),
            ],
        )
        with self.assertRaises(InvalidOptions):
            WeightedMultiSigOptions(0, [1])
        with self.assertRaises(InvalidOptions):
            WeightedMultiSigOptions(1, [])
        with self.assertRaises(KeyCountExceeded):
            WeightedMultiSigOptions(1, [1] * 11)

    def test_role_based(self):
        public_keys = self.public_keys(4)
        key = AccountKeyRoleBased.from_role_based_public_keys_and_options(
            [[public_keys[0]], [], public_keys[1:4]],
            [
                WeightedMultiSigOptions(),
                WeightedMultiSigOptions(),
                WeightedMultiSigOptions(2, [1, 1, 1]),
            ],
        )
        self.assertIsInstance(key.get_role_key(RoleGroup.TRANSACTION), AccountKeyPublic)
        self.assertIsInstance(key.get_role_key(RoleGroup.ACCOUNT_UPDATE), AccountKeyNil)
        self.assertIsInstance(
            key.get_role_key(RoleGroup.FEE_PAYER), AccountKeyWeightedMultiSig
        )

        encoded = key.to_bytes()
        self.assertEqual(encoded[0], 0x05)
        inner = rlp.decode(encoded[1:])
        self.assertEqual(inner[0], key.account_keys[0].to_bytes())
        self.assertEqual(inner[1], b"\x80")
        self.assertEqual(AccountKeyDecoder.decode(encoded), key)

    def test_role_based_short_decode_keeps_count(self):
        key = AccountKeyRoleBased([AccountKeyPublic(self.public_keys(1)[0])])
        decoded = AccountKeyDecoder.decode(key.get_rlp_encoding())
        self.assertEqual(len(decoded), 1)
        self.assertEqual(decoded, key)

        empty = AccountKeyDecoder.decode(AccountKeyRoleBased([]).to_bytes())
        self.assertEqual(len(empty), 0)

    def test_role_based_none_is_nil(self):
        key = AccountKeyRoleBased([None, AccountKeyPublic(self.public_keys(1)[0])])
        self.assertEqual(key.account_keys[0], AccountKeyNil())

    def test_role_based_invalid(self):
        public_keys = self.public_keys(2)
        with self.assertRaises(RoleCountExceeded):
            AccountKeyRoleBased([AccountKeyNil()] * 4)
        with self.assertRaises(InvalidTag):
            AccountKeyRoleBased([AccountKeyRoleBased([])])
        with self.assertRaises(InvalidOptions):
            AccountKeyRoleBased.from_role_based_public_keys_and_options(
                [[], [], []],
                [WeightedMultiSigOptions(1, [1]), WeightedMultiSigOptions(), WeightedMultiSigOptions()],
            )
        with self.assertRaises(InvalidOptions):
            AccountKeyRoleBased.from_role_based_public_keys_and_options([public_keys])
        with self.assertRaises(RoleCountExceeded):
            AccountKeyRoleBased.from_role_based_public_keys_and_options([[]] * 4)

    def test_nested_role_based_decode_rejected(self):
        inner = AccountKeyRoleBased([AccountKeyNil()]).to_bytes()
        with self.assertRaises(InvalidTag):
            AccountKeyRoleBased.decode(b"\x05" + rlp.encode([inner]))

    def test_unknown_tag(self):
        for blob in ["0x01c0", "0x03", "0x"]:
            with self.assertRaises(InvalidTag):
                AccountKeyDecoder.decode(blob)

    def test_malformed_payload(self):
        public_key = self.public_keys(1)[0].to_compressed_bytes()
        for blob in [
            "0x04c0",
            "0x0480",
            "0x04c3c101c0",
            "0x04" + rlp.encode([1, [[1]]]).hex(),
            "0x04" + rlp.encode([1, [[1, [public_key]]]]).hex(),
            "0x05ff",
            "0x0580",
            "0x05" + rlp.encode([[b"\x80"]]).hex(),
            "0x02" + rlp.encode(public_key).hex() + "00",
        ]:
            with self.assertRaises(InvalidAccountKey):
                AccountKeyDecoder.decode(blob)
