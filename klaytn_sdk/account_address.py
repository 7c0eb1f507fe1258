# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Account address value type for the Klaytn Python SDK.

Klaytn addresses are 20-byte values rendered as lower-case hex with a ``0x``
prefix. An address is either derived from a public key (the last 20 bytes of
the Keccak-256 hash of the 64-byte uncompressed point) or assigned
independently of any key, in which case the account is said to be
*decoupled* from its key material.

Examples:
    Parse and print an address::

        from klaytn_sdk.account_address import AccountAddress

        address = AccountAddress.from_str("0xA94F5374FCE5EDBC8E2A8697C15331677E6EBF0B")
        print(address)  # 0xa94f5374fce5edbc8e2a8697c15331677e6ebf0b

    Derive the address of a key::

        from klaytn_sdk.secp256k1_ecdsa import PrivateKey

        key = PrivateKey.random()
        address = AccountAddress.from_key(key.public_key())
"""

from __future__ import annotations

import unittest
from typing import TYPE_CHECKING

from . import utils
from .errors import InvalidAddress

if TYPE_CHECKING:
    from .secp256k1_ecdsa import PublicKey


class AccountAddress:
    """A 20-byte account address."""

    address: bytes
    LENGTH: int = 20

    def __init__(self, address: bytes):
        if len(address) != AccountAddress.LENGTH:
            raise InvalidAddress(address.hex())
        self.address = address

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccountAddress):
            return NotImplemented
        return self.address == other.address

    def __hash__(self) -> int:
        return hash(self.address)

    def __str__(self):
        return f"0x{self.address.hex()}"

    def __repr__(self):
        return self.__str__()

    @staticmethod
    def from_str(address: str) -> AccountAddress:
        """Parse a 40 hex digit address, with or without the ``0x`` prefix.

        Mixed case input is accepted; the canonical form is lower case.
        """
        if not isinstance(address, str) or not utils.is_address(address):
            raise InvalidAddress(str(address))
        return AccountAddress(bytes.fromhex(utils.strip_hex_prefix(address)))

    @staticmethod
    def from_key(key: PublicKey) -> AccountAddress:
        return AccountAddress(
            utils.keccak256(key.to_uncompressed_bytes())[-AccountAddress.LENGTH :]
        )

    @staticmethod
    def normalize(address: str) -> str:
        """Return the canonical ``0x`` lower-case rendering of ``address``."""
        return str(AccountAddress.from_str(address))


class Test(unittest.TestCase):
    def test_from_str(self):
        upper = AccountAddress.from_str("0xA94F5374FCE5EDBC8E2A8697C15331677E6EBF0B")
        bare = AccountAddress.from_str("a94f5374fce5edbc8e2a8697c15331677e6ebf0b")
        self.assertEqual(upper, bare)
        self.assertEqual(str(upper), "0xa94f5374fce5edbc8e2a8697c15331677e6ebf0b")

    def test_from_str_invalid(self):
        for value in ["0x", "0x1234", "0x" + "g" * 40, "0x" + "a" * 42]:
            with self.assertRaises(InvalidAddress):
                AccountAddress.from_str(value)

    def test_from_bytes_length(self):
        with self.assertRaises(InvalidAddress):
            AccountAddress(b"\x00" * 32)

    def test_from_key(self):
        from .secp256k1_ecdsa import PrivateKey

        key = PrivateKey.from_hex(
            "0x45a915e4d060149eb4365960e6a7a45f334393093061116b197e3240065ff2d8"
        )
        self.assertEqual(
            str(AccountAddress.from_key(key.public_key())),
            "0xa94f5374fce5edbc8e2a8697c15331677e6ebf0b",
        )

    def test_normalize(self):
        self.assertEqual(
            AccountAddress.normalize("A94F5374FCE5EDBC8E2A8697C15331677E6EBF0B"),
            "0xa94f5374fce5edbc8e2a8697c15331677e6ebf0b",
        )
