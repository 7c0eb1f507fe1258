# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Hashing, hex and format helpers shared by the account/key engine.

This module is stateless: every helper is a pure function over its arguments,
except :func:`generate_random_bytes`, which draws from the operating system's
cryptographically secure random source.

Examples:
    Hash a message the way wallets display it for signing::

        from klaytn_sdk import utils

        digest = utils.hash_message("some data")
        print(digest.hex())

    Validate and split a KlaytnWalletKey::

        key = "0x45a9...f2d80x000xa94f...bf0b"
        if utils.is_klaytn_wallet_key(key):
            private_key, key_type, address = utils.parse_klaytn_wallet_key(key)
"""

from __future__ import annotations

import re
import unittest
from typing import Tuple, Union

from Crypto.Hash import keccak
from Crypto.Random import get_random_bytes
from ecdsa import SECP256k1

from .errors import InvalidHex, InvalidWalletKeyFormat

LENGTH_ADDRESS_STRING = 40
LENGTH_PRIVATE_KEY_STRING = 64
LENGTH_KLAYTN_WALLET_KEY_STRING = 110

KLAYTN_MESSAGE_PREAMBLE = b"\x19Klaytn Signed Message:\n"
KLAYTN_WALLET_KEY_TYPE = "00"

_HEX_STRING = re.compile(r"^[0-9A-Fa-f]*$")


def keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


def strip_hex_prefix(value: str) -> str:
    if value[0:2] in ("0x", "0X"):
        return value[2:]
    return value


def add_hex_prefix(value: str) -> str:
    if value[0:2] in ("0x", "0X"):
        return value
    return f"0x{value}"


def is_hex(value: str) -> bool:
    return _HEX_STRING.match(strip_hex_prefix(value)) is not None


def to_bytes(value: Union[str, bytes]) -> bytes:
    """Accept either raw bytes or a hex string (with or without ``0x``)."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    stripped = strip_hex_prefix(value)
    if len(stripped) % 2 == 1:
        stripped = "0" + stripped
    try:
        return bytes.fromhex(stripped)
    except ValueError as e:
        raise InvalidHex(value) from e


def message_to_bytes(message: Union[str, bytes]) -> bytes:
    # 0x-prefixed hex strings are signed as the bytes they encode.
    if isinstance(message, (bytes, bytearray)):
        return bytes(message)
    if message[0:2] == "0x" and is_hex(message):
        return to_bytes(message)
    return message.encode("utf-8")


def hash_message(message: Union[str, bytes]) -> bytes:
    """Return the domain-separated digest signed by ``Keyring.sign_message``.

    The digest is ``keccak256(preamble || len(message) || message)`` where the
    length is written in decimal ASCII and counts message bytes.
    """
    data = message_to_bytes(message)
    return keccak256(KLAYTN_MESSAGE_PREAMBLE + str(len(data)).encode() + data)


def is_address(value: str) -> bool:
    stripped = strip_hex_prefix(value)
    return len(stripped) == LENGTH_ADDRESS_STRING and is_hex(stripped)


def is_valid_private_key(value: str) -> bool:
    stripped = strip_hex_prefix(value)
    if len(stripped) != LENGTH_PRIVATE_KEY_STRING or not is_hex(stripped):
        return False
    scalar = int(stripped, 16)
    return 0 < scalar < SECP256k1.order


def is_klaytn_wallet_key(value: str) -> bool:
    try:
        parse_klaytn_wallet_key(value)
    except InvalidWalletKeyFormat:
        return False
    return True


def parse_klaytn_wallet_key(value: str) -> Tuple[str, str, str]:
    """Split ``0x{private key}0x{type}0x{address}`` into its three parts.

    Each returned part carries a ``0x`` prefix. The type marker must be ``00``.
    """
    stripped = strip_hex_prefix(value)
    if len(stripped) != LENGTH_KLAYTN_WALLET_KEY_STRING:
        raise InvalidWalletKeyFormat(f"unexpected length {len(stripped)}")

    segments = stripped.split("0x")
    if len(segments) != 3:
        raise InvalidWalletKeyFormat(f"expected 3 segments, got {len(segments)}")

    private_key, key_type, address = segments
    if key_type != KLAYTN_WALLET_KEY_TYPE:
        raise InvalidWalletKeyFormat(f"unsupported key type {key_type}")
    if not is_address(address):
        raise InvalidWalletKeyFormat("invalid address segment")
    if not is_valid_private_key(private_key):
        raise InvalidWalletKeyFormat("invalid private key segment")

    return (
        add_hex_prefix(private_key),
        add_hex_prefix(key_type),
        add_hex_prefix(address.lower()),
    )


def generate_random_bytes(size: int) -> bytes:
    return get_random_bytes(size)


class Test(unittest.TestCase):
    WALLET_KEY = (
        "0x45a915e4d060149eb4365960e6a7a45f334393093061116b197e3240065ff2d8"
        "0x00"
        "0xa94f5374fce5edbc8e2a8697c15331677e6ebf0b"
    )

    def test_keccak256_empty(self):
        self.assertEqual(
            keccak256(b"").hex(),
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470",
        )

    def test_hash_message_matches_manual_construction(self):
        expected = keccak256(b"\x19Klaytn Signed Message:\n9some data")
        self.assertEqual(hash_message("some data"), expected)
        self.assertEqual(hash_message(b"some data"), expected)

    def test_hash_message_hex_input(self):
        self.assertEqual(hash_message("0x736f6d652064617461"), hash_message("some data"))

    def test_to_bytes(self):
        self.assertEqual(to_bytes("0x0102"), b"\x01\x02")
        self.assertEqual(to_bytes("102"), b"\x01\x02")
        with self.assertRaises(InvalidHex):
            to_bytes("0xzz")

    def test_is_address(self):
        self.assertTrue(is_address("0xa94f5374fce5edbc8e2a8697c15331677e6ebf0b"))
        self.assertTrue(is_address("a94f5374fce5edbc8e2a8697c15331677e6ebf0b"))
        self.assertFalse(is_address("0xa94f5374fce5edbc8e2a8697c15331677e6ebf"))
        self.assertFalse(is_address("0xz94f5374fce5edbc8e2a8697c15331677e6ebf0b"))

    def test_is_valid_private_key(self):
        self.assertTrue(
            is_valid_private_key(
                "0x45a915e4d060149eb4365960e6a7a45f334393093061116b197e3240065ff2d8"
            )
        )
        self.assertFalse(is_valid_private_key("0x" + "00" * 32))
        self.assertFalse(is_valid_private_key("0x" + "ff" * 32))
        self.assertFalse(is_valid_private_key("0x" + "11" * 31))

    def test_parse_klaytn_wallet_key(self):
        private_key, key_type, address = parse_klaytn_wallet_key(self.WALLET_KEY)
        self.assertEqual(
            private_key,
            "0x45a915e4d060149eb4365960e6a7a45f334393093061116b197e3240065ff2d8",
        )
        self.assertEqual(key_type, "0x00")
        self.assertEqual(address, "0xa94f5374fce5edbc8e2a8697c15331677e6ebf0b")

    def test_parse_klaytn_wallet_key_invalid(self):
        invalid = [
            "39d87f15c695ec94d6d7107b48dee85e252f21fedd371e1c6baefbdf0x000x658b7b7a94ac398a8e7275e719a10c",
            self.WALLET_KEY.replace("0x00", "0x01"),
            self.WALLET_KEY[:-2] + "zz",
        ]
        for value in invalid:
            with self.assertRaises(InvalidWalletKeyFormat):
                parse_klaytn_wallet_key(value)
            self.assertFalse(is_klaytn_wallet_key(value))

    def test_generate_random_bytes(self):
        self.assertEqual(len(generate_random_bytes(32)), 32)
        self.assertNotEqual(generate_random_bytes(32), generate_random_bytes(32))
