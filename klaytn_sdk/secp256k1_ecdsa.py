# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
secp256k1 ECDSA keys and recoverable signatures for the Klaytn Python SDK.

This module wraps the ``ecdsa`` package to provide the three primitives the
keyring is built on:

- :class:`PrivateKey`: a 256-bit scalar in ``[1, n)``. It derives exactly one
  public key and one address, and produces recoverable signatures over 32-byte
  digests.
- :class:`PublicKey`: a curve point, convertible to compressed (33 bytes) and
  uncompressed (64 bytes, no ``04`` prefix) encodings.
- :class:`SignatureData`: the ``(v, r, s)`` triple. ``v`` carries the recovery
  id, offset by ``27`` for plain signatures or by ``35 + 2 * chain_id`` for
  chain-bound transaction signatures (EIP-155 style).

Signing is deterministic (RFC 6979) and signatures are normalized so that
``s <= n / 2``.

Examples:
    Sign and recover::

        from klaytn_sdk import utils
        from klaytn_sdk.secp256k1_ecdsa import PrivateKey, recover_public_key

        key = PrivateKey.random()
        digest = utils.keccak256(b"payload")
        signature = key.sign(digest, chain_id=1001)

        recovered = recover_public_key(digest, signature)
        assert recovered == key.public_key()
"""

from __future__ import annotations

import hashlib
import unittest
from typing import List, Optional, Union

from ecdsa import SECP256k1, SigningKey, VerifyingKey, util
from ecdsa.errors import MalformedPointError

from . import utils
from .account_address import AccountAddress
from .errors import InvalidHash, InvalidKeyFormat, InvalidPublicKey, InvalidSignature

CURVE_ORDER = SECP256k1.order
LEGACY_V_OFFSET = 27
EIP155_V_OFFSET = 35


class PrivateKey:
    """A secp256k1 private key."""

    LENGTH: int = 32

    key: SigningKey

    def __init__(self, key: SigningKey):
        self.key = key

    def __eq__(self, other: object):
        if not isinstance(other, PrivateKey):
            return NotImplemented
        return self.key.to_string() == other.key.to_string()

    def __hash__(self) -> int:
        return hash(self.key.to_string())

    def __repr__(self) -> str:
        return f"PrivateKey({self.derived_address()})"

    @staticmethod
    def from_hex(value: Union[str, bytes]) -> PrivateKey:
        """Parse a private key from 32 raw bytes or 64 hex digits.

        The ``0x`` prefix is optional. The scalar must lie in ``[1, n)``.

        Raises:
            InvalidKeyFormat: If the value is not a 32-byte scalar on the curve.
        """
        if isinstance(value, str):
            if not utils.is_hex(value):
                raise InvalidKeyFormat("not a hex string")
            stripped = utils.strip_hex_prefix(value)
            if len(stripped) != PrivateKey.LENGTH * 2:
                raise InvalidKeyFormat(f"expected 64 hex digits, got {len(stripped)}")
            value = bytes.fromhex(stripped)
        if len(value) != PrivateKey.LENGTH:
            raise InvalidKeyFormat(f"expected 32 bytes, got {len(value)}")
        scalar = int.from_bytes(value, "big")
        if not 0 < scalar < CURVE_ORDER:
            raise InvalidKeyFormat("scalar outside the curve order")
        return PrivateKey(SigningKey.from_string(value, SECP256k1, hashlib.sha256))

    @staticmethod
    def from_str(value: str) -> PrivateKey:
        return PrivateKey.from_hex(value)

    @staticmethod
    def random(entropy: Optional[str] = None) -> PrivateKey:
        """Generate a key from the system random source.

        When ``entropy`` is given it is mixed into the random seed by hashing;
        it never replaces the system randomness. Candidates outside the curve
        order are discarded and redrawn.
        """
        while True:
            seed = utils.generate_random_bytes(PrivateKey.LENGTH)
            if entropy is not None:
                seed = utils.keccak256(seed + entropy.encode("utf-8"))
            if 0 < int.from_bytes(seed, "big") < CURVE_ORDER:
                return PrivateKey(SigningKey.from_string(seed, SECP256k1, hashlib.sha256))

    def hex(self) -> str:
        return f"0x{self.key.to_string().hex()}"

    def to_bytes(self) -> bytes:
        return self.key.to_string()

    def public_key(self) -> PublicKey:
        return PublicKey(self.key.verifying_key)

    def derived_address(self) -> str:
        return str(AccountAddress.from_key(self.public_key()))

    def sign(self, digest: bytes, chain_id: int = 0) -> SignatureData:
        """Produce a recoverable signature over a 32-byte digest.

        ``v`` is ``recovery_id + 35 + 2 * chain_id`` when ``chain_id`` is not
        zero, otherwise ``recovery_id + 27``.
        """
        r, s, recovery_id = self._sign_recoverable(digest)
        if chain_id:
            v = recovery_id + EIP155_V_OFFSET + chain_id * 2
        else:
            v = recovery_id + LEGACY_V_OFFSET
        return SignatureData(v, r, s)

    def sign_message(self, message_hash: bytes) -> SignatureData:
        r, s, recovery_id = self._sign_recoverable(message_hash)
        return SignatureData(recovery_id + LEGACY_V_OFFSET, r, s)

    def _sign_recoverable(self, digest: bytes):
        if len(digest) != 32:
            raise InvalidHash(f"expected 32 bytes, got {len(digest)}")
        sig = self.key.sign_digest_deterministic(digest, hashfunc=hashlib.sha256)
        r, s = util.sigdecode_string(sig, CURVE_ORDER)
        # The signature is valid for both s and -s, normalization ensures that only s < n // 2 is valid
        if s > CURVE_ORDER // 2:
            s = CURVE_ORDER - s

        candidates = _recover_candidates(digest, r, s)
        verifying_key = self.key.verifying_key
        for recovery_id, candidate in enumerate(candidates):
            if candidate == verifying_key:
                return r, s, recovery_id
        raise RuntimeError("Could not construct a recoverable signature")


class PublicKey:
    """A secp256k1 public key (curve point)."""

    LENGTH: int = 64
    LENGTH_WITH_PREFIX_LENGTH: int = 65
    COMPRESSED_LENGTH: int = 33

    key: VerifyingKey

    def __init__(self, key: VerifyingKey):
        self.key = key

    def __eq__(self, other: object):
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.key.to_string() == other.key.to_string()

    def __hash__(self) -> int:
        return hash(self.key.to_string())

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"PublicKey({self.hex(compressed=True)})"

    @staticmethod
    def from_bytes(value: bytes) -> PublicKey:
        """Parse a compressed (33 bytes) or uncompressed (64 or 65 bytes) point."""
        if len(value) not in (
            PublicKey.LENGTH,
            PublicKey.LENGTH_WITH_PREFIX_LENGTH,
            PublicKey.COMPRESSED_LENGTH,
        ):
            raise InvalidPublicKey(f"unexpected length {len(value)}")
        try:
            return PublicKey(VerifyingKey.from_string(value, SECP256k1, hashlib.sha256))
        except (MalformedPointError, ValueError) as e:
            raise InvalidPublicKey(str(e)) from e

    @staticmethod
    def from_str(value: str) -> PublicKey:
        if not utils.is_hex(value):
            raise InvalidPublicKey("not a hex string")
        return PublicKey.from_bytes(utils.to_bytes(value))

    @staticmethod
    def from_xy_point(x: Union[int, str], y: Union[int, str]) -> PublicKey:
        if isinstance(x, str):
            x = int(utils.strip_hex_prefix(x), 16)
        if isinstance(y, str):
            y = int(utils.strip_hex_prefix(y), 16)
        return PublicKey.from_bytes(x.to_bytes(32, "big") + y.to_bytes(32, "big"))

    @property
    def x(self) -> int:
        return self.key.pubkey.point.x()

    @property
    def y(self) -> int:
        return self.key.pubkey.point.y()

    def hex(self, compressed: bool = False) -> str:
        if compressed:
            return f"0x{self.to_compressed_bytes().hex()}"
        return f"0x{self.to_uncompressed_bytes().hex()}"

    def to_compressed_bytes(self) -> bytes:
        return self.key.to_string("compressed")

    def to_uncompressed_bytes(self) -> bytes:
        return self.key.to_string("raw")

    def address(self) -> str:
        return str(AccountAddress.from_key(self))

    def verify(self, digest: bytes, signature: SignatureData) -> bool:
        try:
            self.key.verify_digest(
                util.sigencode_string(signature.r, signature.s, CURVE_ORDER), digest
            )
        except Exception:
            return False
        return True


class SignatureData:
    """The ``(v, r, s)`` triple of a recoverable ECDSA signature."""

    v: int
    r: int
    s: int

    def __init__(self, v: int, r: int, s: int):
        self.v = v
        self.r = r
        self.s = s

    def __eq__(self, other: object):
        if not isinstance(other, SignatureData):
            return NotImplemented
        return (self.v, self.r, self.s) == (other.v, other.r, other.s)

    def __repr__(self) -> str:
        v, r, s = self.to_hex_list()
        return f"SignatureData(v={v}, r={r}, s={s})"

    @property
    def recovery_id(self) -> int:
        if self.v in (0, 1):
            return self.v
        if self.v in (LEGACY_V_OFFSET, LEGACY_V_OFFSET + 1):
            return self.v - LEGACY_V_OFFSET
        if self.v >= EIP155_V_OFFSET:
            return (self.v - EIP155_V_OFFSET) % 2
        raise InvalidSignature(f"unsupported v value {self.v}")

    def to_hex_list(self) -> List[str]:
        return [
            hex(self.v),
            f"0x{self.r.to_bytes(32, 'big').hex()}",
            f"0x{self.s.to_bytes(32, 'big').hex()}",
        ]

    @staticmethod
    def from_hex_list(values: List[str]) -> SignatureData:
        v, r, s = (int(utils.strip_hex_prefix(value) or "0", 16) for value in values)
        return SignatureData(v, r, s)


def _recover_candidates(digest: bytes, r: int, s: int) -> List[VerifyingKey]:
    # Candidates are ordered by the parity of R.y: even first, then odd.
    return VerifyingKey.from_public_key_recovery_with_digest(
        util.sigencode_string(r, s, CURVE_ORDER),
        digest,
        SECP256k1,
        hashfunc=hashlib.sha256,
        sigdecode=util.sigdecode_string,
    )


def recover_public_key(digest: bytes, signature: SignatureData) -> PublicKey:
    if len(digest) != 32:
        raise InvalidHash(f"expected 32 bytes, got {len(digest)}")
    recovery_id = signature.recovery_id
    candidates = _recover_candidates(digest, signature.r, signature.s)
    if recovery_id >= len(candidates):
        raise InvalidSignature("no public key for the recovery id")
    return PublicKey(candidates[recovery_id])


def recover_address(digest: bytes, signature: SignatureData) -> str:
    return recover_public_key(digest, signature).address()


class Test(unittest.TestCase):
    KNOWN_KEY = "0x45a915e4d060149eb4365960e6a7a45f334393093061116b197e3240065ff2d8"
    KNOWN_ADDRESS = "0xa94f5374fce5edbc8e2a8697c15331677e6ebf0b"
    HASH = bytes.fromhex(
        "e9a11d9ef95fb437f75d07ce768d43e74f158dd54b106e7d3746ce29d545b550"
    )

    def test_private_key_from_hex(self):
        with_prefix = PrivateKey.from_hex(self.KNOWN_KEY)
        without_prefix = PrivateKey.from_hex(self.KNOWN_KEY[2:])
        from_bytes = PrivateKey.from_hex(bytes.fromhex(self.KNOWN_KEY[2:]))
        self.assertEqual(with_prefix, without_prefix)
        self.assertEqual(with_prefix, from_bytes)
        self.assertEqual(with_prefix.hex(), self.KNOWN_KEY)

    def test_private_key_from_hex_invalid(self):
        invalid = [
            "0x" + "11" * 31,
            "0x" + "00" * 32,
            "0x" + "ff" * 32,
            "0x" + "zz" * 32,
            b"\x01" * 33,
        ]
        for value in invalid:
            with self.assertRaises(InvalidKeyFormat):
                PrivateKey.from_hex(value)

    def test_derived_address(self):
        key = PrivateKey.from_hex(self.KNOWN_KEY)
        self.assertEqual(key.derived_address(), self.KNOWN_ADDRESS)

    def test_random_address_shape(self):
        for entropy in [None, "entropy"]:
            address = PrivateKey.random(entropy).derived_address()
            self.assertTrue(utils.is_address(address))
            self.assertEqual(address, address.lower())
            self.assertEqual(len(address), 42)

    def test_sign_and_recover(self):
        key = PrivateKey.random()
        for chain_id in [0, 1, 1001, 8217]:
            signature = key.sign(self.HASH, chain_id)
            self.assertLessEqual(signature.s, CURVE_ORDER // 2)
            if chain_id:
                self.assertIn(signature.v, (chain_id * 2 + 35, chain_id * 2 + 36))
            else:
                self.assertIn(signature.v, (27, 28))
            self.assertEqual(recover_public_key(self.HASH, signature), key.public_key())
            self.assertTrue(key.public_key().verify(self.HASH, signature))

    def test_sign_is_deterministic(self):
        key = PrivateKey.from_hex(self.KNOWN_KEY)
        self.assertEqual(key.sign(self.HASH, 1), key.sign(self.HASH, 1))

    def test_sign_rejects_short_digest(self):
        with self.assertRaises(InvalidHash):
            PrivateKey.random().sign(b"\x01" * 31)
        signature = PrivateKey.random().sign(self.HASH)
        with self.assertRaises(InvalidHash):
            recover_public_key(self.HASH[:20], signature)

    def test_signature_invalid_v(self):
        signature = PrivateKey.random().sign(self.HASH)
        with self.assertRaises(InvalidSignature):
            recover_public_key(self.HASH, SignatureData(30, signature.r, signature.s))

    def test_public_key_encodings(self):
        public_key = PrivateKey.from_hex(self.KNOWN_KEY).public_key()
        compressed = public_key.to_compressed_bytes()
        uncompressed = public_key.to_uncompressed_bytes()
        self.assertEqual(len(compressed), 33)
        self.assertIn(compressed[0], (2, 3))
        self.assertEqual(len(uncompressed), 64)

        self.assertEqual(PublicKey.from_bytes(compressed), public_key)
        self.assertEqual(PublicKey.from_bytes(uncompressed), public_key)
        self.assertEqual(PublicKey.from_bytes(b"\x04" + uncompressed), public_key)
        self.assertEqual(PublicKey.from_str(public_key.hex()), public_key)
        self.assertEqual(PublicKey.from_xy_point(public_key.x, public_key.y), public_key)

    def test_public_key_invalid(self):
        with self.assertRaises(InvalidPublicKey):
            PublicKey.from_bytes(b"\x02" * 20)
        with self.assertRaises(InvalidPublicKey):
            # (1, 1) is not on the curve
            PublicKey.from_xy_point(1, 1)

    def test_signature_data_hex_list(self):
        signature = PrivateKey.random().sign(self.HASH, 1)
        self.assertEqual(SignatureData.from_hex_list(signature.to_hex_list()), signature)
