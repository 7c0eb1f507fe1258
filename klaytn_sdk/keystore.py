# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Password-protected keystore files (versions 3 and 4).

Each private key is encrypted on its own. A symmetric key is derived from the
password with scrypt or pbkdf2. The first 16 bytes of the derived key encrypt
the 32-byte private key with AES-128-CTR. The MAC is
``keccak256(derived_key[16:32] || ciphertext)``.

Version 3 holds exactly one key under ``crypto``. Version 4 holds a
``keyring`` list: a flat list of entries for single and multiple-key keyrings,
or three lists of entries (one per role) for role-based keyrings.

Examples:
    Round trip a role-based keyring::

        from klaytn_sdk import keystore
        from klaytn_sdk.keyring import Keyring

        keyring = Keyring.create_with_role_based_key(address, role_keys)
        document = keystore.encrypt(keyring, "password").to_json()

        restored = keystore.decrypt(document, "password")
        assert restored == keyring

    Use pbkdf2 instead of scrypt::

        option = keystore.KeyStoreOption.get_default_option_with_kdf("pbkdf2")
        document = keystore.encrypt(private_key, "password", option)
"""

from __future__ import annotations

import hmac
import json
import logging
import unittest
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

from Crypto.Cipher import AES
from Crypto.Hash import SHA256
from Crypto.Protocol.KDF import PBKDF2, scrypt

from . import utils
from .account_address import AccountAddress
from .errors import (
    AddressMismatch,
    AddressRequired,
    CryptoError,
    FormatError,
    InvalidKeyStore,
    InvalidOptions,
    MacMismatch,
    UnsupportedV3Encryption,
)
from .keyring import Keyring, KeyringType
from .secp256k1_ecdsa import PrivateKey

CIPHER = "aes-128-ctr"
SCRYPT = "scrypt"
PBKDF2_NAME = "pbkdf2"
HMAC_SHA256 = "hmac-sha256"

IV_LENGTH = 16
SALT_LENGTH = 32


@dataclass
class KeyStoreOption:
    """Encryption parameters for :func:`encrypt` and :func:`encrypt_v3`.

    ``address`` is required when encrypting raw multiple or role-based keys,
    since it cannot be derived from the key material. ``salt`` and ``iv`` are
    drawn at random for every key unless fixed here.
    """

    kdf: str = SCRYPT
    address: Optional[str] = None
    dklen: int = 32
    n: int = 4096
    r: int = 8
    p: int = 1
    c: int = 262144
    prf: str = HMAC_SHA256
    salt: Optional[bytes] = None
    iv: Optional[bytes] = None

    def __post_init__(self):
        if self.kdf not in (SCRYPT, PBKDF2_NAME):
            raise InvalidOptions(f"Unsupported kdf: {self.kdf}")
        if self.prf != HMAC_SHA256:
            raise InvalidOptions(f"Unsupported prf: {self.prf}")
        if self.iv is not None and len(self.iv) != IV_LENGTH:
            raise InvalidOptions("The iv must be 16 bytes.")
        if self.kdf == SCRYPT and (self.n < 2 or self.n & (self.n - 1)):
            raise InvalidOptions("The scrypt cost n must be a power of two greater than 1.")

    @staticmethod
    def get_default_option_with_kdf(kdf: str, address: Optional[str] = None) -> KeyStoreOption:
        return KeyStoreOption(kdf=kdf, address=address)


class ScryptKdfParams:
    NAME: str = SCRYPT

    dklen: int
    salt: str
    n: int
    r: int
    p: int

    def __init__(self, dklen: int, salt: str, n: int, r: int, p: int):
        self.dklen = dklen
        self.salt = salt
        self.n = n
        self.r = r
        self.p = p

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScryptKdfParams):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def derive(self, password: bytes) -> bytes:
        try:
            return scrypt(password, utils.to_bytes(self.salt), self.dklen, self.n, self.r, self.p)
        except (TypeError, ValueError) as e:
            raise InvalidKeyStore(f"invalid scrypt parameters: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {"dklen": self.dklen, "salt": self.salt, "n": self.n, "r": self.r, "p": self.p}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> ScryptKdfParams:
        return ScryptKdfParams(data["dklen"], data["salt"], data["n"], data["r"], data["p"])


class Pbkdf2KdfParams:
    NAME: str = PBKDF2_NAME

    dklen: int
    salt: str
    c: int
    prf: str

    def __init__(self, dklen: int, salt: str, c: int, prf: str = HMAC_SHA256):
        if prf != HMAC_SHA256:
            raise InvalidKeyStore(f"unsupported prf {prf}")
        self.dklen = dklen
        self.salt = salt
        self.c = c
        self.prf = prf

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pbkdf2KdfParams):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def derive(self, password: bytes) -> bytes:
        try:
            return PBKDF2(
                password,
                utils.to_bytes(self.salt),
                dkLen=self.dklen,
                count=self.c,
                hmac_hash_module=SHA256,
            )
        except (TypeError, ValueError) as e:
            raise InvalidKeyStore(f"invalid pbkdf2 parameters: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {"dklen": self.dklen, "salt": self.salt, "c": self.c, "prf": self.prf}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Pbkdf2KdfParams:
        return Pbkdf2KdfParams(data["dklen"], data["salt"], data["c"], data["prf"])


KdfParams = Union[ScryptKdfParams, Pbkdf2KdfParams]


def _mac(derived_key: bytes, ciphertext: bytes) -> bytes:
    return utils.keccak256(derived_key[16:32] + ciphertext)


def _aes_128_ctr(key: bytes, iv: bytes, data: bytes) -> bytes:
    # CTR is symmetric; the whole 16-byte IV is the initial counter block.
    cipher = AES.new(key, AES.MODE_CTR, initial_value=iv, nonce=b"")
    return cipher.encrypt(data)


def _password_bytes(password: Union[str, bytes]) -> bytes:
    if isinstance(password, str):
        return password.encode("utf-8")
    return password


class Crypto:
    """One encrypted private key."""

    cipher: str
    ciphertext: str
    iv: str
    kdf: str
    kdfparams: KdfParams
    mac: str

    def __init__(
        self,
        cipher: str,
        ciphertext: str,
        iv: str,
        kdf: str,
        kdfparams: KdfParams,
        mac: str,
    ):
        self.cipher = cipher
        self.ciphertext = ciphertext
        self.iv = iv
        self.kdf = kdf
        self.kdfparams = kdfparams
        self.mac = mac

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Crypto):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def create(
        private_key: PrivateKey, password: Union[str, bytes], option: KeyStoreOption
    ) -> Crypto:
        salt = option.salt if option.salt is not None else utils.generate_random_bytes(SALT_LENGTH)
        iv = option.iv if option.iv is not None else utils.generate_random_bytes(IV_LENGTH)

        kdfparams: KdfParams
        if option.kdf == SCRYPT:
            kdfparams = ScryptKdfParams(option.dklen, salt.hex(), option.n, option.r, option.p)
        else:
            kdfparams = Pbkdf2KdfParams(option.dklen, salt.hex(), option.c, option.prf)

        derived_key = kdfparams.derive(_password_bytes(password))
        ciphertext = _aes_128_ctr(derived_key[:16], iv, private_key.to_bytes())
        return Crypto(
            CIPHER,
            ciphertext.hex(),
            iv.hex(),
            kdfparams.NAME,
            kdfparams,
            _mac(derived_key, ciphertext).hex(),
        )

    def decrypt(self, password: Union[str, bytes]) -> PrivateKey:
        derived_key = self.kdfparams.derive(_password_bytes(password))
        ciphertext = utils.to_bytes(self.ciphertext)
        expected = utils.to_bytes(self.mac)
        if not hmac.compare_digest(_mac(derived_key, ciphertext), expected):
            raise MacMismatch()
        return PrivateKey.from_hex(
            _aes_128_ctr(derived_key[:16], utils.to_bytes(self.iv), ciphertext)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ciphertext": self.ciphertext,
            "cipherparams": {"iv": self.iv},
            "cipher": self.cipher,
            "kdf": self.kdf,
            "kdfparams": self.kdfparams.to_dict(),
            "mac": self.mac,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Crypto:
        if not isinstance(data, dict):
            raise InvalidKeyStore("an encrypted key entry must be an object")
        try:
            cipher = data["cipher"]
            if cipher != CIPHER:
                raise InvalidKeyStore(f"unsupported cipher {cipher}")

            kdf = data["kdf"]
            kdfparams: KdfParams
            if kdf == SCRYPT:
                kdfparams = ScryptKdfParams.from_dict(data["kdfparams"])
            elif kdf == PBKDF2_NAME:
                kdfparams = Pbkdf2KdfParams.from_dict(data["kdfparams"])
            else:
                raise InvalidKeyStore(f"unsupported kdf {kdf}")

            return Crypto(
                cipher,
                data["ciphertext"],
                data["cipherparams"]["iv"],
                kdf,
                kdfparams,
                data["mac"],
            )
        except KeyError as e:
            raise InvalidKeyStore(f"missing field {e}") from e


class KeyStore:
    """A keystore document. Version 3 sets ``crypto``; version 4 sets ``keyring``."""

    VERSION_3: int = 3
    VERSION_4: int = 4

    version: int
    id: str
    address: str
    crypto: Optional[Crypto]
    keyring: Optional[List[Any]]

    def __init__(
        self,
        version: int,
        id: str,
        address: str,
        crypto: Optional[Crypto] = None,
        keyring: Optional[List[Any]] = None,
    ):
        self.version = version
        self.id = id
        self.address = address
        self.crypto = crypto
        self.keyring = keyring

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyStore):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def is_role_based(self) -> bool:
        return self.keyring is not None and any(
            isinstance(slot, list) for slot in self.keyring
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "version": self.version,
            "id": self.id,
            "address": self.address,
        }
        if self.crypto is not None:
            data["crypto"] = self.crypto.to_dict()
        if self.keyring is not None:
            data["keyring"] = [
                [entry.to_dict() for entry in slot]
                if isinstance(slot, list)
                else slot.to_dict()
                for slot in self.keyring
            ]
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> KeyStore:
        if not isinstance(data, dict):
            raise InvalidKeyStore("the keystore must be a JSON object")
        try:
            version = data["version"]
            id = data.get("id", "")
            address = data["address"]
        except KeyError as e:
            raise InvalidKeyStore(f"missing field {e}") from e

        if not isinstance(address, str):
            raise InvalidKeyStore("the address must be a string")
        if not address.startswith("0x"):
            logging.warning("Keystore address has no 0x prefix, normalizing it")
        if not utils.is_address(address):
            raise InvalidKeyStore(f"invalid address {address}")
        address = AccountAddress.normalize(address)

        if version == KeyStore.VERSION_3:
            if "crypto" in data:
                crypto = data["crypto"]
            elif "Crypto" in data:
                logging.warning("Keystore uses the legacy 'Crypto' member")
                crypto = data["Crypto"]
            else:
                raise InvalidKeyStore("missing field 'crypto'")
            return KeyStore(version, id, address, crypto=Crypto.from_dict(crypto))

        if version == KeyStore.VERSION_4:
            if not isinstance(data.get("keyring"), list):
                raise InvalidKeyStore("missing field 'keyring'")
            slots = data["keyring"]
            if any(isinstance(slot, list) for slot in slots):
                keyring: List[Any] = [
                    [Crypto.from_dict(entry) for entry in slot]
                    if isinstance(slot, list)
                    else [Crypto.from_dict(slot)]
                    for slot in slots
                ]
            else:
                keyring = [Crypto.from_dict(entry) for entry in slots]
            return KeyStore(version, id, address, keyring=keyring)

        raise InvalidKeyStore(f"unsupported version {version}")

    @staticmethod
    def from_json(value: str) -> KeyStore:
        try:
            data = json.loads(value)
        except json.JSONDecodeError as e:
            raise InvalidKeyStore(f"not valid JSON: {e}") from e
        return KeyStore.from_dict(data)


KeyMaterial = Union[Keyring, PrivateKey, str, Sequence[Any]]


def _is_role_based_keys(key: Sequence[Any]) -> bool:
    return len(key) > 0 and all(isinstance(role, (list, tuple)) for role in key)


def _resolve_keyring(key: KeyMaterial, option: KeyStoreOption) -> Keyring:
    if isinstance(key, Keyring):
        return key

    if isinstance(key, str) and utils.is_klaytn_wallet_key(key):
        keyring = Keyring.create_from_klaytn_wallet_key(key)
        if option.address is not None and AccountAddress.normalize(option.address) != keyring.address:
            raise AddressMismatch(option.address, keyring.address)
        return keyring

    if isinstance(key, (str, PrivateKey)):
        if option.address is not None:
            return Keyring.create_with_single_key(option.address, key)
        return Keyring.create_from_private_key(key)

    if _is_role_based_keys(key):
        if option.address is None:
            raise AddressRequired("roleBased")
        return Keyring.create_with_role_based_key(option.address, key)

    if option.address is None:
        raise AddressRequired("multiple")
    return Keyring.create_with_multiple_key(option.address, key)


def encrypt(
    key: KeyMaterial,
    password: Union[str, bytes],
    option: Optional[KeyStoreOption] = None,
) -> KeyStore:
    """Encrypt a keyring, private key, KlaytnWalletKey or key list into a v4 keystore."""
    if option is None:
        option = KeyStoreOption()
    keyring = _resolve_keyring(key, option)

    logging.debug(f"Encrypting {keyring.type.value} keyring with {option.kdf}")
    slots: List[Any]
    if keyring.type == KeyringType.ROLE_BASED:
        slots = [
            [Crypto.create(private_key, password, option) for private_key in role]
            for role in keyring.keys
        ]
    else:
        slots = [
            Crypto.create(private_key, password, option) for private_key in keyring.keys[0]
        ]
    return KeyStore(KeyStore.VERSION_4, str(uuid.uuid4()), keyring.address, keyring=slots)


def encrypt_v3(
    key: KeyMaterial,
    password: Union[str, bytes],
    option: Optional[KeyStoreOption] = None,
) -> KeyStore:
    """Encrypt a single key into a v3 keystore."""
    if option is None:
        option = KeyStoreOption()
    if not isinstance(key, (Keyring, PrivateKey, str)):
        if _is_role_based_keys(key) or len(key) != 1:
            raise UnsupportedV3Encryption()
    keyring = _resolve_keyring(key, option)

    if (
        keyring.type == KeyringType.ROLE_BASED
        or len(keyring.keys[0]) != 1
        or any(len(role) > 0 for role in keyring.keys[1:])
    ):
        raise UnsupportedV3Encryption()

    logging.debug(f"Encrypting single key into keystore v3 with {option.kdf}")
    crypto = Crypto.create(keyring.keys[0][0], password, option)
    return KeyStore(KeyStore.VERSION_3, str(uuid.uuid4()), keyring.address, crypto=crypto)


def decrypt(keystore: Union[KeyStore, Dict[str, Any], str], password: Union[str, bytes]) -> Keyring:
    """Decrypt a keystore into a keyring.

    ``keystore`` may be a :class:`KeyStore`, its dict form or a JSON string.

    Raises:
        MacMismatch: If the password is wrong.
        InvalidKeyStore: If the document is malformed or unsupported.
    """
    if isinstance(keystore, str):
        keystore = KeyStore.from_json(keystore)
    elif isinstance(keystore, dict):
        keystore = KeyStore.from_dict(keystore)

    logging.debug(f"Decrypting keystore v{keystore.version} for {keystore.address}")
    if keystore.version == KeyStore.VERSION_3:
        if keystore.crypto is None:
            raise InvalidKeyStore("missing field 'crypto'")
        return Keyring.create_with_single_key(
            keystore.address, keystore.crypto.decrypt(password)
        )

    if keystore.version != KeyStore.VERSION_4 or keystore.keyring is None:
        raise InvalidKeyStore(f"unsupported version {keystore.version}")

    if keystore.is_role_based():
        role_keys = [
            [entry.decrypt(password) for entry in slot]
            if isinstance(slot, list)
            else [slot.decrypt(password)]
            for slot in keystore.keyring
        ]
        return Keyring.create_with_role_based_key(keystore.address, role_keys)

    keys = [entry.decrypt(password) for entry in keystore.keyring]
    if len(keys) == 1:
        return Keyring.create_with_single_key(keystore.address, keys[0])
    return Keyring.create_with_multiple_key(keystore.address, keys)


class Test(unittest.TestCase):
    PASSWORD = "password"
    ADDRESS = "0x86bce8c859f5f304aa30adb89f2f7b6ee5a0d6e2"

    JSON_V3 = {
        "version": 3,
        "id": "7a0a8557-22a5-4c90-b554-d6f3b13783ea",
        "address": "0x86bce8c859f5f304aa30adb89f2f7b6ee5a0d6e2",
        "crypto": {
            "ciphertext": "696d0e8e8bd21ff1f82f7c87b6964f0f17f8bfbd52141069b59f084555f277b7",
            "cipherparams": {"iv": "1fd13e0524fa1095c5f80627f1d24cbd"},
            "cipher": "aes-128-ctr",
            "kdf": "scrypt",
            "kdfparams": {
                "dklen": 32,
                "salt": "7ee980925cef6a60553cda3e91cb8e3c62733f64579f633d0f86ce050c151e26",
                "n": 4096,
                "r": 8,
                "p": 1,
            },
            "mac": "8684d8dc4bf17318cd46c85dbd9a9ec5d9b290e04d78d4f6b5be9c413ff30ea4",
        },
    }

    @staticmethod
    def scrypt_entry(ciphertext: str, iv: str, salt: str, mac: str) -> Dict[str, Any]:
        return {
            "ciphertext": ciphertext,
            "cipherparams": {"iv": iv},
            "cipher": "aes-128-ctr",
            "kdf": "scrypt",
            "kdfparams": {"dklen": 32, "salt": salt, "n": 4096, "r": 8, "p": 1},
            "mac": mac,
        }

    def json_v4(self) -> Dict[str, Any]:
        return {
            "version": 4,
            "id": "55da3f9c-6444-4fc1-abfa-f2eabfc57501",
            "address": "0x86bce8c859f5f304aa30adb89f2f7b6ee5a0d6e2",
            "keyring": [
                [
                    self.scrypt_entry(
                        "93dd2c777abd9b80a0be8e1eb9739cbf27c127621a5d3f81e7779e47d3bb22f6",
                        "84f90907f3f54f53d19cbd6ae1496b86",
                        "69bf176a136c67a39d131912fb1e0ada4be0ed9f882448e1557b5c4233006e10",
                        "8f6d1d234f4a87162cf3de0c7fb1d4a8421cd8f5a97b86b1a8e576ffc1eb52d2",
                    ),
                    self.scrypt_entry(
                        "53d50b4e86b550b26919d9b8cea762cd3c637dfe4f2a0f18995d3401ead839a6",
                        "d7a6f63558996a9f99e7daabd289aa2c",
                        "966116898d90c3e53ea09e4850a71e16df9533c1f9e1b2e1a9edec781e1ad44f",
                        "bca7125e17565c672a110ace9a25755847d42b81aa7df4bb8f5ce01ef7213295",
                    ),
                ],
                [
                    self.scrypt_entry(
                        "f16def98a70bb2dae053f791882f3254c66d63416633b8d91c2848893e7876ce",
                        "f5006128a4c53bc02cada64d095c15cf",
                        "0d8a2f71f79c4880e43ff0795f6841a24cb18838b3ca8ecaeb0cda72da9a72ce",
                        "38b79276c3805b9d2ff5fbabf1b9d4ead295151b95401c1e54aed782502fc90a",
                    ),
                ],
                [
                    self.scrypt_entry(
                        "544dbcc327942a6a52ad6a7d537e4459506afc700a6da4e8edebd62fb3dd55ee",
                        "05dd5d25ad6426e026818b6fa9b25818",
                        "3a9003c1527f65c772c54c6056a38b0048c2e2d58dc0e584a1d867f2039a25aa",
                        "19a698b51409cc9ac22d63d329b1201af3c89a04a1faea3111eec4ca97f2e00f",
                    ),
                    self.scrypt_entry(
                        "dd6b920f02cbcf5998ed205f8867ddbd9b6b088add8dfe1774a9fda29ff3920b",
                        "ac04c0f4559dad80dc86c975d1ef7067",
                        "22279c6dbcc706d7daa120022a236cfe149496dca8232b0f8159d1df999569d6",
                        "1c54f7378fa279a49a2f790a0adb683defad8535a21bdf2f3dadc48a7bddf517",
                    ),
                ],
            ],
        }

    def fast_option(self, kdf: str = SCRYPT, address: Optional[str] = None) -> KeyStoreOption:
        return KeyStoreOption(kdf=kdf, address=address, n=16, c=32)

    def test_decrypt_v3_vector(self):
        keyring = decrypt(json.dumps(self.JSON_V3), self.PASSWORD)
        self.assertEqual(keyring.address, self.ADDRESS)
        self.assertEqual(keyring.type, KeyringType.SINGLE)
        self.assertEqual(
            keyring.keys[0][0].hex(),
            "0x36e0a792553f94a7660e5484cfc8367e7d56a383261175b9abced7416a5d87df",
        )

    def test_decrypt_v4_vector(self):
        keyring = decrypt(self.json_v4(), self.PASSWORD)
        expected = Keyring.create_with_role_based_key(
            self.ADDRESS,
            [
                [
                    "0xd1e9f8f00ef9f93365f5eabccccb3f3c5783001b61a40f0f74270e50158c163d",
                    "0x4bd8d0b0c1575a7a35915f9af3ef8beb11ad571337ec9b6aca7c88ca7458ef5c",
                ],
                ["0xdc2690ac6017e32ef17ea219c2a2fd14a2bb73e7a0a253dfd69abba3eb8d7d91"],
                [
                    "0xf17bf8b7bee09ffc50a401b7ba8e633b9e55eedcf776782f2a55cf7cc5c40aa8",
                    "0x4f8f1e9e1466609b836dba611a0a24628aea8ee11265f757aa346bde3d88d548",
                ],
            ],
        )
        self.assertEqual(keyring, expected)

    def test_decrypt_wrong_password(self):
        with self.assertRaises(MacMismatch):
            decrypt(self.JSON_V3, "wrong password")
        with self.assertRaises(CryptoError):
            decrypt(self.json_v4(), "wrong password")

        for kdf in [SCRYPT, PBKDF2_NAME]:
            store = encrypt(
                Keyring.generate_role_based_keys([2, 0, 1]),
                self.PASSWORD,
                self.fast_option(kdf, self.ADDRESS),
            )
            with self.assertRaises(CryptoError):
                decrypt(store.to_json(), "wrong password")
            with self.assertRaises(CryptoError):
                decrypt(encrypt_v3(Keyring.generate(), self.PASSWORD, self.fast_option(kdf)), "")

    def test_decrypt_legacy_crypto_member(self):
        data = dict(self.JSON_V3)
        data["Crypto"] = data.pop("crypto")
        data["address"] = data["address"][2:].upper()
        keyring = decrypt(data, self.PASSWORD)
        self.assertEqual(keyring.address, self.ADDRESS)

    def test_decrypt_invalid_documents(self):
        unsupported_version = dict(self.JSON_V3, version=2)
        bad_cipher = json.loads(json.dumps(self.JSON_V3))
        bad_cipher["crypto"]["cipher"] = "aes-256-gcm"
        bad_kdf = json.loads(json.dumps(self.JSON_V3))
        bad_kdf["crypto"]["kdf"] = "argon2"
        missing_mac = json.loads(json.dumps(self.JSON_V3))
        del missing_mac["crypto"]["mac"]
        missing_crypto = {k: v for k, v in self.JSON_V3.items() if k != "crypto"}

        numeric_address = dict(self.JSON_V3, address=86)
        bad_scrypt_cost = json.loads(json.dumps(self.JSON_V3))
        bad_scrypt_cost["crypto"]["kdfparams"]["n"] = 1000
        bad_salt = json.loads(json.dumps(self.JSON_V3))
        bad_salt["crypto"]["kdfparams"]["salt"] = "not hex"

        for document in [
            unsupported_version,
            bad_cipher,
            bad_kdf,
            missing_mac,
            missing_crypto,
            numeric_address,
            bad_scrypt_cost,
        ]:
            with self.assertRaises(InvalidKeyStore):
                decrypt(document, self.PASSWORD)
        with self.assertRaises(InvalidKeyStore):
            decrypt("{not json", self.PASSWORD)
        with self.assertRaises(FormatError):
            decrypt(bad_salt, self.PASSWORD)

    def test_single_key_round_trip(self):
        for kdf in [SCRYPT, PBKDF2_NAME]:
            keyring = Keyring.generate()
            store = encrypt(keyring, self.PASSWORD, self.fast_option(kdf))
            self.assertEqual(store.version, 4)
            self.assertEqual(len(store.keyring), 1)
            self.assertEqual(store.keyring[0].kdf, kdf)
            self.assertEqual(decrypt(store.to_json(), self.PASSWORD), keyring)

    def test_multiple_keys_round_trip(self):
        keys = Keyring.generate_multiple_keys(3)
        store = encrypt(keys, self.PASSWORD, self.fast_option(address=self.ADDRESS))
        self.assertFalse(store.is_role_based())
        keyring = decrypt(store, self.PASSWORD)
        self.assertEqual(keyring, Keyring.create_with_multiple_key(self.ADDRESS, keys))

    def test_role_based_round_trip_with_empty_role(self):
        expected = Keyring.create_with_role_based_key(
            self.ADDRESS, Keyring.generate_role_based_keys([3, 0, 2])
        )
        store = encrypt(expected, self.PASSWORD, self.fast_option(PBKDF2_NAME))
        data = store.to_dict()
        self.assertEqual([len(slot) for slot in data["keyring"]], [3, 0, 2])
        self.assertEqual(decrypt(data, self.PASSWORD), expected)

    def test_role_based_single_object_slot(self):
        keys = Keyring.generate_role_based_keys([1, 1, 1])
        data = encrypt(keys, self.PASSWORD, self.fast_option(address=self.ADDRESS)).to_dict()
        data["keyring"][1] = data["keyring"][1][0]
        keyring = decrypt(data, self.PASSWORD)
        self.assertEqual([len(role) for role in keyring.keys], [1, 1, 1])
        self.assertEqual(keyring.keys[1][0].hex(), keys[1][0])

    def test_wallet_key(self):
        keyring = Keyring.generate()
        wallet_key = keyring.get_klaytn_wallet_key()
        option = self.fast_option(address=keyring.address)
        self.assertEqual(decrypt(encrypt(wallet_key, self.PASSWORD, option), self.PASSWORD), keyring)
        self.assertEqual(decrypt(encrypt_v3(wallet_key, self.PASSWORD, option), self.PASSWORD), keyring)

        with self.assertRaises(AddressMismatch):
            encrypt(wallet_key, self.PASSWORD, self.fast_option(address=self.ADDRESS))

    def test_address_required(self):
        with self.assertRaises(AddressRequired) as context:
            encrypt(Keyring.generate_multiple_keys(2), self.PASSWORD, self.fast_option())
        self.assertEqual(context.exception.kind, "multiple")
        with self.assertRaises(AddressRequired) as context:
            encrypt(Keyring.generate_role_based_keys([1, 2]), self.PASSWORD, self.fast_option())
        self.assertEqual(context.exception.kind, "roleBased")

    def test_encrypt_v3(self):
        private_key = Keyring.generate_single_key()
        store = encrypt_v3(private_key, self.PASSWORD, self.fast_option(address=self.ADDRESS))
        data = store.to_dict()
        self.assertEqual(data["version"], 3)
        self.assertNotIn("keyring", data)
        keyring = decrypt(data, self.PASSWORD)
        self.assertEqual(keyring.address, self.ADDRESS)
        self.assertEqual(keyring.keys[0][0].hex(), private_key)
        self.assertTrue(keyring.is_decoupled())

    def test_encrypt_v3_rejects_multiple_and_role_based(self):
        option = self.fast_option(address=self.ADDRESS)
        for keyring in [
            Keyring.create_with_multiple_key(self.ADDRESS, Keyring.generate_multiple_keys(2)),
            Keyring.create_with_role_based_key(self.ADDRESS, Keyring.generate_role_based_keys([1, 1, 1])),
        ]:
            with self.assertRaises(UnsupportedV3Encryption):
                encrypt_v3(keyring, self.PASSWORD, option)
            with self.assertRaises(UnsupportedV3Encryption):
                keyring.encrypt_v3(self.PASSWORD, option)

    def test_encrypt_v3_rejects_raw_key_lists_without_address(self):
        for keys in [
            Keyring.generate_multiple_keys(2),
            Keyring.generate_role_based_keys([1, 2]),
            Keyring.generate_role_based_keys([1]),
            [],
        ]:
            with self.assertRaises(UnsupportedV3Encryption):
                encrypt_v3(keys, self.PASSWORD, self.fast_option())

        with self.assertRaises(AddressRequired):
            encrypt_v3(Keyring.generate_multiple_keys(1), self.PASSWORD, self.fast_option())
        store = encrypt_v3(
            Keyring.generate_multiple_keys(1), self.PASSWORD, self.fast_option(address=self.ADDRESS)
        )
        self.assertEqual(store.version, 3)

    def test_keyring_instance_methods(self):
        keyring = Keyring.generate()
        store = keyring.encrypt(self.PASSWORD, self.fast_option(PBKDF2_NAME))
        self.assertEqual(Keyring.decrypt(store, self.PASSWORD), keyring)

    def test_fixed_salt_and_iv_are_deterministic(self):
        private_key = PrivateKey.random()
        option = KeyStoreOption(n=16, salt=b"\x01" * 32, iv=b"\x02" * 16)
        first = Crypto.create(private_key, self.PASSWORD, option)
        second = Crypto.create(private_key, self.PASSWORD, option)
        self.assertEqual(first, second)
        self.assertEqual(first.iv, "02" * 16)
        self.assertEqual(len(first.mac), 64)

    def test_option_validation(self):
        self.assertEqual(KeyStoreOption.get_default_option_with_kdf(PBKDF2_NAME).c, 262144)
        self.assertEqual(KeyStoreOption.get_default_option_with_kdf(SCRYPT).n, 4096)
        with self.assertRaises(InvalidOptions):
            KeyStoreOption(kdf="argon2")
        with self.assertRaises(InvalidOptions):
            KeyStoreOption(iv=b"\x00" * 8)
        with self.assertRaises(InvalidOptions):
            KeyStoreOption(n=1000)
