# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Keyring: an address bound to role-partitioned private keys.

A keyring always holds three key arrays, one per
:class:`~klaytn_sdk.account_key.RoleGroup`. It is created in one of three
shapes:

- **single**: one key in the Transaction role. When the address is the key's
  derived address the keyring is *coupled*; otherwise it is *decoupled*.
- **multiple**: up to 10 keys in the Transaction role, the other roles empty.
- **role-based**: up to 10 keys per role.

Looking up the keys of a role falls back to the Transaction role when the
requested role is empty, so a keyring without dedicated AccountUpdate or
FeePayer keys signs for those roles with its Transaction keys.

Examples:
    Sign a transaction hash and a message::

        from klaytn_sdk.keyring import Keyring
        from klaytn_sdk.account_key import RoleGroup

        keyring = Keyring.generate()
        signature = keyring.sign_with_key(tx_hash, 1001, RoleGroup.TRANSACTION)

        signed = keyring.sign_message("some data")
        assert Keyring.recover(signed) == keyring.address

    Project a role-based keyring onto an AccountKey::

        keyring = Keyring.create_with_role_based_key(
            address, [[key1, key2], [key3], [key4]]
        )
        account = keyring.to_account()
        print(account.get_rlp_encoding_account_key())

    Export and import a single key::

        wallet_key = keyring.get_klaytn_wallet_key()
        restored = Keyring.create_from_klaytn_wallet_key(wallet_key)
"""

from __future__ import annotations

import unittest
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from . import utils
from .account import Account
from .account_address import AccountAddress
from .account_key import (
    MAX_ACCOUNT_KEY_COUNT,
    MAX_ROLE_BASED_KEY_COUNT,
    AccountKeyNil,
    AccountKeyPublic,
    AccountKeyRoleBased,
    AccountKeyWeightedMultiSig,
    RoleGroup,
    WeightedMultiSigOptions,
)
from .errors import (
    EmptyKeySet,
    IndexOutOfBounds,
    InvalidHash,
    InvalidHex,
    InvalidKeyFormat,
    InvalidOptions,
    InvalidRoleIndex,
    InvalidSignature,
    InvalidWalletKeyFormat,
    KeyCountExceeded,
    NegativeIndex,
    NoDefaultKey,
    RoleCountExceeded,
    RoleDataMismatch,
    UnsupportedExport,
    WeightCountMismatch,
)
from .secp256k1_ecdsa import PrivateKey, SignatureData, recover_address

PrivateKeyLike = Union[str, PrivateKey]
HashLike = Union[str, bytes]


class KeyringType(Enum):
    SINGLE = "single"
    MULTIPLE = "multiple"
    ROLE_BASED = "roleBased"


class MessageSigned:
    """The result of :meth:`Keyring.sign_message`."""

    message_hash: str
    signature: SignatureData
    message: Union[str, bytes]

    def __init__(self, message_hash: str, signature: SignatureData, message: Union[str, bytes]):
        self.message_hash = message_hash
        self.signature = signature
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageSigned):
            return NotImplemented
        return (
            self.message_hash == other.message_hash
            and self.signature == other.signature
            and self.message == other.message
        )

    def __repr__(self) -> str:
        return f"MessageSigned({self.message_hash}, {self.signature!r}, {self.message!r})"


def _to_private_key(key: PrivateKeyLike) -> PrivateKey:
    if isinstance(key, PrivateKey):
        return key
    return PrivateKey.from_hex(key)


def _check_role(role: int) -> int:
    if isinstance(role, bool) or not 0 <= int(role) < MAX_ROLE_BASED_KEY_COUNT:
        raise InvalidRoleIndex(role)
    return int(role)


class Keyring:
    """An address and three role-indexed arrays of private keys.

    Keyrings are immutable after construction. Use the ``create*`` and
    ``generate`` factories rather than the constructor, which expects already
    validated role arrays.
    """

    address: str
    keys: Tuple[Tuple[PrivateKey, ...], ...]
    type: KeyringType

    def __init__(
        self, address: str, keys: Sequence[Sequence[PrivateKey]], type: KeyringType
    ):
        self.address = address
        self.keys = tuple(tuple(role) for role in keys)
        self.type = type

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Keyring):
            return NotImplemented
        return (
            self.address == other.address
            and self.type == other.type
            and self.keys == other.keys
        )

    def __repr__(self) -> str:
        counts = [len(role) for role in self.keys]
        return f"Keyring({self.address}, {self.type.value}, {counts})"

    # Factories

    @staticmethod
    def generate(entropy: Optional[str] = None) -> Keyring:
        """Generate a coupled single-key keyring."""
        key = PrivateKey.random(entropy)
        return Keyring.create_with_single_key(key.derived_address(), key)

    @staticmethod
    def generate_single_key(entropy: Optional[str] = None) -> str:
        return PrivateKey.random(entropy).hex()

    @staticmethod
    def generate_multiple_keys(count: int, entropy: Optional[str] = None) -> List[str]:
        return [PrivateKey.random(entropy).hex() for _ in range(count)]

    @staticmethod
    def generate_role_based_keys(
        counts: Sequence[int], entropy: Optional[str] = None
    ) -> List[List[str]]:
        if len(counts) > MAX_ROLE_BASED_KEY_COUNT:
            raise RoleCountExceeded(len(counts))
        return [Keyring.generate_multiple_keys(count, entropy) for count in counts]

    @staticmethod
    def create(
        address: str,
        key: Union[PrivateKeyLike, Sequence[PrivateKeyLike], Sequence[Sequence[PrivateKeyLike]]],
    ) -> Keyring:
        """Create a keyring whose shape follows ``key``.

        A single key gives a single-key keyring, a flat list a multiple-key
        keyring and a list of lists a role-based keyring.
        """
        if isinstance(key, (str, PrivateKey)):
            return Keyring.create_with_single_key(address, key)
        if len(key) > 0 and all(isinstance(role, (list, tuple)) for role in key):
            return Keyring.create_with_role_based_key(address, key)  # type: ignore[arg-type]
        return Keyring.create_with_multiple_key(address, key)  # type: ignore[arg-type]

    @staticmethod
    def create_from_private_key(key: PrivateKeyLike) -> Keyring:
        """Create a coupled keyring. A KlaytnWalletKey string is also accepted."""
        if isinstance(key, str) and utils.is_klaytn_wallet_key(key):
            return Keyring.create_from_klaytn_wallet_key(key)
        private_key = _to_private_key(key)
        return Keyring.create_with_single_key(private_key.derived_address(), private_key)

    @staticmethod
    def create_from_klaytn_wallet_key(wallet_key: str) -> Keyring:
        private_key, _, address = utils.parse_klaytn_wallet_key(wallet_key)
        return Keyring.create_with_single_key(address, private_key)

    @staticmethod
    def create_with_single_key(address: str, key: PrivateKeyLike) -> Keyring:
        if isinstance(key, str) and utils.is_klaytn_wallet_key(key):
            raise InvalidKeyFormat(
                "Invalid format of parameter. Use 'create_from_klaytn_wallet_key' "
                "to create a Keyring from a KlaytnWalletKey."
            )
        return Keyring(
            AccountAddress.normalize(address),
            [[_to_private_key(key)], [], []],
            KeyringType.SINGLE,
        )

    @staticmethod
    def create_with_multiple_key(address: str, keys: Sequence[PrivateKeyLike]) -> Keyring:
        if len(keys) > MAX_ACCOUNT_KEY_COUNT:
            raise KeyCountExceeded("MultipleKey has up to 10.", len(keys))
        return Keyring(
            AccountAddress.normalize(address),
            [[_to_private_key(key) for key in keys], [], []],
            KeyringType.MULTIPLE,
        )

    @staticmethod
    def create_with_role_based_key(
        address: str, role_keys: Sequence[Sequence[PrivateKeyLike]]
    ) -> Keyring:
        """Roles beyond the ones supplied are left empty."""
        if len(role_keys) > MAX_ROLE_BASED_KEY_COUNT:
            raise RoleCountExceeded(len(role_keys))
        for keys in role_keys:
            if len(keys) > MAX_ACCOUNT_KEY_COUNT:
                raise KeyCountExceeded(
                    "The keys in RoleBasedKey component has up to 10.", len(keys)
                )

        roles = [[_to_private_key(key) for key in keys] for keys in role_keys]
        while len(roles) < MAX_ROLE_BASED_KEY_COUNT:
            roles.append([])
        return Keyring(AccountAddress.normalize(address), roles, KeyringType.ROLE_BASED)

    @staticmethod
    def decrypt(keystore, password: str) -> Keyring:
        from . import keystore as keystore_module

        return keystore_module.decrypt(keystore, password)

    def copy(self) -> Keyring:
        return Keyring(self.address, self.keys, self.type)

    # Role lookup

    def get_key_by_role(self, role: int) -> List[PrivateKey]:
        role = _check_role(role)
        if len(self.keys[role]) > 0:
            return list(self.keys[role])
        if role != RoleGroup.TRANSACTION and len(self.keys[RoleGroup.TRANSACTION]) > 0:
            return list(self.keys[RoleGroup.TRANSACTION])
        raise NoDefaultKey()

    def _get_key(self, role: int, index: int) -> PrivateKey:
        if index < 0:
            raise NegativeIndex(index)
        keys = self.get_key_by_role(role)
        if index >= len(keys):
            raise IndexOutOfBounds(index, len(keys))
        return keys[index]

    # Signing

    def sign_with_key(
        self, tx_hash: HashLike, chain_id: int, role: int, index: int = 0
    ) -> SignatureData:
        return self._get_key(role, index).sign(utils.to_bytes(tx_hash), chain_id)

    def sign_with_keys(self, tx_hash: HashLike, chain_id: int, role: int) -> List[SignatureData]:
        digest = utils.to_bytes(tx_hash)
        return [key.sign(digest, chain_id) for key in self.get_key_by_role(role)]

    def sign_message(
        self,
        message: Union[str, bytes],
        role: Optional[int] = None,
        index: Optional[int] = None,
    ) -> MessageSigned:
        """Sign the prefixed Klaytn message hash of ``message``.

        Without ``role`` and ``index`` the first Transaction key signs; that
        role must not be empty.
        """
        if role is None and index is None:
            if len(self.keys[RoleGroup.TRANSACTION]) == 0:
                raise NoDefaultKey("Default Key does not have enough keys to sign.")
            key = self.keys[RoleGroup.TRANSACTION][0]
        else:
            key = self._get_key(
                role if role is not None else RoleGroup.TRANSACTION,
                index if index is not None else 0,
            )

        message_hash = utils.hash_message(message)
        return MessageSigned(
            f"0x{message_hash.hex()}", key.sign_message(message_hash), message
        )

    @staticmethod
    def recover(
        message: Union[MessageSigned, str, bytes],
        signature: Optional[SignatureData] = None,
        is_prefixed: bool = False,
    ) -> str:
        """Return the address that signed ``message``.

        With ``is_prefixed`` set, ``message`` is already the Klaytn message
        hash and is not hashed again.
        """
        if isinstance(message, MessageSigned):
            signature = message.signature
            message = message.message
        if signature is None:
            raise InvalidSignature("a signature is required to recover the signer")

        if is_prefixed:
            digest = utils.to_bytes(message)
        else:
            digest = utils.hash_message(message)
        return recover_address(digest, signature)

    # Exports

    def get_public_key(self, compressed: bool = False) -> List[List[str]]:
        return [
            [key.public_key().hex(compressed) for key in role] for role in self.keys
        ]

    def _holds_single_key(self) -> bool:
        return len(self.keys[RoleGroup.TRANSACTION]) == 1 and not any(
            self.keys[RoleGroup.ACCOUNT_UPDATE:]
        )

    def is_decoupled(self) -> bool:
        """A keyring is coupled only when it holds one key and its address derives from it."""
        if not self._holds_single_key():
            return True
        return self.address != self.keys[RoleGroup.TRANSACTION][0].derived_address()

    def is_role_based(self) -> bool:
        return self.type == KeyringType.ROLE_BASED

    def get_klaytn_wallet_key(self) -> str:
        if not self._holds_single_key():
            raise UnsupportedExport()
        key = self.keys[RoleGroup.TRANSACTION][0]
        return f"{key.hex()}0x{utils.KLAYTN_WALLET_KEY_TYPE}{self.address}"

    def encrypt(self, password: str, options=None):
        from . import keystore

        return keystore.encrypt(self, password, options)

    def encrypt_v3(self, password: str, options=None):
        from . import keystore

        return keystore.encrypt_v3(self, password, options)

    # Projection

    def to_account(
        self,
        options: Optional[
            Union[WeightedMultiSigOptions, Sequence[WeightedMultiSigOptions]]
        ] = None,
    ) -> Account:
        """Build the :class:`Account` that an account update would install.

        A single key gives a Public key and a multiple-key keyring a 1-of-n
        WeightedMultiSig. Role-based keyrings map each role independently:
        Nil for an empty role, Public for one key, WeightedMultiSig otherwise.
        Explicit ``options`` override the multisig parameters.
        """
        if options is None:
            return self._to_default_account()
        if isinstance(options, WeightedMultiSigOptions):
            return self._to_weighted_multisig_account(options)

        if self.type != KeyringType.ROLE_BASED:
            raise RoleDataMismatch(
                "Role-based options require a keyring with role-based keys."
            )
        public_keys = [[key.public_key() for key in role] for role in self.keys]
        return Account(
            self.address,
            AccountKeyRoleBased.from_role_based_public_keys_and_options(
                public_keys, list(options)
            ),
        )

    def _to_default_account(self) -> Account:
        if self.type == KeyringType.SINGLE:
            key = self.keys[RoleGroup.TRANSACTION][0]
            return Account(self.address, AccountKeyPublic(key.public_key()))
        if self.type == KeyringType.MULTIPLE:
            return self._to_weighted_multisig_account(
                WeightedMultiSigOptions.get_default_options_for_weighted_multisig(
                    len(self.keys[RoleGroup.TRANSACTION])
                )
                if len(self.keys[RoleGroup.TRANSACTION]) > 0
                else None
            )

        role_keys = []
        for role in self.keys:
            public_keys = [key.public_key() for key in role]
            if len(public_keys) == 0:
                role_keys.append(AccountKeyNil())
            elif len(public_keys) == 1:
                role_keys.append(AccountKeyPublic(public_keys[0]))
            else:
                role_keys.append(
                    AccountKeyWeightedMultiSig.from_public_keys_and_options(
                        public_keys,
                        WeightedMultiSigOptions.get_default_options_for_weighted_multisig(
                            len(public_keys)
                        ),
                    )
                )
        return Account(self.address, AccountKeyRoleBased(role_keys))

    def _to_weighted_multisig_account(
        self, options: Optional[WeightedMultiSigOptions]
    ) -> Account:
        if (
            len(self.keys[RoleGroup.ACCOUNT_UPDATE]) > 0
            or len(self.keys[RoleGroup.FEE_PAYER]) > 0
        ):
            raise RoleDataMismatch(
                "There are exists keys in other Group(RoleAccountUpdate, RoleFeePayer)"
            )
        if len(self.keys[RoleGroup.TRANSACTION]) == 0:
            raise EmptyKeySet()
        if options is None or options.is_empty():
            raise InvalidOptions("Invalid options for AccountKeyWeightedMultiSig.")

        public_keys = [key.public_key() for key in self.keys[RoleGroup.TRANSACTION]]
        return Account(
            self.address,
            AccountKeyWeightedMultiSig.from_public_keys_and_options(public_keys, options),
        )


class Test(unittest.TestCase):
    PRIVATE_KEY = "0x45a915e4d060149eb4365960e6a7a45f334393093061116b197e3240065ff2d8"
    ADDRESS = "0xa94f5374fce5edbc8e2a8697c15331677e6ebf0b"
    WALLET_KEY = PRIVATE_KEY + "0x00" + ADDRESS
    HASH = "0xe9a11d9ef95fb437f75d07ce768d43e74f158dd54b106e7d3746ce29d545b550"
    DATA = "some data"

    def multiple_keyring(self, count: int) -> Keyring:
        return Keyring.create_with_multiple_key(
            PrivateKey.random().derived_address(),
            Keyring.generate_multiple_keys(count, "entropy"),
        )

    def role_based_keyring(self, counts: List[int]) -> Keyring:
        return Keyring.create_with_role_based_key(
            PrivateKey.random().derived_address(),
            Keyring.generate_role_based_keys(counts, "entropy"),
        )

    def decoupled_keyring(self) -> Keyring:
        return Keyring.create(
            PrivateKey.random().derived_address(), Keyring.generate_single_key()
        )

    def test_generate(self):
        keyring = Keyring.generate()
        self.assertTrue(utils.is_address(keyring.address))
        self.assertEqual(keyring.address, keyring.keys[0][0].derived_address())
        self.assertEqual([len(role) for role in keyring.keys], [1, 0, 0])
        self.assertFalse(keyring.is_decoupled())

        with_entropy = Keyring.generate("entropy")
        self.assertTrue(utils.is_address(with_entropy.address))

    def test_create_from_private_key(self):
        keyring = Keyring.create_from_private_key(self.PRIVATE_KEY)
        self.assertEqual(keyring.address, self.ADDRESS)
        self.assertEqual(keyring.keys[0][0].hex(), self.PRIVATE_KEY)

        from_wallet_key = Keyring.create_from_private_key(self.WALLET_KEY)
        self.assertEqual(from_wallet_key, keyring)

        with self.assertRaises(InvalidKeyFormat):
            Keyring.create_from_private_key("0x" + "11" * 31)

    def test_create_from_klaytn_wallet_key(self):
        keyring = Keyring.create_from_klaytn_wallet_key(self.WALLET_KEY)
        self.assertEqual(keyring.address, self.ADDRESS)
        self.assertEqual(keyring.keys[0][0].hex(), self.PRIVATE_KEY)

        with self.assertRaises(InvalidWalletKeyFormat):
            Keyring.create_from_klaytn_wallet_key(
                "39d87f15c695ec94d6d7107b48dee85e252f21fedd371e1c6baefbdf0x000x658b7b7a94ac398a8e7275e719a10c"
            )

    def test_create_dispatches_on_shape(self):
        address = PrivateKey.random().derived_address()

        single = Keyring.create(address, Keyring.generate_single_key())
        self.assertEqual(single.type, KeyringType.SINGLE)

        multiple = Keyring.create(address, Keyring.generate_multiple_keys(3))
        self.assertEqual(multiple.type, KeyringType.MULTIPLE)
        self.assertEqual([len(role) for role in multiple.keys], [3, 0, 0])

        role_based = Keyring.create(address, Keyring.generate_role_based_keys([2, 3, 4]))
        self.assertEqual(role_based.type, KeyringType.ROLE_BASED)
        self.assertEqual([len(role) for role in role_based.keys], [2, 3, 4])

    def test_create_with_single_key_rejects_wallet_key(self):
        with self.assertRaises(InvalidKeyFormat):
            Keyring.create_with_single_key(self.ADDRESS, self.WALLET_KEY)

    def test_create_uppercase_address_is_normalized(self):
        keyring = Keyring.create_with_single_key(self.ADDRESS.upper(), self.PRIVATE_KEY)
        self.assertEqual(keyring.address, self.ADDRESS)
        self.assertFalse(keyring.is_decoupled())

    def test_create_limits(self):
        address = PrivateKey.random().derived_address()
        with self.assertRaises(KeyCountExceeded):
            Keyring.create_with_multiple_key(address, Keyring.generate_multiple_keys(11))
        with self.assertRaises(KeyCountExceeded):
            Keyring.create_with_role_based_key(
                address, [Keyring.generate_multiple_keys(11), [], []]
            )
        with self.assertRaises(RoleCountExceeded):
            Keyring.create_with_role_based_key(address, [[], [], [], []])

    def test_create_with_role_based_key_pads_roles(self):
        keyring = Keyring.create_with_role_based_key(
            self.ADDRESS, [Keyring.generate_multiple_keys(2)]
        )
        self.assertEqual([len(role) for role in keyring.keys], [2, 0, 0])

    def test_copy(self):
        keyring = self.role_based_keyring([2, 1, 3])
        copied = keyring.copy()
        self.assertEqual(keyring, copied)
        self.assertIsNot(keyring.keys, copied.keys)

    def test_keys_cannot_be_changed_through_lookups(self):
        keys = [PrivateKey.random()]
        keyring = Keyring.create_with_multiple_key(self.ADDRESS, keys)
        keys.append(PrivateKey.random())
        keyring.get_key_by_role(RoleGroup.ACCOUNT_UPDATE).append(PrivateKey.random())
        keyring.get_key_by_role(RoleGroup.TRANSACTION).clear()
        self.assertEqual([len(role) for role in keyring.keys], [1, 0, 0])
        with self.assertRaises(AttributeError):
            keyring.keys[0].append(PrivateKey.random())  # type: ignore[attr-defined]

    def test_get_key_by_role(self):
        keyring = self.role_based_keyring([2, 3, 4])
        for role, count in enumerate([2, 3, 4]):
            self.assertEqual(len(keyring.get_key_by_role(role)), count)

        fallback = self.role_based_keyring([2, 0, 0])
        self.assertEqual(
            fallback.get_key_by_role(RoleGroup.FEE_PAYER),
            fallback.get_key_by_role(RoleGroup.TRANSACTION),
        )

        no_default = self.role_based_keyring([0, 0, 3])
        with self.assertRaises(NoDefaultKey):
            no_default.get_key_by_role(RoleGroup.ACCOUNT_UPDATE)

        with self.assertRaises(InvalidRoleIndex):
            keyring.get_key_by_role(3)
        with self.assertRaises(InvalidRoleIndex):
            keyring.get_key_by_role(-1)

    def test_sign_with_key_falls_back_to_transaction_role(self):
        keyring = Keyring.generate()
        expected = keyring.sign_with_key(self.HASH, 1001, RoleGroup.TRANSACTION)
        actual = keyring.sign_with_key(self.HASH, 1001, RoleGroup.ACCOUNT_UPDATE)
        self.assertEqual(expected, actual)
        self.assertIn(expected.v, (1001 * 2 + 35, 1001 * 2 + 36))

    def test_sign_with_key_index_errors(self):
        keyring = self.multiple_keyring(3)
        with self.assertRaises(NegativeIndex):
            keyring.sign_with_key(self.HASH, 1, RoleGroup.TRANSACTION, -1)
        with self.assertRaises(IndexOutOfBounds):
            keyring.sign_with_key(self.HASH, 1, RoleGroup.TRANSACTION, 3)

        signature = keyring.sign_with_key(self.HASH, 1, RoleGroup.FEE_PAYER, 2)
        self.assertEqual(signature, keyring.sign_with_key(self.HASH, 1, 0, 2))

    def test_sign_with_keys(self):
        keyring = self.role_based_keyring([3, 0, 2])
        signatures = keyring.sign_with_keys(self.HASH, 1, RoleGroup.ACCOUNT_UPDATE)
        self.assertEqual(len(signatures), 3)
        for key, signature in zip(keyring.keys[0], signatures):
            self.assertEqual(signature, key.sign(utils.to_bytes(self.HASH), 1))

        fee_payer = keyring.sign_with_keys(bytes.fromhex(self.HASH[2:]), 1, RoleGroup.FEE_PAYER)
        self.assertEqual(len(fee_payer), 2)

    def test_sign_message(self):
        keyring = Keyring.generate()
        expected = keyring.sign_message(self.DATA, 0, 0)
        actual = keyring.sign_message(self.DATA)
        self.assertEqual(expected, actual)
        self.assertEqual(actual.message_hash, f"0x{utils.hash_message(self.DATA).hex()}")
        self.assertEqual(actual.message, self.DATA)
        self.assertIn(actual.signature.v, (27, 28))

        fee_payer = keyring.sign_message(self.DATA, RoleGroup.FEE_PAYER, 0)
        self.assertEqual(expected, fee_payer)

    def test_sign_message_index_errors(self):
        keyring = self.decoupled_keyring()
        with self.assertRaises(IndexOutOfBounds):
            keyring.sign_message(self.DATA, 0, 3)
        with self.assertRaises(NegativeIndex):
            keyring.sign_message(self.DATA, 0, -1)

    def test_sign_message_role_based(self):
        keyring = self.role_based_keyring([3, 0, 5])
        expected = keyring.sign_message(self.DATA, 0, 2)
        actual = keyring.sign_message(self.DATA, RoleGroup.ACCOUNT_UPDATE, 2)
        self.assertEqual(expected, actual)

        with self.assertRaises(NoDefaultKey) as context:
            self.role_based_keyring([0, 4, 5]).sign_message(self.DATA)
        self.assertEqual(
            context.exception.message, "Default Key does not have enough keys to sign."
        )

    def test_recover(self):
        keyring = Keyring.generate()
        signed = keyring.sign_message(self.DATA)
        self.assertEqual(Keyring.recover(signed), keyring.address)
        self.assertEqual(Keyring.recover(self.DATA, signed.signature), keyring.address)
        self.assertEqual(
            Keyring.recover(signed.message_hash, signed.signature, is_prefixed=True),
            keyring.address,
        )

    def test_recover_requires_signature(self):
        with self.assertRaises(InvalidSignature):
            Keyring.recover(self.DATA)

    def test_sign_rejects_bad_hashes(self):
        keyring = Keyring.generate()
        with self.assertRaises(InvalidHex):
            keyring.sign_with_key("0xzz", 1, RoleGroup.TRANSACTION)
        with self.assertRaises(InvalidHash):
            keyring.sign_with_keys("0x0102", 1, RoleGroup.TRANSACTION)

    def test_recover_decoupled_returns_key_address(self):
        keyring = self.decoupled_keyring()
        signed = keyring.sign_message(self.DATA)
        recovered = Keyring.recover(signed)
        self.assertNotEqual(recovered, keyring.address)
        self.assertEqual(recovered, keyring.keys[0][0].derived_address())

    def test_get_public_key(self):
        keyring = self.role_based_keyring([2, 3, 1])
        public_keys = keyring.get_public_key()
        self.assertEqual([len(role) for role in public_keys], [2, 3, 1])
        self.assertEqual(public_keys[1][2], keyring.keys[1][2].public_key().hex())
        self.assertEqual(len(public_keys[0][0]), 130)

        compressed = Keyring.generate().get_public_key(compressed=True)
        self.assertEqual([len(role) for role in compressed], [1, 0, 0])
        self.assertEqual(len(compressed[0][0]), 68)

    def test_is_decoupled(self):
        self.assertFalse(Keyring.generate().is_decoupled())
        self.assertTrue(self.decoupled_keyring().is_decoupled())
        self.assertTrue(self.multiple_keyring(3).is_decoupled())
        self.assertTrue(self.role_based_keyring([2, 3, 1]).is_decoupled())

        key = PrivateKey.random()
        one_key_multiple = Keyring.create_with_multiple_key(key.derived_address(), [key])
        self.assertFalse(one_key_multiple.is_decoupled())
        one_key_role_based = Keyring.create_with_role_based_key(key.derived_address(), [[key], [], []])
        self.assertFalse(one_key_role_based.is_decoupled())
        self.assertTrue(
            Keyring.create_with_role_based_key(key.derived_address(), [[key], [key], []]).is_decoupled()
        )

    def test_get_klaytn_wallet_key(self):
        keyring = Keyring.create_from_private_key(self.PRIVATE_KEY)
        wallet_key = keyring.get_klaytn_wallet_key()
        self.assertEqual(wallet_key, self.WALLET_KEY)
        self.assertEqual(
            utils.parse_klaytn_wallet_key(wallet_key),
            (self.PRIVATE_KEY, "0x00", self.ADDRESS),
        )

        decoupled = self.decoupled_keyring()
        self.assertEqual(
            Keyring.create_from_klaytn_wallet_key(decoupled.get_klaytn_wallet_key()),
            decoupled,
        )

        with self.assertRaises(UnsupportedExport):
            self.multiple_keyring(3).get_klaytn_wallet_key()
        with self.assertRaises(UnsupportedExport):
            self.role_based_keyring([1, 1, 1]).get_klaytn_wallet_key()

        key = PrivateKey.random()
        for keyring in [
            Keyring.create_with_multiple_key(key.derived_address(), [key]),
            Keyring.create_with_role_based_key(key.derived_address(), [[key], [], []]),
        ]:
            self.assertEqual(
                keyring.get_klaytn_wallet_key(),
                f"{key.hex()}0x00{key.derived_address()}",
            )

    def test_to_account_single(self):
        keyring = Keyring.generate()
        account = keyring.to_account()
        self.assertEqual(account.address, keyring.address)
        self.assertIsInstance(account.account_key, AccountKeyPublic)
        self.assertEqual(account.account_key.public_key, keyring.keys[0][0].public_key())

    def test_to_account_multiple(self):
        keyring = self.multiple_keyring(3)

        default = keyring.to_account().account_key
        self.assertIsInstance(default, AccountKeyWeightedMultiSig)
        self.assertEqual(default.threshold, 1)
        self.assertEqual([key.weight for key in default.weighted_public_keys], [1, 1, 1])

        options = WeightedMultiSigOptions(2, [1, 1, 2])
        account_key = keyring.to_account(options).account_key
        self.assertEqual(account_key.threshold, 2)
        self.assertEqual(
            [(key.public_key, key.weight) for key in account_key.weighted_public_keys],
            list(zip([key.public_key() for key in keyring.keys[0]], [1, 1, 2])),
        )

    def test_to_account_multiple_errors(self):
        options = WeightedMultiSigOptions(1, [1, 1, 2])
        with self.assertRaises(EmptyKeySet):
            self.multiple_keyring(0).to_account(options)
        with self.assertRaises(WeightCountMismatch):
            self.multiple_keyring(2).to_account(options)
        with self.assertRaises(RoleDataMismatch):
            self.role_based_keyring([3, 3, 4]).to_account(options)
        with self.assertRaises(RoleDataMismatch):
            self.multiple_keyring(3).to_account(
                [options, WeightedMultiSigOptions(), WeightedMultiSigOptions()]
            )

    def test_to_account_role_based_default(self):
        keyring = self.role_based_keyring([2, 1, 4])
        account_key = keyring.to_account().account_key
        self.assertIsInstance(account_key, AccountKeyRoleBased)

        transaction, account_update, fee_payer = account_key.account_keys
        self.assertIsInstance(transaction, AccountKeyWeightedMultiSig)
        self.assertEqual([key.weight for key in transaction.weighted_public_keys], [1, 1])
        self.assertIsInstance(account_update, AccountKeyPublic)
        self.assertEqual(account_update.public_key, keyring.keys[1][0].public_key())
        self.assertIsInstance(fee_payer, AccountKeyWeightedMultiSig)
        self.assertEqual(fee_payer.threshold, 1)

        empty_role = self.role_based_keyring([1, 0, 1]).to_account().account_key
        self.assertIsInstance(empty_role.account_keys[1], AccountKeyNil)

    def test_to_account_role_based_with_options(self):
        keyring = self.role_based_keyring([2, 3, 4])
        options = [
            WeightedMultiSigOptions(2, [1, 1]),
            WeightedMultiSigOptions(2, [1, 1, 2]),
            WeightedMultiSigOptions(3, [1, 1, 2, 2]),
        ]
        account_key = keyring.to_account(options).account_key
        self.assertEqual([key.threshold for key in account_key.account_keys], [2, 2, 3])
        self.assertEqual(
            [key.weight for key in account_key.account_keys[2].weighted_public_keys],
            [1, 1, 2, 2],
        )

        single_keys = self.role_based_keyring([1, 1, 1])
        account_key = single_keys.to_account(
            [WeightedMultiSigOptions() for _ in range(3)]
        ).account_key
        for role_key in account_key.account_keys:
            self.assertIsInstance(role_key, AccountKeyPublic)

    def test_to_account_role_based_combined(self):
        keyring = self.role_based_keyring([2, 0, 1])
        account_key = keyring.to_account(
            [
                WeightedMultiSigOptions(2, [1, 1]),
                WeightedMultiSigOptions(),
                WeightedMultiSigOptions(),
            ]
        ).account_key
        self.assertIsInstance(account_key.account_keys[0], AccountKeyWeightedMultiSig)
        self.assertIsInstance(account_key.account_keys[1], AccountKeyNil)
        self.assertIsInstance(account_key.account_keys[2], AccountKeyPublic)

        with self.assertRaises(InvalidOptions):
            keyring.to_account(
                [
                    WeightedMultiSigOptions(2, [1, 1]),
                    WeightedMultiSigOptions(1, [1]),
                    WeightedMultiSigOptions(),
                ]
            )
