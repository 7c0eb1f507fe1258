# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import json
import tempfile
import unittest
from typing import List, Optional, Sequence, Union

from .account_address import AccountAddress
from .account_key import (
    AccountKey,
    AccountKeyDecoder,
    AccountKeyNil,
    AccountKeyPublic,
    AccountKeyRoleBased,
    AccountKeyWeightedMultiSig,
    WeightedMultiSigOptions,
)
from .secp256k1_ecdsa import PublicKey

PublicKeyLike = Union[str, bytes, PublicKey]


class Account:
    """An address paired with the AccountKey that authorizes it.

    This is what an account-update transaction carries: the account's address
    and the new authorization policy, ready for RLP encoding. An Account holds
    public keys only; private key material lives in a
    :class:`~klaytn_sdk.keyring.Keyring`.

    Examples:
        From a keyring::

            keyring = Keyring.generate()
            account = keyring.to_account()
            print(account.get_rlp_encoding_account_key())

        Directly from public keys::

            account = Account.create(
                address,
                [pub1, pub2],
                WeightedMultiSigOptions(2, [1, 1]),
            )
    """

    address: str
    account_key: AccountKey

    def __init__(self, address: str, account_key: AccountKey):
        self.address = AccountAddress.normalize(address)
        self.account_key = account_key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return (
            self.address == other.address
            and self.account_key.to_bytes() == other.account_key.to_bytes()
        )

    def __repr__(self) -> str:
        return f"Account({self.address}, {self.account_key!r})"

    @staticmethod
    def create(
        address: str,
        public_keys: Union[PublicKeyLike, Sequence[PublicKeyLike], Sequence[Sequence[PublicKeyLike]]],
        options: Optional[
            Union[WeightedMultiSigOptions, Sequence[WeightedMultiSigOptions]]
        ] = None,
    ) -> Account:
        """Choose the AccountKey variant from the shape of ``public_keys``.

        A single key gives a Public key, a flat list gives a WeightedMultiSig
        and a list of lists gives a RoleBased key.
        """
        if isinstance(public_keys, (str, bytes, PublicKey)):
            return Account.create_with_account_key_public(address, public_keys)

        if len(public_keys) > 0 and all(
            isinstance(role, (list, tuple)) for role in public_keys
        ):
            role_options = None
            if options is not None:
                if isinstance(options, WeightedMultiSigOptions):
                    role_options = [options]
                else:
                    role_options = list(options)
            return Account.create_with_account_key_role_based(
                address, public_keys, role_options  # type: ignore[arg-type]
            )

        if options is not None and not isinstance(options, WeightedMultiSigOptions):
            raise TypeError("A flat public key list takes a single WeightedMultiSigOptions")
        return Account.create_with_account_key_weighted_multisig(
            address, public_keys, options  # type: ignore[arg-type]
        )

    @staticmethod
    def create_with_account_key_nil(address: str) -> Account:
        return Account(address, AccountKeyNil())

    @staticmethod
    def create_with_account_key_public(address: str, public_key: PublicKeyLike) -> Account:
        return Account(address, AccountKeyPublic(public_key))

    @staticmethod
    def create_with_account_key_weighted_multisig(
        address: str,
        public_keys: Sequence[PublicKeyLike],
        options: Optional[WeightedMultiSigOptions] = None,
    ) -> Account:
        if options is None:
            options = WeightedMultiSigOptions.get_default_options_for_weighted_multisig(
                len(public_keys)
            )
        return Account(
            address,
            AccountKeyWeightedMultiSig.from_public_keys_and_options(public_keys, options),
        )

    @staticmethod
    def create_with_account_key_role_based(
        address: str,
        public_keys: Sequence[Sequence[PublicKeyLike]],
        options: Optional[List[WeightedMultiSigOptions]] = None,
    ) -> Account:
        if options is None:
            options = WeightedMultiSigOptions.get_default_options_for_role_based(
                [len(role) for role in public_keys]
            )
        return Account(
            address,
            AccountKeyRoleBased.from_role_based_public_keys_and_options(
                public_keys, options
            ),
        )

    @staticmethod
    def create_from_rlp_encoded_account_key(address: str, encoded: Union[str, bytes]) -> Account:
        return Account(address, AccountKeyDecoder.decode(encoded))

    def get_rlp_encoding_account_key(self) -> str:
        return self.account_key.get_rlp_encoding()

    @staticmethod
    def load(path: str) -> Account:
        with open(path) as file:
            data = json.load(file)
        return Account.create_from_rlp_encoded_account_key(
            data["address"], data["account_key"]
        )

    def store(self, path: str):
        data = {
            "address": self.address,
            "account_key": self.get_rlp_encoding_account_key(),
        }
        with open(path, "w") as file:
            json.dump(data, file)


class Test(unittest.TestCase):
    ADDRESS = "0xA94F5374FCE5EDBC8E2A8697C15331677E6EBF0B"

    def public_keys(self, count: int) -> List[PublicKey]:
        from .secp256k1_ecdsa import PrivateKey

        return [PrivateKey.random().public_key() for _ in range(count)]

    def test_load_and_store(self):
        (file, path) = tempfile.mkstemp()
        start = Account.create(self.ADDRESS, self.public_keys(3))
        start.store(path)
        load = Account.load(path)

        self.assertEqual(start, load)

    def test_address_is_normalized(self):
        account = Account.create_with_account_key_nil(self.ADDRESS)
        self.assertEqual(account.address, self.ADDRESS.lower())
        self.assertEqual(account.get_rlp_encoding_account_key(), "0x80")

    def test_create_dispatches_on_shape(self):
        public_keys = self.public_keys(3)

        single = Account.create(self.ADDRESS, public_keys[0].hex())
        self.assertIsInstance(single.account_key, AccountKeyPublic)

        multi = Account.create(
            self.ADDRESS, public_keys, WeightedMultiSigOptions(2, [1, 1, 1])
        )
        self.assertIsInstance(multi.account_key, AccountKeyWeightedMultiSig)
        self.assertEqual(multi.account_key.threshold, 2)

        role_based = Account.create(self.ADDRESS, [[public_keys[0]], [], public_keys[1:]])
        self.assertIsInstance(role_based.account_key, AccountKeyRoleBased)
        inner = role_based.account_key.account_keys
        self.assertIsInstance(inner[0], AccountKeyPublic)
        self.assertIsInstance(inner[1], AccountKeyNil)
        self.assertIsInstance(inner[2], AccountKeyWeightedMultiSig)

    def test_default_multisig_options(self):
        account = Account.create_with_account_key_weighted_multisig(
            self.ADDRESS, self.public_keys(2)
        )
        self.assertEqual(account.account_key.threshold, 1)
        self.assertEqual(
            [key.weight for key in account.account_key.weighted_public_keys], [1, 1]
        )

    def test_from_rlp_encoded_account_key(self):
        start = Account.create(self.ADDRESS, self.public_keys(1)[0])
        decoded = Account.create_from_rlp_encoded_account_key(
            self.ADDRESS, start.get_rlp_encoding_account_key()
        )
        self.assertEqual(start, decoded)
