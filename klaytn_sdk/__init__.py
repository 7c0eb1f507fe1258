# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Klaytn Python SDK - account and key management for the Klaytn blockchain.

Klaytn decouples an account's address from the keys that authorize it. An
account's authorization policy is an AccountKey: a single public key, a
weighted multi-signature set, or a role-based key with one policy per role
(transaction, account update, fee payer). This package holds the local,
offline half of that model: key generation, signing, AccountKey encoding and
encrypted key storage. It does not talk to a node.

Core Features:
- **AccountKey Codec**: Encode and decode Nil, Public, WeightedMultiSig and
  RoleBased keys in the tagged RLP wire format used by account updates
- **Keyring**: Hold private keys per role, pick the right key for a role and
  sign transaction hashes and messages
- **KeyStore**: Encrypt keys into v3 / v4 JSON keystores (scrypt or pbkdf2,
  aes-128-ctr) and decrypt them back into a Keyring
- **KlaytnWalletKey**: Import and export the ``0x{key}0x00{address}`` format
- **CLI**: ``python -m klaytn_sdk.cli`` for generate / encrypt / decrypt

Quick Start:
    Create a keyring, sign a message and verify it::

        from klaytn_sdk.keyring import Keyring

        keyring = Keyring.generate()
        signed = keyring.sign_message("Hello Klaytn")
        assert Keyring.recover(signed) == keyring.address

    Build the AccountKey of a role-based account::

        keyring = Keyring.create(address, Keyring.generate_role_based_keys([2, 1, 1]))
        account = keyring.to_account()
        print(account.get_rlp_encoding_account_key())

    Store a keyring encrypted::

        from klaytn_sdk import keystore

        document = keyring.encrypt("password").to_json()
        restored = keystore.decrypt(document, "password")

Module Organization:
    - **account_key**: AccountKey variants, RoleGroup and the wire codec
    - **account**: Address plus AccountKey, the account-update payload
    - **keyring**: Role tables, key lookup and signing
    - **keystore**: Encrypted keystore documents
    - **secp256k1_ecdsa**: Private/public keys and recoverable signatures
    - **account_address**: 20-byte address handling
    - **errors**: Exception hierarchy
    - **utils**: Keccak-256, hex helpers and message hashing

Requirements:
    - Python 3.8 or higher
    - ecdsa for secp256k1 signing and recovery
    - pycryptodome for Keccak-256, AES and the key derivation functions
    - rlp for the recursive length prefix codec
"""
