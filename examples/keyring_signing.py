# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Keyring signing example.

A role-based keyring holds separate keys for ordinary transactions, account
updates and fee delegation. This walkthrough signs a transaction hash with the
keys of each role and shows the fallback to the transaction keys when a role
is empty, then signs and recovers a Klaytn prefixed message.

Usage:
    python -m examples.keyring_signing
"""

from klaytn_sdk import utils
from klaytn_sdk.account_key import RoleGroup
from klaytn_sdk.keyring import Keyring

from .common import CHAIN_ID


def main():
    # :!:>section_1
    address = Keyring.generate().address
    role_keys = Keyring.generate_role_based_keys([2, 1, 0])
    keyring = Keyring.create(address, role_keys)
    # <:!:section_1

    print("\n=== Keyring ===")
    print(f"Address: {keyring.address}")
    print(f"Decoupled: {keyring.is_decoupled()}")
    for role in RoleGroup:
        print(f"{role.name}: {len(keyring.keys[role])} key(s)")

    # :!:>section_2
    tx_hash = utils.keccak256(b"an unsigned transaction")
    for role in RoleGroup:
        signatures = keyring.sign_with_keys(tx_hash, CHAIN_ID, role)
        print(f"\n=== {role.name} signatures ===")
        for signature in signatures:
            print(signature.to_hex_list())
    # <:!:section_2

    # :!:>section_3
    signed = keyring.sign_message("Hello Klaytn", RoleGroup.ACCOUNT_UPDATE, 0)
    signer = Keyring.recover(signed)
    # <:!:section_3

    print("\n=== Message ===")
    print(f"Hash: {signed.message_hash}")
    print(f"Signature: {signed.signature.to_hex_list()}")
    expected = keyring.keys[RoleGroup.ACCOUNT_UPDATE][0].derived_address()
    print(f"Recovered signer matches the update key: {signer == expected}")


if __name__ == "__main__":
    main()
