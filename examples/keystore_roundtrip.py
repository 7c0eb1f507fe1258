# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Keystore example.

Encrypts a single-key keyring as a version 3 keystore and a role-based keyring
as a version 4 keystore, writes both to ``KLAYTN_KEYSTORE_DIR`` and decrypts
them again.

Usage:
    python -m examples.keystore_roundtrip
"""

import os
import os.path

from klaytn_sdk import keystore
from klaytn_sdk.errors import CryptoError
from klaytn_sdk.keyring import Keyring
from klaytn_sdk.keystore import KeyStoreOption

from .common import KEYSTORE_DIR, KEYSTORE_KDF, KEYSTORE_PASSWORD


def write(name: str, document: str) -> str:
    os.makedirs(KEYSTORE_DIR, exist_ok=True)
    path = os.path.join(KEYSTORE_DIR, name)
    with open(path, "w") as file:
        file.write(document)
    return path


def main():
    option = KeyStoreOption.get_default_option_with_kdf(KEYSTORE_KDF)

    # :!:>section_1
    single = Keyring.generate()
    v3 = single.encrypt_v3(KEYSTORE_PASSWORD, option)
    v3_path = write(f"{single.address}-v3.json", v3.to_json())
    # <:!:section_1

    # :!:>section_2
    role_based = Keyring.create(
        single.address, Keyring.generate_role_based_keys([2, 1, 1])
    )
    v4 = role_based.encrypt(KEYSTORE_PASSWORD, option)
    v4_path = write(f"{role_based.address}-v4.json", v4.to_json())
    # <:!:section_2

    print("\n=== Keystores ===")
    print(f"v3: {v3_path}")
    print(f"v4: {v4_path}")

    # :!:>section_3
    with open(v3_path) as file:
        restored_single = keystore.decrypt(file.read(), KEYSTORE_PASSWORD)
    with open(v4_path) as file:
        restored_role_based = keystore.decrypt(file.read(), KEYSTORE_PASSWORD)
    # <:!:section_3

    print("\n=== Decrypted ===")
    print(f"Single key restored: {restored_single.get_klaytn_wallet_key() == single.get_klaytn_wallet_key()}")
    print(f"Role key counts: {[len(role) for role in restored_role_based.keys]}")

    try:
        keystore.decrypt(v4, KEYSTORE_PASSWORD + "!")
    except CryptoError as e:
        print(f"Wrong password rejected: {e}")


if __name__ == "__main__":
    main()
