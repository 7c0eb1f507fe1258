# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
AccountKey construction example.

Shows the AccountKey an account-update transaction would carry for each
keyring shape, with default options and with explicit multisig options, and
decodes the encoding back.

Usage:
    python -m examples.account_update_key
"""

from klaytn_sdk.account import Account
from klaytn_sdk.account_key import AccountKeyDecoder, WeightedMultiSigOptions
from klaytn_sdk.keyring import Keyring


def main():
    single = Keyring.generate()
    address = single.address

    # :!:>section_1
    multiple = Keyring.create(address, Keyring.generate_multiple_keys(3))
    role_based = Keyring.create(address, Keyring.generate_role_based_keys([1, 0, 2]))
    # <:!:section_1

    print("\n=== Default AccountKeys ===")
    print(f"Single: {single.to_account().get_rlp_encoding_account_key()}")
    print(f"Multiple: {multiple.to_account().get_rlp_encoding_account_key()}")
    print(f"Role based: {role_based.to_account().get_rlp_encoding_account_key()}")

    # :!:>section_2
    options = WeightedMultiSigOptions(threshold=3, weights=[1, 2, 2])
    account = multiple.to_account(options)
    encoded = account.get_rlp_encoding_account_key()
    # <:!:section_2

    print("\n=== 3 of 5 weighted multisig ===")
    print(f"Encoded: {encoded}")
    decoded = AccountKeyDecoder.decode(encoded)
    print(f"Threshold: {decoded.threshold}")
    print(f"Weights: {[key.weight for key in decoded.weighted_public_keys]}")

    # :!:>section_3
    nil = Account.create_with_account_key_nil(address)
    restored = Account.create_from_rlp_encoded_account_key(address, encoded)
    # <:!:section_3

    print("\n=== Account ===")
    print(f"Nil key keeps the current policy: {nil.get_rlp_encoding_account_key()}")
    print(f"Round trip matches: {restored == account}")


if __name__ == "__main__":
    main()
