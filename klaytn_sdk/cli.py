# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Command-line interface for the Klaytn account/key engine.

Supported Commands:
- generate: print a new KlaytnWalletKey
- encrypt: encrypt a private key or KlaytnWalletKey into a keystore file
- decrypt: decrypt a keystore file and print its address and key counts
- account-key: print the RLP-encoded AccountKeyPublic of a key

Environment Variables:
    KLAYTN_KEYSTORE_PASSWORD: Keystore password used when ``--password`` is
        not given.
    KLAYTN_KEYSTORE_KDF: Key derivation function used by ``encrypt`` when
        ``--kdf`` is not given (``scrypt`` or ``pbkdf2``).

Examples:
    Generate a key and store it encrypted::

        python -m klaytn_sdk.cli generate > wallet_key.txt
        python -m klaytn_sdk.cli encrypt \
            --private-key-path ./wallet_key.txt \
            --password secret \
            --output ./keystore.json

    Decrypt it again::

        KLAYTN_KEYSTORE_PASSWORD=secret python -m klaytn_sdk.cli decrypt \
            --keystore-path ./keystore.json
"""

from __future__ import annotations

import argparse
import json
import os
import sys
import tempfile
import unittest
from typing import List, Optional, TextIO

from .account_address import AccountAddress
from .errors import KlaytnError
from .keyring import Keyring
from .keystore import KeyStoreOption, decrypt, encrypt, encrypt_v3

PASSWORD_ENV = "KLAYTN_KEYSTORE_PASSWORD"
KDF_ENV = "KLAYTN_KEYSTORE_KDF"


def read_key(parsed_args: argparse.Namespace) -> str:
    if parsed_args.private_key is not None:
        return parsed_args.private_key
    with open(parsed_args.private_key_path) as file:
        return file.read().strip()


def main(args: List[str], out: Optional[TextIO] = None):
    """Main entry point for the CLI.

    Args:
        args: Command-line arguments, typically ``sys.argv[1:]``.
        out: Stream that receives command output, ``sys.stdout`` by default.
    """
    out = out or sys.stdout

    parser = argparse.ArgumentParser(description="Klaytn key management CLI")
    parser.add_argument(
        "command",
        type=str,
        help="The command to execute",
        choices=["generate", "encrypt", "decrypt", "account-key"],
    )
    parser.add_argument(
        "--address",
        help="Account address to bind the key to (decoupled keys)",
        type=str,
    )
    parser.add_argument("--entropy", help="Extra entropy mixed into key generation", type=str)
    parser.add_argument(
        "--kdf",
        help="Key derivation function for encrypt",
        choices=["scrypt", "pbkdf2"],
        default=os.getenv(KDF_ENV, "scrypt"),
    )
    parser.add_argument(
        "--keystore-path", help="Path to a keystore JSON file to decrypt", type=str
    )
    parser.add_argument(
        "--output", help="Path the keystore JSON is written to (stdout if omitted)", type=str
    )
    parser.add_argument(
        "--password",
        help=f"Keystore password (defaults to ${PASSWORD_ENV})",
        type=str,
        default=os.getenv(PASSWORD_ENV),
    )
    parser.add_argument("--private-key", help="Private key or KlaytnWalletKey", type=str)
    parser.add_argument(
        "--private-key-path",
        help="Path to a file holding a private key or KlaytnWalletKey",
        type=str,
    )
    parser.add_argument(
        "--v3", help="Write a version 3 keystore", action="store_true", default=False
    )
    parsed_args = parser.parse_args(args)

    if parsed_args.command in ("encrypt", "account-key"):
        if parsed_args.private_key is None and parsed_args.private_key_path is None:
            parser.error("Missing required argument '--private-key' or '--private-key-path'")
    if parsed_args.command in ("encrypt", "decrypt") and parsed_args.password is None:
        parser.error(f"Missing required argument '--password' or ${PASSWORD_ENV}")
    if parsed_args.command == "decrypt" and parsed_args.keystore_path is None:
        parser.error("Missing required argument '--keystore-path'")

    try:
        if parsed_args.address is not None:
            parsed_args.address = AccountAddress.normalize(parsed_args.address)

        if parsed_args.command == "generate":
            keyring = Keyring.generate(parsed_args.entropy)
            if parsed_args.address is not None:
                keyring = Keyring.create_with_single_key(
                    parsed_args.address, keyring.keys[0][0]
                )
            print(keyring.get_klaytn_wallet_key(), file=out)

        elif parsed_args.command == "encrypt":
            option = KeyStoreOption.get_default_option_with_kdf(
                parsed_args.kdf, parsed_args.address
            )
            encrypt_fn = encrypt_v3 if parsed_args.v3 else encrypt
            document = encrypt_fn(read_key(parsed_args), parsed_args.password, option).to_json()
            if parsed_args.output is None:
                print(document, file=out)
            else:
                with open(parsed_args.output, "w") as file:
                    file.write(document)

        elif parsed_args.command == "decrypt":
            with open(parsed_args.keystore_path) as file:
                keyring = decrypt(file.read(), parsed_args.password)
            print(
                json.dumps(
                    {
                        "address": keyring.address,
                        "type": keyring.type.value,
                        "keys": [len(role) for role in keyring.keys],
                        "decoupled": keyring.is_decoupled(),
                    }
                ),
                file=out,
            )

        elif parsed_args.command == "account-key":
            keyring = Keyring.create_from_private_key(read_key(parsed_args))
            print(keyring.to_account().get_rlp_encoding_account_key(), file=out)
    except KlaytnError as e:
        parser.exit(1, f"{e}\n")


if __name__ == "__main__":
    main(sys.argv[1:])


class Test(unittest.TestCase):
    PRIVATE_KEY = "0x45a915e4d060149eb4365960e6a7a45f334393093061116b197e3240065ff2d8"
    ADDRESS = "0xa94f5374fce5edbc8e2a8697c15331677e6ebf0b"

    def run_cli(self, args: List[str]) -> str:
        from io import StringIO

        out = StringIO()
        main(args, out)
        return out.getvalue().strip()

    def test_generate(self):
        wallet_key = self.run_cli(["generate", "--entropy", "entropy"])
        keyring = Keyring.create_from_klaytn_wallet_key(wallet_key)
        self.assertFalse(keyring.is_decoupled())

    def test_encrypt_and_decrypt(self):
        (file, path) = tempfile.mkstemp()
        os.close(file)
        self.run_cli(
            [
                "encrypt",
                "--private-key",
                self.PRIVATE_KEY,
                "--password",
                "password",
                "--kdf",
                "pbkdf2",
                "--output",
                path,
            ]
        )
        summary = json.loads(
            self.run_cli(["decrypt", "--keystore-path", path, "--password", "password"])
        )
        os.remove(path)

        self.assertEqual(summary["address"], self.ADDRESS)
        self.assertEqual(summary["keys"], [1, 0, 0])
        self.assertFalse(summary["decoupled"])

    def test_encrypt_v3_to_stdout(self):
        document = json.loads(
            self.run_cli(
                [
                    "encrypt",
                    "--private-key",
                    self.PRIVATE_KEY,
                    "--password",
                    "password",
                    "--kdf",
                    "scrypt",
                    "--v3",
                ]
            )
        )
        self.assertEqual(document["version"], 3)
        self.assertEqual(document["crypto"]["kdf"], "scrypt")

    def test_account_key(self):
        encoded = self.run_cli(["account-key", "--private-key", self.PRIVATE_KEY])
        self.assertTrue(encoded.startswith("0x02a1"))

    def test_missing_arguments(self):
        with self.assertRaises(SystemExit):
            self.run_cli(["encrypt", "--password", "password"])
        with self.assertRaises(SystemExit):
            self.run_cli(["decrypt", "--password", "password"])
