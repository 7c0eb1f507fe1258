# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Shared settings for the Klaytn Python SDK examples.

The examples run offline. Everything they need is a password, a key
derivation function and a place to write keystore files, each of which can be
overridden from the environment.

Environment Variables:
    KLAYTN_KEYSTORE_PASSWORD: Password used to encrypt example keystores
    KLAYTN_KEYSTORE_KDF: ``scrypt`` (default) or ``pbkdf2``
    KLAYTN_KEYSTORE_DIR: Directory keystore files are written to
    KLAYTN_CHAIN_ID: Chain id used when signing transaction hashes
        (1001 is Baobab, 8217 is Cypress)
"""

import os
import os.path
import tempfile

# :!:>section_1
KEYSTORE_PASSWORD = os.getenv("KLAYTN_KEYSTORE_PASSWORD", "password")

KEYSTORE_KDF = os.getenv("KLAYTN_KEYSTORE_KDF", "scrypt")

KEYSTORE_DIR = os.getenv(
    "KLAYTN_KEYSTORE_DIR",
    os.path.join(tempfile.gettempdir(), "klaytn-keystores"),
)

CHAIN_ID = int(os.getenv("KLAYTN_CHAIN_ID", "1001"))
# <:!:section_1
