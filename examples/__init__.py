"""
Klaytn Python SDK Examples - offline walkthroughs of the account/key engine.

Example Scripts:
    - keyring_signing.py: Sign transaction hashes and messages per role
    - account_update_key.py: Build the AccountKey an account update installs
    - keystore_roundtrip.py: Encrypt keyrings to keystore files and back
    - common.py: Shared configuration read from the environment

Quick Start:
    Run any example as a module from the repository root::

        python -m examples.keyring_signing
        python -m examples.account_update_key
        python -m examples.keystore_roundtrip

None of the examples contact a node; they only exercise local key handling.
"""
