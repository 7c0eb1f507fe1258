# Copyright © Aptos Foundation
# SPDX-License-Identifier: Apache-2.0

"""
Exception hierarchy for the Klaytn Python SDK account/key engine.

Every failure raised by this package derives from :class:`KlaytnError` and falls
into one of four families:

- :class:`FormatError`: malformed input (hex, addresses, wallet keys, wire tags,
  keystore documents).
- :class:`RangeError`: an index or element count outside its permitted range.
- :class:`PolicyError`: the operation is not permitted for the shape of the
  keyring or key material it was given.
- :class:`CryptoError`: integrity verification failed, which callers should
  treat as a wrong password.

Examples:
    Distinguishing a wrong password from a corrupt file::

        from klaytn_sdk import keystore
        from klaytn_sdk.errors import CryptoError, FormatError

        try:
            keyring = keystore.decrypt(document, password)
        except CryptoError:
            print("Wrong password, try again")
        except FormatError as e:
            print(f"Keystore is damaged: {e}")
"""

from typing import Optional


class KlaytnError(Exception):
    """Base exception for all account/key engine errors."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{type(self).__name__}: {self.message} ({self.detail})"
        return f"{type(self).__name__}: {self.message}"


class FormatError(KlaytnError):
    """Raised when an input string or byte blob is malformed."""


class RangeError(KlaytnError):
    """Raised when an index or a count is out of its permitted range."""


class PolicyError(KlaytnError):
    """Raised when an operation is not permitted for the given key shape."""


class CryptoError(KlaytnError):
    """Raised when integrity verification of encrypted key material fails."""


class InvalidKeyFormat(FormatError):
    def __init__(self, detail: Optional[str] = None):
        super().__init__("Invalid private key.", detail)


class InvalidPublicKey(FormatError):
    def __init__(self, detail: Optional[str] = None):
        super().__init__("Invalid public key.", detail)


class InvalidAddress(FormatError):
    def __init__(self, address: str):
        self.address = address
        super().__init__("Invalid address.", address)


class InvalidWalletKeyFormat(FormatError):
    def __init__(self, detail: Optional[str] = None):
        super().__init__("Invalid Klaytn wallet key.", detail)


class InvalidTag(FormatError):
    """Raised when an AccountKey blob starts with an unknown type tag."""

    def __init__(self, tag: Optional[int] = None, expected: Optional[int] = None):
        self.tag = tag
        self.expected = expected
        if tag is None:
            detail = "empty input"
        elif expected is not None:
            detail = f"expected 0x{expected:02x}, got 0x{tag:02x}"
        else:
            detail = f"0x{tag:02x}"
        super().__init__("Invalid RLP-encoded account key tag.", detail)


class InvalidAccountKey(FormatError):
    """Raised when an AccountKey blob has a known tag but a malformed payload."""

    def __init__(self, detail: Optional[str] = None):
        super().__init__("Invalid RLP-encoded account key.", detail)


class InvalidHex(FormatError):
    def __init__(self, value: str):
        self.value = value
        super().__init__("Invalid hex string.", value)


class InvalidHash(FormatError):
    def __init__(self, detail: Optional[str] = None):
        super().__init__("Invalid hash.", detail)


class InvalidSignature(FormatError):
    def __init__(self, detail: Optional[str] = None):
        super().__init__("Invalid signature.", detail)


class InvalidKeyStore(FormatError):
    def __init__(self, detail: str):
        super().__init__("Invalid keystore.", detail)


class InvalidRoleIndex(RangeError):
    def __init__(self, role: int):
        self.role = role
        super().__init__("Invalid role index", str(role))


class NegativeIndex(RangeError):
    def __init__(self, index: int):
        self.index = index
        super().__init__("keyIndex cannot have negative value.", str(index))


class IndexOutOfBounds(RangeError):
    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(
            "keyIndex value must be less than the length of key array",
            f"index {index}, length {length}",
        )


class KeyCountExceeded(RangeError):
    def __init__(self, message: str, count: int):
        self.count = count
        super().__init__(message, f"got {count}")


class RoleCountExceeded(RangeError):
    def __init__(self, count: int):
        self.count = count
        super().__init__("RoleBasedKey component must have 3.", f"got {count}")


class NoDefaultKey(PolicyError):
    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "The key data with specified roleIndex does not exist. "
            "The default key in TransactionRole is also empty."
        )


class UnsupportedExport(PolicyError):
    def __init__(self):
        super().__init__(
            "The keyring cannot be exported in KlaytnWalletKey format. "
            "Use keystore.encrypt or keyring.encrypt."
        )


class UnsupportedV3Encryption(PolicyError):
    def __init__(self):
        super().__init__(
            "This keyring cannot be encrypted keystore v3. "
            "use 'keyring.encrypt(password)'"
        )


class AddressRequired(PolicyError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(
            f"The address must be defined inside the option object to encrypt {kind} keys."
        )


class AddressMismatch(PolicyError):
    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            "The address defined in options does not match the address of KlaytnWalletKey",
            f"{expected} != {actual}",
        )


class WeightCountMismatch(PolicyError):
    def __init__(self, keys: int, weights: int):
        self.keys = keys
        self.weights = weights
        super().__init__(
            "The number of keys and the number of elements in the Weights array should be the same.",
            f"{keys} keys, {weights} weights",
        )


class EmptyKeySet(PolicyError):
    def __init__(self):
        super().__init__(
            "There must be one or more keys in RoleTransaction Key array."
        )


class RoleDataMismatch(PolicyError):
    def __init__(self, message: str):
        super().__init__(message)


class InvalidOptions(PolicyError):
    def __init__(self, message: str):
        super().__init__(message)


class MacMismatch(CryptoError):
    def __init__(self):
        super().__init__("Key derivation failed - possibly wrong password")


InvalidPassword = MacMismatch
