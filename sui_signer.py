"""
Ed25519 signing for Sui transactions.

Keys come in as base64, either the 33-byte `flag || seed` form Sui tooling
exports or a bare 32-byte seed.
"""

import base64
import binascii
import hashlib

from nacl.signing import SigningKey

from kaizen_errors import PreconditionError

ED25519_FLAG = 0x00
# TransactionData intent: scope 0, version 0, app id 0
TRANSACTION_INTENT = bytes([0, 0, 0])


def blake2b_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


class Ed25519Signer:
    def __init__(self, seed: bytes):
        if len(seed) != 32:
            raise PreconditionError("Ed25519 private key must be 32 bytes")
        self._signing_key = SigningKey(seed)
        self.public_key = bytes(self._signing_key.verify_key)
        self.address = "0x" + blake2b_256(bytes([ED25519_FLAG]) + self.public_key).hex()

    @classmethod
    def from_base64(cls, encoded: str) -> "Ed25519Signer":
        try:
            raw = base64.b64decode(encoded.strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            raise PreconditionError(f"SUI_PRIVATE_KEY is not valid base64: {e}") from e

        if len(raw) == 33:
            if raw[0] != ED25519_FLAG:
                raise PreconditionError("SUI_PRIVATE_KEY is not an Ed25519 key")
            raw = raw[1:]
        return cls(raw)

    def sign_transaction(self, tx_bytes: bytes) -> str:
        """serialized signature: flag || signature || public key, base64"""
        digest = blake2b_256(TRANSACTION_INTENT + tx_bytes)
        signature = self._signing_key.sign(digest).signature
        return base64.b64encode(bytes([ED25519_FLAG]) + signature + self.public_key).decode()
