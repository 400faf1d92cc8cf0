"""
Cryptographic signers for prupdater.

GitHub Apps authenticate with a JWT signed using the app's RSA private key
(RS256). This module wraps that key.
"""

from abc import ABC, abstractmethod

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa


class Signer(ABC):
    """Abstract base class for JWT signers."""

    algorithm: str

    @abstractmethod
    def sign(self, message: bytes) -> bytes:
        """Sign a message and return the signature bytes."""
        pass

    @classmethod
    @abstractmethod
    def from_pem(cls, pem_string: str) -> "Signer":
        """Load a signer from a PEM string."""
        pass


class RS256Signer(Signer):
    """RSASSA-PKCS1-v1_5 with SHA-256, as required for GitHub App JWTs."""

    algorithm = "RS256"

    def __init__(self, private_key: rsa.RSAPrivateKey) -> None:
        """
        Initialize with an RSA private key.

        Args:
            private_key: RSA private key from cryptography library
        """
        self._private_key = private_key

    def sign(self, message: bytes) -> bytes:
        return self._private_key.sign(message, padding.PKCS1v15(), hashes.SHA256())

    def public_key_pem(self) -> str:
        """Return the public key in PEM format."""
        return self._private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode()

    @classmethod
    def from_pem(cls, pem_string: str) -> "RS256Signer":
        """
        Load an RS256 signer from a PEM string.

        Accepts both PKCS#1 (``BEGIN RSA PRIVATE KEY``, as downloaded from
        GitHub) and PKCS#8 keys. Escaped ``\\n`` sequences, common when the key
        is stored in a single-line secret, are unescaped first.

        Raises:
            TypeError: If the key is not an RSA private key
        """
        if "\\n" in pem_string and "\n" not in pem_string.strip():
            pem_string = pem_string.replace("\\n", "\n")

        private_key = serialization.load_pem_private_key(
            pem_string.strip().encode(), password=None
        )

        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise TypeError(f"Expected RSA private key, got {type(private_key).__name__}")

        return cls(private_key)

    @classmethod
    def generate(cls, key_size: int = 2048) -> "RS256Signer":
        """Generate a new RSA keypair (for tests and local experiments)."""
        private_key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)
        return cls(private_key)
