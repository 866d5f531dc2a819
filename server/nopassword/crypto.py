from __future__ import annotations

from cryptography.hazmat.decrepit.ciphers.algorithms import Blowfish
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers import Cipher, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

KEY_LENGTH = 16
BLOCK_SIZE = 8
DEFAULT_ITERATIONS = 1000

# Tokens are a single block holding a timestamp, and keys are per-user.
ZERO_IV = bytes(BLOCK_SIZE)


def encode_text(text: str) -> bytes:
    """UTF-8 encode ``text``, turning unpaired surrogates into U+FFFD.

    Adjacent surrogate halves are joined into one code point first, so any
    ``str`` maps to the same bytes a UTF-16 string runtime would produce.
    """
    joined = text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")
    return joined.encode("utf-8")


def derive_key(secret: bytes, username: str, iterations: int = DEFAULT_ITERATIONS) -> bytes:
    """Derive the 16-byte Blowfish key for ``username``.

    The username is the PBKDF2 password and the shared secret is the salt.
    Swapping them would change every key and invalidate existing tokens.
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=KEY_LENGTH,
        salt=secret,
        iterations=iterations,
    )
    return kdf.derive(encode_text(username))


def _cipher(key: bytes, iv: bytes) -> Cipher:
    return Cipher(Blowfish(key), modes.CBC(iv))


def encrypt_block(key: bytes, iv: bytes, plaintext: bytes) -> bytes:
    encryptor = _cipher(key, iv).encryptor()
    encrypted = encryptor.update(plaintext)
    assert encryptor.finalize() == b""
    assert len(encrypted) == len(plaintext) == BLOCK_SIZE
    return encrypted


def decrypt_block(key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    decryptor = _cipher(key, iv).decryptor()
    decrypted = decryptor.update(ciphertext)
    assert decryptor.finalize() == b""
    assert len(decrypted) == len(ciphertext) == BLOCK_SIZE
    return decrypted
