import hashlib

from nopassword.crypto import ZERO_IV, decrypt_block, derive_key, encode_text, encrypt_block


def test_derive_key_uses_username_as_password_and_secret_as_salt() -> None:
    key = derive_key(b"shh-this-is-our-secret", "frani")

    expected = hashlib.pbkdf2_hmac("sha512", b"frani", b"shh-this-is-our-secret", 1000, dklen=16)
    assert key == expected
    assert len(key) == 16


def test_derive_key_is_deterministic_and_user_specific() -> None:
    assert derive_key(b"secret", "alice") == derive_key(b"secret", "alice")
    assert derive_key(b"secret", "alice") != derive_key(b"secret", "bob")
    assert derive_key(b"secret", "alice") != derive_key(b"other", "alice")
    assert derive_key(b"secret", "alice", 1000) != derive_key(b"secret", "alice", 2000)


def test_block_cipher_round_trip_keeps_length() -> None:
    key = derive_key(b"secret", "alice")
    plaintext = b"\x00\x00\x01\x8f\x12\x34\x56\x78"

    ciphertext = encrypt_block(key, ZERO_IV, plaintext)

    assert len(ciphertext) == 8
    assert ciphertext != plaintext
    assert decrypt_block(key, ZERO_IV, ciphertext) == plaintext


def test_block_cipher_depends_on_key() -> None:
    plaintext = b"12345678"
    first = encrypt_block(derive_key(b"secret", "alice"), ZERO_IV, plaintext)
    second = encrypt_block(derive_key(b"secret", "bob"), ZERO_IV, plaintext)
    assert first != second


def test_encode_text_is_utf8_for_ordinary_strings() -> None:
    assert encode_text("frani") == b"frani"
    assert encode_text("zoë") == "zoë".encode("utf-8")


def test_encode_text_joins_surrogate_pairs_and_replaces_lone_halves() -> None:
    assert encode_text("\ud83d\ude00") == "\U0001f600".encode("utf-8")
    assert encode_text("a\ud800b") == "a\ufffdb".encode("utf-8")
    assert encode_text("\udc00") == "\ufffd".encode("utf-8")
