# PUBLIC_INTERFACE
"""
Unit tests for the AES-GCM keyed cipher.
"""
import pytest

from shroud.core import security
from shroud.core.errors import CipherInitError, InvalidKeyError, InvalidSecretError, RandomnessError
from shroud.core.security import KEY_SIZE, NONCE_SIZE, TAG_SIZE, KeyedCipher, generate_key


def test_generate_key_length_and_uniqueness():
    keys = {generate_key() for _ in range(50)}
    assert len(keys) == 50
    assert all(len(k) == KEY_SIZE for k in keys)


def test_valid_key_accepted():
    KeyedCipher(bytes(32))
    KeyedCipher(bytearray(32))
    KeyedCipher(memoryview(bytes(32)))


@pytest.mark.parametrize("length", [0, 16, 31, 33, 64])
def test_wrong_key_length_rejected(length):
    with pytest.raises(InvalidKeyError):
        KeyedCipher(b"\x01" * length)


@pytest.mark.parametrize("key", ["0" * 32, None, 32])
def test_non_bytes_key_rejected(key):
    with pytest.raises(InvalidKeyError):
        KeyedCipher(key)


def test_repr_hides_key():
    key = b"k" * 32
    text = repr(KeyedCipher(key))
    assert "kkkk" not in text
    assert str(key) not in text


def test_encrypt_decrypt_roundtrip():
    cipher = KeyedCipher(generate_key())
    blob = cipher.encrypt(b"hello world")
    assert cipher.decrypt(blob) == b"hello world"


def test_blob_layout_is_nonce_ciphertext_tag():
    cipher = KeyedCipher(generate_key())
    plaintext = b"sensitive data"
    blob = cipher.encrypt(plaintext)
    assert len(blob) == NONCE_SIZE + len(plaintext) + TAG_SIZE
    assert plaintext not in blob


def test_empty_plaintext_roundtrip():
    cipher = KeyedCipher(generate_key())
    blob = cipher.encrypt(b"")
    assert len(blob) == NONCE_SIZE + TAG_SIZE
    assert cipher.decrypt(blob) == b""


def test_fresh_nonce_each_call():
    cipher = KeyedCipher(generate_key())
    first = cipher.encrypt(b"data")
    second = cipher.encrypt(b"data")
    assert first[:NONCE_SIZE] != second[:NONCE_SIZE]
    assert first != second
    assert cipher.decrypt(first) == cipher.decrypt(second) == b"data"


@pytest.mark.parametrize("length", [0, 1, NONCE_SIZE - 1, NONCE_SIZE, NONCE_SIZE + TAG_SIZE - 1])
def test_short_blob_rejected(length):
    cipher = KeyedCipher(generate_key())
    with pytest.raises(InvalidSecretError):
        cipher.decrypt(b"\x00" * length)


def test_every_single_bit_flip_detected():
    cipher = KeyedCipher(generate_key())
    blob = cipher.encrypt(b"tamper-me")
    for index in range(len(blob)):
        for bit in range(8):
            tampered = bytearray(blob)
            tampered[index] ^= 1 << bit
            with pytest.raises(InvalidSecretError):
                cipher.decrypt(bytes(tampered))


def test_wrong_key_indistinguishable_from_tampering():
    cipher = KeyedCipher(generate_key())
    other = KeyedCipher(generate_key())
    blob = cipher.encrypt(b"secret")

    with pytest.raises(InvalidSecretError) as wrong_key:
        other.decrypt(blob)

    tampered = bytearray(blob)
    tampered[-1] ^= 0xFF
    with pytest.raises(InvalidSecretError) as tampered_blob:
        cipher.decrypt(bytes(tampered))

    assert str(wrong_key.value) == str(tampered_blob.value)
    assert wrong_key.value.__cause__ is None
    assert wrong_key.value.__suppress_context__


def test_randomness_failure_is_fatal(monkeypatch):
    def broken_source(n):
        raise OSError("entropy source unavailable")

    monkeypatch.setattr(security.secrets, "token_bytes", broken_source)
    cipher = KeyedCipher(bytes(32))
    with pytest.raises(RandomnessError):
        cipher.encrypt(b"data")


def test_cipher_construction_failure(monkeypatch):
    def broken_aesgcm(key):
        raise ValueError("backend refused key")

    cipher = KeyedCipher(bytes(32))
    monkeypatch.setattr(security, "AESGCM", broken_aesgcm)
    with pytest.raises(CipherInitError):
        cipher.encrypt(b"data")
