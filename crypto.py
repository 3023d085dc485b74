# Per-user keys (PBKDF2) and AES-GCM sealing of entry text and account check values.
import base64
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

PBKDF2_ITERATIONS = 250_000
SALT_LENGTH = 16
NONCE_LENGTH = 12
KEY_LENGTH = 32
CHECK_PLAINTEXT = "havyn-account-ok"


class DecryptionError(ValueError):
    pass


def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def _unb64(text: str) -> bytes:
    return base64.b64decode(text)


def new_salt() -> str:
    return _b64(os.urandom(SALT_LENGTH))


def derive_key(passphrase: str, salt_b64: str, iterations: int = PBKDF2_ITERATIONS) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=_unb64(salt_b64),
        iterations=iterations,
    )
    return kdf.derive(passphrase.encode("utf-8"))


def seal(plaintext: str, key: bytes) -> tuple[str, str]:
    """Encrypt text; returns (ciphertext, nonce) as base64."""
    nonce = os.urandom(NONCE_LENGTH)
    ct = AESGCM(key).encrypt(nonce, plaintext.encode("utf-8"), None)
    return _b64(ct), _b64(nonce)


def unseal(ciphertext_b64: str, nonce_b64: str, key: bytes) -> str:
    try:
        raw = AESGCM(key).decrypt(_unb64(nonce_b64), _unb64(ciphertext_b64), None)
    except InvalidTag as e:
        raise DecryptionError("Could not decrypt with this key.") from e
    return raw.decode("utf-8")


def make_check_value(key: bytes) -> tuple[str, str]:
    return seal(CHECK_PLAINTEXT, key)


def verify_check_value(ciphertext_b64: str, nonce_b64: str, key: bytes) -> bool:
    try:
        return unseal(ciphertext_b64, nonce_b64, key) == CHECK_PLAINTEXT
    except DecryptionError:
        return False
