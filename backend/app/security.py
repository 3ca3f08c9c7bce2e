"""
Hachage et vérification des mots de passe.

Format stocké : "<clé dérivée hex>.<sel hex>" (scrypt, N=16384, r=8, p=1, clé de 64 octets).
Le sel est utilisé sous sa forme hexadécimale textuelle (chaîne UTF-8), pas décodé en octets.
"""

import hashlib
import hmac
import secrets

SALT_BYTES = 16
KEY_LENGTH = 64
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1


def _derive(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    """Génère un sel aléatoire et retourne la chaîne à stocker en base."""
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_derive(password, salt).hex()}.{salt}"


def verify_password(password: str, stored: str) -> bool:
    """
    Compare un mot de passe au hash stocké en temps constant.
    Retourne False (sans lever) si la valeur stockée est mal formée.
    """
    if not stored or stored.count(".") != 1:
        return False
    digest_hex, salt = stored.split(".")
    if not digest_hex or not salt:
        return False
    try:
        expected = bytes.fromhex(digest_hex)
    except ValueError:
        return False
    if len(expected) != KEY_LENGTH:
        return False
    return hmac.compare_digest(expected, _derive(password, salt))
