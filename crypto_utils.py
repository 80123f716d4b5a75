#!/usr/bin/env python3

"""
Crypto Utilities for Base Chain

RSA key generation and signing of envelope metadata, so a recipient can
check that the sidecar describing a ciphertext was not altered. Private
keys may be stored encrypted under a passphrase.
"""


import json
import base64
import binascii
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

KEY_SIZE = 4096
PUBLIC_EXPONENT = 65537

# Ties a signature to envelope metadata and nothing else
SIGNATURE_CONTEXT = b"base-chain envelope\x00"


def _signed_bytes(metadata_dict: dict) -> bytes:
    return SIGNATURE_CONTEXT + json.dumps(
        metadata_dict,
        sort_keys=True,
        separators=(",", ":")
    ).encode()


def _pss() -> padding.PSS:
    return padding.PSS(
        mgf=padding.MGF1(hashes.SHA256()),
        salt_length=padding.PSS.MAX_LENGTH
    )


def _key_encryption(passphrase: Optional[str]):
    if passphrase:
        return serialization.BestAvailableEncryption(passphrase.encode())
    return serialization.NoEncryption()


# =============================
# KEYS
# =============================

def generate_keys(private_path: str = "private.pem",
                  public_path: str = "public.pem",
                  key_size: int = KEY_SIZE,
                  passphrase: Optional[str] = None):

    private_key = rsa.generate_private_key(
        public_exponent=PUBLIC_EXPONENT,
        key_size=key_size,
    )

    pem_private = private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        _key_encryption(passphrase)
    )
    pem_public = private_key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo
    )

    with open(private_path, "wb") as f:
        f.write(pem_private)

    with open(public_path, "wb") as f:
        f.write(pem_public)


def load_private_key(private_key_path: str, passphrase: Optional[str] = None):
    """
    Load a PEM private key. Raises ValueError on a wrong passphrase,
    TypeError when one is missing for an encrypted key or given for an
    unencrypted one.
    """
    with open(private_key_path, "rb") as f:
        return serialization.load_pem_private_key(
            f.read(),
            password=passphrase.encode() if passphrase else None
        )


def load_public_key(public_key_path: str):
    with open(public_key_path, "rb") as f:
        return serialization.load_pem_public_key(f.read())


# =============================
# SIGN
# =============================

def sign_metadata(metadata_dict: dict, private_key_path: str,
                  passphrase: Optional[str] = None) -> str:

    private_key = load_private_key(private_key_path, passphrase)
    signature = private_key.sign(_signed_bytes(metadata_dict), _pss(), hashes.SHA256())

    return base64.b64encode(signature).decode()


# =============================
# VERIFY
# =============================

def verify_metadata_signature(
    metadata_dict: dict,
    public_key_path: str,
    signature_b64: str
) -> bool:

    public_key = load_public_key(public_key_path)

    try:
        signature = base64.b64decode(signature_b64, validate=True)
        public_key.verify(signature, _signed_bytes(metadata_dict), _pss(), hashes.SHA256())
    except (binascii.Error, InvalidSignature):
        return False

    return True
