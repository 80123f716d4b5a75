#!/usr/bin/env python3
"""
Envelope metadata for Base Chain

A gzip-compressed JSON sidecar written next to a ciphertext:
- SHA256 of the plaintext payload and of the ciphertext
- Plaintext length (restores leading zero-digit symbols on decrypt)
- Base sequence fingerprint (detects a wrong password early)
- Optional RSA signature (crypto_utils)
"""

import os
import gzip
import json
import hashlib
from dataclasses import dataclass
from typing import Iterable, Optional

import crypto_utils

# ============================================================
# GLOBAL CONFIGURATION
# ============================================================

PROTOCOL_VERSION = "v1"
METADATA_SUFFIX = ".json.gz"
FINGERPRINT_LENGTH = 16

MODE_TEXT = "text"
MODE_BINARY = "binary"


# ============================================================
# UTILITIES
# ============================================================

def payload_hash(payload: str) -> str:
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def sequence_fingerprint(bases: Iterable[int]) -> str:
    serialized = " ".join(str(b) for b in bases)
    return hashlib.sha256(serialized.encode()).hexdigest()[:FINGERPRINT_LENGTH]


def metadata_path_for(output_path: str) -> str:
    return output_path + METADATA_SUFFIX


# ============================================================
# ENVELOPE METADATA
# ============================================================

@dataclass
class EnvelopeMetadata:
    filename: str
    mode: str
    charset: str
    plaintext_length: int
    plaintext_hash: str
    ciphertext_hash: str
    step_count: int
    sequence_fingerprint: str
    protocol_version: str = PROTOCOL_VERSION
    signature: str = ""

    # -----------------------------
    # SERIALIZATION
    # -----------------------------

    def to_dict(self) -> dict:
        return {
            "f": self.filename,
            "m": self.mode,
            "cs": self.charset,
            "n": self.plaintext_length,
            "h": self.plaintext_hash,
            "ch": self.ciphertext_hash,
            "k": self.step_count,
            "fp": self.sequence_fingerprint,
            "v": self.protocol_version,
        }

    def to_signed_dict(self) -> dict:
        base = self.to_dict()
        if self.signature:
            base["sig"] = self.signature
        return base

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            filename=data["f"],
            mode=data.get("m", MODE_TEXT),
            charset=data["cs"],
            plaintext_length=data["n"],
            plaintext_hash=data["h"],
            ciphertext_hash=data["ch"],
            step_count=data["k"],
            sequence_fingerprint=data["fp"],
            protocol_version=data.get("v", "legacy"),
            signature=data.get("sig", ""),
        )

    # -----------------------------
    # SIGNATURE (RSA)
    # -----------------------------

    def sign(self, private_key_path: str, passphrase: Optional[str] = None):
        self.signature = crypto_utils.sign_metadata(
            self.to_dict(),
            private_key_path,
            passphrase
        )

    def verify_signature(self, public_key_path: str) -> bool:
        if not self.signature:
            return False

        return crypto_utils.verify_metadata_signature(
            self.to_dict(),
            public_key_path,
            self.signature
        )

    # -----------------------------
    # SAVE / LOAD
    # -----------------------------

    def save(self, filepath: str) -> str:
        if not filepath.endswith(".gz"):
            filepath += ".gz"

        with gzip.open(filepath, "wt", encoding="utf-8") as f:
            json.dump(self.to_signed_dict(), f, separators=(",", ":"))

        return filepath

    @classmethod
    def load(cls, filepath: str):
        if not filepath.endswith(".gz") and os.path.exists(filepath + ".gz"):
            filepath += ".gz"

        with gzip.open(filepath, "rt", encoding="utf-8") as f:
            data = json.load(f)

        return cls.from_dict(data)


# ============================================================
# METADATA CREATION
# ============================================================

def create_envelope_metadata(filename: str, mode: str, charset: str,
                             plaintext: str, ciphertext: str,
                             bases: list) -> EnvelopeMetadata:

    return EnvelopeMetadata(
        filename=os.path.basename(filename),
        mode=mode,
        charset=charset,
        plaintext_length=len(plaintext),
        plaintext_hash=payload_hash(plaintext),
        ciphertext_hash=payload_hash(ciphertext),
        step_count=len(bases),
        sequence_fingerprint=sequence_fingerprint(bases),
    )
