#!/usr/bin/env python3
"""
Base Chain command-line tool

Commands:
- encrypt: chain a file's payload through a base sequence read from a key file
- decrypt: run the chain backwards
- convert: convert one number between two bases
- info: print an envelope metadata file
- keygen: create an RSA key pair for signing envelope metadata
"""

import os
import sys
import string
import argparse
from typing import List, Optional

import binary_encoder
import chain_pipeline
import crypto_utils
import envelope
from base_converter import checked_convert
from digits import MalformedBaseSequence, resolve_charset

DEFAULT_CHARSET_NAME = "default"
PASSPHRASE_ENV = "BASE_CHAIN_PASSPHRASE"


class BaseChain:
    """Main class for file encryption operations."""

    def __init__(self, charset: str = DEFAULT_CHARSET_NAME, verbose: bool = True):
        self.charset_label = charset
        self.charset = resolve_charset(charset)
        self.verbose = verbose

    def log(self, message: str, level: str = "INFO"):
        if self.verbose:
            print(f"[{level}] {message}")

    def warn_or_fail(self, message: str, strict: bool):
        if strict:
            raise RuntimeError(message)
        self.log(f"WARNING: {message}", "WARNING")

    # ============================================================
    # INPUT / OUTPUT
    # ============================================================

    def read_payload(self, path: str) -> str:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()

        # The space may be a digit of the charset; only strip the others
        blank = "".join(c for c in string.whitespace if c not in self.charset)
        return text.strip(blank)

    def write_payload(self, path: str, payload: str):
        with open(path, "w", encoding="utf-8") as f:
            f.write(payload)

    def load_bases(self, key_path: str, strict: bool = False) -> List[int]:
        if not os.path.exists(key_path):
            raise FileNotFoundError(f"Key file not found: {key_path}")

        with open(key_path, "r", encoding="utf-8") as f:
            bases = chain_pipeline.parse_base_sequence(f.read())

        if not bases:
            message = f"No bases found in {key_path}"
            if strict:
                raise MalformedBaseSequence(message)
            self.log(f"{message}; payload passes through unchanged", "WARNING")

        return bases

    # ============================================================
    # ENCRYPT
    # ============================================================

    def encrypt_file(self, input_path: str, output_path: str, key_path: str,
                     metadata_output: Optional[str] = None,
                     private_key_path: Optional[str] = None,
                     passphrase: Optional[str] = None,
                     binary: bool = False,
                     compress: bool = True,
                     strict: bool = False) -> str:

        if not os.path.exists(input_path):
            raise FileNotFoundError(f"File not found: {input_path}")

        self.log("=" * 60)
        self.log(f"ENCRYPTING: {input_path}")
        self.log("=" * 60)

        bases = self.load_bases(key_path, strict=strict)

        if binary:
            with open(input_path, "rb") as f:
                raw = f.read()
            estimate = binary_encoder.estimate_encoded_size(len(raw), self.charset)
            overhead = binary_encoder.calculate_overhead(self.charset)
            self.log(
                f"Estimated size: ~{estimate:,} symbols uncompressed "
                f"({overhead:.2f} symbols/byte)"
            )
            plaintext = binary_encoder.encode_bytes(raw, self.charset, compress=compress)
            self.log(f"Size: {len(raw):,} bytes -> {len(plaintext):,} symbols")
        else:
            plaintext = self.read_payload(input_path)
            self.log(f"Size: {len(plaintext):,} symbols")

        self.log(f"Steps: {len(bases)}")

        result = chain_pipeline.encrypt(plaintext, bases, self.charset)
        if not result.ok:
            raise result.error

        with_metadata = bool(metadata_output or private_key_path)

        if (not plaintext or plaintext[0] == self.charset[0]) and not with_metadata:
            self.log(
                "WARNING: payload starts with the zero-digit symbol; "
                "it will not survive decryption without metadata",
                "WARNING"
            )

        self.write_payload(output_path, result.payload)
        self.log(f"Ciphertext: {len(result.payload):,} symbols -> {output_path}")

        if with_metadata:
            metadata = envelope.create_envelope_metadata(
                input_path,
                envelope.MODE_BINARY if binary else envelope.MODE_TEXT,
                self.charset_label,
                plaintext,
                result.payload,
                bases,
            )

            if private_key_path:
                self.log("Signing metadata (RSA)...")
                metadata.sign(private_key_path, passphrase)

            saved = metadata.save(
                metadata_output or envelope.metadata_path_for(output_path)
            )
            self.log(f"Metadata saved to {saved}")

        return result.payload

    # ============================================================
    # DECRYPT
    # ============================================================

    def decrypt_file(self, input_path: str, output_path: str, key_path: str,
                     metadata_path: Optional[str] = None,
                     public_key_path: Optional[str] = None,
                     binary: bool = False,
                     strict: bool = False) -> bool:

        if not os.path.exists(input_path):
            raise FileNotFoundError(f"File not found: {input_path}")

        self.log("=" * 60)
        self.log(f"DECRYPTING: {input_path}")
        self.log("=" * 60)

        metadata = None
        if metadata_path:
            metadata = envelope.EnvelopeMetadata.load(metadata_path)

        if public_key_path:
            if metadata is None:
                raise RuntimeError("Signature verification requires --metadata")
            self.log("Verifying metadata signature...")
            if not metadata.verify_signature(public_key_path):
                raise RuntimeError("Invalid metadata digital signature.")
            self.log("✓ Signature verified")

        bases = self.load_bases(key_path, strict=strict)
        ciphertext = self.read_payload(input_path)

        if metadata:
            binary = binary or metadata.mode == envelope.MODE_BINARY

            if resolve_charset(metadata.charset) != self.charset:
                self.warn_or_fail("Charset differs from the one recorded in metadata", strict)

            if envelope.sequence_fingerprint(bases) != metadata.sequence_fingerprint:
                self.warn_or_fail("Base sequence does not match metadata fingerprint", strict)

            if envelope.payload_hash(ciphertext) != metadata.ciphertext_hash:
                self.warn_or_fail("Ciphertext SHA256 mismatch", strict)

        self.log(f"Steps: {len(bases)}")

        result = chain_pipeline.decrypt(ciphertext, bases, self.charset)
        if not result.ok:
            raise result.error

        plaintext = result.payload

        if metadata:
            plaintext = chain_pipeline.restore_leading_zeros(
                plaintext, metadata.plaintext_length, self.charset
            )

            if envelope.payload_hash(plaintext) != metadata.plaintext_hash:
                self.warn_or_fail("Plaintext SHA256 mismatch", strict)
            else:
                self.log("✓ Plaintext SHA256 verified")

        if binary:
            data = binary_encoder.decode_payload(plaintext, self.charset)
            with open(output_path, "wb") as f:
                f.write(data)
            self.log(f"Recovered {len(data):,} bytes -> {output_path}")
        else:
            self.write_payload(output_path, plaintext)
            self.log(f"Recovered {len(plaintext):,} symbols -> {output_path}")

        return True

    # ============================================================
    # CONVERT
    # ============================================================

    def convert_number(self, number: str, base_from: int, base_to: int) -> str:
        result = checked_convert(number, base_from, base_to, self.charset)

        print(
            f"Number: {number}, Base from: {base_from}, "
            f"Base to: {base_to}, Result: {result}"
        )

        return result

    # ============================================================
    # INFO
    # ============================================================

    def show_metadata(self, metadata_path: str):

        metadata = envelope.EnvelopeMetadata.load(metadata_path)

        print("\n" + "=" * 60)
        print("ENVELOPE INFORMATION")
        print("=" * 60)
        print(f"Filename: {metadata.filename}")
        print(f"Mode: {metadata.mode}")
        print(f"Charset: {metadata.charset}")
        print(f"Plaintext length: {metadata.plaintext_length:,} symbols")
        print(f"Plaintext SHA256: {metadata.plaintext_hash}")
        print(f"Ciphertext SHA256: {metadata.ciphertext_hash}")
        print(f"Steps: {metadata.step_count}")
        print(f"Sequence fingerprint: {metadata.sequence_fingerprint}")
        print(f"Protocol: {metadata.protocol_version}")
        print(f"Signed: {'yes' if metadata.signature else 'no'}")
        print("=" * 60 + "\n")

        return metadata


# ============================================================
# CLI
# ============================================================

def build_parser() -> argparse.ArgumentParser:

    parser = argparse.ArgumentParser(
        description="Base Chain - chained numeral base conversion"
    )
    parser.add_argument(
        "--charset",
        default=DEFAULT_CHARSET_NAME,
        help="charset name (default, printable) or a literal alphabet"
    )
    parser.add_argument("--quiet", action="store_true")

    subparsers = parser.add_subparsers(dest="command")

    # Encrypt
    encrypt_parser = subparsers.add_parser("encrypt")
    encrypt_parser.add_argument("input")
    encrypt_parser.add_argument("output")
    encrypt_parser.add_argument("--key", required=True)
    encrypt_parser.add_argument("--metadata")
    encrypt_parser.add_argument("--privkey")
    encrypt_parser.add_argument("--passphrase", default=os.environ.get(PASSPHRASE_ENV))
    encrypt_parser.add_argument("--binary", action="store_true")
    encrypt_parser.add_argument("--no-compress", action="store_true")
    encrypt_parser.add_argument("--strict", action="store_true")

    # Decrypt
    decrypt_parser = subparsers.add_parser("decrypt")
    decrypt_parser.add_argument("input")
    decrypt_parser.add_argument("output")
    decrypt_parser.add_argument("--key", required=True)
    decrypt_parser.add_argument("--metadata")
    decrypt_parser.add_argument("--pubkey")
    decrypt_parser.add_argument("--binary", action="store_true")
    decrypt_parser.add_argument("--strict", action="store_true")

    # Single number conversion
    convert_parser = subparsers.add_parser("convert")
    convert_parser.add_argument("number")
    convert_parser.add_argument("base_from", type=int)
    convert_parser.add_argument("base_to", type=int)

    # Info
    info_parser = subparsers.add_parser("info")
    info_parser.add_argument("metadata")

    # Keys
    keygen_parser = subparsers.add_parser("keygen")
    keygen_parser.add_argument("--private", default="private.pem")
    keygen_parser.add_argument("--public", default="public.pem")
    keygen_parser.add_argument("--key-size", type=int, default=crypto_utils.KEY_SIZE)
    keygen_parser.add_argument("--passphrase", default=os.environ.get(PASSPHRASE_ENV))

    return parser


def main(argv=None):

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    try:
        tool = BaseChain(charset=args.charset, verbose=not args.quiet)

        if args.command == "encrypt":
            tool.encrypt_file(
                args.input,
                args.output,
                args.key,
                metadata_output=args.metadata,
                private_key_path=args.privkey,
                passphrase=args.passphrase,
                binary=args.binary,
                compress=not args.no_compress,
                strict=args.strict
            )

        elif args.command == "decrypt":
            success = tool.decrypt_file(
                args.input,
                args.output,
                args.key,
                metadata_path=args.metadata,
                public_key_path=args.pubkey,
                binary=args.binary,
                strict=args.strict
            )
            sys.exit(0 if success else 1)

        elif args.command == "convert":
            tool.convert_number(args.number, args.base_from, args.base_to)

        elif args.command == "info":
            tool.show_metadata(args.metadata)

        elif args.command == "keygen":
            crypto_utils.generate_keys(
                args.private,
                args.public,
                args.key_size,
                passphrase=args.passphrase
            )
            tool.log(f"Keys written to {args.private} and {args.public}")

    except Exception as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
