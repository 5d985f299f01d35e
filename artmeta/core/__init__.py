"""Manifest generation and verification engine."""

from artmeta.core.assembler import ManifestAssembler
from artmeta.core.certificate import locate_certificate
from artmeta.core.classifier import bucket_files, classify, format_label
from artmeta.core.hasher import ContentHasher, HashOutcome, hash_bytes, hash_file
from artmeta.core.ignore_rules import should_ignore
from artmeta.core.manifest_io import (
    ManifestParseError,
    fingerprint_manifest,
    load_manifest,
    manifest_filename,
    write_manifest,
)
from artmeta.core.verifier import ManifestVerifier

__all__ = [
    "ManifestAssembler",
    "ManifestVerifier",
    "ContentHasher",
    "HashOutcome",
    "hash_bytes",
    "hash_file",
    "should_ignore",
    "classify",
    "format_label",
    "bucket_files",
    "locate_certificate",
    "ManifestParseError",
    "load_manifest",
    "write_manifest",
    "manifest_filename",
    "fingerprint_manifest",
]
