"""Tests for import file fingerprint validation."""

import hashlib

import pytest

from brokerledger.domain.errors import IntegrityError, StructuralError
from brokerledger.domain.integrity import CHUNK_SIZE, file_sha256, validate_checksum


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "export.Xls"
    # Larger than one read chunk so the whole file must be consumed
    path.write_bytes(bytes(range(256)) * (CHUNK_SIZE // 128))
    return path


def test_file_sha256_matches_hashlib(sample_file):
    assert file_sha256(sample_file) == hashlib.sha256(sample_file.read_bytes()).hexdigest()


def test_validate_checksum_accepts_match(sample_file):
    expected = hashlib.sha256(sample_file.read_bytes()).hexdigest()
    assert validate_checksum(sample_file, expected) == expected


def test_validate_checksum_accepts_uppercase_declaration(sample_file):
    expected = hashlib.sha256(sample_file.read_bytes()).hexdigest()
    validate_checksum(sample_file, expected.upper())


def test_mismatch_carries_both_digests(sample_file):
    actual = hashlib.sha256(sample_file.read_bytes()).hexdigest()

    with pytest.raises(IntegrityError) as excinfo:
        validate_checksum(sample_file, "0" * 64)

    assert excinfo.value.expected == "0" * 64
    assert excinfo.value.actual == actual
    assert excinfo.value.path == sample_file
    assert actual in str(excinfo.value)


@pytest.mark.parametrize("offset", [0, CHUNK_SIZE, -1])
def test_single_byte_mutation_fails(sample_file, offset):
    expected = file_sha256(sample_file)
    data = bytearray(sample_file.read_bytes())
    data[offset] ^= 0x01
    sample_file.write_bytes(bytes(data))

    with pytest.raises(IntegrityError):
        validate_checksum(sample_file, expected)


def test_missing_file(tmp_path):
    with pytest.raises(StructuralError, match="Could not read import file"):
        file_sha256(tmp_path / "absent.Xls")
