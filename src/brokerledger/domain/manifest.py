"""Manifest descriptor parsing."""

import logging
import tomllib
from pathlib import Path
from typing import Any, Optional

from brokerledger.domain.entities import AccountKind, AccountMetadata, Manifest, Platform
from brokerledger.domain.errors import StructuralError

logger = logging.getLogger(__name__)


def load_manifest(manifest_path: Path) -> Manifest:
    """Read and parse a manifest file.

    Raises:
        StructuralError: If the file cannot be read or decoded
    """
    try:
        text = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StructuralError(f"Could not read manifest: {e}", path=manifest_path) from e
    return parse_manifest(text, source=manifest_path)


def parse_manifest(text: str, source: Optional[Path] = None) -> Manifest:
    """Parse manifest TOML text.

    Expected shape::

        sha256sum = "<hex digest>"
        platform = "vanguard_uk"

        [[accounts]]
        id = "VG123"
        label = "Stocks and shares"
        kind = "isa"

    Args:
        text: Manifest contents
        source: Path the text was read from, used in error messages

    Returns:
        Manifest

    Raises:
        StructuralError: If the text is not valid TOML or does not have the
            expected fields
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise StructuralError(f"Manifest is not valid TOML: {e}", path=source) from e

    sha256sum = _required_string(data, "sha256sum", source)
    platform_tag = _required_string(data, "platform", source)
    platform = Platform.from_id(platform_tag)
    if platform is None:
        raise StructuralError(f"Unknown platform '{platform_tag}'", path=source)

    raw_accounts = data.get("accounts", [])
    if not isinstance(raw_accounts, list):
        raise StructuralError("Manifest field 'accounts' must be a list", path=source)

    accounts = []
    seen_ids = set()
    for index, entry in enumerate(raw_accounts):
        if not isinstance(entry, dict):
            raise StructuralError(f"Manifest accounts[{index}] must be a table", path=source)
        metadata = _parse_account_metadata(entry, index, source)
        if metadata.id in seen_ids:
            raise StructuralError(
                f"Manifest declares account {metadata.id} more than once", path=source
            )
        seen_ids.add(metadata.id)
        accounts.append(metadata)

    logger.debug("parsed manifest for %s with %d account overrides", platform.id, len(accounts))
    return Manifest(
        sha256sum=sha256sum.strip().lower(),
        platform=platform,
        accounts=tuple(accounts),
    )


def _parse_account_metadata(entry: dict[str, Any], index: int, source: Optional[Path]) -> AccountMetadata:
    prefix = f"accounts[{index}]."
    account_id = _required_string(entry, "id", source, prefix)
    label = _required_string(entry, "label", source, prefix)
    kind_tag = _required_string(entry, "kind", source, prefix)
    kind = AccountKind.from_id(kind_tag)
    if kind is None:
        raise StructuralError(f"Unknown account kind '{kind_tag}' for {account_id}", path=source)
    return AccountMetadata(id=account_id, label=label, kind=kind)


def _required_string(data: dict[str, Any], key: str, source: Optional[Path], prefix: str = "") -> str:
    if key not in data:
        raise StructuralError(f"Manifest is missing required field '{prefix}{key}'", path=source)
    value = data[key]
    if not isinstance(value, str):
        raise StructuralError(f"Manifest field '{prefix}{key}' must be a string", path=source)
    return value
