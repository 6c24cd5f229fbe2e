"""Discovery of manifest and import file pairs in a directory."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from brokerledger.domain.entities import Manifest
from brokerledger.domain.manifest import load_manifest

logger = logging.getLogger(__name__)

MANIFEST_SUFFIX = ".toml"


@dataclass(frozen=True)
class ImportCandidate:
    """A manifest and the import file it describes."""

    manifest_path: Path
    manifest: Manifest
    import_path: Path


def find_imports(imports_directory: Path) -> list[ImportCandidate]:
    """Find every manifest in a directory and pair it with its import file.

    Manifests are processed in name order. A manifest whose import file is
    missing is logged and skipped.

    Raises:
        StructuralError: If a manifest cannot be parsed
        FileNotFoundError: If the directory does not exist
    """
    if not imports_directory.is_dir():
        raise FileNotFoundError(f"Imports directory not found: {imports_directory}")

    candidates = []
    for manifest_path in sorted(imports_directory.iterdir()):
        if manifest_path.is_dir() or manifest_path.suffix.lower() != MANIFEST_SUFFIX:
            continue

        manifest = load_manifest(manifest_path)
        import_path = _paired_import_file(manifest_path, manifest.platform.file_extension)
        if import_path is None:
            logger.warning(
                "%s exists but %s does not. is platform correct?",
                manifest_path,
                manifest_path.with_suffix(f".{manifest.platform.file_extension}"),
            )
            continue
        candidates.append(ImportCandidate(manifest_path, manifest, import_path))
    return candidates


def _paired_import_file(manifest_path: Path, extension: str) -> Optional[Path]:
    expected = manifest_path.with_suffix(f".{extension}")
    if expected.is_file():
        return expected
    # Exports arrive as .xls, .XLS or .Xls depending on the browser
    for sibling in sorted(manifest_path.parent.iterdir()):
        if (
            sibling.stem == manifest_path.stem
            and sibling.suffix.lower() == f".{extension.lower()}"
            and sibling.is_file()
        ):
            return sibling
    return None
