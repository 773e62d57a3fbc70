"""Reading and updating the project manifest (pubspec.yaml)."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from change_project_name.core.errors import ManifestNotFound, ValidationError
from change_project_name.utils.files import read_text, write_text

logger = logging.getLogger(__name__)

NAME_FIELD_PREFIX = "name: "


def read_manifest_name(manifest_path: Path) -> str:
    """Return the project name declared in the manifest.

    Raises:
        ManifestNotFound: If the manifest does not exist
        ValidationError: If the manifest is not valid YAML or has no name
    """
    if not manifest_path.is_file():
        raise ManifestNotFound(manifest_path)

    try:
        data = yaml.safe_load(read_text(manifest_path))
    except yaml.YAMLError as e:
        raise ValidationError(f"Could not parse {manifest_path}: {e}") from e

    name = data.get("name") if isinstance(data, dict) else None
    if name is None or str(name).strip() == "":
        raise ValidationError(f'Could not find "name" in {manifest_path}')
    return str(name).strip()


def update_manifest_name(
    manifest_path: Path,
    old_name: str,
    new_name: str,
    dry_run: bool = False,
) -> bool:
    """Rewrite the manifest's ``name:`` declaration.

    Only the first ``name: <old_name>`` is replaced; later occurrences (for
    example under dependencies) are left alone.

    Args:
        manifest_path: Path to the manifest
        old_name: Current project name
        new_name: New project name
        dry_run: Decide without writing

    Returns:
        True if the declaration was found (and, unless dry run, rewritten)

    Raises:
        ManifestNotFound: If the manifest does not exist
    """
    if not manifest_path.is_file():
        raise ManifestNotFound(manifest_path)

    content = read_text(manifest_path)
    old_field = f"{NAME_FIELD_PREFIX}{old_name}"
    if old_field not in content:
        logger.warning(f'"{old_field}" not found in {manifest_path}, manifest left unchanged')
        return False

    if not dry_run:
        write_text(manifest_path, content.replace(old_field, f"{NAME_FIELD_PREFIX}{new_name}", 1))
        logger.debug(f"Wrote {manifest_path}")
    return True
