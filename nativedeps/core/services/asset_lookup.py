"""
Asset lookup — find host assets by stable identifier or by name.

The iOS template folder is addressed by the GUID recorded in its
``.meta`` file, so the package can move without breaking the lookup.
The iOS resolver plugin is found by name and must be unique.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from nativedeps.core.errors import DuplicateResourceError, MissingResourceError
from nativedeps.core.models.project import Project

logger = logging.getLogger(__name__)

_GUID_LINE = re.compile(r"^guid:\s*([0-9A-Fa-f]+)\s*$", re.MULTILINE)


def _existing_dirs(project_root: Path, search_dirs: Iterable[str]) -> list[Path]:
    dirs = []
    for name in search_dirs:
        path = Path(name)
        path = path if path.is_absolute() else project_root / path
        if path.is_dir():
            dirs.append(path)
    return dirs


def resolve_asset_guid(project_root: Path, guid: str, search_dirs: Iterable[str]) -> Path | None:
    """Path of the asset whose ``.meta`` file records ``guid``, or None."""
    wanted = guid.lower()
    for base in _existing_dirs(project_root, search_dirs):
        for meta in sorted(base.rglob("*.meta")):
            try:
                text = meta.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.debug("Cannot read %s: %s", meta, e)
                continue
            match = _GUID_LINE.search(text)
            if match and match.group(1).lower() == wanted:
                return meta.with_suffix("")
    return None


def resolve_template_folder(project: Project, project_root: Path) -> Path | None:
    """iOS dependency template folder: explicit path first, then by GUID."""
    if project.ios.template_folder:
        folder = Path(project.ios.template_folder)
        return folder if folder.is_absolute() else project_root / folder

    folder = resolve_asset_guid(
        project_root, project.ios.template_folder_guid, project.paths.plugin_search_dirs
    )
    if folder is None:
        logger.debug("No asset with guid %s", project.ios.template_folder_guid)
    return folder


def locate_plugin(project_root: Path, plugin_name: str, search_dirs: Iterable[str]) -> Path:
    """The single ``.dll`` whose file name contains ``plugin_name``.

    Raises:
        MissingResourceError: no candidate found.
        DuplicateResourceError: more than one candidate found.
    """
    candidates = sorted({
        path
        for base in _existing_dirs(project_root, search_dirs)
        for path in base.rglob("*.dll")
        if plugin_name in path.name
    })

    if not candidates:
        raise MissingResourceError(f"Could not locate {plugin_name} plugin.")
    if len(candidates) > 1:
        raise DuplicateResourceError(
            f"There are multiple {plugin_name} plugins detected. "
            f"One is {candidates[0]}, another is {candidates[1]}. Please remove one of them.",
            candidates=[str(c) for c in candidates],
        )
    return candidates[0]
