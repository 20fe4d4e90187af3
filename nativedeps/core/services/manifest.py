"""
Android manifest synthesis.

A module supplies only the inner ``<androidPackage>`` markup. It is
wrapped in the fixed ``<dependencies><androidPackages>`` document and
fully parsed before anything is written, so malformed snippets never
reach the staging directory.
"""

from __future__ import annotations

import textwrap
import xml.etree.ElementTree as ET
from pathlib import Path

from nativedeps.core.errors import ConfigurationError
from nativedeps.core.models.settings import BuildSettings
from nativedeps.core.modules.base import DependentModule

ANDROID_MANIFEST_SUFFIX = "Dependencies.xml"

_MANIFEST_TEMPLATE = "<dependencies><androidPackages>{snippet}</androidPackages></dependencies>"
_MANIFEST_LAYOUT = "<dependencies>\n  <androidPackages>\n{body}\n  </androidPackages>\n</dependencies>\n"


def manifest_file_name(module_name: str) -> str:
    """``GeospatialModule`` -> ``GeospatialModuleDependencies.xml``."""
    return f"{module_name}{ANDROID_MANIFEST_SUFFIX}"


def synthesize(module: DependentModule, settings: BuildSettings) -> str:
    """The module's Android snippet, or "" when it declares none.

    Raises:
        ConfigurationError: the module failed to produce a snippet.
    """
    try:
        snippet = module.android_dependencies_snippet(settings)
    except ConfigurationError:
        raise
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Module {module.name} failed to build its snippet: {e}") from e

    if snippet is None:
        return ""
    if not isinstance(snippet, str):
        raise ConfigurationError(
            f"Module {module.name} returned {type(snippet).__name__}, expected markup text"
        )
    return snippet.strip()


def render_manifest(snippet: str) -> str:
    """Wrap a snippet in the manifest document.

    The parse only validates. The snippet text itself is written, one
    indentation level per line, so comments, processing instructions and
    namespace prefixes survive.

    Raises:
        ConfigurationError: the wrapped document is not well-formed XML.
    """
    document = _MANIFEST_TEMPLATE.format(snippet=snippet)
    try:
        ET.fromstring(document)
    except ET.ParseError as e:
        raise ConfigurationError(f"Dependency snippet is not well-formed XML: {e}") from e

    return _MANIFEST_LAYOUT.format(body=textwrap.indent(snippet.strip(), "    "))


def read_manifest_specs(path: Path) -> list[str]:
    """Package coordinates declared in a written manifest, in file order."""
    root = ET.parse(path).getroot()
    return [pkg.get("spec", "") for pkg in root.iter("androidPackage")]
