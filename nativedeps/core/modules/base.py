"""
Dependent module contract — what a feature module can tell the reconcilers.

A module answers three questions: is it enabled for this build, what
Android packages does it need, and which iOS dependency templates does
it need. Modules have no state; the registry builds them fresh.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from collections.abc import Iterable

from nativedeps.core.models.settings import BuildSettings, BuildTarget


def android_package_snippet(spec: str, repositories: Iterable[str] = ()) -> str:
    """Render one ``<androidPackage>`` element for a package coordinate.

    The coordinate is opaque; it is only attribute-escaped.
    """
    package = ET.Element("androidPackage", {"spec": spec})
    repos = list(repositories)
    if repos:
        container = ET.SubElement(package, "repositories")
        for url in repos:
            ET.SubElement(container, "repository").text = url
    return ET.tostring(package, encoding="unicode")


class DependentModule(ABC):
    """A feature unit that may pull native dependencies into the build."""

    @property
    def name(self) -> str:
        """Stable identifier; also names the module's Android manifest file."""
        return type(self).__name__

    @abstractmethod
    def is_enabled(self, settings: BuildSettings, target: BuildTarget) -> bool:
        """Whether the module takes part in a build for ``target``."""

    def android_dependencies_snippet(self, settings: BuildSettings) -> str:
        """Inner ``<androidPackages>`` markup, or "" when none is needed."""
        return ""

    def ios_dependency_template_names(self) -> list[str]:
        """Names of the iOS dependency templates this module needs."""
        return []

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
