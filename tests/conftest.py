"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from nativedeps.adapters.mock import MockAdapter
from nativedeps.adapters.registry import AdapterRegistry
from nativedeps.core.services.host import HostBridge
from tests.fakes import TEMPLATE_GUID, write_template


@pytest.fixture
def mock_adapter() -> MockAdapter:
    """Recording stand-in for every host hook."""
    return MockAdapter()


@pytest.fixture
def adapters(mock_adapter: MockAdapter) -> AdapterRegistry:
    registry = AdapterRegistry()
    registry.set_mock_mode(True, mock_adapter)
    return registry


@pytest.fixture
def host(adapters: AdapterRegistry, tmp_path: Path) -> HostBridge:
    return HostBridge(adapters, project_root=tmp_path)


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    path = tmp_path / "Assets"
    path.mkdir()
    return path


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Package template folder, registered under TEMPLATE_GUID."""
    editor = tmp_path / "Packages" / "com.example.extensions" / "Editor"
    folder = editor / "BuildResources"
    folder.mkdir(parents=True)
    (editor / "BuildResources.meta").write_text(
        f"fileFormatVersion: 2\nguid: {TEMPLATE_GUID}\nfolderAsset: yes\n"
    )
    return folder


@pytest.fixture
def project_file(tmp_path: Path, assets_dir: Path, template_dir: Path) -> Path:
    """nativedeps.yml with Geospatial + Cloud Anchors on and iOS support on."""
    for name in (
        "ARCoreiOSDependencies",
        "ARCoreiOSCloudAnchorDependencies",
        "ARCoreiOSGeospatialDependencies",
        "ARCoreiOSSemanticsDependencies",
    ):
        write_template(template_dir, name)

    content = textwrap.dedent("""\
        name: ar-sample
        settings:
          ios_support_enabled: true
          cloud_anchor_enabled: true
          geospatial_enabled: true
          android_authentication: keyless
        ios:
          resolver_plugin: ""
        modules:
          - name: Analytics
            enabled_when: analytics
            platforms: [android]
            android_packages:
              - spec: "com.example:analytics:1.2.0"
                repositories: ["https://maven.example.com"]
    """)
    path = tmp_path / "nativedeps.yml"
    path.write_text(content)
    return path
