"""
Project model — everything nativedeps.yml declares.

Paths are relative to the directory holding nativedeps.yml unless
they are absolute.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

from nativedeps.core.models.settings import BuildSettings

# Unity folder GUID of the package's Editor/BuildResources template folder
DEFAULT_TEMPLATE_FOLDER_GUID = "117437286c43f4eeb845c3257f2a8546"

# Module and template names become file names in the staging and
# active directories: no separators, no leading dot.
_FILE_STEM = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$")


def _check_file_stem(value: str, what: str) -> str:
    if not _FILE_STEM.match(value):
        raise ValueError(
            f"{what} '{value}' must use only letters, digits, _ . - and not start with a dot"
        )
    return value


class ProjectPaths(BaseModel):
    """Where the host keeps its assets and plugins."""

    assets: str = "Assets"
    plugin_search_dirs: list[str] = Field(default_factory=lambda: ["Assets", "Packages"])


class HookCommands(BaseModel):
    """Shell commands bound to the external collaborators.

    ``{target}`` and ``{path}`` placeholders are substituted per call,
    shell-quoted, so they must not be wrapped in quotes again.
    An empty command means the hook is not wired up.
    """

    refresh: str = ""
    resolve: str = ""
    enable_plugin: str = ""
    timeout: int = 600


class IOSOptions(BaseModel):
    """iOS template lookup and resolver plugin settings."""

    template_folder: str | None = None
    template_folder_guid: str = DEFAULT_TEMPLATE_FOLDER_GUID
    resolver_plugin: str = "Google.IOSResolver"
    symbol_group: str = "ios"


class AndroidOptions(BaseModel):
    """Android manifest staging settings."""

    resolve_per_module: bool = True


class AndroidPackage(BaseModel):
    """One androidPackage entry of a declared module."""

    spec: str
    repositories: list[str] = Field(default_factory=list)


class ModuleDecl(BaseModel):
    """A feature module declared in nativedeps.yml rather than built in."""

    name: str
    description: str = ""
    enabled_when: str | None = None          # settings flag; None = always on
    platforms: list[str] = Field(default_factory=lambda: ["android", "ios"])
    android_packages: list[AndroidPackage] = Field(default_factory=list)
    ios_templates: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_is_file_stem(cls, value: str) -> str:
        return _check_file_stem(value, "module name")

    @field_validator("ios_templates")
    @classmethod
    def templates_are_file_stems(cls, value: list[str]) -> list[str]:
        return [_check_file_stem(name, "template name") for name in value]


class Project(BaseModel):
    """Root configuration loaded from nativedeps.yml."""

    version: int = 1

    name: str
    description: str = ""

    paths: ProjectPaths = Field(default_factory=ProjectPaths)
    settings: BuildSettings = Field(default_factory=BuildSettings)
    hooks: HookCommands = Field(default_factory=HookCommands)
    ios: IOSOptions = Field(default_factory=IOSOptions)
    android: AndroidOptions = Field(default_factory=AndroidOptions)
    modules: list[ModuleDecl] = Field(default_factory=list)
