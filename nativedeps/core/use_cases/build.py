"""
Build use cases — pre-build and post-build as separate invocations.

Each call loads nativedeps.yml and the state file, runs one phase of a
BuildSession and writes the active template set back, so a CI job can
run ``prebuild``, the platform build, then ``postbuild``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from nativedeps.adapters.registry import AdapterRegistry
from nativedeps.adapters.shell.command import ShellCommandAdapter
from nativedeps.core.config.loader import find_project_file, load_project, project_root
from nativedeps.core.engine.session import BuildReport, BuildSession
from nativedeps.core.errors import NativeDepsError
from nativedeps.core.models.project import Project
from nativedeps.core.models.settings import BuildTarget
from nativedeps.core.models.state import BuildRecord, BuildState
from nativedeps.core.persistence.state_file import default_state_path, load_state, save_state
from nativedeps.core.services.host import HostBridge

logger = logging.getLogger(__name__)


@dataclass
class BuildContext:
    """Everything loaded for one invocation."""

    project: Project
    state: BuildState
    state_path: Path
    session: BuildSession


@dataclass
class BuildResult:
    """Result of one build phase."""

    project: Project | None = None
    report: BuildReport | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "project": self.project.name if self.project else "",
            "report": self.report.to_dict() if self.report else None,
        }


def default_adapters(mock_mode: bool = False) -> AdapterRegistry:
    """Registry with the shell adapter that runs configured hooks."""
    registry = AdapterRegistry(mock_mode=mock_mode)
    registry.register(ShellCommandAdapter())
    return registry


def open_build_context(
    config_path: Path | None = None,
    adapters: AdapterRegistry | None = None,
    mock_mode: bool = False,
) -> BuildContext:
    """Load config and state and wire a BuildSession.

    Raises:
        ConfigurationError: nativedeps.yml is missing or invalid.
    """
    if config_path is None:
        config_path = find_project_file()
    project = load_project(config_path)
    assert config_path is not None  # load_project raised otherwise
    root = project_root(config_path)

    state_path = default_state_path(root)
    state = load_state(state_path)
    state.project_name = project.name

    host = HostBridge(adapters or default_adapters(mock_mode), project.hooks, project_root=root)
    session = BuildSession.from_project(
        project, root, host, active_templates=state.active_templates
    )
    return BuildContext(project, state, state_path, session)


def _record(ctx: BuildContext, report: BuildReport) -> None:
    ctx.state.active_templates = ctx.session.ios.active_templates
    ctx.state.last_build = BuildRecord(
        target=report.target.value,
        phase=report.phase,
        batch_mode=report.batch_mode,
        started_at=report.started_at,
        ended_at=report.ended_at,
        status=report.status,
        manifests_written=report.android.written if report.android else [],
        templates_activated=report.ios.activated if report.ios else [],
        errors=report.errors,
    )
    save_state(ctx.state, ctx.state_path)


def run_prebuild(
    target: str | BuildTarget,
    config_path: Path | None = None,
    adapters: AdapterRegistry | None = None,
    mock_mode: bool = False,
) -> BuildResult:
    """Reconcile native dependencies before a build of ``target``."""
    result = BuildResult()
    try:
        ctx = open_build_context(config_path, adapters, mock_mode)
        result.project = ctx.project
        result.report = ctx.session.pre_build(BuildTarget.parse(target))
        _record(ctx, result.report)
    except (NativeDepsError, OSError) as e:
        logger.error("Pre-build failed: %s", e)
        result.error = str(e)
    return result


def run_postbuild(
    target: str | BuildTarget,
    batch_mode: bool,
    config_path: Path | None = None,
    adapters: AdapterRegistry | None = None,
    mock_mode: bool = False,
) -> BuildResult:
    """Clean up after a build of ``target`` (batch mode only)."""
    result = BuildResult()
    try:
        ctx = open_build_context(config_path, adapters, mock_mode)
        result.project = ctx.project
        result.report = ctx.session.post_build(BuildTarget.parse(target), batch_mode)
        _record(ctx, result.report)
    except (NativeDepsError, OSError) as e:
        logger.error("Post-build failed: %s", e)
        result.error = str(e)
    return result
