"""
Bootstrap use case — load settings, build the context, run the pipeline.

The full vertical slice from ``envstrap run`` to a RunReport. Fatal
errors are turned into ``BootstrapResult.error`` so the CLI only has
to render.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from envstrap.adapters.base import Installer
from envstrap.core.components import CUSTOM, BootstrapContext, Component, build_components
from envstrap.core.config.loader import find_config_file, load_settings
from envstrap.core.detection import detect_os
from envstrap.core.engine.orchestrator import RunReport, run_pipeline
from envstrap.core.errors import BootstrapError, ConfigError
from envstrap.core.models.settings import BootstrapSettings

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    """Result of one bootstrap run."""

    report: RunReport | None = None
    settings: BootstrapSettings | None = None
    config_path: Path | None = None
    error: str | None = None
    error_kind: str | None = None
    failed_component: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {
            "config_path": str(self.config_path) if self.config_path else None,
        }
        if self.error:
            result["error"] = {
                "kind": self.error_kind,
                "message": self.error,
                "component": self.failed_component,
            }
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def _check_names(names: Sequence[str], known: list[str], option: str) -> None:
    unknown = [n for n in names if n not in known]
    if unknown:
        raise ConfigError(
            f"Unknown component(s) for {option}: {', '.join(unknown)} "
            f"(known: {', '.join(known)})"
        )


def run_bootstrap(
    config_path: Path | None = None,
    *,
    dry_run: bool = False,
    only: Sequence[str] | None = None,
    skip: Sequence[str] = (),
    installer: Installer | None = None,
    os_name: str | None = None,
    components: list[Component] | None = None,
) -> BootstrapResult:
    """Bring the environment into its configured state.

    Args:
        config_path: Explicit settings file; None searches the defaults.
        dry_run: Report what would change without running installers or
            writing files.
        only: Run just these components.
        skip: Leave these components out.
        installer: Runs install actions (default: ShellInstaller).
        os_name: Platform override (default: detected).
        components: Component list override (default: the built-ins).

    Returns:
        BootstrapResult. ``error`` is set when the run aborted; ``report``
        then holds the steps completed before the abort.
    """
    result = BootstrapResult(config_path=config_path or find_config_file())

    # ── Load settings ────────────────────────────────────────────
    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        result.error = str(e)
        result.error_kind = e.kind
        return result
    result.settings = settings

    if components is None:
        components = build_components()
    known = [c.name for c in components] + [CUSTOM]

    try:
        if only:
            _check_names(only, known, "--only")
        _check_names(list(skip) + settings.skip, known, "skip")
    except ConfigError as e:
        result.error = str(e)
        result.error_kind = e.kind
        return result

    # ── Run ──────────────────────────────────────────────────────
    if installer is None:
        from envstrap.adapters.shell.command import ShellInstaller

        installer = ShellInstaller()

    ctx = BootstrapContext.from_settings(
        settings,
        os_name=os_name or detect_os(),
        dry_run=dry_run,
    )
    logger.debug("Bootstrapping on %s (dry_run=%s)", ctx.os_name, dry_run)

    try:
        result.report = run_pipeline(
            ctx,
            components,
            installer,
            only=list(only) if only else None,
            skip=skip,
        )
    except BootstrapError as e:
        result.report = e.report
        result.error = str(e)
        result.error_kind = e.kind
        result.failed_component = e.component

    return result
