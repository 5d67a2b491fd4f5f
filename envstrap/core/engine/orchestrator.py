"""
Orchestrator — the fixed, strictly sequential bootstrap pipeline.

Per component:

    select → check tools → is_present → install → activate → registrations

Install failures of non-critical components are recorded and the
pipeline moves on. Three things abort the run: a missing tool or an
unavailable installer on a critical component (PreconditionError), a
failed critical install (InstallError) and any I/O error on a
configuration file (ConfigIOError). The aborting error carries the
partial report.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from envstrap.adapters.base import Installer
from envstrap.core.components import CUSTOM
from envstrap.core.components.base import BootstrapContext, Component, Registration
from envstrap.core.detection import missing_commands
from envstrap.core.errors import (
    BootstrapError,
    ConfigIOError,
    InstallError,
    PreconditionError,
)
from envstrap.core.models.action import Receipt
from envstrap.core.textedit.primitives import EnsureResult

logger = logging.getLogger(__name__)


@dataclass
class ComponentResult:
    """What happened to one component during a run."""

    name: str
    kind: str = ""
    critical: bool = False
    receipt: Receipt | None = None
    skip_reason: str | None = None        # whole component skipped
    was_present: bool = False
    present: bool = False
    entries: list[EnsureResult] = field(default_factory=list)
    config_skipped: list[str] = field(default_factory=list)   # gated entries held back

    @property
    def status(self) -> str:
        if self.skip_reason:
            return "skipped"
        if self.receipt is not None and self.receipt.failed:
            return "failed"
        return "ok"

    @property
    def changed_entries(self) -> list[EnsureResult]:
        return [e for e in self.entries if e.changed]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "kind": self.kind,
            "critical": self.critical,
            "status": self.status,
            "skip_reason": self.skip_reason,
            "was_present": self.was_present,
            "present": self.present,
            "receipt": self.receipt.model_dump(mode="json") if self.receipt else None,
            "entries": [e.to_dict() for e in self.entries],
            "config_skipped": list(self.config_skipped),
        }


@dataclass
class RunReport:
    """Ordered per-component results of one pipeline run."""

    os_name: str
    dry_run: bool = False
    results: list[ComponentResult] = field(default_factory=list)

    def get(self, name: str) -> ComponentResult | None:
        for result in self.results:
            if result.name == name:
                return result
        return None

    @property
    def failed(self) -> list[str]:
        return [r.name for r in self.results if r.status == "failed"]

    @property
    def changed(self) -> int:
        return sum(len(r.changed_entries) for r in self.results)

    @property
    def status(self) -> str:
        return "partial" if self.failed else "ok"

    def to_dict(self) -> dict:
        return {
            "os": self.os_name,
            "dry_run": self.dry_run,
            "status": self.status,
            "failed": self.failed,
            "changed": self.changed,
            "components": [r.to_dict() for r in self.results],
        }


# ── Steps ───────────────────────────────────────────────────────


def _skip_reason(
    component: Component,
    ctx: BootstrapContext,
    only: set[str] | None,
    excluded: set[str],
) -> str | None:
    if not component.supports(ctx.os_name):
        return f"Unsupported OS for {component.kind} install: {ctx.os_name}"
    if only is not None and component.name not in only:
        return "not selected"
    if component.name in excluded:
        return "excluded by configuration"
    return None


def _apply(
    ctx: BootstrapContext,
    registration: Registration,
    component: str,
) -> EnsureResult:
    file = ctx.file(registration.file)
    try:
        return registration.entry.ensure(file, dry_run=ctx.dry_run)
    except OSError as e:
        raise ConfigIOError(f"Cannot update {file.path}: {e}", component=component) from e


def _install(
    component: Component,
    ctx: BootstrapContext,
    installer: Installer,
) -> Receipt:
    action_id = f"{component.name}:install"

    if ctx.dry_run:
        commands = [a.command_text for a in component.planned_actions(ctx)]
        for command in commands:
            logger.info("[dry-run] Would run: %s", command)
        return Receipt.skip(
            installer=installer.name,
            action_id=action_id,
            reason="would install",
            metadata={"commands": commands},
        )

    logger.info("Installing %s", component.name)
    try:
        return component.install(ctx, installer)
    except OSError as e:
        # prepare() could not create a directory
        return Receipt.failure(installer=installer.name, action_id=action_id, error=str(e))


def run_component(
    component: Component,
    ctx: BootstrapContext,
    installer: Installer,
) -> ComponentResult:
    """Run one component through check → install → registrations."""
    result = ComponentResult(
        name=component.name,
        kind=component.kind,
        critical=component.critical,
    )
    result.was_present = component.is_present(ctx)
    installing = not result.was_present

    missing = missing_commands(component.required_tools(ctx, installing=installing))
    if missing:
        message = f"{component.name}: required command not found: {', '.join(missing)}"
    elif installing and not ctx.dry_run and not installer.is_available():
        message = f"{component.name}: installer {installer.name!r} is not available"
    else:
        message = None

    if message:
        if component.critical:
            raise PreconditionError(message, component=component.name)
        logger.warning(message)
        result.receipt = Receipt.failure(
            installer=installer.name,
            action_id=f"{component.name}:install",
            error=message,
            metadata={"missing": missing},
        )
        installing = False
    elif result.was_present:
        logger.info("%s already installed", component.name)
        result.receipt = Receipt.skip(
            installer=installer.name,
            action_id=f"{component.name}:install",
            reason="already installed",
        )
    else:
        result.receipt = _install(component, ctx, installer)
        if result.receipt.failed:
            message = f"{component.name} install failed: {result.receipt.error}"
            if component.critical:
                raise InstallError(message, component=component.name)
            logger.warning(message)

    if ctx.dry_run:
        result.present = result.was_present
        # gated entries are previewed when an install would be attempted
        gate_open = result.present or installing
    else:
        result.present = component.is_present(ctx)
        gate_open = result.present

    if result.present:
        component.activate(ctx)

    for registration in component.registrations(ctx):
        if registration.gated and not gate_open:
            described = registration.entry.describe()
            logger.info("%s not installed; leaving out %s", component.name, described)
            result.config_skipped.append(described)
            continue
        result.entries.append(_apply(ctx, registration, component.name))

    return result


def _ensure_config_files(ctx: BootstrapContext) -> None:
    for file in (ctx.rc, ctx.profile):
        try:
            file.ensure_exists()
        except OSError as e:
            raise ConfigIOError(f"Cannot create {file.path}: {e}") from e


def _apply_custom(ctx: BootstrapContext) -> ComponentResult:
    result = ComponentResult(name=CUSTOM, kind=CUSTOM, was_present=True, present=True)
    for custom in ctx.settings.extra_entries:
        registration = Registration(custom.file, custom.entry)
        result.entries.append(_apply(ctx, registration, CUSTOM))
    return result


def run_pipeline(
    ctx: BootstrapContext,
    components: Sequence[Component],
    installer: Installer,
    *,
    only: Iterable[str] | None = None,
    skip: Iterable[str] = (),
) -> RunReport:
    """Run every component in order and return the report.

    Args:
        ctx: Settings, platform and config file handles.
        components: Components in execution order.
        installer: Runs install actions.
        only: If given, run just these components (others are skipped).
        skip: Component names to leave out, on top of ``settings.skip``.

    Raises:
        BootstrapError: On a fatal error; ``error.report`` holds the
            results gathered up to that point.
    """
    report = RunReport(os_name=ctx.os_name, dry_run=ctx.dry_run)
    selected = set(only) if only is not None else None
    excluded = set(skip) | set(ctx.settings.skip)

    try:
        if not ctx.dry_run:
            _ensure_config_files(ctx)

        for component in components:
            reason = _skip_reason(component, ctx, selected, excluded)
            if reason:
                logger.info("Skipping %s: %s", component.name, reason)
                report.results.append(
                    ComponentResult(
                        name=component.name,
                        kind=component.kind,
                        critical=component.critical,
                        skip_reason=reason,
                        receipt=Receipt.skip(
                            installer=installer.name,
                            action_id=f"{component.name}:install",
                            reason=reason,
                        ),
                    )
                )
                continue
            report.results.append(run_component(component, ctx, installer))

        wants_custom = (selected is None or CUSTOM in selected) and CUSTOM not in excluded
        if ctx.settings.extra_entries and wants_custom:
            report.results.append(_apply_custom(ctx))
    except BootstrapError as e:
        logger.error("Aborting: %s", e)
        e.report = report
        raise

    logger.info(
        "Pipeline finished: %s (%d config change(s))", report.status, report.changed
    )
    return report
