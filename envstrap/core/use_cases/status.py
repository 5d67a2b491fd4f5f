"""
Status use case — which components are present on this machine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from envstrap.core.components import BootstrapContext, build_components
from envstrap.core.config.loader import ConfigError, find_config_file, load_settings
from envstrap.core.detection import detect_os
from envstrap.core.models.settings import BootstrapSettings


@dataclass
class StatusResult:
    """Presence of every component, plus the resolved file locations."""

    os_name: str = ""
    settings: BootstrapSettings | None = None
    config_path: Path | None = None
    rc_file: Path | None = None
    profile_file: Path | None = None
    components: list[dict] = field(default_factory=list)
    error: str | None = None

    @property
    def present_count(self) -> int:
        return sum(1 for c in self.components if c["present"])

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "os": self.os_name,
            "config_path": str(self.config_path) if self.config_path else None,
            "rc_file": str(self.rc_file),
            "profile_file": str(self.profile_file),
            "components": self.components,
        }


def get_status(config_path: Path | None = None, os_name: str | None = None) -> StatusResult:
    """Probe every component. Read-only."""
    result = StatusResult(
        os_name=os_name or detect_os(),
        config_path=config_path or find_config_file(),
    )

    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    ctx = BootstrapContext.from_settings(settings, os_name=result.os_name)
    result.settings = settings
    result.rc_file = ctx.rc.path
    result.profile_file = ctx.profile.path

    for component in build_components():
        supported = component.supports(ctx.os_name)
        result.components.append({
            "name": component.name,
            "kind": component.kind,
            "critical": component.critical,
            "supported": supported,
            "present": supported and component.is_present(ctx),
        })

    return result
