"""Run configuration for report generation."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

ENV_PREFIX = "TASK_REPORT_"


@dataclass(frozen=True)
class ReportConfig:
    input_dir: str = "csvs1"
    task_actions_file: str = "useravailability.csv"
    task_history_file: str = "taskhistories.csv"
    users_file: str = "users.csv"
    auto_assignments_file: str = "gcp.json"
    open_times_file: str = "assigntome.csv"
    screen_opens_file: str = "openCambridgeTime.csv"
    report_out: str = "task_performance_report.csv"
    analysis_out: str = "auto_task_open_analysis.csv"
    log_level: str = "INFO"

    def source_path(self, name: str) -> Path:
        return Path(self.input_dir) / getattr(self, f"{name}_file")


def load_settings(path: str | None) -> dict[str, Any]:
    """Read a YAML or JSON settings file; no path means no settings."""

    if not path:
        return {}
    content = Path(path).read_text(encoding="utf-8")
    if path.endswith(".json"):
        data = json.loads(content)
    else:
        data = yaml.safe_load(content)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: settings must be a mapping")
    return data


def _from_env(env: Mapping[str, str]) -> dict[str, str]:
    values = {}
    for item in fields(ReportConfig):
        key = ENV_PREFIX + item.name.upper()
        if env.get(key):
            values[item.name] = env[key]
    return values


def load_config(settings_path: str | None = None, env: Mapping[str, str] | None = None, **overrides: Any) -> ReportConfig:
    """Layer defaults, settings file, TASK_REPORT_* variables and explicit overrides."""

    known = {item.name for item in fields(ReportConfig)}
    settings = load_settings(settings_path)
    unknown = sorted(set(settings) - known)
    if unknown:
        raise ValueError(f"Unknown settings: {unknown}")

    config = replace(ReportConfig(), **settings)
    config = replace(config, **_from_env(os.environ if env is None else env))
    return replace(config, **{k: v for k, v in overrides.items() if v is not None})
