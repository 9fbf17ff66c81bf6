from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import yaml


@dataclass(frozen=True)
class Settings:
    # API
    api_base_url: str | None = None
    timeout_seconds: float = 20.0
    retries: int = 3
    retry_backoff_seconds: float = 0.5
    tls_skip_verify: bool = False
    ca_file: str | None = None

    # Paths
    log_dir: str = "./logs"
    report_dir: str = "./reports"

    # Logging
    log_level: str = "INFO"


@dataclass(frozen=True)
class LoadedSettings:
    settings: Settings
    sources_used: list[str]


ENV_NAMES: dict[str, str] = {
    "api_base_url": "ROSTER_API_BASE_URL",
    "timeout_seconds": "ROSTER_TIMEOUT_SECONDS",
    "retries": "ROSTER_RETRIES",
    "retry_backoff_seconds": "ROSTER_RETRY_BACKOFF_SECONDS",
    "tls_skip_verify": "ROSTER_TLS_SKIP_VERIFY",
    "ca_file": "ROSTER_CA_FILE",
    "log_dir": "ROSTER_LOG_DIR",
    "report_dir": "ROSTER_REPORT_DIR",
    "log_level": "ROSTER_LOG_LEVEL",
}


def _read_yaml_config(path: Path) -> dict:
    if not path.exists():
        return {}
    if not path.is_file():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data


def _env_get(name: str) -> str | None:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return None
    return v.strip()


def parse_bool(v: str | None) -> bool | None:
    if v is None:
        return None
    vv = v.lower()
    if vv in ("1", "true", "yes", "y"):
        return True
    if vv in ("0", "false", "no", "n"):
        return False
    raise ValueError(f"Invalid boolean env value: {v}")


_ENV_PARSERS = {
    "timeout_seconds": float,
    "retries": int,
    "retry_backoff_seconds": float,
    "tls_skip_verify": parse_bool,
}


def load_settings(
    config_path: str | None,
    cli_overrides: dict,
) -> LoadedSettings:
    """
    Priority: CLI > ENV > config > defaults
    """
    sources: list[str] = []
    defaults = Settings()

    # 1) config file
    cfg: dict = {}
    if config_path:
        cfg = _read_yaml_config(Path(config_path))
        if cfg:
            sources.append("config")

    merged = {name: cfg.get(name, getattr(defaults, name)) for name in ENV_NAMES}

    # 2) env
    env = {name: _env_get(env_name) for name, env_name in ENV_NAMES.items()}
    if any(v is not None for v in env.values()):
        sources.append("env")

    for name, raw in env.items():
        if raw is None:
            continue
        parser = _ENV_PARSERS.get(name)
        merged[name] = parser(raw) if parser else raw

    # 3) apply CLI overrides (only those explicitly passed)
    if any(v is not None for v in cli_overrides.values()):
        sources.append("cli")

    for k, v in cli_overrides.items():
        if v is None:
            continue
        merged[k] = v

    settings = Settings(
        api_base_url=merged["api_base_url"],
        timeout_seconds=float(merged["timeout_seconds"]),
        retries=int(merged["retries"]),
        retry_backoff_seconds=float(merged["retry_backoff_seconds"]),
        tls_skip_verify=bool(merged["tls_skip_verify"]),
        ca_file=merged["ca_file"],
        log_dir=merged["log_dir"],
        report_dir=merged["report_dir"],
        log_level=str(merged["log_level"]),
    )

    return LoadedSettings(settings=settings, sources_used=sources)
