import os
import re
from dataclasses import dataclass, field

import yaml


@dataclass
class EWMAConfig:
    strength: float = 0.5


@dataclass
class KalmanConfig:
    process_noise: float = 0.01
    measurement_noise: float = 0.1
    estimated_error: float = 1.0


@dataclass
class SmoothingConfig:
    method: str = "kalman"
    strict_shape: bool = False
    ewma: EWMAConfig = field(default_factory=EWMAConfig)
    kalman: KalmanConfig = field(default_factory=KalmanConfig)


@dataclass
class PipelineConfig:
    smooth_faces: bool = True


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class Config:
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _substitute_env_vars(value: str) -> str:
    pattern = r"\$\{([^}]+)\}"

    def replace(match):
        env_var = match.group(1)
        return os.environ.get(env_var, match.group(0))

    return re.sub(pattern, replace, value)


def _process_config_values(data: dict) -> dict:
    result = {}
    for key, value in data.items():
        if isinstance(value, dict):
            result[key] = _process_config_values(value)
        elif isinstance(value, str):
            result[key] = _substitute_env_vars(value)
        else:
            result[key] = value
    return result


def _to_number(value):
    # ${VAR} substitution always yields strings
    if isinstance(value, str):
        return float(value)
    return value


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _build_smoothing(data: dict) -> SmoothingConfig:
    ewma = {k: _to_number(v) for k, v in (data.get("ewma") or {}).items()}
    kalman = {k: _to_number(v) for k, v in (data.get("kalman") or {}).items()}
    return SmoothingConfig(
        method=str(data.get("method", "kalman")),
        strict_shape=_to_bool(data.get("strict_shape", False)),
        ewma=EWMAConfig(**ewma),
        kalman=KalmanConfig(**kalman),
    )


def config_from_dict(raw_config: dict | None) -> Config:
    config_data = _process_config_values(raw_config or {})

    return Config(
        smoothing=_build_smoothing(config_data.get("smoothing") or {}),
        pipeline=PipelineConfig(
            **{k: _to_bool(v) for k, v in (config_data.get("pipeline") or {}).items()}
        ),
        logging=LoggingConfig(**(config_data.get("logging") or {})),
    )


def load_config(config_path: str = "config/settings.yaml") -> Config:
    with open(config_path) as f:
        raw_config = yaml.safe_load(f)

    return config_from_dict(raw_config)
