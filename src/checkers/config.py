from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Literal

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_TEST_METHOD_PATTERN = r"^Test([A-Z]\w*)$"
DEFAULT_SETUP_METHOD = "SetUpTest"


class SuiteConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    test_method_pattern: str = DEFAULT_TEST_METHOD_PATTERN
    setup_method: str = DEFAULT_SETUP_METHOD
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    junit_path: str | None = None

    @field_validator("test_method_pattern")
    @classmethod
    def pattern_must_name_the_subtest(cls, v: str) -> str:
        try:
            compiled = re.compile(v)
        except re.error as e:
            raise ValueError(f"test_method_pattern is not a valid regexp: {e}") from e
        if compiled.groups < 1:
            raise ValueError("test_method_pattern must capture the subtest name in a group")
        return v

    @field_validator("setup_method")
    @classmethod
    def setup_method_must_be_identifier(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"setup_method '{v}' is not a valid method name")
        return v


def _expand(value: Any, missing: list[str], key: str = "") -> Any:
    if isinstance(value, str):
        try:
            return expandvars(value, nounset=True)
        except Exception:
            # Variable is missing and has no default
            missing.append(f"  {key}={value}")
            return value
    if isinstance(value, dict):
        return {k: _expand(v, missing, str(k)) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand(v, missing, key) for v in value]
    return value


def load_config(path: Path) -> SuiteConfig:
    """Load and validate a suite config from a YAML file.

    ``${VAR}`` references are expanded from the environment. A relative
    ``junit_path`` is resolved against the config file's directory.
    """
    if not path.exists():
        return SuiteConfig()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config {path} must be a YAML mapping")

    missing: list[str] = []
    raw = _expand(raw, missing)
    if missing:
        details = "\n".join(missing)
        raise ValueError(f"Config {path} has missing environment variables:\n{details}")

    config = SuiteConfig(**raw)

    if config.junit_path and not Path(config.junit_path).is_absolute():
        config.junit_path = str((path.parent.resolve() / config.junit_path).resolve())

    return config
