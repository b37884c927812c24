from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, TypedDict, cast

import yaml

from .usage import DEFAULT_MAX_INFLIGHT, default_max_workers


class RawAppConfig(TypedDict):
    max_workers: int
    max_inflight: int


class RawConfigFile(TypedDict):
    config: RawAppConfig


CONFIG_FILENAME: Path = Path("duscan.yaml")


def type_error(value: object) -> NoReturn:
    raise TypeError(f"Unexpected value of wrong type: {value!r}")


@dataclass(slots=True)
class AppConfig:
    max_workers: int
    max_inflight: int

    @staticmethod
    def default() -> "AppConfig":
        return AppConfig(max_workers=default_max_workers(), max_inflight=DEFAULT_MAX_INFLIGHT)

    @staticmethod
    def load(path: Path = CONFIG_FILENAME) -> "AppConfig":
        if not path.exists():
            raise FileNotFoundError(f"Missing config file {path}. Run duscan init first.")

        with path.open("r", encoding="UTF-8") as f:
            raw_loaded_obj: object | None = cast(object, yaml.safe_load(f))

        if not raw_loaded_obj:
            raise ValueError("Config file is empty or invalid YAML.")

        if not isinstance(raw_loaded_obj, dict):
            type_error(raw_loaded_obj)

        raw_dict: dict[str, object] = cast(dict[str, object], raw_loaded_obj)

        cfg_raw: object | None = raw_dict.get("config")
        if not isinstance(cfg_raw, dict):
            type_error(cfg_raw)

        cfg: RawAppConfig = cast(RawAppConfig, cast(object, cfg_raw))
        defaults: AppConfig = AppConfig.default()

        for key in ("max_workers", "max_inflight"):
            value: object = cfg.get(key)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                type_error(value)

        return AppConfig(
            max_workers=cfg.get("max_workers", defaults.max_workers),
            max_inflight=cfg.get("max_inflight", defaults.max_inflight),
        )

    @staticmethod
    def load_or_default(path: Path = CONFIG_FILENAME) -> "AppConfig":
        """Like load, but a missing file yields the defaults."""
        if not path.exists():
            return AppConfig.default()

        return AppConfig.load(path)

    def save(self, path: Path = CONFIG_FILENAME) -> None:
        raw: RawConfigFile = {"config": self.to_raw()}
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(raw, f, sort_keys=False)

    def to_raw(self) -> RawAppConfig:
        return {
            "max_workers": self.max_workers,
            "max_inflight": self.max_inflight,
        }
