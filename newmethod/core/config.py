from __future__ import annotations

import json
from dataclasses import dataclass, replace

from . import paths
from .errors import ConfigError
from .util import read_json, write_json


DEFAULTS = {
    "rootDirectory": "~",
    "templateDirectory": "template",
    "templateNames": "",
    "methodTemplate": "",
    "disambiguateNamedReturns": False,
}


@dataclass(frozen=True)
class Settings:
    root_directory: str = "~"
    template_directory: str = "template"
    template_names: str = ""
    method_template: str = ""
    disambiguate_returns: bool = False

    def file_names(self) -> list[str]:
        names = [name.strip() for name in self.template_names.split(",")]
        return [name for name in names if name]

    def root(self) -> str:
        return paths.expand_home(self.root_directory)

    def with_overrides(self, **changes) -> "Settings":
        changes = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **changes) if changes else self

    def to_json(self) -> dict:
        return {
            "rootDirectory": self.root_directory,
            "templateDirectory": self.template_directory,
            "templateNames": self.template_names,
            "methodTemplate": self.method_template,
            "disambiguateNamedReturns": self.disambiguate_returns,
        }


def _get(data: dict, key: str, kind: type):
    value = data.get(key, DEFAULTS[key])
    if not isinstance(value, kind):
        raise ConfigError(f"setting {key} must be a {kind.__name__}")
    return value


def settings_from_dict(data: dict) -> Settings:
    if not isinstance(data, dict):
        raise ConfigError("settings must be a JSON object")
    return Settings(
        root_directory=_get(data, "rootDirectory", str),
        template_directory=_get(data, "templateDirectory", str),
        template_names=_get(data, "templateNames", str),
        method_template=_get(data, "methodTemplate", str),
        disambiguate_returns=_get(data, "disambiguateNamedReturns", bool),
    )


def load_settings(path: str | None = None) -> Settings:
    path = path or paths.settings_path()
    try:
        data = read_json(path)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid settings file {path}: {exc.msg}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"invalid settings file {path}: {exc.reason}") from exc
    except OSError as exc:
        raise ConfigError(f"cannot read settings file {path}: {exc.strerror or exc}") from exc
    if data is None:
        return Settings()
    return settings_from_dict(data)


def write_default_settings(path: str | None = None) -> str:
    path = path or paths.settings_path()
    write_json(path, Settings().to_json())
    return path
