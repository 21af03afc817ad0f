from __future__ import annotations

import os


TEMPLATE_SUFFIX = ".tmpl"


def home_dir() -> str:
    return os.path.expanduser("~")


def expand_home(path: str) -> str:
    if not path.startswith("~"):
        return path
    rest = path[1:].lstrip("/\\")
    return os.path.join(home_dir(), rest) if rest else home_dir()


def settings_dir() -> str:
    override = os.getenv("NEWMETHOD_HOME")
    if override:
        return os.path.abspath(override)
    return os.path.join(home_dir(), ".newmethod")


def settings_path() -> str:
    return os.path.join(settings_dir(), "settings.json")


def queue_dir() -> str:
    return os.path.join(settings_dir(), "queue")


def archive_dir() -> str:
    return os.path.join(settings_dir(), "archive")


def template_dir(root: str, template_directory: str) -> str:
    return os.path.join(root, template_directory)


def template_path(root: str, template_directory: str, file_name: str) -> str:
    return os.path.join(template_dir(root, template_directory), f"{file_name}{TEMPLATE_SUFFIX}")


def method_template_path(root: str, template_directory: str, method_template: str) -> str:
    return os.path.join(template_dir(root, template_directory), method_template)


def target_path(current_file: str, file_name: str) -> str:
    return os.path.join(os.path.dirname(current_file), file_name)
