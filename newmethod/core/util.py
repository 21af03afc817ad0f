from __future__ import annotations

import json
import os

from .errors import FileError


class FileStore:
    def read(self, path: str) -> str:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as exc:
            raise FileError(path, exc.strerror or "cannot read file") from exc
        except UnicodeDecodeError as exc:
            raise FileError(path, f"cannot decode file: {exc.reason}") from exc

    def write(self, path: str, data: str) -> None:
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(data)
        except OSError as exc:
            raise FileError(path, exc.strerror or "cannot write file") from exc

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)


def read_json(path: str) -> dict | None:
    if not os.path.exists(path):
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: str, data: dict) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, sort_keys=True)


def short_text(text: str, max_len: int = 120) -> str:
    t = " ".join(text.split())
    if len(t) <= max_len:
        return t
    return t[: max_len - 1].rstrip() + "…"

