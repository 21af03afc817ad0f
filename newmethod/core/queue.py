from __future__ import annotations

import json
import os
from dataclasses import dataclass

from . import paths


ALLOWED_KEYS = {"signature", "file", "line", "column", "insert"}


@dataclass(frozen=True)
class Request:
    signature: str
    file: str | None
    line: int
    column: int
    insert: bool
    source_file: str


def list_queue_files(queue_dir: str | None = None) -> list[str]:
    qdir = queue_dir or paths.queue_dir()
    if not os.path.isdir(qdir):
        return []
    files = [os.path.join(qdir, f) for f in os.listdir(qdir) if f.endswith(".json")]
    return sorted(files, key=lambda p: (os.path.getmtime(p), p))


def _load_json(path: str) -> dict | None:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError):
        return None


def _position(value) -> int | None:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


def parse_request(path: str) -> Request | None:
    data = _load_json(path)
    if not isinstance(data, dict):
        return None
    if any(key not in ALLOWED_KEYS for key in data.keys()):
        return None

    signature = data.get("signature", "")
    file = data.get("file")
    insert = data.get("insert", True)
    if not isinstance(signature, str):
        return None
    if file is not None and not isinstance(file, str):
        return None
    if not isinstance(insert, bool):
        return None
    line = _position(data.get("line"))
    column = _position(data.get("column"))
    if line is None or column is None:
        return None

    return Request(
        signature=signature,
        file=file or None,
        line=line,
        column=column,
        insert=insert,
        source_file=path,
    )


def archive_file(path: str, suffix: str = "done", archive_dir: str | None = None) -> str:
    target_dir = archive_dir or paths.archive_dir()
    os.makedirs(target_dir, exist_ok=True)
    dst = os.path.join(target_dir, f"{os.path.basename(path)}.{suffix}")
    os.replace(path, dst)
    return dst
