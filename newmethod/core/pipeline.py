from __future__ import annotations

import os
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Callable, Optional

from . import paths
from .config import Settings
from .derive import CURSOR_TOKEN
from .editor import EditorContext, Position, insert_text
from .errors import InputCancelled
from .signature import parse_signature, split_notation
from .template import render, substitute
from .util import FileStore


Prompt = Callable[[], Optional[str]]


class MethodGenerator:
    def __init__(
        self,
        settings: Settings,
        editor: EditorContext,
        store: Optional[FileStore] = None,
        max_workers: Optional[int] = None,
    ):
        self.settings = settings
        self.editor = editor
        self.store = store or FileStore()
        self.max_workers = max_workers
        self.root_path: Optional[str] = None

    def determine_root(self) -> str:
        if self.root_path is None:
            self.root_path = self.settings.root()
        return self.root_path

    def template_path(self, file_name: str) -> str:
        return paths.template_path(
            self.determine_root(), self.settings.template_directory, file_name
        )

    def method_template_path(self) -> str:
        return paths.method_template_path(
            self.determine_root(),
            self.settings.template_directory,
            self.settings.method_template,
        )

    def target_path(self, file_name: str) -> str:
        return paths.target_path(self.editor.require_file(), file_name)

    def add_to_current_location(self, method_signature: str) -> str:
        file_path = self.editor.require_file()
        edits = [(self.editor.cursor, method_signature)]
        if self.settings.method_template:
            template = self.store.read(self.method_template_path())
            head, _ = split_notation(method_signature)
            boilerplate = substitute(template, head, CURSOR_TOKEN)
            edits.append((Position(self.editor.line + 2, 0), boilerplate))

        content = self.store.read(file_path)
        self.store.write(file_path, insert_text(content, edits))
        return method_signature

    def create_method(self, file_name: str, method_signature: str) -> str:
        template = self.store.read(self.template_path(file_name))
        file_path = self.target_path(file_name)
        existing = self.store.read(file_path)

        rendered = render(
            template,
            parse_signature(method_signature),
            disambiguate=self.settings.disambiguate_returns,
        )
        self.store.write(file_path, f"{existing}\n{rendered}")
        return method_signature

    def _create_in_order(self, requests: list[tuple[int, str]], method_signature: str) -> list[tuple[int, str]]:
        return [(index, self.create_method(name, method_signature)) for index, name in requests]

    def create_methods(self, method_signature: str) -> list[str]:
        file_names = self.settings.file_names()
        if not file_names:
            return []
        self.editor.require_file()

        # Names sharing a target file are appended one after another.
        groups: dict[str, list[tuple[int, str]]] = {}
        for index, name in enumerate(file_names):
            target = os.path.normcase(os.path.abspath(self.target_path(name)))
            groups.setdefault(target, []).append((index, name))

        workers = self.max_workers or len(groups)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(self._create_in_order, requests, method_signature)
                for requests in groups.values()
            ]
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            for future in futures:
                if future in done and future.exception() is not None:
                    for pending in futures:
                        pending.cancel()
                    raise future.exception()
            tokens = dict(pair for future in futures for pair in future.result())
            return [tokens[index] for index in range(len(file_names))]

    def run(self, prompt: Prompt, insert: bool = True) -> list[str]:
        self.determine_root()
        method_signature = prompt()
        if not method_signature:
            raise InputCancelled()
        if insert:
            self.add_to_current_location(method_signature)
        return self.create_methods(method_signature)
