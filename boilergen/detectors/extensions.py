"""Detectors that recognise languages by file extension or shebang."""

from __future__ import annotations

from ..models import Repo
from ..value import Value
from .base import Detector
from .utils import detect_by_extension, detect_by_header, iter_repo_files, lang_fragment

SHELL_SHEBANGS: tuple[bytes, ...] = (
    b"#!/usr/local/bin/bash",
    b"#!/usr/local/bin/fish",
    b"#!/usr/local/bin/tcsh",
    b"#!/usr/local/bin/ash",
    b"#!/usr/local/bin/zsh",
    b"#!/usr/bin/env bash",
    b"#!/usr/bin/env fish",
    b"#!/usr/bin/env zsh",
    b"#!/usr/local/bash",
    b"#!/usr/local/tcsh",
    b"#!/usr/bin/bash",
    b"#!/usr/bin/fish",
    b"#!/usr/bin/tcsh",
    b"#!/usr/bin/zsh",
    b"#!/bin/bash",
    b"#!/bin/tcsh",
    b"#!/bin/ash",
    b"#!/bin/csh",
    b"#!/bin/ksh",
    b"#!/bin/zsh",
    b"#!/bin/sh",
)


class JavascriptDetector(Detector):
    """Detects JavaScript and TypeScript sources, including JSX flavours."""

    name = "javascript"
    description = "Detects if the project contains JavaScript or TypeScript files."

    _FLAVOURS: tuple[tuple[tuple[str, ...], str], ...] = (
        (("js", "ts", "jsx", "tsx"), "javascript"),
        (("ts", "tsx"), "typescript"),
        (("jsx", "tsx"), "jsx"),
        (("tsx",), "tsx"),
    )

    def detect(self, repo: Repo) -> Value:
        suffixes = {path.suffix.lower().lstrip(".") for path in iter_repo_files(repo)}
        data = Value.empty_object()
        for extensions, lang in self._FLAVOURS:
            if suffixes.intersection(extensions):
                data.union(lang_fragment(lang))
        return data


class JsonDetector(Detector):
    name = "json"
    description = "Detects if the project contains JSON files."

    def detect(self, repo: Repo) -> Value:
        return detect_by_extension(repo, ("json",), "json")


class ShellScriptDetector(Detector):
    name = "shell_script"
    description = "Detects if the project contains shell scripts."

    def detect(self, repo: Repo) -> Value:
        return detect_by_header(repo, SHELL_SHEBANGS, "shell")


class TomlDetector(Detector):
    name = "toml"
    description = "Detects if the project contains TOML files."

    def detect(self, repo: Repo) -> Value:
        return detect_by_extension(repo, ("toml",), "toml")


class YamlDetector(Detector):
    name = "yaml"
    description = "Detects if the project contains YAML files."

    def detect(self, repo: Repo) -> Value:
        return detect_by_extension(repo, ("yaml", "yml"), "yaml")
