"""Opt-in ESLint / Prettier tooling for generated projects."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from create_mcp.core.documents import MANIFEST_FILENAME, Manifest
from create_mcp.core.types import CustomizationChoices

logger = logging.getLogger(__name__)

ESLINT_CONFIG_FILENAME = ".eslintrc.json"
PRETTIER_CONFIG_FILENAME = ".prettierrc"
PRETTIER_ESLINT_PLUGIN = "plugin:prettier/recommended"

_LINT_DEPS: dict[str, str] = {
    "eslint": "^8.56.0",
    "@typescript-eslint/eslint-plugin": "^7.2.0",
    "@typescript-eslint/parser": "^7.2.0",
}

_LINT_SCRIPTS: dict[str, str] = {
    "lint": "eslint 'src/**/*.ts'",
    "lint:fix": "eslint 'src/**/*.ts' --fix",
}

_FORMAT_DEPS: dict[str, str] = {
    "prettier": "^3.2.5",
}

_FORMAT_SCRIPTS: dict[str, str] = {
    "format": "prettier --write 'src/**/*.ts'",
}

_LINT_FORMAT_DEPS: dict[str, str] = {
    "eslint-config-prettier": "^9.1.0",
    "eslint-plugin-prettier": "^5.1.3",
}

_ESLINT_CONFIG: dict[str, Any] = {
    "parser": "@typescript-eslint/parser",
    "extends": ["eslint:recommended", "plugin:@typescript-eslint/recommended"],
    "parserOptions": {"ecmaVersion": 2020, "sourceType": "module"},
    "rules": {},
}

_PRETTIER_CONFIG: dict[str, Any] = {
    "semi": True,
    "trailingComma": "es5",
    "singleQuote": True,
    "printWidth": 100,
    "tabWidth": 2,
}


def _write_json(path: Path, data: dict[str, Any]) -> None:
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def _add_prettier_to_eslint(destination: Path) -> None:
    path = destination / ESLINT_CONFIG_FILENAME
    if not path.is_file():
        return
    config = json.loads(path.read_text(encoding="utf-8"))
    extends = config.setdefault("extends", [])
    if isinstance(extends, str):
        extends = [extends]
        config["extends"] = extends
    if PRETTIER_ESLINT_PLUGIN not in extends:
        extends.append(PRETTIER_ESLINT_PLUGIN)
    _write_json(path, config)


def apply(destination: Path, choices: CustomizationChoices) -> None:
    """
    Layer lint and format tooling onto the project at ``destination``.

    devDependencies are assigned, scripts are only added under names the
    template does not already use. Applying the same choices again leaves the
    manifest unchanged. Does nothing when the project has no manifest.
    """
    manifest_path = destination / MANIFEST_FILENAME
    if not manifest_path.is_file():
        logger.debug("No %s in %s, skipping customization", MANIFEST_FILENAME, destination)
        return

    try:
        manifest = Manifest.load(manifest_path)
    except ValueError as exc:
        logger.warning("Skipping customization, cannot read %s: %s", manifest_path, exc)
        return

    if choices.lint:
        manifest.merge("devDependencies", _LINT_DEPS)
        manifest.merge("scripts", _LINT_SCRIPTS, keep_existing=True)
        _write_json(destination / ESLINT_CONFIG_FILENAME, _ESLINT_CONFIG)

    if choices.format:
        manifest.merge("devDependencies", _FORMAT_DEPS)
        if choices.lint:
            manifest.merge("devDependencies", _LINT_FORMAT_DEPS)
            _add_prettier_to_eslint(destination)
        manifest.merge("scripts", _FORMAT_SCRIPTS, keep_existing=True)
        _write_json(destination / PRETTIER_CONFIG_FILENAME, _PRETTIER_CONFIG)

    manifest.dump(manifest_path)
    logger.info("Applied customizations (lint=%s, format=%s)", choices.lint, choices.format)
