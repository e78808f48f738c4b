# litforge/config.py
"""
Configuration blocks refine the run's Options.

    ```lit-type:config lit-name:include
    docs/app.md
    ```

    ```lit-type:config lit-name:general
    output_source=false
    unresolved=error
    ```

``include``/``ignore`` lines are paths relative to the document holding the
block. ``general`` lines are ``key=value`` options; unknown keys are ignored.
"""
from __future__ import annotations

import logging
import os
from typing import Dict, List

from .models.blocks import ConfigurationBlock
from .models.options import UNRESOLVED_POLICIES, Options
from .store import BlockStore
from .utils.paths import resolve_path

log = logging.getLogger(__name__)

CONFIG_DOCUMENT = "config.md"

_BOOLEAN_KEYS = ("output_source", "output_source_absolute_paths")


def _path_lines(block: ConfigurationBlock) -> List[str]:
    base_dir = os.path.dirname(block.source_file)
    return [resolve_path(line.strip(), base_dir) for line in block.body.splitlines() if line.strip()]


def _general_settings(block: ConfigurationBlock) -> Dict[str, object]:
    settings: Dict[str, object] = {}
    for line in block.body.splitlines():
        key, sep, value = line.partition("=")
        key, value = key.strip(), value.strip()
        if not sep or not key:
            continue
        if key in _BOOLEAN_KEYS:
            settings[key] = value == "true"
        elif key == "unresolved":
            if value in UNRESOLVED_POLICIES:
                settings[key] = value
            else:
                log.warning("Ignoring unresolved=%r (expected one of %s)", value, ", ".join(UNRESOLVED_POLICIES))
        else:
            log.debug("Ignoring unknown general option '%s'", key)
    return settings


def apply_configuration(options: Options, store: BlockStore) -> Options:
    """
    Fold every configuration block in `store` into `options`, in scan order,
    and return the refined copy.
    """
    include = list(options.include_files)
    ignore = list(options.ignore_files)
    settings: Dict[str, object] = {}

    blocks = store.blocks_of_kind("config")
    log.info("Found %d config blocks.", len(blocks))
    for block in blocks:
        if block.name == "include":
            include.extend(_path_lines(block))
        elif block.name == "ignore":
            ignore.extend(_path_lines(block))
        elif block.name == "general":
            settings.update(_general_settings(block))
        else:
            log.debug("Ignoring config block named %r in %s", block.name, block.source_file)

    return options.with_overrides(include_files=tuple(include), ignore_files=tuple(ignore), **settings)


def has_config_document(options: Options) -> bool:
    path = os.path.join(options.input_path, CONFIG_DOCUMENT)
    if os.path.isfile(path):
        log.info("Found a %s file.", CONFIG_DOCUMENT)
        return True
    log.info("No %s file. Using defaults.", CONFIG_DOCUMENT)
    return False
