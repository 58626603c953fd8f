"""Load site configuration from a folder of YAML files.

The folder holds an optional ``base.yml`` plus one ``<lang>.yml`` overlay per
language. Without overlays the loader returns ``{"base": config}``; with
overlays it returns one merged configuration per language and no ``base`` key.

Examples
--------
>>> from pathlib import Path
>>> from pagebuild.config import load_config
>>> configs = load_config(Path("config"))  # doctest: +SKIP
>>> sorted(configs)  # doctest: +SKIP
['en', 'ru']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import BASE_CONFIG_NAME, CONFIG_GLOB
from .errors import ConfigLoadError
from .merge import deep_merge

logger = logging.getLogger(__name__)

Config = dict[str, typ.Any]


@dc.dataclass(slots=True)
class ConfigSet:
    """Raw configuration files before overlays are merged."""

    base: Config = dc.field(default_factory=dict)
    languages: dict[str, Config] = dc.field(default_factory=dict)


def list_config_files(folder: Path) -> list[Path]:
    """Return the ``*.yml`` files directly inside ``folder``, sorted by name."""
    return sorted(folder.glob(CONFIG_GLOB))


def read_yaml_file(path: Path) -> Config:
    """Load a YAML mapping from ``path``; an empty file yields ``{}``.

    Raises
    ------
    ConfigLoadError
        If the file cannot be read or decoded as UTF-8, is not valid YAML or
        its top level is not a mapping.
    """
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle)
    except (OSError, UnicodeDecodeError, YAMLError) as exc:
        raise ConfigLoadError(path, str(exc)) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = "top-level YAML structure must be a mapping"
        raise ConfigLoadError(path, msg)
    return dict(loaded)


def read_config_files(files: cabc.Iterable[Path]) -> ConfigSet:
    """Sort ``files`` into the base config and per-language overlays."""
    configs = ConfigSet()
    for path in files:
        name = path.stem
        if name == BASE_CONFIG_NAME:
            configs.base = read_yaml_file(path)
        else:
            configs.languages[name] = read_yaml_file(path)
    return configs


def merge_configs(configs: ConfigSet) -> dict[str, Config]:
    """Fold the base config into every language overlay.

    Returns ``{"base": base}`` when no overlays exist. Otherwise returns a
    mapping of language code to ``deep_merge(base, overlay)``; overlay values
    win and lists from the overlay replace the base lists.
    """
    if not configs.languages:
        return {BASE_CONFIG_NAME: deep_merge(configs.base)}
    return {
        lang: deep_merge(configs.base, overlay)
        for lang, overlay in configs.languages.items()
    }


def load_config(folder: Path) -> dict[str, Config]:
    """Load and merge every config file in ``folder``.

    Parameters
    ----------
    folder : Path
        Folder containing ``base.yml`` and optional ``<lang>.yml`` files.

    Returns
    -------
    dict[str, Config]
        ``{"base": ...}`` or ``{lang: ...}`` as described in the module
        docstring.

    Raises
    ------
    ConfigLoadError
        If any YAML file fails to load; the error names the file.
    """
    files = list_config_files(folder)
    logger.debug("config files in %s: %s", folder, [path.name for path in files])
    return merge_configs(read_config_files(files))


__all__ = [
    "Config",
    "ConfigSet",
    "list_config_files",
    "load_config",
    "merge_configs",
    "read_config_files",
    "read_yaml_file",
]
