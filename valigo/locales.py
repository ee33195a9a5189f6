"""Loading of locale message catalogues from YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml


def flatten(source: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings into ``"outer:inner"`` keys.

    Only string values are kept; other scalar values are ignored.
    """
    if prefix:
        prefix += ":"
    flat: dict[str, str] = {}
    for key, value in source.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(flatten(value, full_key))
        elif isinstance(value, str):
            flat[full_key] = value
    return flat


def locales_from_dir(root: str | Path) -> dict[str, dict[str, str]]:
    """Read ``<root>/locales/<lang>/data.yaml`` catalogues, keyed by language.

    Language directories without a ``data.yaml`` are skipped. Raises
    ``OSError`` if the ``locales`` directory cannot be read and ``ValueError``
    if a catalogue is not a valid YAML mapping.
    """
    locales_dir = Path(root) / "locales"
    catalogues: dict[str, dict[str, str]] = {}
    for entry in sorted(locales_dir.iterdir(), key=lambda p: p.name):
        data_file = entry / "data.yaml"
        if not data_file.is_file():
            continue
        text = data_file.read_text(encoding="utf-8")
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"can't parse locales/{entry.name}/data.yaml: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ValueError(
                f"can't parse locales/{entry.name}/data.yaml: top level is not a mapping"
            )
        catalogues[entry.name] = flatten(data)
    return catalogues