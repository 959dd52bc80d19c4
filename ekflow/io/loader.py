"""Load a network description from disk, choosing the reader by suffix."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from ekflow.config import DEFAULT_PARSER_CONFIG, ParserConfig
from ekflow.errors import NetworkFileNotFoundError, NetworkFormatError
from ekflow.io.parser import parse_network
from ekflow.io.types import NetworkSpec
from ekflow.io.yaml_loader import load_network_yaml

YAML_SUFFIXES = (".yaml", ".yml")


def load_network(
    path: Union[str, Path],
    config: ParserConfig = DEFAULT_PARSER_CONFIG,
    *,
    indexed: bool = False,
) -> NetworkSpec:
    """Read ``path`` as YAML (``.yaml``/``.yml``) or as the plain-text format.

    Raises:
        NetworkFileNotFoundError: If the file cannot be located.
        NetworkFormatError: If the description cannot be parsed at all.
    """
    path = Path(path)
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            text = path.read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError) as exc:
            raise NetworkFileNotFoundError(f"Network file not found: {path}") from exc
        except UnicodeDecodeError as exc:
            raise NetworkFormatError(f"{path} is not valid UTF-8: {exc}") from exc
        spec = load_network_yaml(text, indexed=indexed)
        if spec.name is None:
            spec.name = path.stem
        return spec

    result = parse_network(path, config, indexed=indexed)
    return NetworkSpec(
        network=result.network, name=path.stem, diagnostics=result.diagnostics
    )
