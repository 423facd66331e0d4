"""Output formats for collected variables."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import IO

from rich.console import Console
from rich.table import Table
from rich.text import Text

Formatter = Callable[[Mapping[str, str], IO[str]], None]

# ---------------------------------------------------------------------------
# Formatter Registry
# ---------------------------------------------------------------------------

_formatter_registry: dict[str, Formatter] = {}


def register_formatter(name: str):
    """Decorator to register an output formatter under an --output name."""

    def decorator(func):
        _formatter_registry[name] = func
        return func

    return decorator


def get_formatter_registry() -> dict[str, Formatter]:
    return _formatter_registry


def write_variables(env: Mapping[str, str], fmt: str, stream: IO[str]) -> None:
    """Write ``env`` to ``stream`` in the named format."""
    try:
        formatter = _formatter_registry[fmt]
    except KeyError:
        raise ValueError(f"Output type '{fmt}' is not supported") from None
    formatter(env, stream)


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

TABLE_WIDTH = 4096

_EXPORT_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "$": "\\$", "`": "\\`"})


@register_formatter("export")
def write_export(env: Mapping[str, str], stream: IO[str]) -> None:
    """Shell `export` lines, safe to eval."""
    for key in sorted(env):
        stream.write(f'export {key}="{env[key].translate(_EXPORT_ESCAPES)}"\n')


@register_formatter("json")
def write_json(env: Mapping[str, str], stream: IO[str]) -> None:
    stream.write(json.dumps(dict(env), indent=4, sort_keys=True))
    stream.write("\n")


@register_formatter("table")
def write_table(env: Mapping[str, str], stream: IO[str]) -> None:
    table = Table("Key", "Value", show_edge=False, header_style="bold")
    for key in sorted(env):
        table.add_row(Text(key), Text(env[key]))
    # wide enough that long values are never wrapped inside a cell
    Console(file=stream, width=TABLE_WIDTH).print(table)
