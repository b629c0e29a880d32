"""
Diagram catalog: named grid diagrams loaded from YAML at startup.

Every entry is validated when the catalog loads: its rows must form a valid
grid diagram, and the declared component and crossing counts must match what
the diagram actually traces. A corrupt data file therefore fails at import
time, not when a diagram is first requested.

The catalog is a module-level singleton; call get_catalog() to obtain it.
Nothing writes to the catalog after startup. get() hands out a fresh
GridDiagram each time, so callers may apply moves to it freely.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, cast

import yaml

from gridknot.diagram.errors import GridError
from gridknot.diagram.grid import GridDiagram
from gridknot.knot.path import component_count

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent / "data"


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    description: str
    rows: tuple[str, ...]
    components: int
    crossings: int


class DiagramCatalog:
    """
    Read-only table of named grid diagrams.

    Instantiate directly to use a custom data directory (e.g. in tests);
    otherwise use get_catalog() for the module singleton.
    """

    def __init__(self, data_dir: Path = _DATA_DIR) -> None:
        self._data_dir = data_dir
        self.entries: MappingProxyType[str, CatalogEntry]
        self._load()
        self._validate_entries()
        logger.debug(f"Loaded {len(self.entries)} catalog diagrams from {data_dir}")

    # ── Loading ────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> dict[str, Any]:
        path = self._data_dir / filename
        try:
            with open(path) as f:
                return cast(dict[str, Any], yaml.safe_load(f))
        except FileNotFoundError:
            raise FileNotFoundError(f"Catalog data file not found: {path}") from None
        except yaml.YAMLError as exc:
            raise ValueError(f"Failed to parse catalog data file {path}: {exc}") from exc

    def _load(self) -> None:
        data = self._load_yaml("diagrams.yaml")
        if not isinstance(data, dict) or not isinstance(data.get("entries"), list):
            raise ValueError("Catalog data file must contain an 'entries' list")
        result: dict[str, CatalogEntry] = {}
        for entry in data["entries"]:
            try:
                name = entry["name"]
                parsed = CatalogEntry(
                    name=name,
                    description=entry.get("description", "").strip(),
                    rows=tuple(entry["rows"]),
                    components=int(entry["components"]),
                    crossings=int(entry["crossings"]),
                )
            except (KeyError, TypeError, ValueError) as exc:
                raise ValueError(f"Malformed catalog entry {entry!r}: {exc}") from exc
            if name in result:
                raise ValueError(f"Duplicate catalog entry {name!r}")
            result[name] = parsed
        self.entries = MappingProxyType(result)

    # ── Validation ─────────────────────────────────────────────────────────────

    def _validate_entries(self) -> None:
        """Raise ValueError listing every entry that does not match its declaration."""
        errors: list[str] = []
        for name, entry in self.entries.items():
            try:
                diagram = GridDiagram(entry.rows)
            except GridError as exc:
                errors.append(f"{name}: {exc}")
                continue
            components = component_count(diagram)
            if components != entry.components:
                errors.append(
                    f"{name}: declares {entry.components} component(s), traces {components}"
                )
            crossings = len(diagram.compute_crossings())
            if crossings != entry.crossings:
                errors.append(f"{name}: declares {entry.crossings} crossing(s), has {crossings}")
        if errors:
            raise ValueError(
                "Diagram catalog validation failed:\n" + "\n".join(f"  • {e}" for e in errors)
            )

    # ── Query API ──────────────────────────────────────────────────────────────

    def names(self) -> tuple[str, ...]:
        return tuple(self.entries)

    def entry(self, name: str) -> CatalogEntry:
        try:
            return self.entries[name]
        except KeyError:
            raise KeyError(f"Unknown catalog diagram: {name!r}") from None

    def get(self, name: str) -> GridDiagram:
        """Return a new GridDiagram for the named entry."""
        return GridDiagram(self.entry(name).rows)

    def __contains__(self, name: object) -> bool:
        return name in self.entries


# ── Module-level singleton ─────────────────────────────────────────────────────

_catalog: DiagramCatalog = DiagramCatalog()


def get_catalog() -> DiagramCatalog:
    """Return the module-level catalog singleton."""
    return _catalog
