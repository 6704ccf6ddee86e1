"""Static data provider — viral patterns and GIF templates per industry."""

import json
import pathlib
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from viralgif_engine.catalog.models import PatternsFile, Template, TemplatesFile, ViralPattern
from viralgif_engine.common.exceptions import CatalogError
from viralgif_engine.common.logging import get_logger

logger = get_logger("catalog")

_DATA_DIR = pathlib.Path(__file__).parent / "data"
PATTERNS_FILE = "viral_patterns.json"
TEMPLATES_FILE = "templates.json"


def _load(path: pathlib.Path, schema):
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise CatalogError(f"Reference data file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Reference data file is not valid JSON: {path}") from exc
    try:
        return schema.model_validate(raw)
    except PydanticValidationError as exc:
        raise CatalogError(f"Malformed reference data in {path.name}: {exc}") from exc


class StaticDataProvider:
    """Read-only lookup of reference data, keyed by lower-cased industry name.

    Both files are parsed and validated on first use; a malformed record
    fails the whole load instead of surfacing mid-request.
    """

    def __init__(self, data_dir: Optional[str | pathlib.Path] = None):
        self.data_dir = pathlib.Path(data_dir) if data_dir else _DATA_DIR
        self._patterns: dict[str, list[ViralPattern]] | None = None
        self._templates: dict[str, list[Template]] | None = None
        self._names: dict[str, str] = {}

    def load(self) -> None:
        patterns = _load(self.data_dir / PATTERNS_FILE, PatternsFile)
        templates = _load(self.data_dir / TEMPLATES_FILE, TemplatesFile)

        self._patterns = {}
        for entry in patterns.industries:
            key = entry.industry.lower()
            self._patterns[key] = list(entry.patterns)
            self._names.setdefault(key, entry.industry)

        self._templates = {}
        for entry in templates.industries:
            key = entry.industry.lower()
            self._templates[key] = list(entry.templates)
            self._names.setdefault(key, entry.industry)

        logger.info(
            "Reference data loaded",
            extra={"context": {
                "pattern_industries": len(self._patterns),
                "template_industries": len(self._templates),
            }},
        )

    def _ensure_loaded(self) -> None:
        if self._patterns is None or self._templates is None:
            self.load()

    def patterns_for(self, industry: str) -> list[ViralPattern]:
        self._ensure_loaded()
        return list(self._patterns.get(industry.strip().lower(), []))

    def templates_for(self, industry: str) -> list[Template]:
        self._ensure_loaded()
        return list(self._templates.get(industry.strip().lower(), []))

    def industries(self) -> list[str]:
        """Industries that have both patterns and templates."""
        self._ensure_loaded()
        keys = [k for k in self._patterns if self._templates.get(k)]
        return [self._names[k] for k in keys]
