import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from datetime import date
from typing import Any, Dict

from ..prompts import DETAIL_LABELS

logger = logging.getLogger(__name__)

PROPERTY_TYPES = ["Appartement", "Maison", "Local commercial", "Terrain", "Autre"]

# value → label shown next to the radio button
DETAIL_OPTIONS = DETAIL_LABELS

MIN_YEAR_BUILT = 1800

def max_year_built() -> int:
    return date.today().year

# Persisted key → attribute, matching the JSON body the endpoint accepts
_WIRE_NAMES = {
    "address": "address",
    "propertyType": "property_type",
    "surface": "surface",
    "yearBuilt": "year_built",
    "notes": "notes",
    "extraContext": "extra_context",
    "detailLevel": "detail_level",
}

@dataclass
class FormState:
    """Values typed into the form. Numbers may be "" while the input is empty."""
    address: str = ""
    property_type: str = "Appartement"
    surface: float | str | None = ""
    year_built: int | str | None = ""
    notes: str = ""
    extra_context: str = ""
    detail_level: str = "standard"

    def can_submit(self, loading: bool = False) -> bool:
        """Required fields filled in and no generation already running."""
        if loading:
            return False
        return bool(
            self.address.strip()
            and self.notes.strip()
            and self.property_type.strip()
        )

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for POST /api/generate-report; empty numbers become null."""
        return {
            "address": self.address,
            "propertyType": self.property_type,
            "surface": _number_or_none(self.surface, float),
            "yearBuilt": _number_or_none(self.year_built, int),
            "notes": self.notes,
            "extraContext": self.extra_context,
            "detailLevel": self.detail_level,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        return {wire: data[attr] for wire, attr in _WIRE_NAMES.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormState":
        """Defaults overlaid with whatever known keys `data` carries."""
        text_fields = {f.name for f in fields(cls) if f.type is str}
        values = {}
        for wire, attr in _WIRE_NAMES.items():
            if wire not in data:
                continue
            value = data[wire]
            if attr in text_fields:
                value = "" if value is None else str(value)
            values[attr] = value
        return cls(**values)

def _number_or_none(value, kind):
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    number = float(value)
    return int(number) if kind is int else number

class FormStore:
    """
    Single local slot holding the last form values. Reads and writes are best
    effort: a missing or unreadable slot yields the defaults, a failed write
    is logged and forgotten.
    """
    def __init__(self, path: str):
        self.path = path

    def load(self) -> FormState:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return FormState()
        except (OSError, ValueError) as exc:
            logger.warning("could not load saved form values from %s: %s", self.path, exc)
            return FormState()
        if not isinstance(data, dict):
            logger.warning("ignoring saved form values in %s: not an object", self.path)
            return FormState()
        return FormState.from_dict(data)

    def save(self, state: FormState) -> None:
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(state.to_dict(), f, ensure_ascii=False)
        except OSError as exc:
            logger.warning("could not save form values to %s: %s", self.path, exc)
