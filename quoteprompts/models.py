"""Data models for prompt definitions and pricing outputs."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

__all__ = ["Option", "PromptDef", "OutputSummary", "QuantityRow"]


@dataclass
class Option:
    """A single choice of a select, image or color prompt."""

    value: str
    label: str
    color: Optional[str] = None
    image_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"value": self.value, "label": self.label}
        if self.color is not None:
            data["color"] = self.color
        if self.image_url is not None:
            data["imageUrl"] = self.image_url
        return data


@dataclass
class PromptDef:
    """Normalized definition of a configurable product prompt.

    Built once per product payload by the extractor. ``visibility`` and
    ``hidden_when`` keep the raw declarative condition data untouched; they
    are evaluated against the current value map on every render.
    """

    id: str
    label: str
    type: str = "text"
    options: List[Option] = field(default_factory=list)
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    required: bool = False
    default: Any = None
    description: Optional[str] = None
    visibility: Any = None
    hidden_when: Any = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the wire names the form layer expects."""
        return {
            "id": self.id,
            "label": self.label,
            "type": self.type,
            "options": [o.to_dict() for o in self.options],
            "min": self.min,
            "max": self.max,
            "step": self.step,
            "required": self.required,
            "default": self.default,
            "description": self.description,
            "visibility": self.visibility,
            "hiddenWhen": self.hidden_when,
        }


@dataclass
class OutputSummary:
    """Pricing engine outputs split by how the quote displays them."""

    price: Optional[Dict[str, Any]] = None
    images: List[Dict[str, Any]] = field(default_factory=list)
    others: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class QuantityRow:
    """One row of a multi-quantity price table."""

    qty: float
    outputs: List[Dict[str, Any]] = field(default_factory=list)
    total: Any = None
    unit: Optional[float] = None
