import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..data.reuse_catalog import reuse_step_definitions
from .exceptions import CatalogError


@dataclass(frozen=True)
class ChecklistItem:
    label: str
    desc: str


@dataclass(frozen=True)
class FieldDefinition:
    label: str
    type: str = "text"


@dataclass(frozen=True)
class GradedChecklist:
    """A checklist where every item is answered yes or no."""
    name: str
    items: Tuple[ChecklistItem, ...]


@dataclass(frozen=True)
class MultiSelectChecklist:
    """A checklist where any number of items may be selected."""
    name: str
    items: Tuple[ChecklistItem, ...]


@dataclass(frozen=True)
class Planner:
    """A step made of optional free-text fields."""
    name: str
    fields: Tuple[FieldDefinition, ...]


StepDefinition = Union[GradedChecklist, MultiSelectChecklist, Planner]
Catalog = Tuple[StepDefinition, ...]


def item_count(step: StepDefinition) -> int:
    if isinstance(step, Planner):
        return len(step.fields)
    return len(step.items)


def step_kind_title(step: StepDefinition) -> str:
    return "Planner" if isinstance(step, Planner) else "Checklist"


# --- Raw definition schema ---

class ChecklistItemSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    label: str
    desc: str = ""


class FieldSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    label: str
    type: str = "text"


class StepSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    checklist: Optional[List[ChecklistItemSchema]] = None
    multi: bool = False
    fields: Optional[List[FieldSchema]] = None

    @model_validator(mode="after")
    def check_kind(self) -> "StepSchema":
        if (self.checklist is None) == (self.fields is None):
            raise ValueError(f"step '{self.name}' must define exactly one of 'checklist' or 'fields'")
        if self.fields is not None and self.multi:
            raise ValueError(f"step '{self.name}': 'multi' applies to checklist steps only")
        if not (self.checklist or self.fields):
            raise ValueError(f"step '{self.name}' has no items")
        return self

    def to_step(self) -> StepDefinition:
        if self.fields is not None:
            return Planner(
                name=self.name,
                fields=tuple(FieldDefinition(label=f.label, type=f.type) for f in self.fields),
            )
        items = tuple(ChecklistItem(label=i.label, desc=i.desc) for i in self.checklist)
        if self.multi:
            return MultiSelectChecklist(name=self.name, items=items)
        return GradedChecklist(name=self.name, items=items)


class CatalogSchema(BaseModel):
    steps: List[StepSchema] = Field(min_length=1)


def build_catalog(raw: list) -> Catalog:
    """
    Validates raw step definitions and turns them into an immutable catalog.
    """
    try:
        schema = CatalogSchema(steps=raw)
    except ValidationError as e:
        raise CatalogError(f"Invalid step catalog: {e}") from e
    return tuple(step.to_step() for step in schema.steps)


def load_catalog(path: Union[str, Path]) -> Catalog:
    """ Loads a catalog from a JSON file holding a list of step definitions. """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Could not read step catalog from {path}: {e}") from e
    catalog = build_catalog(raw)
    logging.info(f"Loaded step catalog from {path} with {len(catalog)} steps.")
    return catalog


def default_catalog() -> Catalog:
    return build_catalog(reuse_step_definitions)
