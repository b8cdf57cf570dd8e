"""
Edit session state.

Holds what the user selected, what was extracted and the manual edits made
on top of it. Rendering and schema generation take a session explicitly.
"""
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from schema_markup.models.content import ExtractionResult, SchemaType

LIST_TYPES = (SchemaType.BREADCRUMB, SchemaType.FAQ, SchemaType.CAROUSEL)

BLANK_ITEMS: Dict[SchemaType, Dict[str, str]] = {
    SchemaType.BREADCRUMB: {"name": "", "url": ""},
    SchemaType.FAQ: {"question": "", "answer": ""},
    SchemaType.CAROUSEL: {"name": "", "url": "", "image": "", "description": "", "price": ""},
}


class EditSession(BaseModel):
    """
    Selected types plus extracted and manually edited records.
    
    Both `extracted` and `manual` use the extraction response shape:
    a product dict and lists of item dicts keyed by type name.
    """
    selected_types: List[SchemaType] = Field(default_factory=list)
    extracted: Dict[str, Any] = Field(default_factory=dict)
    manual: Dict[str, Any] = Field(default_factory=dict)
    
    def apply_extraction(self, result: ExtractionResult) -> None:
        """Store an extraction and seed the manual edits with its records."""
        self.extracted = result.to_dict()
        self.manual = {}
        for schema_type in SchemaType:
            key = schema_type.value
            if key not in self.extracted:
                continue
            value = self.extracted[key]
            if isinstance(value, list):
                self.manual[key] = [dict(item) for item in value]
            else:
                self.manual[key] = dict(value)
    
    def update_field(self, schema_type: SchemaType, field: str, value: Any) -> None:
        """Set a field on a single-record type (product)."""
        self.manual.setdefault(schema_type.value, {})[field] = value
    
    def add_item(self, schema_type: SchemaType) -> int:
        """Append a blank item to a list type and return its index."""
        items = self._items(schema_type)
        items.append(dict(BLANK_ITEMS[schema_type]))
        return len(items) - 1
    
    def update_item(self, schema_type: SchemaType, index: int, field: str, value: Any) -> None:
        self._items(schema_type)[index][field] = value
    
    def remove_item(self, schema_type: SchemaType, index: int) -> None:
        del self._items(schema_type)[index]
    
    def merged(self, schema_type: SchemaType) -> Any:
        if schema_type in LIST_TYPES:
            return self.merged_items(schema_type)
        return self.merged_record(schema_type)

    def merged_record(self, schema_type: SchemaType) -> Dict[str, Any]:
        """Extracted record overlaid with manual edits."""
        key = schema_type.value
        merged: Dict[str, Any] = {}
        for source in (self.extracted.get(key), self.manual.get(key)):
            if isinstance(source, dict):
                merged.update(source)
        return merged
    
    def merged_items(self, schema_type: SchemaType) -> List[Dict[str, Any]]:
        """Manual list if one exists, otherwise the extracted list. Non-dict entries are dropped."""
        key = schema_type.value
        items = self.manual[key] if key in self.manual else self.extracted.get(key)
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict)]
    
    def _items(self, schema_type: SchemaType) -> List[Dict[str, Any]]:
        if schema_type not in LIST_TYPES:
            raise ValueError(f"{schema_type.value} is not a list type")
        key = schema_type.value
        if key not in self.manual:
            self.manual[key] = [dict(item) for item in self.extracted.get(key) or []]
        return self.manual[key]
