"""
Data models for content entries returned by the content API.

Every upstream document is parsed into an ``Entry``; the ``type`` field is the
discriminator. Types that carry a structured payload (the ordering documents)
get their own subclass, registered in ``ENTRY_TYPES``. Everything else keeps
its ``data`` as a free-form mapping that templates read by convention.
"""

from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field


# Ordering document types, keyed by the collection they order.
PROJECT_ORDERING_TYPE = "ordering"
POST_ORDERING_TYPE = "orderart"

PROJECT_TYPE = "project"
POST_TYPE = "post"


class Entry(BaseModel):
    """One content record, discriminated by ``type``."""

    model_config = ConfigDict(extra="allow")

    id: str
    uid: Optional[str] = None
    type: str
    tags: List[str] = Field(default_factory=list)
    lang: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)


class DocumentLink(BaseModel):
    """A link field pointing at another document."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = None
    uid: Optional[str] = None
    type: Optional[str] = None
    link_type: Optional[str] = None
    is_broken: bool = Field(default=False, alias="isBroken")


class OrderingItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    project: Optional[DocumentLink] = None

    @property
    def uid(self) -> Optional[str]:
        if self.project is None or self.project.is_broken:
            return None
        return self.project.uid


class OrderingData(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    items: List[OrderingItem] = Field(default_factory=list, alias="list")


class OrderingEntry(Entry):
    """An explicit sequence of references used to order another collection."""

    data: OrderingData = Field(default_factory=OrderingData)

    @property
    def uids(self) -> List[Optional[str]]:
        return [item.uid for item in self.data.items]


ENTRY_TYPES: Dict[str, Type[Entry]] = {
    PROJECT_ORDERING_TYPE: OrderingEntry,
    POST_ORDERING_TYPE: OrderingEntry,
}


def parse_entry(raw: Dict[str, Any]) -> Entry:
    """Parses a raw API document into the model registered for its type."""
    model = ENTRY_TYPES.get(raw.get("type"), Entry)
    return model.model_validate(raw)


def parse_entries(raw_entries: List[Dict[str, Any]]) -> List[Entry]:
    return [parse_entry(raw) for raw in raw_entries]
