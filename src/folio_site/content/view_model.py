"""
Per-request view model shared by every page.

The standard context holds the site-wide singleton entries, the device flags
and the two ordered collections (projects and posts). The collections are
built by resolving an ordering document against the flat list of entries of
the matching type, so their order is the editor's order rather than the
order the API returned them in.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from folio_site.content.device import DeviceClass, classify_device
from folio_site.content.exceptions import MissingOrderingError
from folio_site.content.models import (
    Entry,
    OrderingEntry,
    POST_ORDERING_TYPE,
    POST_TYPE,
    PROJECT_ORDERING_TYPE,
    PROJECT_TYPE,
)

logger = logging.getLogger("quart.app")

SINGLETON_TYPES = ("functionals", "meta", "navigation", "sharing", "social")


def find_by_type(entries: Iterable[Optional[Entry]], entry_type: str) -> Optional[Entry]:
    """Returns the first entry of the given type, or None."""
    for entry in entries:
        if entry is not None and entry.type == entry_type:
            return entry
    return None


def filter_by_type(entries: Iterable[Optional[Entry]], entry_type: str) -> List[Entry]:
    return [entry for entry in entries if entry is not None and entry.type == entry_type]


def find_by_uid(items: Sequence[Optional[Entry]], uid: Optional[str]) -> Tuple[int, Optional[Entry]]:
    """
    Finds an entry by uid in an ordered collection.

    Returns:
        ``(index, entry)`` for the first match, ``(-1, None)`` otherwise.
        Unresolved (None) slots never match.
    """
    if uid is None:
        return -1, None
    for index, item in enumerate(items):
        if item is not None and item.uid == uid:
            return index, item
    return -1, None


def next_related(items: Sequence[Optional[Entry]], index: int) -> Optional[Entry]:
    """
    Returns the item following ``index``, wrapping to the first item when
    there is no next item or the next slot is unresolved.
    """
    if not items:
        return None
    following = index + 1
    if 0 <= following < len(items) and items[following] is not None:
        return items[following]
    return items[0]


def resolve_ordering(entries: Sequence[Entry], ordering_type: str, item_type: str) -> List[Optional[Entry]]:
    """
    Builds an ordered collection from an ordering document.

    Each reference in the ordering document maps to the first entry of
    ``item_type`` with the same uid; references that match nothing leave a
    None in their slot.

    Raises:
        MissingOrderingError: no ordering document of ``ordering_type`` exists.
    """
    ordering = find_by_type(entries, ordering_type)
    if not isinstance(ordering, OrderingEntry):
        raise MissingOrderingError(ordering_type)

    by_uid: Dict[str, Entry] = {}
    for entry in filter_by_type(entries, item_type):
        if entry.uid is not None:
            by_uid.setdefault(entry.uid, entry)

    resolved = [by_uid.get(uid) if uid is not None else None for uid in ordering.uids]

    unresolved = [uid for uid, item in zip(ordering.uids, resolved) if item is None]
    if unresolved:
        logger.warning(f"Ordering '{ordering_type}' references unknown {item_type} entries: {unresolved}")

    return resolved


@dataclass
class StandardContext:
    analytics: Optional[str] = None
    functionals: Optional[Entry] = None
    meta: Optional[Entry] = None
    navigation: Optional[Entry] = None
    sharing: Optional[Entry] = None
    social: Optional[Entry] = None
    device: DeviceClass = field(default_factory=DeviceClass)
    projects: List[Optional[Entry]] = field(default_factory=list)
    posts: List[Optional[Entry]] = field(default_factory=list)

    @property
    def is_desktop(self) -> bool:
        return self.device.is_desktop

    @property
    def is_phone(self) -> bool:
        return self.device.is_phone

    @property
    def is_tablet(self) -> bool:
        return self.device.is_tablet

    def as_template_context(self) -> Dict[str, Any]:
        """Flat mapping handed to every page template."""
        return {
            "analytics": self.analytics,
            "functionals": self.functionals,
            "meta": self.meta,
            "navigation": self.navigation,
            "sharing": self.sharing,
            "social": self.social,
            "is_desktop": self.is_desktop,
            "is_phone": self.is_phone,
            "is_tablet": self.is_tablet,
            "projects": self.projects,
            "posts": self.posts,
        }


def build_standard_context(
    entries: Sequence[Entry],
    user_agent: Optional[str] = None,
    analytics: Optional[str] = None,
) -> StandardContext:
    """
    Derives the standard context from the full entry list of one request.

    Raises:
        MissingOrderingError: the project or post ordering document is absent.
    """
    singletons = {entry_type: find_by_type(entries, entry_type) for entry_type in SINGLETON_TYPES}

    return StandardContext(
        analytics=analytics,
        device=classify_device(user_agent),
        projects=resolve_ordering(entries, PROJECT_ORDERING_TYPE, PROJECT_TYPE),
        posts=resolve_ordering(entries, POST_ORDERING_TYPE, POST_TYPE),
        **singletons,
    )
