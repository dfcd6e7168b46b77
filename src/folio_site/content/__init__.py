"""
Content package: fetching entries from the content API and assembling the
per-request view model from them.
"""

from folio_site.content.exceptions import ContentError, ContentGatewayError, MissingOrderingError
from folio_site.content.gateway import ContentApi, ContentGateway
from folio_site.content.models import Entry, OrderingEntry, parse_entries, parse_entry
from folio_site.content.view_model import StandardContext, build_standard_context

__all__ = [
    "ContentApi",
    "ContentGateway",
    "ContentError",
    "ContentGatewayError",
    "MissingOrderingError",
    "Entry",
    "OrderingEntry",
    "parse_entry",
    "parse_entries",
    "StandardContext",
    "build_standard_context",
]
