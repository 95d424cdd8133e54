"""Upstream field aliases.

The ePlanning search API has returned several row schemas over time. Each
canonical attribute lists the upstream names it may arrive under, in
priority order. Supporting a new alias means adding a name here.
"""

from typing import Any, Mapping, Optional, Sequence

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "projectId", "nepaId", "documentId", "projectID", "nepaNumber"),
    "title": ("projectName", "title", "name"),
    "office": ("leadOfficeName", "office", "fieldOffice"),
    "nepa_status": ("nepaStatus", "nepaStage", "status"),
    "nepa_type": ("nepaDocType", "type"),
    "url": ("url",),
}

# Keys that may hold the row list in a wrapped payload, in priority order
ROW_CONTAINER_KEYS: tuple[str, ...] = ("items", "content", "results", "data")


def first_present(obj: Mapping[str, Any], names: Sequence[str]) -> Optional[Any]:
    """Return the value of the first name in ``names`` that is present and not None.

    Example:
        >>> first_present({"title": None, "name": "Gemini"}, ("projectName", "title", "name"))
        'Gemini'
    """
    for name in names:
        value = obj.get(name)
        if value is not None:
            return value
    return None


def resolve(obj: Mapping[str, Any], attribute: str) -> Optional[Any]:
    """Resolve a canonical attribute through ``FIELD_ALIASES``."""
    return first_present(obj, FIELD_ALIASES[attribute])


def as_text(value: Any) -> Optional[str]:
    """Coerce a scalar to trimmed text; containers and blanks become None."""
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return None
    if isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None
