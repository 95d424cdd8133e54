"""Record normalization: upstream JSON rows to canonical ``Record`` objects."""

from typing import Any, Iterable, Mapping, Optional

from nepa_watch.config.models import DEFAULT_HOST
from nepa_watch.domain.models import Record, synthesize_project_url, synthesize_title
from nepa_watch.logging import get_logger

from .fields import ROW_CONTAINER_KEYS, as_text, resolve

logger = get_logger(__name__, component="normalization")


def find_row_list(payload: Any) -> Optional[list]:
    """Find the row list in a search response, or None if there is none.

    The payload itself when it is a list, else the first of ``items``,
    ``content``, ``results``, ``data`` holding a list.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for key in ROW_CONTAINER_KEYS:
            rows = payload.get(key)
            if isinstance(rows, list):
                return rows
    return None


def locate_rows(payload: Any) -> list:
    """Like ``find_row_list`` but an unrecognised shape means zero rows."""
    rows = find_row_list(payload)
    return rows if rows is not None else []


def resolve_state(obj: Mapping[str, Any]) -> Optional[str]:
    """Join the row's state codes with ``", "``.

    A truthy ``state`` wins over a ``states`` array; falsy entries are dropped.
    """
    state = obj.get("state")
    if state:
        candidates = state if isinstance(state, (list, tuple)) else [state]
    elif isinstance(obj.get("states"), list):
        candidates = obj["states"]
    else:
        candidates = []

    codes = [text for text in (as_text(c) for c in candidates if c) if text]
    return ", ".join(codes) or None


def normalize_record(obj: Any, host: str = DEFAULT_HOST) -> Optional[Record]:
    """Map one upstream row to a ``Record``.

    Returns None when the row is not a mapping or when no id or url can be
    resolved; callers drop such rows without counting them as errors.
    """
    if not isinstance(obj, Mapping):
        return None

    record_id = as_text(resolve(obj, "id"))
    if not record_id:
        return None

    explicit_url = resolve(obj, "url")
    if explicit_url is None:
        # projectId takes precedence over the resolved id when building links
        url = synthesize_project_url(host, as_text(obj.get("projectId")) or record_id)
    else:
        # a url field that is present but blank is not replaced
        url = as_text(explicit_url)
        if not url:
            return None

    return Record(
        id=record_id,
        title=as_text(resolve(obj, "title")) or synthesize_title(record_id),
        url=url,
        state=resolve_state(obj),
        office=as_text(resolve(obj, "office")),
        nepa_type=as_text(resolve(obj, "nepa_type")),
        nepa_status=as_text(resolve(obj, "nepa_status")),
        raw=obj,
    )


def normalize_rows(rows: Iterable[Any], host: str = DEFAULT_HOST) -> list[Record]:
    """Normalize rows in order, dropping the invalid ones."""
    records = []
    dropped = 0
    for row in rows:
        record = normalize_record(row, host=host)
        if record is None:
            dropped += 1
            continue
        records.append(record)

    if dropped:
        logger.debug(
            f"Dropped {dropped} rows without an id or url",
            extra={"event": "normalization.rows.dropped", "dropped": dropped},
        )
    return records


def normalize_payload(payload: Any, host: str = DEFAULT_HOST) -> list[Record]:
    """Locate the row list in ``payload`` and normalize every row."""
    return normalize_rows(locate_rows(payload), host=host)
