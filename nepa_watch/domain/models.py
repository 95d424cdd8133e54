"""Core domain models.

- Record: one normalized NEPA project, the unit of feed output
- SearchTerm: one concrete search submitted to the upstream
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PROJECT_PATH_TEMPLATE = "/eplanning-ui/project/{project_id}/510"


def synthesize_title(project_id: str) -> str:
    """Fallback title for projects the upstream did not name."""
    return f"BLM Project {project_id}"


def synthesize_project_url(host: str, project_id: str) -> str:
    """Canonical ePlanning deep link for a project id."""
    return host.rstrip("/") + PROJECT_PATH_TEMPLATE.format(project_id=project_id)


class Record(BaseModel):
    """Normalized NEPA project.

    ``id`` is the deduplication key for a run. Optional metadata is ``None``
    when the upstream did not supply it, never an empty string. ``raw`` keeps
    the upstream object for diagnostics and is excluded from dumps.
    """

    id: str = Field(..., description="Upstream project identity")
    title: str = Field(..., description="Human-readable project name")
    url: str = Field(..., description="Canonical project link")
    state: Optional[str] = Field(None, description="Comma-joined state codes")
    office: Optional[str] = Field(None, description="Lead BLM office")
    nepa_type: Optional[str] = Field(None, description="NEPA document type (EA, EIS, CX, ...)")
    nepa_status: Optional[str] = Field(None, description="NEPA stage or status")
    raw: Any = Field(None, exclude=True, repr=False)

    @field_validator("id", "url")
    @classmethod
    def require_text(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Field cannot be empty or whitespace-only")
        return v.strip()

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return v.strip()

    @field_validator("state", "office", "nepa_type", "nepa_status")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"example": {
            "id": "2016719",
            "title": "Gemini Solar Project",
            "url": "https://eplanning.blm.gov/eplanning-ui/project/2016719/510",
            "state": "NV",
            "office": "Las Vegas Field Office",
            "nepa_type": "EIS",
            "nepa_status": "Completed",
        }},
    )


@dataclass(frozen=True)
class SearchTerm:
    """One concrete search.

    Attributes:
        text: Free text sent as ``searchText`` (may be empty for filter-only searches)
        label: Name of the query or search definition it came from
        adv_search: Structured filter expression, for advanced searches
    """

    text: str
    label: str
    adv_search: Optional[Dict[str, Any]] = field(default=None, compare=False, repr=False)

    @property
    def is_advanced(self) -> bool:
        return self.adv_search is not None

    def describe(self) -> str:
        """Short form for logs."""
        return self.text or f"advSearch:{self.label}"
