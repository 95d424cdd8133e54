"""Domain models for NEPA Watch."""

from .models import Record, SearchTerm, synthesize_project_url, synthesize_title

__all__ = ["Record", "SearchTerm", "synthesize_project_url", "synthesize_title"]
