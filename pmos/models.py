"""
Pydantic models for curriculum rows loaded from Supabase and for the
analysis results returned by the API.

Rows are frozen: every snapshot is read, analysed and discarded, so nothing
downstream may mutate them.
"""

from __future__ import annotations

from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Difficulty = Literal["beginner", "intermediate", "advanced"]
ContentType = Literal["video", "article", "pdf", "screenshot"]
Status = Literal["queued", "in-progress", "completed"]
ModuleStatus = Literal["completed", "available", "locked"]


def _unique_topics(value: list[str] | None) -> list[str]:
    if not value:
        return []
    seen: list[str] = []
    for topic in value:
        if topic not in seen:
            seen.append(topic)
    return seen


class Track(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    order: int = 0
    color: str = "#3b82f6"
    estimated_total_hours: float = 0


class Module(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    track_id: str
    name: str = ""
    description: str = ""
    order: int = 0
    estimated_hours: float = 0
    # Module ids; kept for completeness, the lock logic only follows `order`
    prerequisites: list[str] = Field(default_factory=list)


class Resource(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    url: str = ""
    content_type: ContentType = "article"
    extracted_content: str | None = None
    topics: list[str] = Field(default_factory=list)
    prerequisite_topics: list[str] = Field(default_factory=list)
    difficulty: Difficulty = "intermediate"
    estimated_minutes: int = 0
    status: Status = "queued"
    date_added: str | None = None
    completion_date: str | None = None
    user_notes: str | None = None

    @field_validator("topics", "prerequisite_topics", mode="before")
    @classmethod
    def dedupe_topics(cls, v):
        """Topic lists behave as sets: missing means empty, repeats count once."""
        return _unique_topics(v)


class ModuleResource(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    module_id: str
    resource_id: str
    sequence_order: int | None = None


class CurriculumSnapshot(BaseModel):
    """Everything read from the store in one pass."""

    model_config = ConfigDict(frozen=True)

    tracks: list[Track] = Field(default_factory=list)
    modules: list[Module] = Field(default_factory=list)
    resources: list[Resource] = Field(default_factory=list)
    module_resources: list[ModuleResource] = Field(default_factory=list)


class ResourceCreate(BaseModel):
    title: str = Field(min_length=1)
    url: str = ""
    content_type: ContentType = "article"
    extracted_content: str | None = None
    topics: list[str] = Field(default_factory=list)
    prerequisite_topics: list[str] = Field(default_factory=list)
    difficulty: Difficulty = "intermediate"
    estimated_minutes: int = Field(default=15, ge=0)
    user_notes: str | None = None

    @field_validator("topics", "prerequisite_topics", mode="before")
    @classmethod
    def dedupe_topics(cls, v):
        return _unique_topics(v)


class ResourceUpdate(BaseModel):
    """Partial edit of a resource; only fields sent by the client are written."""

    CLEARABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({"extracted_content", "user_notes"})

    title: str | None = Field(default=None, min_length=1)
    url: str | None = None
    content_type: ContentType | None = None
    extracted_content: str | None = None
    topics: list[str] | None = None
    prerequisite_topics: list[str] | None = None
    difficulty: Difficulty | None = None
    estimated_minutes: int | None = Field(default=None, ge=0)
    status: Status | None = None
    user_notes: str | None = None

    @field_validator("topics", "prerequisite_topics", mode="before")
    @classmethod
    def dedupe_topics(cls, v):
        if v is None:
            return None
        return _unique_topics(v)

    def changes(self) -> dict:
        """Fields the client set. An explicit null only clears the clearable fields."""
        values = self.model_dump(exclude_unset=True)
        return {k: v for k, v in values.items() if v is not None or k in self.CLEARABLE_FIELDS}


# ============================================
# Analysis results
# ============================================


class TopicGap(BaseModel):
    topic: str
    required_count: int
    available_count: int


class Recommendation(BaseModel):
    resource: Resource
    score: int
    reason: str


class TrackSummary(Track):
    """Track row plus the overview numbers shown in the track list."""

    module_count: int = 0
    progress: int = 0


class ModuleStats(BaseModel):
    total: int
    completed: int
    is_complete: bool
    is_started: bool


class ModuleProgress(BaseModel):
    module: Module
    status: ModuleStatus
    stats: ModuleStats


class TrackProgress(BaseModel):
    track: Track
    progress: int
    modules: list[ModuleProgress] = Field(default_factory=list)


class DashboardSummary(BaseModel):
    total_resources: int
    completed_resources: int
    completion_percentage: int
    recent_activity: list[Resource] = Field(default_factory=list)
    in_progress: Resource | None = None
    next_up: Resource | None = None
