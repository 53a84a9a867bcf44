"""
Curriculum Store
Reads curriculum snapshots from Supabase and applies the few writes the
client performs (add, edit, toggle, delete, seed, reset).
"""

import logging
import uuid
from datetime import UTC, datetime
from typing import Any

import httpx
from supabase import Client
from tenacity import (
    after_log,
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from pmos.core.supabase_client import get_supabase_client
from pmos.models import (
    CurriculumSnapshot,
    Module,
    ModuleResource,
    Resource,
    ResourceCreate,
    ResourceUpdate,
    Track,
)

logger = logging.getLogger(__name__)

TRACKS_TABLE = "tracks"
MODULES_TABLE = "modules"
RESOURCES_TABLE = "resources"
MODULE_RESOURCES_TABLE = "module_resources"
SYNTHESES_TABLE = "syntheses"

# Children before parents so links never point at deleted rows mid-reset
RESET_ORDER = (
    MODULE_RESOURCES_TABLE,
    SYNTHESES_TABLE,
    RESOURCES_TABLE,
    MODULES_TABLE,
    TRACKS_TABLE,
)

# uuid primary keys reject "" in filters; no row ever carries the nil uuid
NIL_UUID = "00000000-0000-0000-0000-000000000000"

# Transient network failures between us and PostgREST
supabase_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
    retry=retry_if_exception_type((httpx.TransportError,)),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    after=after_log(logger, logging.DEBUG),
    reraise=True,
)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class CurriculumStore:
    """Supabase-backed access to tracks, modules, resources and their links."""

    def __init__(self, supabase: Client | None = None):
        self.supabase = supabase or get_supabase_client()

    # ============================================
    # Reads
    # ============================================

    @supabase_retry
    def _fetch_table(self, table: str) -> list[dict[str, Any]]:
        response = self.supabase.table(table).select("*").execute()
        return response.data or []

    @supabase_retry
    def _fetch_by_id(self, table: str, row_id: str) -> dict[str, Any] | None:
        response = self.supabase.table(table).select("*").eq("id", row_id).execute()
        if not response.data:
            return None
        return response.data[0]

    def load_snapshot(self) -> CurriculumSnapshot:
        """Read all four curriculum collections in one pass."""
        snapshot = CurriculumSnapshot(
            tracks=[Track(**row) for row in self._fetch_table(TRACKS_TABLE)],
            modules=[Module(**row) for row in self._fetch_table(MODULES_TABLE)],
            resources=[Resource(**row) for row in self._fetch_table(RESOURCES_TABLE)],
            module_resources=[
                ModuleResource(**row) for row in self._fetch_table(MODULE_RESOURCES_TABLE)
            ],
        )
        logger.info(
            f"Loaded snapshot: {len(snapshot.tracks)} tracks, {len(snapshot.modules)} modules, "
            f"{len(snapshot.resources)} resources, {len(snapshot.module_resources)} links"
        )
        return snapshot

    def load_resources(self) -> list[Resource]:
        return [Resource(**row) for row in self._fetch_table(RESOURCES_TABLE)]

    def get_track(self, track_id: str) -> Track | None:
        row = self._fetch_by_id(TRACKS_TABLE, track_id)
        return Track(**row) if row else None

    def get_module(self, module_id: str) -> Module | None:
        row = self._fetch_by_id(MODULES_TABLE, module_id)
        return Module(**row) if row else None

    def get_resource(self, resource_id: str) -> Resource | None:
        row = self._fetch_by_id(RESOURCES_TABLE, resource_id)
        return Resource(**row) if row else None

    # ============================================
    # Writes
    # ============================================

    def create_resource(self, payload: ResourceCreate) -> Resource:
        """Insert a new queued resource."""
        row = payload.model_dump()
        row.update(
            {
                "id": str(uuid.uuid4()),
                "status": "queued",
                "date_added": _now_iso(),
            }
        )

        response = self.supabase.table(RESOURCES_TABLE).insert(row).execute()
        if not response.data:
            raise RuntimeError("Supabase returned no row for inserted resource")

        logger.info(f"Created resource {row['id']}: {payload.title}")
        return Resource(**response.data[0])

    def toggle_resource_status(self, resource: Resource) -> Resource:
        """
        Flip completion: completed goes back to in-progress, anything else
        becomes completed and is stamped with the completion time.
        """
        if resource.status == "completed":
            update = {"status": "in-progress", "completion_date": None}
        else:
            update = {"status": "completed", "completion_date": _now_iso()}

        response = (
            self.supabase.table(RESOURCES_TABLE).update(update).eq("id", resource.id).execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to update status of resource {resource.id}")

        logger.info(f"Resource {resource.id}: {resource.status} -> {update['status']}")
        return Resource(**response.data[0])

    def update_resource(self, resource_id: str, payload: ResourceUpdate) -> Resource:
        """
        Apply a partial edit. Only the fields the caller actually set are
        written; an empty edit returns the stored row unchanged.
        """
        values = payload.changes()
        if not values:
            current = self.get_resource(resource_id)
            if current is None:
                raise RuntimeError(f"Resource {resource_id} not found")
            return current

        # Status edits keep completion_date consistent, as toggling does
        if "status" in values:
            values["completion_date"] = _now_iso() if values["status"] == "completed" else None

        response = (
            self.supabase.table(RESOURCES_TABLE).update(values).eq("id", resource_id).execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to update resource {resource_id}")

        logger.info(f"Updated resource {resource_id}: {sorted(values)}")
        return Resource(**response.data[0])

    def delete_resource(self, resource_id: str) -> int:
        """
        Delete a resource together with every module link pointing at it.

        Returns:
            Number of module links removed
        """
        links = (
            self.supabase.table(MODULE_RESOURCES_TABLE)
            .delete()
            .eq("resource_id", resource_id)
            .execute()
        )
        self.supabase.table(RESOURCES_TABLE).delete().eq("id", resource_id).execute()

        removed = len(links.data or [])
        logger.info(f"Deleted resource {resource_id} and {removed} module link(s)")
        return removed

    def seed_demo_data(self) -> bool:
        """
        Insert the demo "Product Discovery" track when the store has no tracks.

        Returns:
            True if data was inserted
        """
        existing = self.supabase.table(TRACKS_TABLE).select("id").execute()
        if existing.data:
            logger.info("Tracks already present, skipping demo seed")
            return False

        rows = build_demo_rows(_now_iso())
        for table in (TRACKS_TABLE, MODULES_TABLE, RESOURCES_TABLE, MODULE_RESOURCES_TABLE):
            self.supabase.table(table).insert(rows[table]).execute()

        logger.info("Seeded demo curriculum")
        return True

    def reset_all(self) -> dict[str, int]:
        """
        Delete every row of every curriculum table.

        Returns:
            Deleted row count per table
        """
        deleted: dict[str, int] = {}
        for table in RESET_ORDER:
            # PostgREST refuses unfiltered deletes
            response = self.supabase.table(table).delete().neq("id", NIL_UUID).execute()
            deleted[table] = len(response.data or [])
            logger.warning(f"Reset: deleted {deleted[table]} row(s) from {table}")
        return deleted


def build_demo_rows(timestamp: str) -> dict[str, list[dict[str, Any]]]:
    """Rows for the demo curriculum, keyed by table."""
    track_id = str(uuid.uuid4())
    module_id = str(uuid.uuid4())
    resource_ids = [str(uuid.uuid4()) for _ in range(3)]

    resources = [
        {
            "id": resource_ids[0],
            "title": "The Mom Test Summary",
            "url": "https://example.com/mom-test",
            "content_type": "article",
            "difficulty": "beginner",
            "estimated_minutes": 10,
            "status": "completed",
            "date_added": timestamp,
            "completion_date": timestamp,
            "topics": ["user-research", "interviewing"],
            "prerequisite_topics": [],
        },
        {
            "id": resource_ids[1],
            "title": "Conducting CustDev Interviews",
            "url": "https://example.com/cust-dev",
            "content_type": "video",
            "difficulty": "intermediate",
            "estimated_minutes": 45,
            "status": "queued",
            "date_added": timestamp,
            "topics": ["user-research", "discovery"],
            "prerequisite_topics": ["interviewing"],
        },
        {
            "id": resource_ids[2],
            "title": "Advanced Empathy Mapping",
            "url": "https://example.com/empathy",
            "content_type": "article",
            "difficulty": "advanced",
            "estimated_minutes": 20,
            "status": "queued",
            "date_added": timestamp,
            "topics": ["empathy", "design-thinking"],
            "prerequisite_topics": ["user-research"],
        },
    ]

    return {
        TRACKS_TABLE: [
            {
                "id": track_id,
                "name": "Product Discovery",
                "description": "Learn how to validate ideas and understand user needs.",
                "order": 1,
                "color": "#3b82f6",
                "estimated_total_hours": 12,
            }
        ],
        MODULES_TABLE: [
            {
                "id": module_id,
                "track_id": track_id,
                "name": "User Interview Basics",
                "description": "Master the art of talking to users.",
                "order": 1,
                "estimated_hours": 2,
                "prerequisites": [],
            }
        ],
        RESOURCES_TABLE: resources,
        MODULE_RESOURCES_TABLE: [
            {
                "id": str(uuid.uuid4()),
                "module_id": module_id,
                "resource_id": resource_id,
                "sequence_order": position,
            }
            for position, resource_id in enumerate(resource_ids, start=1)
        ],
    }
