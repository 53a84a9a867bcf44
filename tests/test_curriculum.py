"""
Tests for module lock state and track progress (services/curriculum.py)
"""

import pytest

from pmos.models import CurriculumSnapshot, Module, ModuleResource, Resource, Track
from pmos.services.curriculum import (
    build_track_progress,
    calculate_track_progress,
    get_module_resources,
    get_module_stats,
    get_module_status,
    round_percentage,
    sort_track_modules,
    summarize_tracks,
)


def _link(module_id, resource_id, sequence_order=None):
    return ModuleResource(
        id=f"{module_id}:{resource_id}",
        module_id=module_id,
        resource_id=resource_id,
        sequence_order=sequence_order,
    )


class TestModuleStats:
    """Test cases for get_module_stats"""

    def test_counts_completed_resources(self, sample_snapshot):
        stats = get_module_stats(
            "mod_1", sample_snapshot.module_resources, sample_snapshot.resources
        )

        assert stats.total == 2
        assert stats.completed == 2
        assert stats.is_complete is True
        assert stats.is_started is True

    def test_module_without_resources_is_never_complete(self):
        stats = get_module_stats("empty", [], [])

        assert stats.total == 0
        assert stats.is_complete is False
        assert stats.is_started is False

    def test_links_to_missing_resources_are_ignored(self, make_resource):
        done = make_resource(status="completed")
        links = [_link("m", done.id), _link("m", "deleted_resource")]

        stats = get_module_stats("m", links, [done])

        assert stats.total == 1
        assert stats.is_complete is True


class TestModuleStatus:
    """Test cases for get_module_status"""

    def test_statuses_follow_the_chain(self, sample_snapshot):
        ordered = sort_track_modules("track_1", sample_snapshot.modules)
        statuses = [
            get_module_status(
                m, ordered, sample_snapshot.module_resources, sample_snapshot.resources
            )
            for m in ordered
        ]

        assert [m.id for m in ordered] == ["mod_1", "mod_2", "mod_3"]
        assert statuses == ["completed", "available", "locked"]

    def test_first_module_is_available(self, make_resource):
        module = Module(id="m1", track_id="t", order=1)
        queued = make_resource(status="queued")

        status = get_module_status(module, [module], [_link("m1", queued.id)], [queued])

        assert status == "available"

    def test_empty_first_module_blocks_the_rest_of_the_track(self, make_resource):
        m1 = Module(id="m1", track_id="t", order=1)
        m2 = Module(id="m2", track_id="t", order=2)
        m3 = Module(id="m3", track_id="t", order=3)
        r2 = make_resource(status="queued")
        r3 = make_resource(status="in-progress")
        links = [_link("m2", r2.id), _link("m3", r3.id)]
        ordered = [m1, m2, m3]

        statuses = [get_module_status(m, ordered, links, [r2, r3]) for m in ordered]

        assert statuses == ["available", "locked", "locked"]

    def test_complete_module_reports_completed_even_when_previous_is_not(self, make_resource):
        m1 = Module(id="m1", track_id="t", order=1)
        m2 = Module(id="m2", track_id="t", order=2)
        done = make_resource(status="completed")

        status = get_module_status(m2, [m1, m2], [_link("m2", done.id)], [done])

        assert status == "completed"

    def test_completing_previous_module_unlocks_next(self, make_resource):
        m1 = Module(id="m1", track_id="t", order=1)
        m2 = Module(id="m2", track_id="t", order=2)
        first = make_resource(status="queued")
        second = make_resource(status="queued")
        links = [_link("m1", first.id), _link("m2", second.id)]

        before = get_module_status(m2, [m1, m2], links, [first, second])
        first_done = first.model_copy(update={"status": "completed"})
        after = get_module_status(m2, [m1, m2], links, [first_done, second])

        assert before == "locked"
        assert after == "available"

    def test_module_outside_sequence_raises(self):
        m1 = Module(id="m1", track_id="t", order=1)
        stray = Module(id="stray", track_id="other", order=1)

        with pytest.raises(ValueError):
            get_module_status(stray, [m1], [], [])


class TestTrackProgress:
    """Test cases for track progress and the assembled track view"""

    def test_round_percentage_half_up(self):
        assert round_percentage(1, 8) == 13
        assert round_percentage(2, 3) == 67
        assert round_percentage(1, 3) == 33
        assert round_percentage(0, 0) == 0

    def test_calculate_track_progress(self, sample_snapshot):
        progress = calculate_track_progress(
            "track_1",
            sample_snapshot.modules,
            sample_snapshot.module_resources,
            sample_snapshot.resources,
        )

        assert progress == 50

    def test_build_track_progress(self, sample_snapshot):
        track = sample_snapshot.tracks[0]

        view = build_track_progress(track, sample_snapshot)

        assert view.track.id == "track_1"
        assert view.progress == 50
        assert [m.module.id for m in view.modules] == ["mod_1", "mod_2", "mod_3"]
        assert [m.status for m in view.modules] == ["completed", "available", "locked"]
        assert view.modules[0].stats.total == 2

    def test_empty_track(self, sample_snapshot):
        track = Track(id="empty_track", name="Nothing yet")

        view = build_track_progress(track, sample_snapshot)

        assert view.modules == []
        assert view.progress == 0

    def test_idempotent(self, sample_snapshot):
        track = sample_snapshot.tracks[0]

        assert build_track_progress(track, sample_snapshot) == build_track_progress(
            track, sample_snapshot
        )


    def test_summarize_tracks(self, sample_snapshot):
        summaries = summarize_tracks(sample_snapshot)

        assert [(s.id, s.module_count, s.progress) for s in summaries] == [
            ("track_2", 0, 0),
            ("track_1", 3, 50),
        ]
        assert summaries[1].name == "Product Discovery"

    def test_summary_progress_matches_track_view(self, sample_snapshot):
        summary = summarize_tracks(sample_snapshot)[1]
        view = build_track_progress(sample_snapshot.tracks[0], sample_snapshot)

        assert summary.progress == view.progress
        assert summary.module_count == len(view.modules)

class TestModuleResources:
    """Test cases for get_module_resources"""

    def test_ordered_by_sequence(self, sample_snapshot):
        resources = get_module_resources(
            "mod_1", sample_snapshot.module_resources, sample_snapshot.resources
        )

        assert [r.id for r in resources] == ["r1", "r2"]

    def test_missing_sequence_sorts_first(self):
        a = Resource(id="a", title="A")
        b = Resource(id="b", title="B")
        links = [_link("m", "a", 2), _link("m", "b", None)]

        resources = get_module_resources("m", links, [a, b])

        assert [r.id for r in resources] == ["b", "a"]

    def test_snapshot_is_not_mutated(self, sample_snapshot):
        before = sample_snapshot.model_dump()

        build_track_progress(sample_snapshot.tracks[0], sample_snapshot)

        assert sample_snapshot.model_dump() == before
        assert isinstance(sample_snapshot, CurriculumSnapshot)
