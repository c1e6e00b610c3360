"""Unit tests for the aggregation pipeline builders.

Pipelines are plain data, so tenant filters can be checked without a database.
"""
from datetime import datetime, timezone

from bson import ObjectId

from portal.repositories.content.content_pipelines import (
    build_content_breakdown_pipeline,
    build_content_modules_pipeline,
)
from portal.repositories.institution.institution_repo import build_admin_institution_pipeline
from portal.repositories.interaction.interaction_pipelines import build_activity_pipeline
from portal.repositories.member.member_pipelines import (
    build_active_learners_pipeline,
    build_active_members_average_pipeline,
    build_member_listing_pipeline,
    build_member_performance_summary_pipeline,
)
from portal.repositories.performance.performance_pipelines import (
    build_score_summary_pipeline,
    build_user_average_pipeline,
    build_user_performance_pipeline,
    scoped_performance_lookup,
)


def _lookups(pipeline, collection):
    return [s["$lookup"] for s in pipeline if "$lookup" in s and s["$lookup"]["from"] == collection]


class TestPerformanceScoping:
    """Tests that performance rows are tied to the institution through content."""

    def test_score_summary_filters_on_content_institution(self, institution_id) -> None:
        """Test that the summary keeps only rows whose content belongs to the institution."""
        pipeline = build_score_summary_pipeline(institution_id)

        assert _lookups(pipeline, "contents")
        assert {"$match": {"contentDoc.institutionId": institution_id}} in pipeline
        assert not _lookups(pipeline, "institutionmembers")

    def test_members_only_adds_membership_check(self, institution_id) -> None:
        """Test that the dashboard variant also requires a membership row."""
        pipeline = build_score_summary_pipeline(institution_id, members_only=True)

        membership = _lookups(pipeline, "institutionmembers")
        assert len(membership) == 1
        conditions = membership[0]["pipeline"][0]["$match"]["$expr"]["$and"]
        assert {"$eq": ["$institutionId", institution_id]} in conditions

    def test_scoped_lookup_embeds_content_filter(self, institution_id) -> None:
        """Test that the per-member lookup applies the content tenant filter."""
        stage = scoped_performance_lookup(institution_id)

        inner = stage["$lookup"]["pipeline"]
        assert stage["$lookup"]["from"] == "performances"
        assert {"$match": {"contentDoc.institutionId": institution_id}} in inner

    def test_user_performance_keeps_deleted_content(self, institution_id) -> None:
        """Test that rows with no content survive while foreign content is excluded."""
        user_id = ObjectId()
        pipeline = build_user_performance_pipeline(user_id, institution_id)

        match = pipeline[2]["$match"]["$or"]
        assert {"contentDoc": {"$size": 0}} in match
        assert {"contentDoc.institutionId": institution_id} in match
        assert pipeline[0] == {"$match": {"userId": user_id}}

    def test_user_average_is_scoped(self, institution_id) -> None:
        """Test that the recomputed member average uses institution content only."""
        pipeline = build_user_average_pipeline(ObjectId(), institution_id)

        assert {"$match": {"contentDoc.institutionId": institution_id}} in pipeline


class TestMemberPipelines:
    """Tests for membership-driven pipelines."""

    def test_every_member_pipeline_starts_with_institution_match(self, institution_id) -> None:
        """Test that member pipelines never leave the caller's institution."""
        since = datetime(2024, 1, 1, tzinfo=timezone.utc)
        pipelines = [
            build_active_members_average_pipeline(institution_id),
            build_member_listing_pipeline(institution_id),
            build_member_performance_summary_pipeline(institution_id),
            build_active_learners_pipeline(institution_id, since),
        ]

        for pipeline in pipelines:
            assert pipeline[0]["$match"]["institutionId"] == institution_id

    def test_average_preserves_members_without_rows(self, institution_id) -> None:
        """Test that the unwind keeps members with empty performance arrays."""
        pipeline = build_active_members_average_pipeline(institution_id)

        unwind = next(s["$unwind"] for s in pipeline if "$unwind" in s)
        assert unwind["preserveNullAndEmptyArrays"] is True

    def test_listing_sorted_newest_first(self, institution_id) -> None:
        """Test that the user listing sorts by registration date descending."""
        pipeline = build_member_listing_pipeline(institution_id)

        assert {"$sort": {"createdAt": -1}} in pipeline

    def test_active_learners_uses_window(self, institution_id) -> None:
        """Test that only interactions inside the window count."""
        since = datetime(2024, 1, 1, tzinfo=timezone.utc)
        pipeline = build_active_learners_pipeline(institution_id, since)

        lookup = _lookups(pipeline, "interactions")[0]
        conditions = lookup["pipeline"][0]["$match"]["$expr"]["$and"]
        assert {"$gte": ["$timestamp", since]} in conditions
        assert pipeline[-1] == {"$count": "activeLearners"}


class TestContentPipelines:
    """Tests for content listing and breakdown pipelines."""

    def test_modules_exclude_trash_and_sort_by_order(self, institution_id) -> None:
        """Test that listings skip trashed items and follow display order."""
        pipeline = build_content_modules_pipeline(institution_id)

        assert pipeline[0] == {"$match": {"institutionId": institution_id, "isTrash": False}}
        assert pipeline[1] == {"$sort": {"order": 1}}

    def test_breakdown_counts_mastered_users(self, institution_id) -> None:
        """Test that the breakdown projects enrolled and mastered user counts."""
        pipeline = build_content_breakdown_pipeline(institution_id)

        project = pipeline[-1]["$project"]
        assert "enrolledUsers" in project
        assert "masteredUsers" in project
        assert pipeline[0]["$match"]["institutionId"] == institution_id


class TestOtherPipelines:
    """Tests for activity and institution pipelines."""

    def test_activity_content_join_is_tenant_scoped(self, institution_id) -> None:
        """Test that content only resolves inside the institution."""
        pipeline = build_activity_pipeline({"userId": ObjectId()}, institution_id, 5)

        assert {"$limit": 5} in pipeline
        assert {"$sort": {"timestamp": -1}} in pipeline
        content_lookup = _lookups(pipeline, "contents")[0]
        conditions = content_lookup["pipeline"][0]["$match"]["$expr"]["$and"]
        assert {"$eq": ["$institutionId", institution_id]} in conditions

    def test_admin_institution_requires_owner_or_admin(self, institution_id, user_id) -> None:
        """Test that myInstitution only matches institutions the caller administers."""
        pipeline = build_admin_institution_pipeline(institution_id, user_id)

        assert pipeline[0]["$match"] == {
            "_id": institution_id,
            "$or": [{"owner": user_id}, {"admins": user_id}],
        }


class TestInteractionTenantScoping:
    """Tests that other institutions' interactions never reach counts or feeds."""

    def test_active_learners_only_count_institution_content(self, institution_id) -> None:
        """Test that recent activity on another institution's content does not make a learner active."""
        since = datetime(2024, 1, 1, tzinfo=timezone.utc)
        pipeline = build_active_learners_pipeline(institution_id, since)

        inner = _lookups(pipeline, "interactions")[0]["pipeline"]
        content_lookup = next(s["$lookup"] for s in inner if "$lookup" in s)
        assert content_lookup["from"] == "contents"
        content_match = {"$match": {"contentDoc.institutionId": institution_id}}
        assert content_match in inner
        assert inner.index(content_match) < inner.index({"$limit": 1})

    def test_active_learners_count_every_member_status(self, institution_id) -> None:
        """Test that learners are distinct members regardless of membership status."""
        pipeline = build_active_learners_pipeline(institution_id, datetime(2024, 1, 1, tzinfo=timezone.utc))

        assert pipeline[0] == {"$match": {"institutionId": institution_id}}

    def test_activity_filters_foreign_content_before_limit(self, institution_id) -> None:
        """Test that newer events on other institutions' content cannot use up the limit."""
        pipeline = build_activity_pipeline({"userId": ObjectId()}, institution_id, 5)

        limit_index = pipeline.index({"$limit": 5})
        content_index = next(i for i, s in enumerate(pipeline)
                             if "$lookup" in s and s["$lookup"]["from"] == "contents")
        non_empty_index = pipeline.index({"$match": {"contentDoc.0": {"$exists": True}}})
        assert pipeline.index({"$sort": {"timestamp": -1}}) < content_index < non_empty_index < limit_index

    def test_activity_user_join_after_limit(self, institution_id) -> None:
        """Test that only the user join is left for after the limit."""
        pipeline = build_activity_pipeline({"userId": ObjectId()}, institution_id, 5)

        after_limit = pipeline[pipeline.index({"$limit": 5}) + 1:]
        assert [s["$lookup"]["from"] for s in after_limit if "$lookup" in s] == ["users"]
