"""Institution Member Repository - Data Access Layer (SoC)"""
from datetime import datetime
from typing import Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument

from portal.repositories.member.member_pipelines import (
    build_active_learners_pipeline,
    build_active_members_average_pipeline,
    build_member_listing_pipeline,
    build_member_performance_summary_pipeline,
)


class MemberRepo:
    def __init__(self, collection):
        self.collection = collection

    def count(self, institution_id: ObjectId, status: Optional[str] = None,
              created_since: Optional[datetime] = None) -> int:
        query = {"institutionId": institution_id}
        if status:
            query["status"] = status
        if created_since:
            query["createdAt"] = {"$gte": created_since}
        return self.collection.count_documents(query)

    def find_member_user_ids(self, institution_id: ObjectId) -> List[ObjectId]:
        members = self.collection.find({"institutionId": institution_id}, {"userId": 1})
        return [m["userId"] for m in members if m.get("userId")]

    def find_membership(self, user_id: ObjectId, institution_id: ObjectId) -> Optional[Dict]:
        return self.collection.find_one({"userId": user_id, "institutionId": institution_id})

    def update_status(self, user_id: ObjectId, institution_id: ObjectId, status: str,
                      updated_at: datetime) -> Optional[Dict]:
        """Set membership status; returns the updated document or None when no membership matched"""
        return self.collection.find_one_and_update(
            {"userId": user_id, "institutionId": institution_id},
            {"$set": {"status": status, "updatedAt": updated_at}},
            return_document=ReturnDocument.AFTER
        )

    def get_active_members_average(self, institution_id: ObjectId) -> Optional[float]:
        results = list(self.collection.aggregate(build_active_members_average_pipeline(institution_id)))
        return results[0].get("avgPerformance") if results else None

    def list_with_performance(self, institution_id: ObjectId) -> List[Dict]:
        return list(self.collection.aggregate(build_member_listing_pipeline(institution_id)))

    def get_member_performance_summaries(self, institution_id: ObjectId) -> List[Dict]:
        return list(self.collection.aggregate(build_member_performance_summary_pipeline(institution_id)))

    def count_active_learners(self, institution_id: ObjectId, since: datetime) -> int:
        results = list(self.collection.aggregate(build_active_learners_pipeline(institution_id, since)))
        return results[0]["activeLearners"] if results else 0
