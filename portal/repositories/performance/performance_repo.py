"""Performance Repository - Data Access Layer (SoC)"""
from typing import Dict, List, Optional

from bson import ObjectId

from portal.repositories.performance.performance_pipelines import (
    build_score_summary_pipeline,
    build_user_average_pipeline,
    build_user_performance_pipeline,
)

EMPTY_SUMMARY = {"averageScore": None, "totalTimeSeconds": 0, "recordCount": 0, "learnerCount": 0}


class PerformanceRepo:
    def __init__(self, collection):
        self.collection = collection

    def get_score_summary(self, institution_id: ObjectId, members_only: bool = False) -> Dict:
        """Summary over the institution's performance rows; empty summary when there are none"""
        pipeline = build_score_summary_pipeline(institution_id, members_only)
        results = list(self.collection.aggregate(pipeline))
        return results[0] if results else dict(EMPTY_SUMMARY)

    def find_for_user(self, user_id: ObjectId, institution_id: ObjectId) -> List[Dict]:
        return list(self.collection.aggregate(build_user_performance_pipeline(user_id, institution_id)))

    def get_user_average(self, user_id: ObjectId, institution_id: ObjectId) -> Optional[float]:
        results = list(self.collection.aggregate(build_user_average_pipeline(user_id, institution_id)))
        return results[0].get("averageScore") if results else None
