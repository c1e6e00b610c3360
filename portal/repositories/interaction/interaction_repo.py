"""Interaction Repository - Data Access Layer (SoC)"""
from typing import Dict, List

from bson import ObjectId

from portal.repositories.interaction.interaction_pipelines import build_activity_pipeline


class InteractionRepo:
    def __init__(self, collection):
        self.collection = collection

    def find_recent_for_users(self, user_ids: List[ObjectId], institution_id: ObjectId, limit: int) -> List[Dict]:
        pipeline = build_activity_pipeline({"userId": {"$in": user_ids}}, institution_id, limit)
        return list(self.collection.aggregate(pipeline))

    def find_recent_for_user(self, user_id: ObjectId, institution_id: ObjectId, limit: int) -> List[Dict]:
        pipeline = build_activity_pipeline({"userId": user_id}, institution_id, limit)
        return list(self.collection.aggregate(pipeline))
