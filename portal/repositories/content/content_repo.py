"""Content Repository - Data Access Layer (SoC)"""
from datetime import datetime
from typing import Dict, List, Optional

from bson import ObjectId
from pymongo import DESCENDING, UpdateOne

from portal.repositories.content.content_pipelines import (
    build_content_breakdown_pipeline,
    build_content_modules_pipeline,
)


class ContentRepo:
    def __init__(self, collection):
        self.collection = collection

    def count(self, institution_id: ObjectId, published_only: bool = False,
              created_since: Optional[datetime] = None) -> int:
        """Count non-trashed content; published means not a draft as well"""
        query = {"institutionId": institution_id, "isTrash": False}
        if published_only:
            query["isDraft"] = False
        if created_since:
            query["createdAt"] = {"$gte": created_since}
        return self.collection.count_documents(query)

    def list_modules(self, institution_id: ObjectId) -> List[Dict]:
        return list(self.collection.aggregate(build_content_modules_pipeline(institution_id)))

    def get_breakdown(self, institution_id: ObjectId) -> List[Dict]:
        return list(self.collection.aggregate(build_content_breakdown_pipeline(institution_id)))

    def find_highest_order(self, institution_id: ObjectId) -> Optional[int]:
        doc = self.collection.find_one(
            {"institutionId": institution_id},
            {"order": 1},
            sort=[("order", DESCENDING)]
        )
        if not doc or doc.get("order") is None:
            return None
        return doc["order"]

    def insert(self, content: Dict) -> ObjectId:
        return self.collection.insert_one(content).inserted_id

    def soft_delete_many(self, content_ids: List[ObjectId], institution_id: ObjectId,
                         modified_at: datetime) -> int:
        """Move matching in-tenant items to trash; returns the modified count"""
        result = self.collection.update_many(
            {"_id": {"$in": content_ids}, "institutionId": institution_id},
            {"$set": {"isTrash": True, "lastModifiedAt": modified_at}}
        )
        return result.modified_count

    def update_order(self, ordered_ids: List[ObjectId], institution_id: ObjectId) -> int:
        """Write each id's position as its order in one unordered batch; returns matched count"""
        operations = [
            UpdateOne({"_id": content_id, "institutionId": institution_id}, {"$set": {"order": index}})
            for index, content_id in enumerate(ordered_ids)
        ]
        result = self.collection.bulk_write(operations, ordered=False)
        return result.matched_count
