"""Institution Repository - Data Access Layer (SoC)"""
from datetime import datetime
from typing import Dict, List, Optional

from bson import ObjectId

from portal.config.settings import COLLECTIONS

SETTINGS_PROJECTION = {
    "name": 1, "description": 1, "website": 1, "contactEmail": 1,
    "contactPhone": 1, "address": 1, "branding": 1
}


def _admin_filter(user_id: ObjectId) -> Dict:
    return {"$or": [{"owner": user_id}, {"admins": user_id}]}


def _user_lookup(local_field: str, as_field: str) -> Dict:
    return {"$lookup": {
        "from": COLLECTIONS["users"],
        "localField": local_field,
        "foreignField": "_id",
        "pipeline": [{"$project": {"name": 1, "email": 1, "profileImage": 1}}],
        "as": as_field
    }}


def build_admin_institution_pipeline(institution_id: ObjectId, user_id: ObjectId) -> List[Dict]:
    """The session institution, only if the user owns or administers it, with users populated"""
    return [
        {"$match": {"_id": institution_id, **_admin_filter(user_id)}},
        _user_lookup("owner", "ownerDoc"),
        _user_lookup("admins", "adminDocs"),
        _user_lookup("members", "memberDocs"),
        {"$project": {
            "name": 1,
            "portalKey": 1,
            "owner": {"$arrayElemAt": ["$ownerDoc", 0]},
            "admins": "$adminDocs",
            "members": "$memberDocs"
        }}
    ]


class InstitutionRepo:
    def __init__(self, collection):
        self.collection = collection

    def find_for_admin(self, user_id: ObjectId) -> Optional[Dict]:
        """Institution the user owns or administers (login)"""
        return self.collection.find_one(_admin_filter(user_id), {"name": 1, "portalKey": 1})

    def find_admin_institution(self, institution_id: ObjectId, user_id: ObjectId) -> Optional[Dict]:
        results = list(self.collection.aggregate(build_admin_institution_pipeline(institution_id, user_id)))
        return results[0] if results else None

    def find_settings(self, institution_id: ObjectId) -> Optional[Dict]:
        return self.collection.find_one({"_id": institution_id}, SETTINGS_PROJECTION)

    def update_settings(self, institution_id: ObjectId, set_fields: Dict, unset_fields: List[str],
                        updated_at: datetime) -> bool:
        """Apply only the provided fields; returns False when the institution does not exist"""
        update = {"$set": {**set_fields, "updatedAt": updated_at}}
        if unset_fields:
            update["$unset"] = {field: "" for field in unset_fields}
        result = self.collection.update_one({"_id": institution_id}, update)
        return result.matched_count > 0
