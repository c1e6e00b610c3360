"""User Repository - Data Access Layer (SoC)"""
from datetime import datetime
from typing import Dict, Optional

from bson import ObjectId

PROFILE_PROJECTION = {"name": 1, "email": 1, "profileImage": 1, "phone": 1, "address": 1}


class UserRepo:
    def __init__(self, collection):
        self.collection = collection

    def find_profile(self, user_id: ObjectId) -> Optional[Dict]:
        return self.collection.find_one({"_id": user_id}, PROFILE_PROJECTION)

    def find_with_credentials(self, user_id: ObjectId) -> Optional[Dict]:
        return self.collection.find_one({"_id": user_id}, {"email": 1, "password_hash": 1})

    def find_by_email(self, email: str) -> Optional[Dict]:
        return self.collection.find_one({"email": email})

    def update_password_hash(self, user_id: ObjectId, password_hash: str, updated_at: datetime) -> bool:
        result = self.collection.update_one(
            {"_id": user_id},
            {"$set": {"password_hash": password_hash, "updatedAt": updated_at}}
        )
        return result.matched_count > 0
