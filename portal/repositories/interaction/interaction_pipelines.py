"""Interaction Domain Pipelines - Flow-Based Organization (SoC)"""
from typing import Dict, List

from bson import ObjectId

from portal.config.settings import COLLECTIONS


def institution_content_stages(institution_id: ObjectId) -> List[Dict]:
    """Attach the interaction's content and keep only rows on the institution's content"""
    return [
        {"$lookup": {
            "from": COLLECTIONS["contents"],
            "let": {"cid": "$contentId"},
            "pipeline": [
                {"$match": {"$expr": {"$and": [
                    {"$eq": ["$_id", "$$cid"]},
                    {"$eq": ["$institutionId", institution_id]}
                ]}}},
                {"$project": {"title": 1}}
            ],
            "as": "contentDoc"
        }},
        {"$match": {"contentDoc.0": {"$exists": True}}},
    ]


def build_activity_pipeline(match: Dict, institution_id: ObjectId, limit: int) -> List[Dict]:
    """
    Most recent interactions matching ``match`` on the institution's content, with the user joined.

    The content filter runs ahead of ``$limit`` so other institutions' events never
    use up the window. Rows whose user no longer exists come back with an empty
    ``userDoc`` and are dropped by the caller.
    """
    return [
        {"$match": match},
        {"$sort": {"timestamp": -1}},
        *institution_content_stages(institution_id),
        {"$limit": limit},
        {"$lookup": {
            "from": COLLECTIONS["users"],
            "localField": "userId",
            "foreignField": "_id",
            "as": "userDoc"
        }},
        {"$project": {
            "eventType": 1,
            "timestamp": 1,
            "userDoc._id": 1,
            "userDoc.name": 1,
            "userDoc.email": 1,
            "userDoc.profileImage": 1,
            "contentDoc": 1
        }}
    ]
