"""Content Domain Pipelines - Flow-Based Organization (SoC)"""
from typing import Dict, List

from bson import ObjectId

from portal.config.settings import COLLECTIONS, UNDERSTANDING_LEVEL_MASTERED


def active_content_match(institution_id: ObjectId) -> Dict:
    return {"$match": {"institutionId": institution_id, "isTrash": False}}


def build_content_modules_pipeline(institution_id: ObjectId) -> List[Dict]:
    """Non-trashed content in display order with the author's name"""
    return [
        active_content_match(institution_id),
        {"$sort": {"order": 1}},
        {"$lookup": {
            "from": COLLECTIONS["users"],
            "localField": "createdBy",
            "foreignField": "_id",
            "as": "authorDoc"
        }},
        {"$addFields": {"author": {"$arrayElemAt": [
            {"$map": {"input": "$authorDoc", "as": "a", "in": {"_id": "$$a._id", "name": "$$a.name"}}},
            0
        ]}}},
        {"$project": {"authorDoc": 0, "data": 0}}
    ]


def build_content_breakdown_pipeline(institution_id: ObjectId) -> List[Dict]:
    """Per-content enrollment, mastery, score and time, including items with no rows"""
    return [
        active_content_match(institution_id),
        {"$sort": {"order": 1}},
        {"$lookup": {
            "from": COLLECTIONS["performances"],
            "localField": "_id",
            "foreignField": "contentId",
            "as": "perf"
        }},
        {"$project": {
            "title": 1,
            "order": 1,
            "enrolledUsers": {"$size": {"$setUnion": ["$perf.userId", []]}},
            "masteredUsers": {"$size": {"$setUnion": [
                {"$map": {
                    "input": {"$filter": {
                        "input": "$perf",
                        "as": "p",
                        "cond": {"$eq": ["$$p.understandingLevel", UNDERSTANDING_LEVEL_MASTERED]}
                    }},
                    "as": "p",
                    "in": "$$p.userId"
                }},
                []
            ]}},
            "avgScore": {"$avg": "$perf.understandingScore"},
            "avgTimeSeconds": {"$avg": "$perf.totalTimeSeconds"}
        }}
    ]
