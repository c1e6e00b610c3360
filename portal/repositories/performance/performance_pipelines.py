"""Performance Domain Pipelines - Flow-Based Organization (SoC)"""
from typing import Dict, List

from bson import ObjectId

from portal.config.settings import COLLECTIONS

# ═══════════════════════════════════════════════════════════════════════════════
# TENANT SCOPING
# A performance row belongs to an institution through its content item.
# ═══════════════════════════════════════════════════════════════════════════════

def content_scope_stages(institution_id: ObjectId) -> List[Dict]:
    """Keep only performance rows whose content belongs to the institution"""
    return [
        {"$lookup": {
            "from": COLLECTIONS["contents"],
            "localField": "contentId",
            "foreignField": "_id",
            "as": "contentDoc"
        }},
        {"$match": {"contentDoc.institutionId": institution_id}},
    ]


def scoped_performance_lookup(institution_id: ObjectId, local_field: str = "userId",
                              as_field: str = "performanceRecords") -> Dict:
    """$lookup stage attaching a user's performance rows for this institution's content"""
    return {"$lookup": {
        "from": COLLECTIONS["performances"],
        "let": {"uid": f"${local_field}"},
        "pipeline": [
            {"$match": {"$expr": {"$eq": ["$userId", "$$uid"]}}},
            *content_scope_stages(institution_id),
            {"$project": {"contentDoc": 0}},
        ],
        "as": as_field
    }}


def membership_scope_stages(institution_id: ObjectId) -> List[Dict]:
    """Keep only performance rows whose user is a member of the institution"""
    return [
        {"$lookup": {
            "from": COLLECTIONS["members"],
            "let": {"uid": "$userId"},
            "pipeline": [
                {"$match": {"$expr": {"$and": [
                    {"$eq": ["$userId", "$$uid"]},
                    {"$eq": ["$institutionId", institution_id]}
                ]}}},
                {"$limit": 1}
            ],
            "as": "membership"
        }},
        {"$match": {"membership.0": {"$exists": True}}},
    ]


# ═══════════════════════════════════════════════════════════════════════════════
# AGGREGATES
# ═══════════════════════════════════════════════════════════════════════════════

def build_score_summary_pipeline(institution_id: ObjectId, members_only: bool = False) -> List[Dict]:
    """Average score, total time, row count and distinct learners over the institution's rows"""
    pipeline = content_scope_stages(institution_id)
    if members_only:
        pipeline.extend(membership_scope_stages(institution_id))
    pipeline.extend([
        {"$group": {
            "_id": None,
            "averageScore": {"$avg": "$understandingScore"},
            "totalTimeSeconds": {"$sum": {"$ifNull": ["$totalTimeSeconds", 0]}},
            "recordCount": {"$sum": 1},
            "learners": {"$addToSet": "$userId"}
        }},
        {"$project": {
            "_id": 0,
            "averageScore": 1,
            "totalTimeSeconds": 1,
            "recordCount": 1,
            "learnerCount": {"$size": "$learners"}
        }}
    ])
    return pipeline


def build_user_performance_pipeline(user_id: ObjectId, institution_id: ObjectId) -> List[Dict]:
    """A user's rows with content titles; rows whose content was deleted are kept"""
    return [
        {"$match": {"userId": user_id}},
        {"$lookup": {
            "from": COLLECTIONS["contents"],
            "localField": "contentId",
            "foreignField": "_id",
            "as": "contentDoc"
        }},
        {"$match": {"$or": [
            {"contentDoc": {"$size": 0}},
            {"contentDoc.institutionId": institution_id}
        ]}},
        {"$project": {
            "contentId": 1,
            "understandingScore": 1,
            "understandingLevel": 1,
            "totalTimeSeconds": 1,
            "content": {"$arrayElemAt": [
                {"$map": {"input": "$contentDoc", "as": "c", "in": {"_id": "$$c._id", "title": "$$c.title"}}},
                0
            ]}
        }}
    ]


def build_user_average_pipeline(user_id: ObjectId, institution_id: ObjectId) -> List[Dict]:
    return [
        {"$match": {"userId": user_id}},
        *content_scope_stages(institution_id),
        {"$group": {"_id": None, "averageScore": {"$avg": "$understandingScore"}}}
    ]
