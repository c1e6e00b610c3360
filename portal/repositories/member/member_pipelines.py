"""Membership Domain Pipelines - Flow-Based Organization (SoC)"""
from datetime import datetime
from typing import Dict, List

from bson import ObjectId

from portal.config.settings import COLLECTIONS, MEMBER_STATUS_ACTIVE
from portal.repositories.performance.performance_pipelines import scoped_performance_lookup

# ═══════════════════════════════════════════════════════════════════════════════
# USER MANAGEMENT PIPELINES
# ═══════════════════════════════════════════════════════════════════════════════

def build_active_members_average_pipeline(institution_id: ObjectId) -> List[Dict]:
    """Average score across active members' actual records (members without rows add nothing)"""
    return [
        {"$match": {"institutionId": institution_id, "status": MEMBER_STATUS_ACTIVE}},
        scoped_performance_lookup(institution_id),
        {"$unwind": {"path": "$performanceRecords", "preserveNullAndEmptyArrays": True}},
        {"$group": {
            "_id": None,
            "avgPerformance": {"$avg": "$performanceRecords.understandingScore"}
        }}
    ]


def build_member_listing_pipeline(institution_id: ObjectId) -> List[Dict]:
    """Every member, newest first, with profile and own average score"""
    return [
        {"$match": {"institutionId": institution_id}},
        {"$sort": {"createdAt": -1}},
        {"$lookup": {
            "from": COLLECTIONS["users"],
            "localField": "userId",
            "foreignField": "_id",
            "as": "userDoc"
        }},
        {"$unwind": "$userDoc"},
        scoped_performance_lookup(institution_id),
        {"$project": {
            "status": 1,
            "createdAt": 1,
            "metadata": 1,
            "userDoc._id": 1,
            "userDoc.name": 1,
            "userDoc.email": 1,
            "userDoc.profileImage": 1,
            "averagePerformance": {"$avg": "$performanceRecords.understandingScore"}
        }}
    ]


# ═══════════════════════════════════════════════════════════════════════════════
# ANALYTICS PIPELINES
# ═══════════════════════════════════════════════════════════════════════════════

def build_member_performance_summary_pipeline(institution_id: ObjectId) -> List[Dict]:
    """One row per active member with record count and average score"""
    return [
        {"$match": {"institutionId": institution_id, "status": MEMBER_STATUS_ACTIVE}},
        scoped_performance_lookup(institution_id),
        {"$project": {
            "_id": 0,
            "userId": 1,
            "recordCount": {"$size": "$performanceRecords"},
            "averageScore": {"$avg": "$performanceRecords.understandingScore"},
            "totalTimeSeconds": {"$sum": "$performanceRecords.totalTimeSeconds"}
        }}
    ]


def build_active_learners_pipeline(institution_id: ObjectId, since: datetime) -> List[Dict]:
    """Count members with at least one interaction on the institution's content since ``since``"""
    return [
        {"$match": {"institutionId": institution_id}},
        {"$lookup": {
            "from": COLLECTIONS["interactions"],
            "let": {"uid": "$userId"},
            "pipeline": [
                {"$match": {"$expr": {"$and": [
                    {"$eq": ["$userId", "$$uid"]},
                    {"$gte": ["$timestamp", since]}
                ]}}},
                {"$lookup": {
                    "from": COLLECTIONS["contents"],
                    "localField": "contentId",
                    "foreignField": "_id",
                    "as": "contentDoc"
                }},
                {"$match": {"contentDoc.institutionId": institution_id}},
                {"$limit": 1}
            ],
            "as": "recentInteractions"
        }},
        {"$match": {"recentInteractions.0": {"$exists": True}}},
        {"$group": {"_id": "$userId"}},
        {"$count": "activeLearners"}
    ]
