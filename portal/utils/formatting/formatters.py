"""Response shaping shared across services"""
from typing import Dict, Optional

from portal.config.settings import NOT_AVAILABLE
from portal.utils.analysis.score_utils import engagement_rate, round2
from portal.utils.time.timeutils import to_iso_utc


def or_not_available(value):
    return value if value else NOT_AVAILABLE


def format_user_summary(user: Optional[Dict]) -> Optional[Dict]:
    if not user:
        return None
    return {
        "id": str(user["_id"]),
        "name": user.get("name", ""),
        "email": user.get("email", ""),
        "profileImage": user.get("profileImage"),
    }


def format_content_summary(content: Optional[Dict]) -> Optional[Dict]:
    if not content:
        return None
    return {"id": str(content["_id"]), "title": content.get("title", "")}


def format_activity_item(interaction: Dict, user: Dict, content: Dict) -> Dict:
    return {
        "id": str(interaction["_id"]),
        "eventType": interaction.get("eventType"),
        "timestamp": to_iso_utc(interaction.get("timestamp")),
        "user": format_user_summary(user),
        "content": format_content_summary(content),
    }


def format_institution_user(member: Dict, user: Dict, average_performance: Optional[float]) -> Dict:
    """Flat member row: membership fields merged with the user's profile"""
    metadata = member.get("metadata") or {}
    return {
        "userId": str(user["_id"]),
        "name": user.get("name", ""),
        "email": user.get("email", ""),
        "profileImage": user.get("profileImage"),
        "registrationDate": to_iso_utc(member.get("createdAt")),
        "status": member.get("status"),
        "businessName": or_not_available(metadata.get("businessName")),
        "tin": or_not_available(metadata.get("tin")),
        "averagePerformance": round2(average_performance),
    }


def format_content_module(content: Dict, author: Optional[Dict], active_members: int) -> Dict:
    completions = (content.get("userEngagement") or {}).get("completions") or 0
    return {
        "id": str(content["_id"]),
        "title": content.get("title", ""),
        "description": content.get("description") or "",
        "status": "Draft" if content.get("isDraft") else "Published",
        "creationDate": to_iso_utc(content.get("createdAt")),
        "engagementRate": engagement_rate(completions, active_members),
        "category": content.get("tags") or [],
        "author": {"id": str(author["_id"]), "name": author.get("name", "")} if author else None,
        "enrolledUsers": completions,
        "order": content.get("order", 0),
    }
