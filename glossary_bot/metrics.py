from datetime import datetime, timezone

from pymongo.collection import Collection

from .utils import sanitize_slack_id
from .logger import logger


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def increment_lookups(workspaces: Collection, team_id: str) -> None:
    """
    Increment the lookup counter for this workspace.
    """
    try:
        # Sanitize input to prevent MongoDB injection
        team_id = sanitize_slack_id(team_id, "team_id")
        # Atomically increment counter
        workspaces.update_one(
            {"team_id": team_id},
            {
                "$inc": {"lookups_total": 1},
                "$setOnInsert": {"joined_date": _now_iso()},
            },
            upsert=True,  # ensures record exists even if first call
        )
    except Exception as e:
        logger.exception("Error incrementing lookups for team_id=%s: %s", team_id, e)
        # Don't raise - metrics are non-critical


def get_lookup_count(workspaces: Collection, team_id: str) -> int:
    """
    Return total lookups handled for this workspace.
    """
    team_id = sanitize_slack_id(team_id, "team_id")
    try:
        workspace = workspaces.find_one({"team_id": team_id})
    except Exception as e:
        logger.exception("Error reading lookups for team_id=%s: %s", team_id, e)
        return 0
    if not workspace:
        return 0
    return workspace.get("lookups_total", 0)
