from __future__ import annotations

from unittest.mock import MagicMock

from pymongo.errors import PyMongoError

from glossary_bot.metrics import get_lookup_count, increment_lookups


def test_increment_lookups_upserts_counter():
    workspaces = MagicMock()

    increment_lookups(workspaces, "T1")

    query, update = workspaces.update_one.call_args.args
    assert query == {"team_id": "T1"}
    assert update["$inc"] == {"lookups_total": 1}
    assert workspaces.update_one.call_args.kwargs == {"upsert": True}


def test_increment_lookups_never_raises():
    workspaces = MagicMock()
    workspaces.update_one.side_effect = PyMongoError("down")

    increment_lookups(workspaces, "T1")
    increment_lookups(workspaces, "$bad")

    assert workspaces.update_one.call_count == 1


def test_get_lookup_count():
    workspaces = MagicMock()
    workspaces.find_one.return_value = {"team_id": "T1", "lookups_total": 7}
    assert get_lookup_count(workspaces, "T1") == 7

    workspaces.find_one.return_value = None
    assert get_lookup_count(workspaces, "T1") == 0
