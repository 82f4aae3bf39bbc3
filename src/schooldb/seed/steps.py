"""Entity-seeding steps.

Each step inserts one entity's fixture records and returns the ids it
created, keyed by the record's symbolic key.  The orchestrator collects
them into an ``IdMap`` and passes it to later steps, so foreign keys come
from the rows actually inserted rather than from assumed auto-increment
values.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from schooldb.adapters.base import DatabaseClient
from schooldb.seed import fixtures
from schooldb.seed.passwords import hash_password

logger = logging.getLogger(__name__)

# table name -> {symbolic key: inserted id}
IdMap = dict[str, dict[str, int]]

SeedStep = Callable[[DatabaseClient, IdMap], Awaitable[dict[str, int]]]


def resolve(ids: IdMap, table: str, key: str | None) -> int | None:
    """Translate a symbolic reference into the id inserted for it.

    ``None`` stays ``None`` (nullable foreign keys).

    Raises:
        KeyError: If ``key`` was not seeded into ``table``.
    """
    if key is None:
        return None
    try:
        return ids[table][key]
    except KeyError:
        raise KeyError(f"No seeded {table} row for reference '{key}'") from None


def _resolve_all(ids: IdMap, table: str, keys: list[str]) -> list[int]:
    return [resolve(ids, table, key) for key in keys]


async def _insert_all(
    client: DatabaseClient,
    table: str,
    key_field: str,
    rows: list[dict[str, Any]],
) -> dict[str, int]:
    created: dict[str, int] = {}
    for row in rows:
        inserted = await client.insert(table, row)
        created[row[key_field]] = inserted["id"]
        logger.info("  %s '%s' added", table, row[key_field])
    return created


async def seed_users(client: DatabaseClient, ids: IdMap) -> dict[str, int]:
    rows = []
    for user in fixtures.USERS:
        # bcrypt blocks, hash in a worker thread
        password_hash = await asyncio.to_thread(hash_password, user["password"])
        rows.append({
            "username": user["username"],
            "email": user["email"],
            "password_hash": password_hash,
            "role": user["role"],
            "full_name": user["full_name"],
            "phone": user["phone"],
        })
    return await _insert_all(client, "users", "username", rows)


async def seed_classes(client: DatabaseClient, ids: IdMap) -> dict[str, int]:
    rows = [
        {
            "name": c["name"],
            "grade_level": c["grade_level"],
            "academic_year": c["academic_year"],
            "teacher_id": resolve(ids, "users", c["teacher"]),
        }
        for c in fixtures.CLASSES
    ]
    return await _insert_all(client, "classes", "name", rows)


async def seed_badges(client: DatabaseClient, ids: IdMap) -> dict[str, int]:
    return await _insert_all(client, "badges", "name", [dict(b) for b in fixtures.BADGES])


async def seed_stickers(client: DatabaseClient, ids: IdMap) -> dict[str, int]:
    return await _insert_all(client, "stickers", "name", [dict(s) for s in fixtures.STICKERS])


async def seed_events(client: DatabaseClient, ids: IdMap) -> dict[str, int]:
    rows = []
    for event in fixtures.EVENTS:
        row = {k: v for k, v in event.items() if k not in ("created_by", "class")}
        row["created_by"] = resolve(ids, "users", event["created_by"])
        row["class_id"] = resolve(ids, "classes", event["class"])
        rows.append(row)
    return await _insert_all(client, "events", "title", rows)


async def seed_quizzes(client: DatabaseClient, ids: IdMap) -> dict[str, int]:
    rows = []
    for quiz in fixtures.QUIZZES:
        row = {k: v for k, v in quiz.items() if k not in ("created_by", "class")}
        row["created_by"] = resolve(ids, "users", quiz["created_by"])
        row["class_id"] = resolve(ids, "classes", quiz["class"])
        rows.append(row)
    return await _insert_all(client, "quizzes", "title", rows)


async def seed_albums(client: DatabaseClient, ids: IdMap) -> dict[str, int]:
    rows = []
    for album in fixtures.ALBUMS:
        row = {k: v for k, v in album.items() if k not in ("created_by", "class")}
        row["created_by"] = resolve(ids, "users", album["created_by"])
        row["class_id"] = resolve(ids, "classes", album["class"])
        rows.append(row)
    return await _insert_all(client, "albums", "title", rows)


async def seed_chat_rooms(client: DatabaseClient, ids: IdMap) -> dict[str, int]:
    rows = []
    for room in fixtures.CHAT_ROOMS:
        rows.append({
            "name": room["name"],
            "type": room["type"],
            "class_id": resolve(ids, "classes", room["class"]),
            "description": room["description"],
            "members": _resolve_all(ids, "users", room["members"]),
            "moderators": _resolve_all(ids, "users", room["moderators"]),
            "settings": room["settings"],
            "created_by": resolve(ids, "users", room["created_by"]),
        })
    return await _insert_all(client, "chat_rooms", "name", rows)


# Dependency order: every step only references tables seeded before it
SEED_STEPS: list[tuple[str, SeedStep]] = [
    ("users", seed_users),
    ("classes", seed_classes),
    ("badges", seed_badges),
    ("stickers", seed_stickers),
    ("events", seed_events),
    ("quizzes", seed_quizzes),
    ("albums", seed_albums),
    ("chat_rooms", seed_chat_rooms),
]
