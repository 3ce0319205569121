# seed script: creates a demo practitioner with clients, today's sessions and stats views
# lets the dashboard be exercised without the upstream sync running
# run once: python -m bloom.seed

import asyncio
import json
import logging
from datetime import datetime, timedelta

from bloom.services.db import db

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

DEMO_PRACTITIONER_ID = "demo-practitioner-0001"

# (initials, first name, last name, issues, mhcp remaining, mhcp total, months)
DEMO_CLIENTS = [
    ("JK", "Jordan", "Kim", ["anxiety", "work stress"], 6, 10, 4),
    ("AR", "Alex", "Rivera", ["depression"], 2, 10, 11),
    ("SP", "Sam", "Patel", ["grief", "sleep"], 9, 10, 1),
    ("MB", "Morgan", "Blake", ["relationship issues"], 0, 10, 18),
    ("RN", "Riley", "Nguyen", ["adhd"], 4, 6, 7),
]

# (client index, hour, minute, session number, status, location)
DEMO_SESSIONS = [
    (0, 9, 0, 5, "completed", "in-person"),
    (1, 10, 30, 9, "confirmed", "telehealth"),
    (2, 13, 0, 2, "scheduled", "in-person"),
    (3, 14, 30, 22, "scheduled", "telehealth"),
    (4, 16, 0, 3, "cancelled", "in-person"),
]


def _client_id(index: int) -> str:
    return f"{DEMO_PRACTITIONER_ID}-client-{index + 1:02d}"


async def seed():
    """create the demo practitioner and today's schedule, skips anything that exists"""
    await db.connect()

    existing = await db.practitioners.find_one({"_id": DEMO_PRACTITIONER_ID})
    if existing:
        logger.info(f"Practitioner already exists: {DEMO_PRACTITIONER_ID}")
    else:
        await db.practitioners.insert_one({
            "_id": DEMO_PRACTITIONER_ID,
            "display_name": "Dr. Zoe Semmler",
            "email": "zoe@bloom.example",
            "specializations": json.dumps(["Anxiety", "Depression", "Trauma"]),
            "timezone": "Australia/Sydney",
        })
        logger.info(f"Created practitioner: {DEMO_PRACTITIONER_ID}")

    created_clients = 0
    for index, (initials, first, last, issues, remaining, total, months) in enumerate(DEMO_CLIENTS):
        client_id = _client_id(index)
        if await db.clients.find_one({"_id": client_id}):
            continue
        await db.clients.insert_one({
            "_id": client_id,
            "practitioner_id": DEMO_PRACTITIONER_ID,
            "initials": initials,
            "first_name": first,
            "last_name": last,
            # stored as json text, same as the synced records
            "presenting_issues": json.dumps(issues),
            "mhcp_remaining_sessions": remaining,
            "mhcp_total_sessions": total,
            "relationship_months": months,
        })
        created_clients += 1
    logger.info(f"Clients: {created_clients} new, {len(DEMO_CLIENTS) - created_clients} already existed")

    today = datetime.combine(datetime.now().date(), datetime.min.time())
    created_sessions = 0
    for client_index, hour, minute, number, status, location in DEMO_SESSIONS:
        session_id = f"{_client_id(client_index)}-{today.date().isoformat()}"
        if await db.sessions.find_one({"_id": session_id}):
            continue
        await db.sessions.insert_one({
            "_id": session_id,
            "practitioner_id": DEMO_PRACTITIONER_ID,
            "client_id": _client_id(client_index),
            "scheduled_start_time": today + timedelta(hours=hour, minutes=minute),
            "session_number": number,
            "status": status,
            "location_type": location,
        })
        created_sessions += 1
    logger.info(f"Sessions for {today.date()}: {created_sessions} new")

    # stats views: normally maintained by the sync worker
    week_start = today - timedelta(days=today.weekday())
    views = {
        "weekly_stats": {
            "week_start": week_start,
            "week_end": week_start + timedelta(days=6),
            "completed_sessions": 12,
            "scheduled_sessions": 8,
            "total_sessions": 22,
            "weekly_session_target": 25,
            "earned_revenue": "2640.00",
            "weekly_revenue_target": "5500.00",
            "no_shows": 1,
            "cancellations": 1,
        },
        "monthly_stats": {
            "earned_revenue": "9240.00",
            "projected_revenue": "6600.00",
            "monthly_revenue_target": "22000.00",
            "completed_sessions": 42,
            "scheduled_sessions": 30,
            "avg_session_value": "220.00",
            "medicare_revenue": "5280.00",
            "private_revenue": "2860.00",
            "dva_revenue": "660.00",
            "workcover_revenue": "440.00",
            "ndis_revenue": "0",
        },
        "upcoming_stats": {
            "tomorrow_sessions": 5,
            "remaining_this_week": 8,
            "next_week_sessions": 21,
        },
        "mhcp_ending_soon": {"clients_mhcp_ending": 2},
        "sync_status": {
            "is_connected": True,
            "last_successful_sync": datetime.now(),
            "last_sync_attempt": datetime.now(),
            "last_error_message": None,
            "pending_changes": 0,
            "updated_at": datetime.now(),
        },
    }
    for collection_name, doc in views.items():
        collection = getattr(db, collection_name)
        await collection.update_one(
            {"practitioner_id": DEMO_PRACTITIONER_ID},
            {"$set": doc},
            upsert=True,
        )
    logger.info(f"Upserted {len(views)} stats view documents")

    # indexes used by the dashboard queries
    await db.sessions.create_index([("practitioner_id", 1), ("scheduled_start_time", 1)])
    for collection_name in views:
        await getattr(db, collection_name).create_index("practitioner_id", unique=True)
    logger.info("Created indexes")

    logger.info("Seed complete!")
    await db.close()


if __name__ == "__main__":
    asyncio.run(seed())
