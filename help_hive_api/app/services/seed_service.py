"""
Sample data inserted into an empty database at startup.

This is a development convenience: when the ``events`` collection has
no documents, a handful of community events and two join records are
created so the front end has something to show.  Event dates are
relative to the moment of seeding so the samples stay in the future
and appear in ``GET /api/events``.
"""

import logging
from datetime import timedelta
from typing import Any, Dict, List

from bson import ObjectId
from fastapi.concurrency import run_in_threadpool

from ..core.db import Database
from .event_service import utcnow

logger = logging.getLogger(__name__)

SAMPLE_EVENTS: List[Dict[str, Any]] = [
    {
        "title": "Beach Cleanup Drive",
        "description": "Join us for a community beach cleanup to protect marine life and keep our shores beautiful.",
        "eventType": "Cleanup",
        "thumbnail": "https://images.unsplash.com/photo-1618477461853-cf6ed80faba5",
        "location": "Miami Beach",
        "days_ahead": 60,
        "email": "organizer@example.com",
    },
    {
        "title": "Urban Tree Plantation",
        "description": "Help us make our city greener by participating in our tree plantation drive.",
        "eventType": "Plantation",
        "thumbnail": "https://images.unsplash.com/photo-1542601906990-b4d3fb778b09",
        "location": "Central Park",
        "days_ahead": 14,
        "email": "green@example.com",
    },
    {
        "title": "Plastic-Free Campaign",
        "description": "Awareness campaign about reducing plastic usage and adopting sustainable alternatives.",
        "eventType": "Awareness Campaign",
        "thumbnail": "https://images.unsplash.com/photo-1610336016836-d5c2d53fced7",
        "location": "Community Center",
        "days_ahead": 30,
        "email": "environment@example.com",
    },
    {
        "title": "Food Drive for Homeless",
        "description": "Help us collect and distribute food to those in need in our community.",
        "eventType": "Donation",
        "thumbnail": "https://images.unsplash.com/photo-1488521787991-ed7bbaae773c",
        "location": "Downtown Shelter",
        "days_ahead": 7,
        "email": "helper@example.com",
    },
    {
        "title": "River Cleanup Project",
        "description": "Join our initiative to clean up the river and protect our water resources.",
        "eventType": "Cleanup",
        "thumbnail": "https://images.unsplash.com/photo-1567095761054-7a02e69e5c43",
        "location": "River Park",
        "days_ahead": 45,
        "email": "watercare@example.com",
    },
]

SAMPLE_PARTICIPANTS = ["participant1@example.com", "participant2@example.com"]


def build_sample_events() -> List[Dict[str, Any]]:
    now = utcnow()
    events = []
    for sample in SAMPLE_EVENTS:
        doc = {k: v for k, v in sample.items() if k != "days_ahead"}
        doc["eventDate"] = now + timedelta(days=sample["days_ahead"])
        doc["createdAt"] = now
        doc["_id"] = ObjectId()
        events.append(doc)
    return events


class SeedService:
    """Populate an empty database with sample events and joins."""

    @classmethod
    async def seed_sample_data(cls, db: Database) -> bool:
        """Insert the sample data if the events collection is empty.

        Returns ``True`` when data was inserted.  Driver errors
        propagate; startup treats them as fatal.
        """
        count = await run_in_threadpool(db.events.count_documents, {})
        if count:
            return False

        events = build_sample_events()
        await run_in_threadpool(db.events.insert_many, events)
        logger.info("Inserted %d sample events", len(events))

        joined = [
            {
                "eventId": str(event["_id"]),
                "participantEmail": email,
                "joinedAt": utcnow(),
                "event": dict(event),
            }
            for email, event in zip(SAMPLE_PARTICIPANTS, events)
        ]
        await run_in_threadpool(db.joined_events.insert_many, joined)
        logger.info("Inserted %d sample join records", len(joined))
        return True
