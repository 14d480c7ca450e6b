"""
MongoDB database connection and operations using Motor (async driver).
"""

import re
from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, IndexModel, ReturnDocument

from .config import Settings, get_settings


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Convert a string id to ObjectId, None if it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


class Database:
    """Async MongoDB database wrapper."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """Establish database connection."""
        if self._client is not None:
            return

        logger.info(f"Connecting to MongoDB: {self.settings.mongodb_database}")
        self._client = AsyncIOMotorClient(self.settings.mongodb_uri)
        self._db = self._client[self.settings.mongodb_database]

        # Verify connection
        await self._client.admin.command("ping")
        logger.info("MongoDB connection established")

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._db = None
            logger.info("MongoDB connection closed")

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """Get database instance."""
        if self._db is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._db

    # -------------------------------------------------------------------------
    # Jobs Collection
    # -------------------------------------------------------------------------

    async def find_active_jobs(
        self,
        experience_levels: Optional[list[str]] = None,
        skills: Optional[list[str]] = None,
        limit: int = 20,
    ) -> list[dict[str, Any]]:
        """
        Find active jobs, optionally restricted to experience tiers and to
        jobs sharing at least one skill.
        """
        query: dict[str, Any] = {"isActive": True}
        if experience_levels is not None:
            query["experience"] = {"$in": experience_levels}
        if skills is not None:
            query["skills"] = {"$in": skills}

        cursor = self.db.jobs.find(query).limit(limit)
        return await cursor.to_list(length=limit)

    async def list_jobs(
        self,
        page: int = 1,
        limit: int = 10,
        location: Optional[str] = None,
        experience: Optional[str] = None,
        skills: Optional[list[str]] = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """Page through active jobs, newest first. Returns (jobs, total)."""
        query: dict[str, Any] = {"isActive": True}
        if location:
            query["location"] = {"$regex": re.escape(location), "$options": "i"}
        if experience:
            query["experience"] = experience
        if skills:
            query["skills"] = {"$in": skills}

        cursor = (
            self.db.jobs.find(query)
            .sort("postedDate", DESCENDING)
            .skip((page - 1) * limit)
            .limit(limit)
        )
        jobs = await cursor.to_list(length=limit)
        total = await self.db.jobs.count_documents(query)
        return jobs, total

    async def get_job(self, job_id: str) -> Optional[dict[str, Any]]:
        """Get job by ID."""
        oid = to_object_id(job_id)
        if oid is None:
            return None
        return await self.db.jobs.find_one({"_id": oid})

    async def get_jobs_by_ids(self, job_ids: list[Any]) -> list[dict[str, Any]]:
        """Get jobs for a list of IDs, keeping the order of the IDs."""
        oids = [oid for oid in (to_object_id(j) for j in job_ids) if oid is not None]
        if not oids:
            return []
        cursor = self.db.jobs.find({"_id": {"$in": oids}})
        found = {doc["_id"]: doc for doc in await cursor.to_list(length=len(oids))}
        return [found[oid] for oid in oids if oid in found]

    async def count_skills(self, limit: int = 10) -> list[dict[str, Any]]:
        """Most frequent skills across active jobs, as {_id: skill, count}."""
        pipeline = [
            {"$match": {"isActive": True}},
            {"$unwind": "$skills"},
            {"$group": {"_id": "$skills", "count": {"$sum": 1}}},
            {"$sort": {"count": -1}},
            {"$limit": limit},
        ]
        cursor = self.db.jobs.aggregate(pipeline)
        return await cursor.to_list(length=limit)

    async def insert_jobs(self, jobs: list[dict[str, Any]]) -> int:
        """Insert many jobs, returns inserted count."""
        if not jobs:
            return 0
        now = datetime.now(timezone.utc)
        for job in jobs:
            job.setdefault("createdAt", now)
            job["updatedAt"] = now
        result = await self.db.jobs.insert_many(jobs)
        return len(result.inserted_ids)

    async def clear_jobs(self) -> int:
        """Delete every job, returns deleted count."""
        result = await self.db.jobs.delete_many({})
        return result.deleted_count

    async def count_jobs_by_experience(self) -> dict[str, int]:
        cursor = self.db.jobs.aggregate(
            [{"$group": {"_id": "$experience", "count": {"$sum": 1}}}]
        )
        return {row["_id"]: row["count"] for row in await cursor.to_list(length=None)}

    # -------------------------------------------------------------------------
    # Users Collection
    # -------------------------------------------------------------------------

    async def insert_user(self, user: dict[str, Any]) -> str:
        """Insert a new user, returns user_id."""
        user["createdAt"] = datetime.now(timezone.utc)
        user["updatedAt"] = datetime.now(timezone.utc)
        result = await self.db.users.insert_one(user)
        return str(result.inserted_id)

    async def get_user(self, user_id: str) -> Optional[dict[str, Any]]:
        """Get user by ID."""
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return await self.db.users.find_one({"_id": oid})

    async def get_user_by_email(self, email: str) -> Optional[dict[str, Any]]:
        return await self.db.users.find_one({"email": email.strip().lower()})

    async def update_user(
        self, user_id: str, fields: dict[str, Any]
    ) -> Optional[dict[str, Any]]:
        """Set fields on a user, returns the updated document."""
        oid = to_object_id(user_id)
        if oid is None:
            return None

        update = dict(fields)
        update["updatedAt"] = datetime.now(timezone.utc)
        return await self.db.users.find_one_and_update(
            {"_id": oid},
            {"$set": update},
            return_document=ReturnDocument.AFTER,
        )

    async def add_to_user_set(
        self, user_id: str, field: str, value: Any
    ) -> Optional[dict[str, Any]]:
        """Add a value to an array field unless already present."""
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return await self.db.users.find_one_and_update(
            {"_id": oid},
            {
                "$addToSet": {field: value},
                "$set": {"updatedAt": datetime.now(timezone.utc)},
            },
            return_document=ReturnDocument.AFTER,
        )

    async def pull_from_user_set(
        self, user_id: str, field: str, value: Any
    ) -> Optional[dict[str, Any]]:
        """Remove every occurrence of a value from an array field."""
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return await self.db.users.find_one_and_update(
            {"_id": oid},
            {
                "$pull": {field: value},
                "$set": {"updatedAt": datetime.now(timezone.utc)},
            },
            return_document=ReturnDocument.AFTER,
        )

    # -------------------------------------------------------------------------
    # Index Setup
    # -------------------------------------------------------------------------

    async def ensure_indexes(self) -> None:
        """Create database indexes."""
        job_indexes = [
            IndexModel([("isActive", ASCENDING), ("experience", ASCENDING)]),
            IndexModel([("skills", ASCENDING)]),
            IndexModel([("postedDate", DESCENDING)]),
            IndexModel([("company", ASCENDING)]),
        ]
        await self.db.jobs.create_indexes(job_indexes)

        user_indexes = [
            IndexModel([("email", ASCENDING)], unique=True),
        ]
        await self.db.users.create_indexes(user_indexes)

        logger.info("Database indexes created")
