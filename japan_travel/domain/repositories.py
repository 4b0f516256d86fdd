"""
Saved plans live as one JSON document per plan in a blob namespace.

There is no in-process cache and no locking: every read lists and re-fetches
from the backend, and writes to the same id race with last-write-wins. A list
running alongside a write may or may not observe it.
"""

import asyncio
import logging
from typing import List

from pydantic import ValidationError as PydanticValidationError

from japan_travel.api.models.schemas import SavedPlan
from japan_travel.core.errors import NotFoundError
from japan_travel.domain.models import BlobEntry
from japan_travel.external.blob_storage import BlobBackend

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class PlanStore:
    def __init__(self, backend: BlobBackend, prefix: str = "plans/"):
        self.backend = backend
        self.prefix = prefix

    def key_for(self, plan_id: int) -> str:
        return f"{self.prefix}{plan_id}.json"

    async def list_plans(self) -> List[SavedPlan]:
        entries = [entry for entry in await self.backend.list(self.prefix) if self._is_plan_key(entry.key)]
        loaded = await asyncio.gather(*(self._load(entry) for entry in entries))
        plans = [plan for plan in loaded if plan is not None]
        plans.sort(key=lambda plan: plan.id, reverse=True)
        return plans

    async def save_plan(self, plan: SavedPlan) -> List[SavedPlan]:
        key = self.key_for(plan.id)
        await self.backend.put(key, plan.model_dump_json().encode("utf-8"), JSON_CONTENT_TYPE)
        logger.info("Saved plan %s at %s", plan.id, key)
        return await self.list_plans()

    async def delete_plan(self, plan_id: int) -> List[SavedPlan]:
        key = self.key_for(plan_id)
        # exact key match only: plans/1.json must never hit plans/12.json
        targets = [entry for entry in await self.backend.list(self.prefix) if entry.key == key]
        if not targets:
            logger.info("Plan %s not found at %s; nothing to delete", plan_id, key)
        for entry in targets:
            await self.backend.delete(entry.url)
            logger.info("Deleted plan %s at %s", plan_id, key)
        return await self.list_plans()

    def _is_plan_key(self, key: str) -> bool:
        return key.startswith(self.prefix) and key.endswith(".json") and "/" not in key[len(self.prefix):]

    async def _load(self, entry: BlobEntry) -> SavedPlan | None:
        try:
            raw = await self.backend.fetch(entry.url)
        except NotFoundError:
            # deleted between list and fetch; treat as not observed
            logger.info("Plan blob %s vanished before it could be read", entry.key)
            return None
        try:
            return SavedPlan.model_validate_json(raw)
        except PydanticValidationError as exc:
            logger.warning("Skipping unreadable plan blob %s: %s", entry.key, exc)
            return None
