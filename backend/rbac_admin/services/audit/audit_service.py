"""
Audit Service - activity feed for admin mutations.

Each successful create/update/delete/toggle is written to the
``rbac_admin.audit`` logger as JSON and kept in a bounded, in-memory feed
that backs the dashboard's recent activity list.

CRITICAL: Audit failures must NEVER block admin operations.
"""
from __future__ import annotations

import json
import logging
from collections import deque
from datetime import datetime, timezone
from typing import Any

from ...schemas.audit_log import AuditEntry

logger = logging.getLogger("rbac_admin.audit")

DEFAULT_FEED_SIZE = 50


class AuditService:
    """
    Service for recording admin actions in a structured, auditable format.

    All logging is fire-and-forget - failures do not propagate to caller.
    """

    def __init__(self, max_entries: int = DEFAULT_FEED_SIZE) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be greater than 0")
        self._entries: deque[AuditEntry] = deque(maxlen=max_entries)

    def __len__(self) -> int:
        return len(self._entries)

    def log_admin_action(
        self,
        *,
        action: str,
        target_type: str,
        target_id: str | int,
        summary: str,
        payload: dict[str, Any] | None = None,
    ) -> AuditEntry | None:
        """
        Record an admin action.

        Args:
            action: Action identifier (e.g., "user.create")
            target_type: Type of target entity (e.g., "user", "role")
            target_id: ID of the target entity
            summary: Human readable description for the activity feed
            payload: Optional dict with action details

        Returns:
            The stored entry, or None if recording failed
        """
        try:
            entry = AuditEntry(
                action=action,
                target_type=target_type,
                target_id=str(target_id),
                summary=summary,
                payload=payload or {},
                timestamp=datetime.now(timezone.utc),
            )
            self._entries.append(entry)

            logger.info(
                "AUDIT: %s",
                json.dumps(entry.model_dump(mode="json"), ensure_ascii=False),
                extra={"audit_entry": entry.model_dump()},
            )
            return entry

        except Exception as e:
            # Never let audit failures block the actual operation
            logger.error(
                "Audit logging failed for action %s: %s",
                action,
                str(e),
                exc_info=True,
            )
            return None

    def recent(self, limit: int | None = None) -> list[AuditEntry]:
        """Newest-first view of the feed, optionally capped at ``limit`` entries."""
        entries = list(reversed(self._entries))
        if limit is not None:
            entries = entries[: max(limit, 0)]
        return entries
