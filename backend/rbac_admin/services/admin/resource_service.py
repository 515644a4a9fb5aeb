"""
Generic resource controller shared by the user, role and permission services.

A controller owns one ResourceStore and turns user actions into store
mutations plus a transient notification. Failures never escape to the
caller: ValidationError and NotFoundError are raised internally, caught
here and surfaced as an ``error`` notification on the returned
OperationResult.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from ...background.notifications import NotificationQueue
from ...crud.store import ResourceStore
from ...domain.projection import project, validate_fields
from ...errors import AppError, MissingFieldsError, NotFoundError, ValidationError
from ...models.notification import Notification, NotificationKind
from ...schemas.projection import FilterSet, SortSpec
from ..audit import AuditService

RecordT = TypeVar("RecordT", bound=BaseModel)
CreateT = TypeVar("CreateT", bound=BaseModel)
UpdateT = TypeVar("UpdateT", bound=BaseModel)

logger = logging.getLogger("rbac_admin.admin")


@dataclass
class OperationResult(Generic[RecordT]):
    ok: bool
    record: RecordT | None = None
    notification: Notification | None = None
    error: AppError | None = None


class ResourceService(Generic[RecordT, CreateT, UpdateT]):
    """Create/update/delete/view orchestration for one resource type.

    Subclasses declare their schema, required fields, projection fields and
    notification wording as class attributes and implement
    :meth:`_build_record`.
    """

    resource_name: ClassVar[str]
    create_schema: ClassVar[type[BaseModel]]
    required_fields: ClassVar[tuple[str, ...]]

    text_filter_fields: ClassVar[frozenset[str]] = frozenset()
    exact_filter_fields: ClassVar[frozenset[str]] = frozenset()
    sortable_fields: ClassVar[frozenset[str]] = frozenset({"id"})

    delete_kind: ClassVar[NotificationKind] = NotificationKind.INFO
    # None falls back to the queue default
    notification_duration_ms: ClassVar[int | None] = None

    created_message: ClassVar[str]
    updated_message: ClassVar[str]
    deleted_message: ClassVar[str]
    invalid_message: ClassVar[str]
    update_missing_message: ClassVar[str]
    not_found_message: ClassVar[str]

    def __init__(
        self,
        store: ResourceStore[RecordT],
        notifications: NotificationQueue,
        audit: AuditService | None = None,
        *,
        normalize_delete_notifications: bool = False,
    ) -> None:
        self.store = store
        self.notifications = notifications
        self.audit = audit
        self.normalize_delete_notifications = normalize_delete_notifications
        self.draft: CreateT = self.create_schema()
        self.editing_id: int | None = None

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def get(self, record_id: int) -> RecordT:
        record = self.store.get_by_id(record_id)
        if record is None:
            raise NotFoundError(self.not_found_message, record_id=record_id)
        return record

    def list_all(self) -> list[RecordT]:
        return self.store.list_all()

    def view(
        self,
        filters: FilterSet | Mapping[str, str] | None = None,
        sort: SortSpec | None = None,
    ) -> list[RecordT]:
        """Filtered and sorted snapshot of the collection.

        Raises:
            UnsupportedFieldError: If a filter or sort field is not exposed by this resource
        """
        filter_map = filters.to_filter_map() if isinstance(filters, FilterSet) else filters
        validate_fields(
            filter_map,
            sort,
            filterable=self.text_filter_fields | self.exact_filter_fields,
            sortable=self.sortable_fields,
        )
        return project(
            self.store.list_all(),
            filter_map,
            sort,
            exact_fields=self.exact_filter_fields,
        )

    # ------------------------------------------------------------------
    # Draft and edit selection
    # ------------------------------------------------------------------

    def update_draft(self, **fields: Any) -> CreateT:
        self.draft = self.create_schema.model_validate({**self.draft.model_dump(), **fields})
        return self.draft

    def reset_draft(self) -> None:
        self.draft = self.create_schema()

    def begin_edit(self, record_id: int) -> OperationResult[RecordT]:
        record = self.store.get_by_id(record_id)
        if record is None:
            return self._reject(NotFoundError(self.not_found_message, record_id=record_id))
        self.editing_id = record_id
        return OperationResult(ok=True, record=record)

    def cancel_edit(self) -> None:
        self.editing_id = None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, draft: CreateT | None = None) -> OperationResult[RecordT]:
        """Append a record built from ``draft`` (or the pending draft)."""
        submitted = self.draft if draft is None else draft
        try:
            self._validate_draft(submitted)
        except ValidationError as exc:
            return self._reject(exc)

        record = self.store.add(lambda record_id: self._build_record(record_id, submitted))
        self.reset_draft()
        return self._complete(
            "create",
            record,
            self._format(self.created_message, record),
            NotificationKind.SUCCESS,
        )

    def update(self, record_id: int, patch: UpdateT) -> OperationResult[RecordT]:
        """Merge ``patch`` into the record; unset fields keep their values.

        While an edit selection is active only the selected record can be
        updated.
        """
        current = self.store.get_by_id(record_id)
        selected = self.editing_id is None or self.editing_id == record_id
        if current is None or not selected:
            return self._reject(
                NotFoundError(self.update_missing_message, record_id=record_id)
            )

        record = self._merge(current, patch)
        self.store.replace(record)
        self.editing_id = None
        return self._complete(
            "update",
            record,
            self._format(self.updated_message, record),
            NotificationKind.SUCCESS,
            payload={"fields": self._changed_fields(current, record)},
        )

    def delete(self, record_id: int) -> OperationResult[RecordT]:
        record = self.store.remove(record_id)
        if record is None:
            return self._reject(NotFoundError(self.not_found_message, record_id=record_id))

        if self.editing_id == record_id:
            self.editing_id = None
        kind = NotificationKind.INFO if self.normalize_delete_notifications else self.delete_kind
        return self._complete("delete", record, self._format(self.deleted_message, record), kind)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _build_record(self, record_id: int, draft: CreateT) -> RecordT:
        raise NotImplementedError

    def _merge(self, current: RecordT, patch: UpdateT) -> RecordT:
        return current.model_copy(update=patch.model_dump(exclude_none=True))

    def _validate_draft(self, draft: CreateT) -> None:
        # presence only, formats are not checked
        missing = [field for field in self.required_fields if not getattr(draft, field)]
        if missing:
            raise MissingFieldsError(self.invalid_message, missing)

    # ------------------------------------------------------------------
    # Outcome helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _format(template: str, record: RecordT) -> str:
        return template.format(**record.model_dump())

    @staticmethod
    def _changed_fields(before: RecordT, after: RecordT) -> list[str]:
        return [
            field
            for field in type(after).model_fields
            if getattr(before, field) != getattr(after, field)
        ]

    def _notify(self, message: str, kind: NotificationKind) -> Notification:
        return self.notifications.push(message, kind, self.notification_duration_ms)

    def _record_activity(
        self,
        action: str,
        record: RecordT,
        summary: str,
        payload: dict[str, Any] | None = None,
    ) -> None:
        logger.info(
            "[ADMIN] %s resource=%s id=%s",
            action,
            self.resource_name,
            getattr(record, "id", None),
        )
        if self.audit is not None:
            self.audit.log_admin_action(
                action=f"{self.resource_name}.{action}",
                target_type=self.resource_name,
                target_id=getattr(record, "id"),
                summary=summary,
                payload=payload,
            )

    def _complete(
        self,
        action: str,
        record: RecordT,
        message: str,
        kind: NotificationKind,
        payload: dict[str, Any] | None = None,
    ) -> OperationResult[RecordT]:
        self._record_activity(action, record, message, payload)
        return OperationResult(ok=True, record=record, notification=self._notify(message, kind))

    def _reject(self, error: AppError) -> OperationResult[RecordT]:
        logger.info(
            "[ADMIN] rejected resource=%s code=%s message=%s details=%s",
            self.resource_name,
            error.code,
            error.message,
            error.details,
        )
        notification = self._notify(error.message, NotificationKind.ERROR)
        return OperationResult(ok=False, notification=notification, error=error)
