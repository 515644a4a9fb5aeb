from __future__ import annotations

from ...background.notifications import NotificationQueue
from ...crud.store import ResourceStore
from ...errors import NotFoundError
from ...models.notification import NotificationKind
from ...models.user import User, UserStatus
from ...schemas.user import UserCreate, UserUpdate
from ...utils.security import DEFAULT_HASH_ROUNDS, hash_password
from ..audit import AuditService
from .resource_service import OperationResult, ResourceService


class UserService(ResourceService[User, UserCreate, UserUpdate]):
    """User accounts: CRUD, status toggling and the filterable user table."""

    resource_name = "user"
    create_schema = UserCreate
    required_fields = ("username", "name", "email", "password", "role")

    text_filter_fields = frozenset({"username", "name", "email"})
    exact_filter_fields = frozenset({"role"})
    sortable_fields = frozenset({"username", "name", "email", "role", "status"})

    delete_kind = NotificationKind.ERROR

    created_message = "{name} has been added as a {role}"
    updated_message = "{name}'s information has been updated"
    deleted_message = "{name} has been removed from the system"
    invalid_message = "All fields are required to add a new user."
    update_missing_message = "No user selected for update."
    not_found_message = "User not found."

    def __init__(
        self,
        store: ResourceStore[User],
        notifications: NotificationQueue,
        audit: AuditService | None = None,
        *,
        normalize_delete_notifications: bool = False,
        hash_rounds: int = DEFAULT_HASH_ROUNDS,
    ) -> None:
        super().__init__(
            store,
            notifications,
            audit,
            normalize_delete_notifications=normalize_delete_notifications,
        )
        self.hash_rounds = hash_rounds
        self._password_hash: str | None = None

    def hash_password(self, password: str) -> str:
        return hash_password(password, self.hash_rounds)

    def create(
        self, draft: UserCreate | None = None, *, password_hash: str | None = None
    ) -> OperationResult[User]:
        """Create a user.

        ``password_hash`` is the already computed hash of the draft's
        password, so callers on the event loop can hash in a worker thread.
        """
        self._password_hash = password_hash
        try:
            return super().create(draft)
        finally:
            self._password_hash = None

    def update(
        self, record_id: int, patch: UserUpdate, *, password_hash: str | None = None
    ) -> OperationResult[User]:
        self._password_hash = password_hash
        try:
            return super().update(record_id, patch)
        finally:
            self._password_hash = None

    def _hash(self, password: str) -> str:
        return self._password_hash or self.hash_password(password)

    def _build_record(self, record_id: int, draft: UserCreate) -> User:
        return User(
            id=record_id,
            username=draft.username,
            name=draft.name,
            email=draft.email,
            role=draft.role,
            status=UserStatus.ACTIVE,
            password_hash=self._hash(draft.password),
        )

    def _merge(self, current: User, patch: UserUpdate) -> User:
        changes = patch.model_dump(exclude_none=True, exclude={"password"})
        # an empty password keeps the stored one
        if patch.password:
            changes["password_hash"] = self._hash(patch.password)
        return current.model_copy(update=changes)

    def toggle_status(self, user_id: int) -> OperationResult[User]:
        """Flip Active/Inactive and announce the new status."""
        current = self.store.get_by_id(user_id)
        if current is None:
            return self._reject(NotFoundError(self.not_found_message, record_id=user_id))

        record = current.model_copy(update={"status": current.status.toggled()})
        self.store.replace(record)
        return self._complete(
            "toggle_status",
            record,
            f"{record.name} is now {record.status.value.lower()}",
            NotificationKind.INFO,
            payload={"status": record.status.value},
        )

    def count_by_status(self, status: UserStatus) -> int:
        return sum(1 for user in self.store.list_all() if user.status is status)
