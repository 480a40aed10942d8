from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Self

from pydantic import TypeAdapter

from repairdesk.catalog.catalog import Catalog
from repairdesk.catalog.models import Part, PartCategory
from repairdesk.catalog.seed import default_parts
from repairdesk.communication.assembler import request_quote, request_report
from repairdesk.communication.interface import TextGenerator
from repairdesk.errors import (
    RecordNotFoundError,
    RegistrationError,
    RepairDeskError,
    RepairValidationError,
)
from repairdesk.persistence.document_store import DocumentStore
from repairdesk.reconciliation.codec import Row, TabularCodec, XlsxCodec
from repairdesk.reconciliation.parts import parts_from_rows, parts_to_rows
from repairdesk.reconciliation.rows import (
    ImportOutcome,
    export_rows,
    import_rows,
    merge_records,
)
from repairdesk.repair import lifecycle
from repairdesk.repair.cost import total
from repairdesk.repair.models import RepairRecord, RepairStatus
from repairdesk.repair.seed import seed_records
from repairdesk.user.models import REGISTRATION_DOMAIN, User, ensure_bootstrap_admin

logger = logging.getLogger(__name__)

RECORDS_KEY = "robomate_repairs_v10"
PARTS_KEY = "robomate_parts_v2"
USERS_KEY = "robomate_users_v1"

RECORDS_SHEET = "Repair Records"
PARTS_SHEET = "Spare Parts"

_RECORDS = TypeAdapter(list[RepairRecord])
_PARTS = TypeAdapter(list[Part])
_USERS = TypeAdapter(list[User])


class RepairDeskService:
    """
    The authoritative record, catalog and user collections of one desk.

    Every command that changes a collection persists that whole collection
    before returning. Use `open()` to get an initialized instance.
    """

    def __init__(
        self,
        store: DocumentStore,
        generator: TextGenerator | None = None,
        codec: TabularCodec | None = None,
    ) -> None:
        self._store = store
        self._generator = generator
        self._codec = codec or XlsxCodec()
        self._records: list[RepairRecord] = []
        self._catalog = Catalog()
        self._users: list[User] = []
        self._generating: set[str] = set()

    @classmethod
    async def open(
        cls,
        store: DocumentStore,
        generator: TextGenerator | None = None,
        codec: TabularCodec | None = None,
    ) -> Self:
        service = cls(store, generator, codec)
        await service.initialize()
        return service

    async def initialize(self) -> None:
        """Load every collection, seeding the ones never persisted before."""
        stored_records = await self._store.load(RECORDS_KEY)
        if stored_records is not None:
            self._records = _RECORDS.validate_python(stored_records)
        else:
            self._records = seed_records()
            await self._persist_records()
            logger.info("Seeded %d repair records", len(self._records))

        stored_parts = await self._store.load(PARTS_KEY)
        if stored_parts is not None:
            self._catalog = Catalog(_PARTS.validate_python(stored_parts))
        else:
            self._catalog = Catalog(default_parts())
            await self._persist_parts()
            logger.info("Seeded catalog with %d parts", len(self._catalog))

        stored_users = await self._store.load(USERS_KEY)
        users = _USERS.validate_python(stored_users) if stored_users is not None else []
        self._users, changed = ensure_bootstrap_admin(users)
        if changed:
            await self._persist_users()

    # ── Queries ──

    @property
    def records(self) -> list[RepairRecord]:
        return list(self._records)

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def get_record(self, record_id: str) -> RepairRecord:
        record = self._find_record(record_id)
        if record is None:
            raise RecordNotFoundError("Record", record_id)
        return record

    def total(self, record: RepairRecord) -> float:
        return total(record, self._catalog)

    def is_generating(self, record_id: str) -> bool:
        return record_id in self._generating

    # ── Lifecycle commands ──

    def reopen(self, record_id: str) -> RepairRecord:
        """An editable copy of a stored record, e.g. to act on a quote."""
        return lifecycle.reopen(self.get_record(record_id))

    async def save_progress(self, draft: RepairRecord) -> lifecycle.TransitionResult:
        draft = self._as_stored(draft)
        result = lifecycle.save_progress(draft)
        await self._upsert(result.record)
        return result

    async def generate_quote(self, draft: RepairRecord) -> lifecycle.TransitionResult:
        draft = self._as_stored(draft)
        lifecycle.check_quotable(draft)
        generator = self._require_generator()

        self._begin_generation(draft.id)
        try:
            quote_text = await request_quote(generator, draft, self._catalog)
        finally:
            self._generating.discard(draft.id)

        result = lifecycle.mark_quoted(draft, quote_text)
        await self._upsert(result.record)
        return result

    async def complete_repair(self, draft: RepairRecord) -> lifecycle.TransitionResult:
        draft = self._as_stored(draft)
        lifecycle.check_completable(draft)
        generator = self._require_generator()

        self._begin_generation(draft.id)
        try:
            report = await request_report(generator, draft, self._catalog)
        finally:
            self._generating.discard(draft.id)

        result = lifecycle.mark_completed(draft, report.email, report.sms)
        await self._upsert(result.record)
        return result

    async def approve_quote(self, record_id: str) -> RepairRecord:
        record = lifecycle.approve_quote(self.get_record(record_id))
        await self._upsert(record)
        return record

    async def mark_shipped(self, record_id: str) -> RepairRecord:
        record = lifecycle.mark_shipped(self.get_record(record_id))
        await self._upsert(record)
        return record

    async def delete_record(self, user: User, record_id: str) -> bool:
        """Administrators only; anyone else is silently ignored."""
        if not user.is_admin:
            logger.info("Ignoring delete of %s by non-admin %s", record_id, user.email)
            return False

        remaining = [r for r in self._records if r.id != record_id]
        if len(remaining) == len(self._records):
            return False
        self._records = remaining
        await self._persist_records()
        logger.info("Record %s deleted by %s", record_id, user.email)
        return True

    # ── Reconciliation ──

    def export_rows(self) -> list[Row]:
        return export_rows(self._records)

    async def import_rows(self, rows: Sequence[Row]) -> ImportOutcome:
        """Add the rows' records whose ids are new, ahead of the existing ones."""
        imported, skipped = import_rows(rows)
        fresh = merge_records(self._records, imported)
        if fresh:
            self._records = [*fresh, *self._records]
            await self._persist_records()
        logger.info(
            "Imported %d new records (%d rows, %d skipped)",
            len(fresh),
            len(rows),
            skipped,
        )
        return ImportOutcome(added=len(fresh), skipped=skipped)

    def export_file(self) -> bytes:
        return self._codec.write_rows(self.export_rows(), RECORDS_SHEET)

    async def import_file(self, data: bytes) -> ImportOutcome:
        """Raises ImportFailedError, without touching the store, on unreadable files."""
        rows = self._codec.read_rows(data)
        return await self.import_rows(rows)

    # ── Catalog ──

    async def add_part(
        self,
        user: User,
        name: str,
        category: PartCategory = PartCategory.MOTOR,
        price: float = 0,
    ) -> Part | None:
        if not user.is_admin:
            return None
        part = self._catalog.add(name, category, price)
        await self._persist_parts()
        return part

    async def update_part(
        self,
        user: User,
        part_id: str,
        *,
        name: str | None = None,
        category: PartCategory | None = None,
        price: float | None = None,
    ) -> Part | None:
        if not user.is_admin:
            return None
        part = self._catalog.update(part_id, name=name, category=category, price=price)
        await self._persist_parts()
        return part

    async def remove_part(self, user: User, part_id: str) -> bool:
        if not user.is_admin or not self._catalog.remove(part_id):
            return False
        await self._persist_parts()
        return True

    def export_parts_file(self) -> bytes:
        return self._codec.write_rows(parts_to_rows(self._catalog), PARTS_SHEET)

    async def replace_catalog(self, user: User, rows: Sequence[Row]) -> ImportOutcome:
        """Swap the whole catalog for the parts in `rows` (administrators only)."""
        if not user.is_admin:
            logger.info("Ignoring catalog import by non-admin %s", user.email)
            return ImportOutcome(added=0)

        parts = parts_from_rows(rows)
        if not parts:
            return ImportOutcome(added=0, skipped=len(rows))

        self._catalog.replace(parts)
        await self._persist_parts()
        logger.info("Catalog replaced with %d parts", len(parts))
        return ImportOutcome(added=len(parts), skipped=len(rows) - len(parts))

    async def import_parts_file(self, user: User, data: bytes) -> ImportOutcome:
        rows = self._codec.read_rows(data)
        return await self.replace_catalog(user, rows)

    # ── Users ──

    def authenticate(self, email: str, password: str) -> User | None:
        return next(
            (u for u in self._users if u.matches_email(email) and u.password == password),
            None,
        )

    async def register(self, email: str, password: str) -> User:
        if not email.lower().endswith(REGISTRATION_DOMAIN):
            raise RegistrationError(
                f"Registration is restricted to {REGISTRATION_DOMAIN} email addresses."
            )
        if any(u.matches_email(email) for u in self._users):
            raise RegistrationError("User already exists.")
        if not password:
            raise RegistrationError("Password must not be empty.")

        user = User(email=email, password=password, is_admin=False)
        self._users = [*self._users, user]
        await self._persist_users()
        logger.info("Registered technician %s", email)
        return user

    def list_users(self, user: User) -> list[User]:
        return list(self._users) if user.is_admin else []

    async def reset_password(self, user: User, email: str, new_password: str) -> bool:
        if not user.is_admin or not new_password:
            return False
        if not any(u.matches_email(email) for u in self._users):
            return False

        self._users = [
            u.model_copy(update={"password": new_password}) if u.matches_email(email) else u
            for u in self._users
        ]
        await self._persist_users()
        logger.info("Password reset for %s by %s", email, user.email)
        return True

    # ── Internals ──

    def _find_record(self, record_id: str) -> RepairRecord | None:
        return next((r for r in self._records if r.id == record_id), None)

    def _as_stored(self, draft: RepairRecord) -> RepairRecord:
        """
        A private copy of `draft` whose status, technician and generated text
        are the stored ones. Only transitions change those fields.
        """
        stored = self._find_record(draft.id)
        if stored is None:
            protected: dict[str, Any] = {
                "status": RepairStatus.PENDING,
                "ai_quote": None,
                "ai_report": None,
                "ai_sms": None,
            }
        else:
            protected = {
                "status": stored.status,
                "technician": stored.technician,
                "ai_quote": stored.ai_quote,
                "ai_report": stored.ai_report,
                "ai_sms": stored.ai_sms,
            }
        return draft.model_copy(update=protected, deep=True)

    def _require_generator(self) -> TextGenerator:
        if self._generator is None:
            raise RepairDeskError("No text generator is configured")
        return self._generator

    def _begin_generation(self, record_id: str) -> None:
        if record_id in self._generating:
            raise RepairValidationError(
                "A quote or report is already being generated for this record."
            )
        self._generating.add(record_id)

    async def _upsert(self, record: RepairRecord) -> None:
        record = record.model_copy(deep=True)
        for index, existing in enumerate(self._records):
            if existing.id == record.id:
                self._records[index] = record
                break
        else:
            self._records.insert(0, record)
        await self._persist_records()

    async def _persist_records(self) -> None:
        if not self._records:
            await self._store.delete(RECORDS_KEY)
            return
        await self._store.save(RECORDS_KEY, [r.to_document() for r in self._records])

    async def _persist_parts(self) -> None:
        await self._store.save(PARTS_KEY, [p.to_document() for p in self._catalog])

    async def _persist_users(self) -> None:
        await self._store.save(USERS_KEY, [u.to_document() for u in self._users])
