"""Member card validation service."""

import threading
from concurrent.futures import Executor
from concurrent.futures import Future
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol

from membercard.api.member_api import MemberCardAPI
from membercard.config.types import AppConfig
from membercard.config.validation import validate_config
from membercard.exceptions import APIError
from membercard.exceptions import StorageError
from membercard.models.member_card import MembershipRecord
from membercard.models.member_card import SavedMemberInfo
from membercard.services.member_card_parser import parse_member_card
from membercard.services.session_store import MemberSessionStore
from membercard.storage.key_value import create_store
from membercard.utils.logging_utils import LoggerMixin
from membercard.utils.logging_utils import log_execution


class MemberCardListener(Protocol):
    """Receives validation outcomes."""

    def on_member_card_loaded(self, record: MembershipRecord) -> None:
        ...

    def on_member_card_load_failed(self) -> None:
        ...


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a single validation attempt."""
    ok: bool
    record: MembershipRecord | None = None

    @classmethod
    def success(cls, record: MembershipRecord) -> "ValidationResult":
        return cls(ok=True, record=record)

    @classmethod
    def failure(cls) -> "ValidationResult":
        return cls(ok=False)


class MemberCardService(LoggerMixin):
    """Validates members and keeps the active member session.

    Lookups run on a worker thread. Each outcome is delivered to the listener
    and through the returned future. The current record and the persisted
    session are only written under a lock, so when validations overlap the
    last one to complete wins.
    """

    def __init__(
        self,
        api: MemberCardAPI,
        session_store: MemberSessionStore,
        listener: MemberCardListener | None = None,
        executor: Executor | None = None
    ):
        """Initialize service.

        Args:
            api: Membership service client
            session_store: Store for the saved member session
            listener: Optional receiver of validation outcomes
            executor: Executor running lookups, a private thread pool if None
        """
        super().__init__()
        self.api = api
        self.session_store = session_store
        self.listener = listener
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=2,
            thread_name_prefix="membercard"
        )
        # Reentrant so listeners may call back into the service
        self._lock = threading.RLock()
        self._current_record: MembershipRecord | None = None

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        listener: MemberCardListener | None = None,
        executor: Executor | None = None
    ) -> "MemberCardService":
        """Build a service from validated configuration.

        Raises:
            ConfigError: If the configuration is invalid
        """
        validate_config(config)
        return cls(
            api=MemberCardAPI.from_config(config.api),
            session_store=MemberSessionStore(create_store(config.storage)),
            listener=listener,
            executor=executor
        )

    @property
    def current_record(self) -> MembershipRecord | None:
        return self._current_record

    @property
    def selected_name_index(self) -> int:
        return self.session_store.selected_name_index

    def validate_member(self, member_id: str, zip_code: str) -> "Future[ValidationResult]":
        """Validate a member against the membership service.

        Args:
            member_id: Membership identifier
            zip_code: Postal code on file for the membership

        Returns:
            Future resolving to the validation result. The listener is
            notified before the future resolves.
        """
        self.debug("Submitting member validation", member_id=member_id)
        return self._executor.submit(self._run_validation, member_id, zip_code)

    def revalidate_saved_member(self) -> "Future[ValidationResult] | None":
        """Validate the saved member again, or return None if none is saved."""
        saved = self.get_saved_member()
        if saved is None:
            self.debug("No saved member to restore")
            return None
        return self.validate_member(saved.member_id, saved.member_zip)

    def get_saved_member(self) -> SavedMemberInfo | None:
        with self._lock:
            return self.session_store.get_saved_member()

    def save_current_member(self) -> None:
        with self._lock:
            self.session_store.save_current_member(self._current_record)

    def select_member_name(self, index: int) -> None:
        """Mark which name on the card is active and persist it."""
        with self._lock:
            self.session_store.selected_name_index = index
            self.session_store.save_current_member(self._current_record)

    @log_execution(level='DEBUG')
    def _run_validation(self, member_id: str, zip_code: str) -> ValidationResult:
        try:
            body = self.api.lookup_member(member_id, zip_code)
        except APIError as e:
            self.warning("Member card request failed", member_id=member_id, error=str(e))
            return self._fail()
        except Exception:
            self.error("Unexpected error requesting member card", exc_info=True, member_id=member_id)
            return self._fail()

        try:
            record = parse_member_card(body, zip_code)
        except Exception:
            self.error("Unexpected error parsing member card", exc_info=True, member_id=member_id)
            return self._fail()
        if record is None:
            return self._fail()

        with self._lock:
            try:
                self._commit(record)
            except StorageError as e:
                self.error("Failed to persist member session", exc_info=e, card_id=record.card_id)
                return self._fail()
            except Exception:
                self.error("Unexpected error persisting member session", exc_info=True, card_id=record.card_id)
                return self._fail()
            self._notify_loaded(record)

        self.info("Member card loaded", card_id=record.card_id, level=record.member_level)
        return ValidationResult.success(record)

    def _commit(self, record: MembershipRecord) -> None:
        """Replace the current record and persist it, all or nothing."""
        previous_record = self._current_record
        previous_index = self.session_store.selected_name_index

        self._current_record = record
        try:
            saved = self.session_store.get_saved_member()
            if saved is not None and saved.member_id != record.card_id:
                self.session_store.selected_name_index = 0
            self.session_store.save_current_member(record)
        except Exception:
            self._current_record = previous_record
            self.session_store.selected_name_index = previous_index
            raise

    def _fail(self) -> ValidationResult:
        if self.listener is not None:
            try:
                self.listener.on_member_card_load_failed()
            except Exception:
                self.error("Listener failed handling load failure", exc_info=True)
        return ValidationResult.failure()

    def _notify_loaded(self, record: MembershipRecord) -> None:
        if self.listener is None:
            return
        try:
            self.listener.on_member_card_loaded(record)
        except Exception:
            self.error("Listener failed handling loaded card", exc_info=True, card_id=record.card_id)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the private worker pool."""
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> "MemberCardService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
