"""Persistence of the active member session."""

from membercard.models.member_card import MembershipRecord
from membercard.models.member_card import SavedMemberInfo
from membercard.storage.key_value import KeyValueStore
from membercard.utils.logging_utils import LoggerMixin


MEMBER_ID_KEY = "member_info_id"
MEMBER_ZIP_KEY = "member_info_zip"
MEMBER_FIRST_NAME_KEY = "member_first_name"
SELECTED_MEMBER_KEY = "member_info_selected_member"


def first_name_of(full_name: str) -> str:
    """Return the text before the first space of a full name."""
    return full_name.split(" ", 1)[0]


class MemberSessionStore(LoggerMixin):
    """Saves and restores the member id, zip and selected name index.

    ``selected_name_index`` is held in memory and written with every save.
    Reading the saved member restores it from storage.
    """
    
    def __init__(self, store: KeyValueStore, selected_name_index: int = 0):
        super().__init__()
        self.store = store
        self.selected_name_index = selected_name_index
    
    def save_current_member(self, record: MembershipRecord | None) -> None:
        """Persist the identifying subset of ``record``.

        No-op without a record. An out of range index stores an empty
        first name.
        """
        if record is None:
            return
        
        full_name = record.name_at(self.selected_name_index)
        first_name = first_name_of(full_name) if full_name is not None else ""
        
        self._write_session({
            MEMBER_ID_KEY: record.card_id,
            MEMBER_ZIP_KEY: record.member_zip,
            MEMBER_FIRST_NAME_KEY: first_name,
            SELECTED_MEMBER_KEY: str(self.selected_name_index),
        })
        
        self.debug(
            "Saved member session",
            card_id=record.card_id,
            selected_name_index=self.selected_name_index
        )
    
    def _write_session(self, values: dict[str, str]) -> None:
        """Write all session keys, in one batch where the backend supports it."""
        set_many = getattr(self.store, 'set_many', None)
        if callable(set_many):
            set_many(values)
            return
        for key, value in values.items():
            self.store.set(key, value)
    
    def _stored_index(self) -> int | None:
        raw = self.store.get(SELECTED_MEMBER_KEY)
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            self.warning("Ignoring non-integer selected member index", value=raw)
            return None
    
    def get_saved_member(self) -> SavedMemberInfo | None:
        """Read the saved member, restoring ``selected_name_index``.

        Returns None unless id, zip and index are all present.
        """
        stored_id = self.store.get(MEMBER_ID_KEY)
        stored_zip = self.store.get(MEMBER_ZIP_KEY)
        stored_index = self._stored_index()
        
        if stored_id is None or stored_zip is None or stored_index is None:
            return None
        
        self.selected_name_index = stored_index
        return SavedMemberInfo(member_id=stored_id, member_zip=stored_zip)
    
    def saved_first_name(self) -> str | None:
        """First name of the selected member at the last save."""
        return self.store.get(MEMBER_FIRST_NAME_KEY)
