"""
Check-in draft service
Keeps an operator's unfinished check-in form on the server, with expiry
"""
import json
import logging
from datetime import timedelta
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from frontdesk.config import settings
from frontdesk.domain.civil_time import Clock, civil_now, format_for_storage
from frontdesk.domain.records import reassign_primary_on_removal
from frontdesk.models.ontology import CheckinDraft

logger = logging.getLogger(__name__)


class DraftService:
    """Check-in draft service"""

    def __init__(self, db: Session, clock: Optional[Clock] = None,
                 ttl_minutes: Optional[int] = None):
        self.db = db
        self.clock = clock
        self.ttl = timedelta(minutes=ttl_minutes if ttl_minutes is not None else settings.DRAFT_TTL_MINUTES)

    def _get_row(self, operator_id: int) -> Optional[CheckinDraft]:
        return self.db.query(CheckinDraft).filter(CheckinDraft.operator_id == operator_id).first()

    def get_draft(self, operator_id: int) -> Optional[Dict[str, Any]]:
        """The operator's draft, or None when missing or expired"""
        draft = self._get_row(operator_id)
        if not draft:
            return None

        if draft.expires_at <= civil_now(self.clock):
            self.db.delete(draft)
            self.db.commit()
            logger.info(f"Expired check-in draft of operator {operator_id} removed")
            return None

        data = json.loads(draft.payload)
        data['expires_at'] = format_for_storage(draft.expires_at)
        return data

    def save_draft(self, operator_id: int, data: Dict[str, Any]) -> CheckinDraft:
        """Create or replace the draft and push its expiry forward"""
        now = civil_now(self.clock)
        payload = json.dumps(data, default=str, ensure_ascii=False)

        draft = self._get_row(operator_id)
        if draft:
            draft.payload = payload
        else:
            draft = CheckinDraft(operator_id=operator_id, payload=payload)
            self.db.add(draft)
        draft.updated_at = now
        draft.expires_at = now + self.ttl

        self.db.commit()
        self.db.refresh(draft)
        return draft

    def remove_guest(self, operator_id: int, guest_id: int) -> Dict[str, Any]:
        """
        Drop one guest from the draft form; removing the primary promotes
        the first remaining guest
        """
        data = self.get_draft(operator_id)
        if data is None:
            raise ValueError("Draft not found")

        guests = data.get("guests") or []
        if not any(g.get("id") == guest_id for g in guests):
            raise ValueError(f"Guest {guest_id} not found in draft")

        data.pop("expires_at", None)
        data["guests"] = reassign_primary_on_removal(guests, guest_id)
        draft = self.save_draft(operator_id, data)
        logger.info(f"Guest {guest_id} removed from check-in draft of operator {operator_id}")

        data["expires_at"] = format_for_storage(draft.expires_at)
        return data

    def discard(self, operator_id: int, commit: bool = True) -> bool:
        """Remove the draft; False if there was none"""
        draft = self._get_row(operator_id)
        if not draft:
            return False
        self.db.delete(draft)
        if commit:
            self.db.commit()
        return True
