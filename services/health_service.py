"""
Health Record Service Module

This module submits pet health records (vaccinations, vet visits, ...).
Like recipe edits, nothing is kept locally unless the server accepts it.
"""

from typing import Any, Dict, Optional

from data.models import HealthRecord
from services.protocols import CommunityApi, Notifier
from utils.exceptions import ValidationError, user_message
from utils.logger import get_logger

logger = get_logger(__name__)


class HealthRecordForm:
    """Add-record form for a pet's health history."""

    def __init__(self, api: CommunityApi, notifier: Notifier):
        self.api = api
        self.notifier = notifier
        self.submitting = False

    def add(self, record: HealthRecord) -> Optional[Dict[str, Any]]:
        """
        Submit a health record.

        Args:
            record: The record to add

        Returns:
            Optional[Dict[str, Any]]: The stored record, or None on failure
        """
        self.submitting = True
        try:
            missing = record.missing_fields()
            if missing:
                raise ValidationError(f"Missing required fields: {', '.join(missing)}")

            stored = self.api.add_health_record(record.to_payload())
            logger.info(f"Added health record '{record.title}' for pet {record.pet_id}")
            return stored
        except Exception as e:
            logger.error(f"Error adding health record: {e}")
            self.notifier.alert(user_message(e, "Failed to add health record"))
            return None
        finally:
            self.submitting = False
