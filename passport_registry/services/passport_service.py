"""
File: passport_service.py
Purpose: Service Layer for Passport Operations (Registration, Search, Edit, Removal, Photos).
"""
import logging
from datetime import date, datetime

from passport_registry.errors import (
    DuplicatePassportError,
    PassportNotFoundError,
    ValidationError,
)
from passport_registry.models.entities.passport import Passport

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Veuillez remplir tous les champs obligatoires"
DUPLICATE_NUMBER_MESSAGE = "Ce numéro de passeport existe déjà dans la base de données"
NOT_FOUND_MESSAGE = "Passeport introuvable"

DATE_FIELDS = ('date_of_birth', 'issue_date', 'expiry_date')


def clean_value(key, value):
    """Strips text input; blank optional values are stored as NULL."""
    if isinstance(value, str):
        value = value.strip()
        if value == '':
            return None
    if key in DATE_FIELDS and isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise ValidationError(f"Date invalide pour {key}: {value}") from None
    if key in DATE_FIELDS and isinstance(value, datetime):
        return value.date()
    return value


def filter_passports(passports, search_term):
    """Case-insensitive substring match on "first last number"."""
    term = (search_term or '').strip().lower()
    if not term:
        return list(passports)
    return [p for p in passports if term in p.search_text]


class PassportService:
    """
    Orchestrates the passport record flows on top of the DAO and the photo bucket.
    """

    def __init__(self, passport_dao, photo_storage):
        self.passport_dao = passport_dao
        self.photo_storage = photo_storage

    # --- Create ---
    def create_passport(self, form_data):
        """
        Registers a new passport.

        Steps:
        1. Required fields (first name, last name, passport number).
        2. Best-effort duplicate check on the passport number.
        3. Insert, then read the stored row back.
        """
        values = {key: clean_value(key, form_data.get(key)) for key in Passport.FIELDS}

        if any(not values[key] for key in Passport.REQUIRED_FIELDS):
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        if self.passport_dao.passport_number_exists(values['passport_number']):
            logger.info("Rejected duplicate passport number %s", values['passport_number'])
            raise DuplicatePassportError(DUPLICATE_NUMBER_MESSAGE)

        passport_id = self.passport_dao.insert_passport(values)
        logger.info("Passport %s registered (%s)", passport_id, values['passport_number'])

        return self.passport_dao.get_passport_by_id(passport_id)

    # --- Read ---
    def list_passports(self, search_term=''):
        """All records newest first, narrowed by the search box."""
        return filter_passports(self.passport_dao.get_all_passports(), search_term)

    def get_passport(self, passport_id):
        passport = self.passport_dao.get_passport_by_id(passport_id)
        if passport is None:
            raise PassportNotFoundError(NOT_FOUND_MESSAGE)
        return passport

    # --- Update ---
    def update_passport(self, passport_id, patch):
        """Applies an edit; unknown keys (id, timestamps, ...) are ignored."""
        changes = {
            key: clean_value(key, value)
            for key, value in patch.items()
            if key in Passport.EDITABLE_FIELDS
        }
        if not changes:
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        must_be_filled = set(Passport.REQUIRED_FIELDS) | set(Passport.EDIT_FORM_FIELDS)
        if any(key in must_be_filled and not value for key, value in changes.items()):
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        current = self.get_passport(passport_id)

        new_number = changes.get('passport_number')
        if new_number and new_number != current.passport_number:
            if self.passport_dao.passport_number_exists(new_number, exclude_id=passport_id):
                raise DuplicatePassportError(DUPLICATE_NUMBER_MESSAGE)

        # Affected rows can be 0 on a same-second re-save of identical values
        self.passport_dao.update_passport(passport_id, changes)

        logger.info("Passport %s updated (%s)", passport_id, ', '.join(sorted(changes)))
        return self.passport_dao.get_passport_by_id(passport_id)

    # --- Delete ---
    def delete_passport(self, passport_id):
        if self.passport_dao.delete_passport(passport_id) == 0:
            raise PassportNotFoundError(NOT_FOUND_MESSAGE)
        logger.info("Passport %s deleted", passport_id)

    # --- Photos ---
    def upload_photo(self, file_storage):
        """Stores the uploaded file in the photo bucket and returns its public URL."""
        if file_storage is None or not file_storage.filename:
            raise ValidationError("Aucun fichier sélectionné")

        name = self.photo_storage.make_object_name(file_storage.filename)
        self.photo_storage.upload(name, file_storage)
        return self.photo_storage.get_public_url(name)
