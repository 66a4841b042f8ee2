"""
File: photo_storage.py
Purpose: Object storage for passport photos (one bucket directory, public URLs).
"""
import logging
import uuid
from pathlib import Path

from flask import url_for

from passport_registry.errors import StorageError, ValidationError

logger = logging.getLogger(__name__)


class PhotoStorage:
    """
    Stores uploaded photos in a bucket directory under the upload root.

    Objects are never overwritten: uploading to an existing name fails,
    which is why names are generated randomly by make_object_name().
    """

    def __init__(self, upload_root, bucket='passport-photos', allowed_extensions=None):
        self.bucket = bucket
        self.bucket_path = Path(upload_root) / bucket
        self.allowed_extensions = frozenset(
            ext.lower() for ext in (allowed_extensions or {'png', 'jpg', 'jpeg', 'gif', 'webp'})
        )

    @staticmethod
    def extension_of(filename):
        if not filename or '.' not in filename:
            return ''
        return filename.rsplit('.', 1)[1].lower()

    def make_object_name(self, filename):
        """Random object name keeping the uploaded file's extension."""
        ext = self.extension_of(filename)
        if ext not in self.allowed_extensions:
            raise ValidationError(f"Type de fichier non autorisé: {filename or '?'}")
        return f"{uuid.uuid4().hex}.{ext}"

    def _object_path(self, name):
        path = (self.bucket_path / name).resolve()
        if path.parent != self.bucket_path.resolve():
            raise StorageError(f"Nom d'objet invalide: {name}")
        return path

    def upload(self, name, file_storage):
        """Writes the uploaded file under `name`. Returns the object name."""
        if self.extension_of(name) not in self.allowed_extensions:
            raise ValidationError(f"Type de fichier non autorisé: {name}")

        self.bucket_path.mkdir(parents=True, exist_ok=True)
        path = self._object_path(name)
        if path.exists():
            raise StorageError(f"L'objet {name} existe déjà")

        try:
            file_storage.save(str(path))
        except OSError as e:
            logger.error("Error writing photo %s: %s", name, e)
            raise StorageError(str(e)) from e

        logger.info("Stored photo %s in bucket %s", name, self.bucket)
        return name

    def get_public_url(self, name):
        """Absolute URL of the object (requires an application context)."""
        return url_for('passports.photo', filename=name, _external=True)

    def exists(self, name):
        try:
            return self._object_path(name).is_file()
        except StorageError:
            return False
