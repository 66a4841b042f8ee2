import uuid

from passport_registry.models.entities.passport import Passport


class PassportDAO:
    """
    Data Access Object for the `passports` table.

    Maps the four collaborator operations (select / insert / update / delete)
    onto SQL statements run through the DB manager. Column names are taken
    from Passport.FIELDS only, values always travel as query parameters.
    """

    def __init__(self, db_manager):
        self.db = db_manager

    def get_all_passports(self):
        """Returns every record, newest first."""
        query = "SELECT * FROM passports ORDER BY created_at DESC"
        rows = self.db.fetch_all(query)
        return [Passport.from_row(row) for row in rows or []]

    def get_passport_by_id(self, passport_id):
        query = "SELECT * FROM passports WHERE id = %s"
        row = self.db.fetch_one(query, (passport_id,))
        return Passport.from_row(row) if row else None

    def passport_number_exists(self, passport_number, exclude_id=None):
        """
        Existence probe used before insert/update.

        Not transactional: two concurrent submissions of the same number can
        both pass this check.
        """
        query = "SELECT passport_number FROM passports WHERE passport_number = %s"
        params = (passport_number,)
        if exclude_id is not None:
            query += " AND id <> %s"
            params = (passport_number, exclude_id)
        return self.db.fetch_one(query + " LIMIT 1", params) is not None

    def insert_passport(self, values):
        """
        Inserts a new record and returns its generated id.
        created_at and updated_at are stamped by the database.
        """
        passport_id = str(uuid.uuid4())
        columns = [key for key in Passport.FIELDS if key in values]

        query = f"""
            INSERT INTO passports
            (id, {', '.join(columns)}, created_at, updated_at)
            VALUES (%s, {', '.join(['%s'] * len(columns))}, NOW(), NOW())
        """
        params = (passport_id,) + tuple(values[key] for key in columns)
        self.db.execute_query(query, params)
        return passport_id

    def update_passport(self, passport_id, patch):
        """Applies a partial update and returns the affected row count."""
        columns = [key for key in Passport.EDITABLE_FIELDS if key in patch]
        assignments = [f"{key} = %s" for key in columns] + ["updated_at = NOW()"]

        query = f"UPDATE passports SET {', '.join(assignments)} WHERE id = %s"
        params = tuple(patch[key] for key in columns) + (passport_id,)
        return self.db.execute_query(query, params)

    def delete_passport(self, passport_id):
        query = "DELETE FROM passports WHERE id = %s"
        return self.db.execute_query(query, (passport_id,))
