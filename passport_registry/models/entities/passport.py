from datetime import date, datetime


class Passport:
    """
    Data Transfer Object for the Passport Entity.
    """
    FIELDS = (
        'first_name', 'last_name', 'date_of_birth', 'nationality',
        'passport_number', 'issue_date', 'expiry_date', 'photo',
    )
    REQUIRED_FIELDS = ('first_name', 'last_name', 'passport_number')
    # Fields the edit form exposes; all of them must stay filled in
    EDIT_FORM_FIELDS = ('first_name', 'last_name', 'nationality', 'expiry_date')
    # Everything except id and timestamps may be patched
    EDITABLE_FIELDS = FIELDS

    def __init__(self, id=None, first_name='', last_name='', date_of_birth=None,
                 nationality='', passport_number='', issue_date=None, expiry_date=None,
                 photo=None, created_at=None, updated_at=None):
        self.id = id
        self.first_name = first_name
        self.last_name = last_name
        self.date_of_birth = date_of_birth
        self.nationality = nationality
        self.passport_number = passport_number
        self.issue_date = issue_date
        self.expiry_date = expiry_date
        self.photo = photo              # public URL in the photo bucket
        self.created_at = created_at
        self.updated_at = updated_at

    @classmethod
    def from_row(cls, row):
        """Builds an entity from a dictionary cursor row."""
        known = ('id',) + cls.FIELDS + ('created_at', 'updated_at')
        return cls(**{key: row.get(key) for key in known})

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def search_text(self):
        """Text matched by the list search box."""
        return f"{self.first_name} {self.last_name} {self.passport_number}".lower()

    def to_dict(self):
        data = {'id': self.id}
        for key in self.FIELDS + ('created_at', 'updated_at'):
            value = getattr(self, key)
            if isinstance(value, (date, datetime)):
                value = value.isoformat()
            data[key] = value
        return data

    def __repr__(self):
        return f"<Passport {self.id} {self.passport_number}>"
