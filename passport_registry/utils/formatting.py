from datetime import date, datetime


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def fr_date(value):
    """dd/mm/yyyy, as toLocaleDateString('fr-FR') prints it."""
    parsed = _as_date(value)
    if parsed is None:
        return value or ''
    return parsed.strftime('%d/%m/%Y')


def iso_date(value):
    """yyyy-mm-dd for <input type="date"> values."""
    parsed = _as_date(value)
    if parsed is None:
        return value or ''
    return parsed.isoformat()
