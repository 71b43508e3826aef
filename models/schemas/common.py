from marshmallow import fields

from models.base_model import as_utc


class UTCDateTime(fields.DateTime):
    """ISO-8601 output that always carries the UTC offset, whether the value
    was just set in Python or read back naive from SQLite."""

    def _serialize(self, value, attr, obj, **kwargs):
        return super()._serialize(as_utc(value), attr, obj, **kwargs)
