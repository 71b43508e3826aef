from marshmallow import EXCLUDE, Schema, fields

from models.schemas.common import UTCDateTime


class ChirpCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    body = fields.String(required=True)


class ChirpOutSchema(Schema):
    id = fields.String()
    body = fields.String()
    user_id = fields.String()
    created_at = UTCDateTime()
    updated_at = UTCDateTime()
