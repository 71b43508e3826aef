from marshmallow import EXCLUDE, Schema, fields, pre_load, validates, ValidationError

from models.schemas.common import UTCDateTime


def _norm_email(v):
    return v.strip().lower() if isinstance(v, str) else v


class _EmailNormalizingSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = dict(data, email=_norm_email(data["email"]))
        return data


class UserCreateSchema(_EmailNormalizingSchema):
    email = fields.Email(required=True)
    password = fields.String(required=True, load_only=True)

    @validates("password")
    def validate_password(self, value, **kwargs):
        if not value:
            raise ValidationError("Password must not be empty.")


class UserUpdateSchema(UserCreateSchema):
    pass


class UserLoginSchema(_EmailNormalizingSchema):
    email = fields.String(required=True)
    password = fields.String(required=True, load_only=True)


class UserOutSchema(Schema):
    id = fields.String()
    email = fields.String()
    created_at = UTCDateTime()
    updated_at = UTCDateTime()
    is_chirpy_red = fields.Boolean()
