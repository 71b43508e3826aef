from marshmallow import EXCLUDE, Schema, fields

USER_UPGRADED = "user.upgraded"


class WebhookDataSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.String(required=False)


class WebhookEventSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    event = fields.String(required=True)
    data = fields.Nested(WebhookDataSchema, required=False, load_default=dict)
