import logging

from flask import Blueprint, request, abort

from models import storage
from models.user import User
from models.schemas.webhook import USER_UPGRADED, WebhookEventSchema
from utils.decorators import api_key_required

logger = logging.getLogger(__name__)

bp = Blueprint("webhooks", __name__)

webhook_event_schema = WebhookEventSchema()


@bp.post("/polka/webhooks")
@api_key_required()
def polka_webhook():
    """
    Payment provider webhook; upgrades a user to Chirpy Red
    ---
    tags:
      - Webhooks
    security:
      - ApiKey: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            event: { type: string, example: user.upgraded }
            data:
              type: object
              properties:
                user_id: { type: string }
    responses:
      204:
        description: Handled or ignored
      401:
        description: Unauthorized
      404:
        description: User not found
    """
    payload = request.get_json(silent=True) or {}
    event = webhook_event_schema.load(payload)

    if event["event"] != USER_UPGRADED:
        return ("", 204)

    user_id = event["data"].get("user_id")
    user = storage.get(User, user_id) if user_id else None
    if not user:
        abort(404, description="user not found")

    user.is_chirpy_red = True
    user.save()
    logger.info("user %s upgraded to Chirpy Red", user.id)
    return ("", 204)
