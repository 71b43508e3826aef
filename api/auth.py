"""
Authentication blueprint:
- POST /api/login
- POST /api/refresh
- POST /api/revoke

Access tokens are short-lived HS256 JWTs; refresh tokens are opaque random
strings stored in the refresh_tokens table so they can be revoked. The
refresh token is sent back as `Authorization: Bearer <refresh_token>`.
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify

from models.schemas.user import UserLoginSchema, UserOutSchema
from utils.decorators import get_auth_service

bp = Blueprint("auth", __name__)

user_login_schema = UserLoginSchema()
user_out_schema = UserOutSchema()


@bp.post("/login")
def login():
    """
    Login: returns the user plus access and refresh tokens
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns tokens)
      401:
        description: Unauthorized
    """
    payload = request.get_json(silent=True) or {}
    data = user_login_schema.load(payload)

    result = get_auth_service().login(data["email"], data["password"])

    body = user_out_schema.dump(result.user)
    body["token"] = result.access_token
    body["refresh_token"] = result.refresh_token
    return jsonify(body), 200


@bp.post("/refresh")
def refresh():
    """
    Exchange a refresh token for a new access token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK (returns a new access token)
      401:
        description: Unauthorized
    """
    token = get_auth_service().refresh(request.headers)
    return jsonify({"token": token}), 200


@bp.post("/revoke")
def revoke():
    """
    Revoke a refresh token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: ""
      401:
        description: Unauthorized
    """
    get_auth_service().revoke(request.headers)
    return ("", 204)
