from __future__ import annotations

from flask import Blueprint, request, jsonify, g, abort

from models import storage
from models.chirp import MAX_CHIRP_LENGTH, Chirp
from models.schemas.chirp import ChirpCreateSchema, ChirpOutSchema
from utils.decorators import get_current_user, jwt_required
from utils.profanity import clean_body

bp = Blueprint("chirps", __name__)

chirp_create_schema = ChirpCreateSchema()
chirp_out_schema = ChirpOutSchema()
chirp_list_out_schema = ChirpOutSchema(many=True)

SORT_ORDERS = ("asc", "desc")


def parse_sort():
    sort = request.args.get("sort") or "asc"
    if sort not in SORT_ORDERS:
        abort(400, description="sort param can only be desc or asc")
    return Chirp.created_at.desc() if sort == "desc" else Chirp.created_at.asc()


def load_chirp_body() -> str:
    """Validate the request body and return the profanity-masked chirp text."""
    payload = request.get_json(silent=True) or {}
    data = chirp_create_schema.load(payload)
    if len(data["body"]) > MAX_CHIRP_LENGTH:
        abort(400, description="Chirp is too long")
    return clean_body(data["body"])


def get_chirp_or_404(chirp_id: str) -> Chirp:
    chirp = storage.get(Chirp, chirp_id)
    if not chirp:
        abort(404, description="chirp not found")
    return chirp


def get_owned_chirp(chirp_id: str) -> Chirp:
    chirp = get_chirp_or_404(chirp_id)
    if chirp.user_id != g.current_user_id:
        abort(403, description="You can only modify your own chirps")
    return chirp


@bp.post("/chirps")
@jwt_required()
def create_chirp():
    """
    Post a chirp as the authenticated user
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            body: { type: string, maxLength: 140 }
    responses:
      201:
        description: Created
      400:
        description: Chirp is too long
      401:
        description: Unauthorized
      422:
        description: Validation error
    """
    user = get_current_user()
    body = load_chirp_body()

    chirp = Chirp(body=body, user_id=user.id)
    storage.new(chirp)
    storage.save()

    return jsonify(chirp_out_schema.dump(chirp)), 201


@bp.get("/chirps")
def list_chirps():
    """
    List chirps
    ---
    tags:
      - Chirps
    parameters:
      - in: query
        name: author_id
        type: string
        required: false
      - in: query
        name: sort
        type: string
        enum: [asc, desc]
        required: false
    responses:
      200:
        description: OK
      400:
        description: Invalid sort
    """
    order_by = parse_sort()
    query = storage.get_session().query(Chirp)

    author_id = request.args.get("author_id")
    if author_id:
        query = query.filter(Chirp.user_id == author_id)

    rows = query.order_by(order_by).all()
    return jsonify(chirp_list_out_schema.dump(rows)), 200


@bp.get("/chirps/<chirp_id>")
def get_chirp(chirp_id: str):
    """
    Get a chirp by id
    ---
    tags:
      - Chirps
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      200:
        description: OK
      404:
        description: Not found
    """
    return jsonify(chirp_out_schema.dump(get_chirp_or_404(chirp_id))), 200


@bp.put("/chirps/<chirp_id>")
@jwt_required()
def update_chirp(chirp_id: str):
    """
    Edit one of your own chirps
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
      - in: body
        name: body
        schema:
          type: object
          properties:
            body: { type: string, maxLength: 140 }
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
      403:
        description: Not the owner
      404:
        description: Not found
    """
    chirp = get_owned_chirp(chirp_id)
    chirp.body = load_chirp_body()
    chirp.save()

    return jsonify(chirp_out_schema.dump(chirp)), 200


@bp.delete("/chirps/<chirp_id>")
@jwt_required()
def delete_chirp(chirp_id: str):
    """
    Delete one of your own chirps
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      204:
        description: Deleted
      401:
        description: Unauthorized
      403:
        description: Not the owner
      404:
        description: Not found
    """
    chirp = get_owned_chirp(chirp_id)
    storage.delete(chirp)
    storage.save()
    return ("", 204)
