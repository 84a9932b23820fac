from flask import Blueprint, request, jsonify
from ..http import jerror, query_int
from ..schemas import UserRequest, user_to_dict
from ..services.users import UserDirectory

bp = Blueprint("users", __name__)


@bp.post("")
def create_user():
    payload = request.get_json(silent=True)
    if not payload:
        return jerror(400, "INVALID_PAYLOAD", "Missing or invalid JSON payload.")

    data = UserRequest.model_validate(payload)
    user = UserDirectory().create(email=data.email, name=data.name, surname=data.surname)
    return jsonify(user_to_dict(user)), 201

@bp.get("")
def list_users():
    """
    Paginated list of users.
    Query: ?search=term&page=1&page_size=10
    """
    page = UserDirectory().search(
        request.args.get("search"),
        page=query_int("page"),
        page_size=query_int("page_size"),
    )
    return jsonify(page.to_dict(user_to_dict))

@bp.get("/<int:user_id>")
def get_user(user_id: int):
    return jsonify(user_to_dict(UserDirectory().get(user_id)))

@bp.put("/<int:user_id>")
def update_user(user_id: int):
    payload = request.get_json(silent=True)
    if not payload:
        return jerror(400, "INVALID_PAYLOAD", "Missing or invalid JSON payload.")

    data = UserRequest.model_validate(payload)
    user = UserDirectory().update(user_id, name=data.name, surname=data.surname, email=data.email)
    return jsonify(user_to_dict(user))

@bp.delete("/<int:user_id>")
def delete_user(user_id: int):
    UserDirectory().delete(user_id)
    return "", 204
