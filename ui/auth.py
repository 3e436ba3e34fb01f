"""
Bearer-token authentication.

Users sign in with an external identity provider; once the identity is
verified the application issues its own signed token, sent back as
``Authorization: Bearer <token>`` on every owner-scoped request.
"""
from typing import Any, Mapping, Optional

from flask import current_app, jsonify
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from sqlalchemy.exc import IntegrityError

from refcite.exceptions import ValidationError
from ui.database import User, db
from ui.extensions import login_manager

TOKEN_SALT = "refcite-auth"


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)


def issue_token(user: User) -> str:
    """Create a signed session token for ``user``."""
    return _serializer().dumps({"user_id": user.id})


def user_from_token(token: str) -> Optional[User]:
    try:
        payload = _serializer().loads(token, max_age=current_app.config["TOKEN_MAX_AGE"])
    except SignatureExpired:
        current_app.logger.info("Rejected expired token")
        return None
    except BadSignature:
        current_app.logger.warning("Rejected token with bad signature")
        return None
    user_id = payload.get("user_id") if isinstance(payload, dict) else None
    if user_id is None:
        return None
    return db.session.get(User, user_id)


@login_manager.request_loader
def load_user_from_request(request):
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return user_from_token(token.strip())


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({"error": "Authentication required"}), 401


def upsert_user(identity: Mapping[str, Any]) -> User:
    """Create or refresh a user from a verified identity.

    ``identity`` carries ``id``, ``email``, ``name`` and ``picture`` as
    returned by the identity provider, plus an optional ``refresh_token``.
    """
    external_id = identity.get("id")
    email = identity.get("email")
    if not external_id or not email:
        raise ValidationError("Identity must include 'id' and 'email'")

    user = User.query.filter_by(external_id=str(external_id)).first()
    if user is None:
        user = User(
            external_id=str(external_id),
            email=email,
            name=identity.get("name"),
            picture=identity.get("picture"),
        )
        db.session.add(user)
        current_app.logger.info(f"Created user {email}")
    else:
        user.name = identity.get("name")
        user.picture = identity.get("picture")

    if identity.get("refresh_token"):
        user.refresh_token = identity["refresh_token"]

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        current_app.logger.warning(f"Rejected identity {external_id}: email {email} is already registered")
        raise ValidationError("Email is already registered to another account")
    return user
