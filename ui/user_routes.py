from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from refcite.exceptions import ValidationError
from ui.citation_routes import get_citation_service
from ui.database import db

users_bp = Blueprint('users', __name__, url_prefix='/users')


@users_bp.route('/me', methods=['GET'])
@login_required
def get_profile():
    return jsonify(current_user.to_dict())


@users_bp.route('/me', methods=['PUT'])
@login_required
def update_profile():
    """
    Update the display name and/or preferred citation styles.

    Body:
        {'name': '...', 'preferredCitationStyles': ['apa', 'mla']}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    if 'name' in data:
        name = data['name']
        if name is not None and not isinstance(name, str):
            raise ValidationError("name must be a string")
        current_user.name = name.strip() if name else None

    if 'preferredCitationStyles' in data:
        styles = data['preferredCitationStyles']
        if not isinstance(styles, list) or not styles:
            raise ValidationError("preferredCitationStyles must be a non-empty list")
        current_user.preferred_styles = get_citation_service().validate_styles(styles)

    db.session.commit()
    current_app.logger.info(f"Updated profile of user {current_user.id}")
    return jsonify({'message': 'Profile updated', 'user': current_user.to_dict()})


@users_bp.route('/me/styles', methods=['GET'])
@login_required
def preferred_styles():
    """The user's preferred styles, in order, as style options."""
    styles = get_citation_service().preferred_styles(current_user.preferred_styles or [])
    return jsonify({'styles': [s.to_option() for s in styles]})
