"""The single editor document each user keeps next to their references."""
from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from refcite.exceptions import ValidationError
from ui.database import Document, db

documents_bp = Blueprint('documents', __name__, url_prefix='/documents')


def _open_pdfs(value):
    if not isinstance(value, list):
        raise ValidationError("openPdfIds must be a list")
    pdfs = []
    for entry in value:
        if not isinstance(entry, dict) or not entry.get('fileId') or not entry.get('name'):
            raise ValidationError("Each open PDF needs a fileId and a name")
        pdfs.append({'fileId': str(entry['fileId']), 'name': str(entry['name'])})
    return pdfs


@documents_bp.route('', methods=['GET'])
@login_required
def get_document():
    document = Document.query.filter_by(user_id=current_user.id).first()
    if document is None:
        return jsonify({'message': 'No document found', 'document': None})
    return jsonify({'document': document.to_dict()})


@documents_bp.route('', methods=['POST'])
@login_required
def save_document():
    """
    Create or update the user's document.

    Body:
        {'title': '...', 'content': '...', 'openPdfIds': [{'fileId': '...', 'name': '...'}]}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    for key in ('title', 'content'):
        if key in data and not isinstance(data[key], str):
            raise ValidationError(f"{key} must be a string")

    document = Document.query.filter_by(user_id=current_user.id).first()
    created = document is None
    if created:
        document = Document(user_id=current_user.id)
        db.session.add(document)

    if data.get('title', '').strip():
        document.title = data['title'].strip()
    if 'content' in data:
        document.content = data['content']
    if 'openPdfIds' in data:
        document.open_pdfs = _open_pdfs(data['openPdfIds'])

    db.session.commit()
    current_app.logger.info(f"{'Created' if created else 'Updated'} document for user {current_user.id}")
    return jsonify({'message': 'Document saved', 'document': document.to_dict()}), 201 if created else 200
