"""Owner-scoped reference management routes."""
from datetime import datetime

from flask import Blueprint, current_app, jsonify, request, send_file
from flask_login import current_user, login_required

from refcite.config import OUTPUT_HTML, OUTPUT_TEXT
from refcite.exceptions import CitationError, IncompleteItemError, NotFoundError, ValidationError
from refcite.export import bibliography_docx
from refcite.normalizer import item_from_csl
from ui.citation_routes import get_citation_service
from ui.database import Reference, db
from ui.forms import item_from_metadata

references_bp = Blueprint('references', __name__, url_prefix='/references')


def _owned_reference(reference_id: int) -> Reference:
    """Load a reference only if it belongs to the current user."""
    reference = Reference.query.filter_by(id=reference_id, user_id=current_user.id).first()
    if reference is None:
        raise NotFoundError("Reference not found")
    return reference


def _default_style() -> str:
    preferred = current_user.preferred_styles or []
    return preferred[0] if preferred else current_app.config['DEFAULT_STYLE']


def _optional_text(data: dict, key: str):
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value.strip() or None


def _reference_fields(data) -> dict:
    """Validate a create/update body into column values."""
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    citation_data = data.get('citationData')
    if not citation_data:
        raise ValidationError("citationData is required")

    item = item_from_metadata(citation_data)
    if not item.is_citable():
        raise IncompleteItemError()

    style = data.get('formattingStyle') or _default_style()
    get_citation_service().validate_styles([style])

    url = _optional_text(data, 'url')
    return {
        'citation_data': item.to_dict(),
        'formatting_style': style,
        'url': url if url is not None else item.url,
        'notes': _optional_text(data, 'notes'),
    }


@references_bp.route('', methods=['GET'])
@login_required
def list_references():
    """All references of the current user, newest first."""
    references = (
        Reference.query.filter_by(user_id=current_user.id)
        .order_by(Reference.created_at.desc(), Reference.id.desc())
        .all()
    )
    return jsonify([r.to_dict() for r in references])


@references_bp.route('', methods=['POST'])
@login_required
def create_reference():
    fields = _reference_fields(request.get_json(silent=True))
    reference = Reference(user_id=current_user.id, **fields)
    db.session.add(reference)
    db.session.commit()
    current_app.logger.info(f"User {current_user.id} created reference {reference.id}")
    return jsonify({'message': 'Reference created', 'reference': reference.to_dict()}), 201


@references_bp.route('/<int:reference_id>', methods=['GET'])
@login_required
def get_reference(reference_id):
    return jsonify(_owned_reference(reference_id).to_dict())


@references_bp.route('/<int:reference_id>', methods=['PUT'])
@login_required
def update_reference(reference_id):
    """Replace citation data, style, url and notes of an owned reference."""
    reference = _owned_reference(reference_id)
    fields = _reference_fields(request.get_json(silent=True))
    for column, value in fields.items():
        setattr(reference, column, value)
    reference.last_edited = datetime.utcnow()
    db.session.commit()
    return jsonify({'message': 'Reference updated', 'reference': reference.to_dict()})


@references_bp.route('/<int:reference_id>', methods=['DELETE'])
@login_required
def delete_reference(reference_id):
    reference = _owned_reference(reference_id)
    db.session.delete(reference)
    db.session.commit()
    current_app.logger.info(f"User {current_user.id} deleted reference {reference_id}")
    return jsonify({'message': 'Reference deleted'})


@references_bp.route('/<int:reference_id>/citation', methods=['GET'])
@login_required
def reference_citation(reference_id):
    """
    Format a stored reference.

    Query params:
        style: overrides the reference's formatting style
        output: 'html' (default) or 'text'
    """
    reference = _owned_reference(reference_id)
    style = request.args.get('style') or reference.formatting_style
    output = request.args.get('output') or OUTPUT_HTML
    item = item_from_csl(reference.citation_data)
    citation = get_citation_service().format_citation(item, style, output)
    return jsonify(citation.to_response())


@references_bp.route('/export.docx', methods=['GET'])
@login_required
def export_docx():
    """Export the current user's references as a Word bibliography."""
    override = request.args.get('style')
    service = get_citation_service()
    references = Reference.query.filter_by(user_id=current_user.id).order_by(Reference.id).all()
    if not references:
        raise NotFoundError("No references to export")

    entries = []
    for reference in references:
        try:
            item = item_from_csl(reference.citation_data)
            citation = service.format_citation(item, override or reference.formatting_style, OUTPUT_TEXT)
        except CitationError as e:
            current_app.logger.error(f"Skipping reference {reference.id} in export: {e.message}")
            continue
        entries.append(citation.formatted)

    return send_file(
        bibliography_docx(sorted(entries, key=str.lower)),
        as_attachment=True,
        download_name='references.docx',
        mimetype='application/vnd.openxmlformats-officedocument.wordprocessingml.document'
    )
