"""
Citation API: style listing and one-off formatting.

These routes do not require authentication; they only format what the
caller sends.
"""
from flask import Blueprint, current_app, jsonify, request

from refcite.config import OUTPUT_HTML
from refcite.exceptions import ValidationError
from refcite.service import CitationService
from ui.extensions import limiter
from ui.forms import item_from_metadata

citations_bp = Blueprint('citations', __name__)


def get_citation_service() -> CitationService:
    return current_app.extensions['citation_service']


def _format_rate_limit():
    return current_app.config['FORMAT_RATE_LIMIT']


@citations_bp.route('/styles', methods=['GET'])
def list_styles():
    """
    List the available citation styles.

    Returns:
        {'styles': [{'label': 'American Psychological Association ...', 'value': 'apa'}, ...]}
    """
    styles = get_citation_service().list_styles()
    return jsonify({'styles': [s.to_option() for s in styles]})


@citations_bp.route('/format', methods=['POST'])
@limiter.limit(_format_rate_limit)
def format_citation():
    """
    Format one bibliography entry.

    Body:
        {'metadata': {...}, 'style': 'apa', 'output': 'html' | 'text'}

    ``metadata`` is either a CSL-JSON item or the raw reference form fields.

    Returns:
        {'citationHtml': '...'} or {'citationText': '...'}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    metadata = data.get('metadata')
    style = data.get('style')
    output = data.get('output') or OUTPUT_HTML
    if not metadata or not style:
        raise ValidationError("metadata and style are required")
    if not isinstance(style, str) or not isinstance(output, str):
        raise ValidationError("style and output must be strings")

    item = item_from_metadata(metadata)
    citation = get_citation_service().format_citation(item, style, output)
    return jsonify(citation.to_response())
