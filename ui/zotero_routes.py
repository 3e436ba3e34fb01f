from flask import Blueprint, current_app, jsonify, request

from refcite.config import OUTPUT_HTML
from refcite.exceptions import NotFoundError
from refcite.zotero import ZoteroAPI, item_from_zotero
from ui.citation_routes import get_citation_service

zotero_bp = Blueprint('zotero', __name__, url_prefix='/zotero')


def get_zotero_api() -> ZoteroAPI:
    return current_app.extensions['zotero_api']


@zotero_bp.route('/citation/<zotero_id>', methods=['GET'])
def zotero_citation(zotero_id):
    """
    Fetch a Zotero item and format it.

    Query params:
        style: citation style id (defaults to DEFAULT_STYLE)
        output: 'html' (default) or 'text'
        library: optional 'users/<id>' or 'groups/<id>' prefix
    """
    style = request.args.get('style') or current_app.config['DEFAULT_STYLE']
    output = request.args.get('output') or OUTPUT_HTML

    raw = get_zotero_api().get_item(zotero_id, library=request.args.get('library'))
    if raw is None:
        raise NotFoundError(f"Zotero item '{zotero_id}' not found")

    citation = get_citation_service().format_citation(item_from_zotero(raw), style, output)
    return jsonify(citation.to_response())
