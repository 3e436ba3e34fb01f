from typing import Any, Mapping

from werkzeug.datastructures import MultiDict
from wtforms import Form, StringField
from wtforms.validators import URL as ValidURL
from wtforms.validators import AnyOf, Length, Optional, Regexp

from refcite.config import REFERENCE_TYPES
from refcite.exceptions import ValidationError
from refcite.models import PAGES_PATTERN, BibliographicItem
from refcite.normalizer import FORM_FIELDS, build_item, is_csl_shaped, item_from_csl


class ReferenceFieldsForm(Form):
    """Raw reference fields as typed into the reference form."""
    type = StringField('Type', validators=[
        Optional(),
        AnyOf(REFERENCE_TYPES, message="Unsupported reference type")
    ])
    title = StringField('Title', validators=[
        Optional(),
        Length(max=1000, message="Title is too long (max 1000 characters)")
    ])
    author = StringField('Authors ("Family,Given;Family,Given")', validators=[
        Optional(),
        Length(max=2000, message="Authors field is too long (max 2000 characters)")
    ])
    year = StringField('Year')
    containerTitle = StringField('Journal / Book', validators=[
        Optional(),
        Length(max=500, message="Container title is too long (max 500 characters)")
    ])
    pages = StringField('Pages', validators=[
        Optional(),
        Regexp(PAGES_PATTERN, message="Pages may only contain digits, letters, dashes, commas, periods and spaces")
    ])
    publisher = StringField('Publisher', validators=[
        Optional(),
        Length(max=300, message="Publisher name is too long (max 300 characters)")
    ])
    URL = StringField('URL', validators=[
        Optional(),
        ValidURL(require_tld=False, message="Invalid URL format (e.g., https://example.com)")
    ])
    notes = StringField('Notes')


def form_errors(form: Form) -> str:
    return "; ".join(
        f"{name}: {', '.join(errors)}" for name, errors in form.errors.items()
    )


def item_from_metadata(metadata: Any) -> BibliographicItem:
    """Validate a metadata payload, CSL-JSON or raw form fields, into an item."""
    if not isinstance(metadata, Mapping):
        raise ValidationError("metadata must be an object")
    if is_csl_shaped(metadata):
        return item_from_csl(metadata)

    unknown = set(metadata) - FORM_FIELDS
    if unknown:
        raise ValidationError(f"Unsupported metadata fields: {', '.join(sorted(unknown))}")

    fields = {}
    for key, value in metadata.items():
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ValidationError(f"Field '{key}' must be text")
        fields[key] = str(value)
    if "url" in fields and not fields.get("URL"):
        fields["URL"] = fields.pop("url")
    form = ReferenceFieldsForm(formdata=MultiDict(fields))
    if not form.validate():
        raise ValidationError(form_errors(form))
    return build_item(form.data)
