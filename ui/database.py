"""
Database models for user accounts, references and editor documents.
"""
from datetime import datetime

from flask_login import UserMixin
from flask_sqlalchemy import SQLAlchemy

from refcite.config import DEFAULT_PREFERRED_STYLES

db = SQLAlchemy()


def _default_preferred_styles():
    return list(DEFAULT_PREFERRED_STYLES)


class User(UserMixin, db.Model):
    """User identified by an external identity provider."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    external_id = db.Column(db.String(255), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255))
    picture = db.Column(db.Text)
    refresh_token = db.Column(db.Text)
    preferred_styles = db.Column(db.JSON, nullable=False, default=_default_preferred_styles)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    references = db.relationship('Reference', backref='user', lazy=True, cascade='all, delete-orphan')
    document = db.relationship('Document', backref='user', uselist=False, cascade='all, delete-orphan')

    def to_dict(self):
        """Public profile; the refresh credential is never included."""
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'picture': self.picture,
            'preferredCitationStyles': list(self.preferred_styles or []),
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<User {self.email}>'


class Reference(db.Model):
    """Reference owned by one user, stored as CSL-JSON."""
    __tablename__ = 'references'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    citation_data = db.Column(db.JSON, nullable=False)
    formatting_style = db.Column(db.String(255), nullable=False)
    url = db.Column(db.Text)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    last_edited = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'citationData': self.citation_data,
            'formattingStyle': self.formatting_style,
            'url': self.url,
            'notes': self.notes,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'lastEdited': self.last_edited.isoformat() if self.last_edited else None,
        }

    def __repr__(self):
        return f'<Reference {self.id} ({self.formatting_style})>'


class Document(db.Model):
    """The rich-text document a user edits next to their references."""
    __tablename__ = 'documents'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, unique=True)
    title = db.Column(db.String(500), nullable=False, default='Untitled document')
    content = db.Column(db.Text, nullable=False, default='')
    open_pdfs = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_edited = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'openPdfIds': list(self.open_pdfs or []),
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'lastEdited': self.last_edited.isoformat() if self.last_edited else None,
        }

    def __repr__(self):
        return f'<Document {self.title[:30]}>'
