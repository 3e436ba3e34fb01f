"""Pytest configuration and fixtures."""
import shutil
import sys
from pathlib import Path
from typing import Dict

import pytest

# Add the project root and src/ to the Python path
PROJECT_ROOT = Path(__file__).parent.parent
for path in (PROJECT_ROOT, PROJECT_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from refcite.config import PACKAGE_STYLES_DIR  # noqa: E402
from refcite.models import Author, BibliographicItem  # noqa: E402


@pytest.fixture
def turing_item() -> BibliographicItem:
    """Return a sample journal article."""
    return BibliographicItem(
        type="article-journal",
        title="The Chemical Basis of Morphogenesis",
        authors=(Author(family="Turing", given="Alan"),),
        issued_year=1952,
        container_title="Philosophical Transactions of the Royal Society B",
        pages="37-72",
    )


@pytest.fixture
def turing_fields() -> Dict[str, str]:
    """The same article as typed into the reference form."""
    return {
        "type": "article-journal",
        "title": "The Chemical Basis of Morphogenesis",
        "author": "Turing,Alan",
        "year": "1952",
        "containerTitle": "Philosophical Transactions of the Royal Society B",
        "pages": "37-72",
    }


@pytest.fixture
def styles_dir(tmp_path) -> Path:
    """A writable copy of the packaged style definitions."""
    target = tmp_path / "styles"
    shutil.copytree(PACKAGE_STYLES_DIR, target)
    return target


@pytest.fixture
def make_app(styles_dir, tmp_path):
    """Factory for test applications; keyword overrides go on top of the defaults."""
    from ui.app import create_app

    def _make(**overrides):
        config = {
            "TESTING": True,
            "SECRET_KEY": "test-secret",
            "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
            "STYLES_DIR": str(styles_dir),
            "LOG_DIR": "",
        }
        config.update(overrides)
        return create_app(config)

    return _make


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


def _create_user(app, external_id: str, email: str) -> str:
    from ui.auth import issue_token, upsert_user

    with app.app_context():
        user = upsert_user({"id": external_id, "email": email, "name": email.split("@")[0]})
        return issue_token(user)


@pytest.fixture
def auth_headers(app) -> Dict[str, str]:
    """Authorization header for a freshly created user."""
    token = _create_user(app, "google-1", "ada@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers(app) -> Dict[str, str]:
    """Authorization header for a second, unrelated user."""
    token = _create_user(app, "google-2", "grace@example.com")
    return {"Authorization": f"Bearer {token}"}
