"""
Create (or refresh) a user account and print a bearer token for it.
"""
import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
for path in (ROOT, os.path.join(ROOT, 'src')):
    if path not in sys.path:
        sys.path.insert(0, path)

from ui.app import create_app
from ui.auth import issue_token, upsert_user

print("\n" + "="*60)
print("CREATE USER ACCOUNT")
print("="*60)

email = input("\nEnter email: ").strip()
name = input("Enter name: ").strip()
external_id = input("Enter identity provider id [email]: ").strip() or email

app = create_app()
with app.app_context():
    user = upsert_user({"id": external_id, "email": email, "name": name or None})
    token = issue_token(user)

    print(f"\nUser ready!")
    print(f"  Email: {user.email}")
    print(f"  ID: {user.id}")
    print(f"  Preferred styles: {', '.join(user.preferred_styles)}")
    print("\nSend this header with authenticated requests:")
    print(f"  Authorization: Bearer {token}")
    print("="*60 + "\n")
