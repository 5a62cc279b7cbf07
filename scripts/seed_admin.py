"""Create or update the dashboard admin user.

Usage:
  SEED_ADMIN_EMAIL=admin@example.com SEED_ADMIN_PASSWORD=... python scripts/seed_admin.py
"""

import sys
import os

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from scribeboard import create_app
from scribeboard.extensions import db
from scribeboard.models import User


def seed_admin(email, password, name=None):
    email = email.strip().lower()
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(email=email)
        db.session.add(user)
    user.name = name or user.name
    user.set_password(password)
    db.session.commit()
    return user


def main():
    email = os.getenv('SEED_ADMIN_EMAIL')
    password = os.getenv('SEED_ADMIN_PASSWORD')
    if not email or not password:
        sys.exit('SEED_ADMIN_EMAIL and SEED_ADMIN_PASSWORD are required')
    app = create_app()
    with app.app_context():
        user = seed_admin(email, password, os.getenv('SEED_ADMIN_NAME'))
        app.logger.info('Admin user ready: %s (id %s)', user.email, user.id)


if __name__ == '__main__':
    main()
