"""Seed demo accounts, menu entries and reference rows.

Usage (from repository root):
    python backend/scripts/seed_demo.py

Usage (from backend directory):
    python scripts/seed_demo.py
    # or
    python -m scripts.seed_demo
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from sqlalchemy import select

# Make `app` imports work whether the script is run from repo root or backend/.
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from app.db.session import SessionLocal
from app.models.auth import AuthUser
from app.models.employee import Employee
from app.models.menu_item import MenuItem
from app.models.reference import Area, Award
from app.schemas.user import UserCreateRequest
from app.services.gateway import TableGateway
from app.services.navigation import SIDEBAR_MENU
from app.services.users import create_user

DEFAULT_PASSWORD = "changeme"

DEMO_EMPLOYEES = [
    {"full_name": "Ana Rivera", "email": "ana.rivera@example.com", "position": "Analyst", "department": "Finance"},
    {"full_name": "Ben Okafor", "email": "ben.okafor@example.com", "position": "Engineer", "department": "IT"},
    {"full_name": "Chen Wei", "email": "chen.wei@example.com", "position": None, "department": "Operations"},
]
DEMO_AREAS = ["North", "South", "Central"]
DEMO_AWARDS = ["Employee of the Month", "Safety Excellence"]


def ensure_account(db, email: str, full_name: str, role: str, password: str) -> bool:
    """Create an account unless the email is already registered."""

    if db.scalar(select(AuthUser).where(AuthUser.email == email)) is not None:
        return False
    create_user(db, UserCreateRequest(email=email, password=password, full_name=full_name, role=role))
    return True


def seed_menu(db) -> int:
    gateway = TableGateway(db, MenuItem)
    if gateway.count():
        return 0
    rows = [
        {
            "title": entry.label,
            "path": entry.path,
            "icon": entry.icon,
            "display_order": order,
            "is_active": True,
            "visible_to_roles": ["admin"] if entry.admin_only else ["admin", "user"],
        }
        for order, entry in enumerate(SIDEBAR_MENU)
    ]
    return len(gateway.insert_many(rows))


def seed_table(db, model, rows: list[dict]) -> int:
    gateway = TableGateway(db, model)
    if gateway.count():
        return 0
    return len(gateway.insert_many(rows))


def parse_args() -> argparse.Namespace:
    """Parse script CLI arguments."""

    parser = argparse.ArgumentParser(description="Seed demo accounts and reference data.")
    parser.add_argument("--admin-email", default="admin@example.com")
    parser.add_argument("--user-email", default="user@example.com")
    parser.add_argument(
        "--password",
        default=DEFAULT_PASSWORD,
        help=f"Password for both demo accounts (default: {DEFAULT_PASSWORD})",
    )
    return parser.parse_args()


def main() -> None:
    """Seed demo data and print a short summary."""

    args = parse_args()
    with SessionLocal() as db:
        admin_created = ensure_account(db, args.admin_email, "Demo Admin", "admin", args.password)
        user_created = ensure_account(db, args.user_email, "Demo User", "user", args.password)
        menu_items = seed_menu(db)
        employees = seed_table(db, Employee, DEMO_EMPLOYEES)
        areas = seed_table(db, Area, [{"name": name} for name in DEMO_AREAS])
        awards = seed_table(db, Award, [{"name": name} for name in DEMO_AWARDS])

    print("Seed complete")
    print(f"admin_created={admin_created} email={args.admin_email}")
    print(f"user_created={user_created} email={args.user_email}")
    print(f"menu_items_created={menu_items}")
    print(f"employees_created={employees}")
    print(f"areas_created={areas}")
    print(f"awards_created={awards}")
    print()
    print("Sign in:")
    print("  POST /auth/login")


if __name__ == "__main__":
    main()
