# servicedesk/seed.py
"""
Demo data for local development.

    python -m servicedesk.seed            # same as "seed"
    python -m servicedesk.seed seed       # wipe, then load the full demo set
    python -m servicedesk.seed reset      # wipe every table
    python -m servicedesk.seed minimal    # only the two demo login users
"""

import argparse
import logging
import sys
from datetime import date

from sqlalchemy.orm import Session

from servicedesk.asset.models import Asset, AssetStatus
from servicedesk.auth.services import DEMO_ACCOUNTS
from servicedesk.core.database import init_db, session_scope
from servicedesk.core.logging_config import setup_logging
from servicedesk.license.models import SoftwareLicense
from servicedesk.ticket.models import Ticket, TicketPriority, TicketStatus
from servicedesk.user.models import User, UserRole

logger = logging.getLogger(__name__)

SEED_USERS = [
    ("End User", "user@company.com", UserRole.END_USER),
    ("Admin User", "admin@company.com", UserRole.ADMIN),
    ("Sarah Johnson", "sarah.johnson@company.com", UserRole.END_USER),
    ("Michael Chen", "michael.chen@company.com", UserRole.END_USER),
    ("Emma Williams", "emma.williams@company.com", UserRole.END_USER),
    ("David Rodriguez", "david.rodriguez@company.com", UserRole.ADMIN),
    ("Lisa Thompson", "lisa.thompson@company.com", UserRole.END_USER),
    ("James Wilson", "james.wilson@company.com", UserRole.ADMIN),
    ("Anna Garcia", "anna.garcia@company.com", UserRole.END_USER),
    ("Robert Brown", "robert.brown@company.com", UserRole.END_USER),
]

SEED_TICKETS = [
    {
        "title": "Unable to connect to Wi-Fi",
        "description": "I cannot connect to the office Wi-Fi network from my laptop. It shows the network "
        "but fails to authenticate with the password. This started happening after the recent Windows update.",
        "priority": TicketPriority.MEDIUM,
        "category": "Network",
        "status": TicketStatus.OPEN,
        "user": "sarah.johnson@company.com",
    },
    {
        "title": "Printer not responding",
        "description": "The HP printer on the 3rd floor is not responding to print jobs. The queue shows jobs "
        "pending but nothing prints. Power cycling the printer did not help.",
        "priority": TicketPriority.HIGH,
        "category": "Hardware",
        "status": TicketStatus.IN_PROGRESS,
        "user": "michael.chen@company.com",
        "assigned_to": "admin@company.com",
    },
    {
        "title": "Password reset for CRM system",
        "description": "I need my password reset for the CRM system. I have been locked out after multiple "
        "failed login attempts. My username is e.williams.",
        "priority": TicketPriority.MEDIUM,
        "category": "Access",
        "status": TicketStatus.RESOLVED,
        "user": "emma.williams@company.com",
        "assigned_to": "david.rodriguez@company.com",
    },
    {
        "title": "Software installation request",
        "description": "I need Adobe Photoshop installed on my workstation for the marketing campaign project. "
        "I have the license key available.",
        "priority": TicketPriority.LOW,
        "category": "Software",
        "status": TicketStatus.OPEN,
        "user": "lisa.thompson@company.com",
    },
    {
        "title": "Computer running very slowly",
        "description": "My computer has become extremely slow over the past week. It takes several minutes to "
        "boot up and applications are very sluggish. I have tried restarting multiple times.",
        "priority": TicketPriority.HIGH,
        "category": "Hardware",
        "status": TicketStatus.OPEN,
        "user": "anna.garcia@company.com",
    },
    {
        "title": "Email not syncing on mobile",
        "description": "My company email is not syncing properly on my iPhone. I can receive emails but cannot "
        'send them. The error message says "Cannot send mail. The message was rejected by the server."',
        "priority": TicketPriority.MEDIUM,
        "category": "Software",
        "status": TicketStatus.IN_PROGRESS,
        "user": "robert.brown@company.com",
        "assigned_to": "james.wilson@company.com",
    },
    {
        "title": "VPN connection issues",
        "description": "I cannot establish a VPN connection to access company resources from home. The "
        "connection times out during the authentication phase.",
        "priority": TicketPriority.HIGH,
        "category": "Network",
        "status": TicketStatus.OPEN,
        "user": "user@company.com",
    },
    {
        "title": "Request for dual monitor setup",
        "description": "I would like to request an additional monitor for my workstation to improve "
        "productivity. I do a lot of spreadsheet work and would benefit from the extra screen space.",
        "priority": TicketPriority.LOW,
        "category": "Hardware",
        "status": TicketStatus.CLOSED,
        "user": "sarah.johnson@company.com",
        "assigned_to": "admin@company.com",
    },
    {
        "title": "Antivirus blocking legitimate software",
        "description": "The antivirus software is blocking our development tools and flagging them as "
        "malicious. This is preventing our team from working effectively.",
        "priority": TicketPriority.CRITICAL,
        "category": "Software",
        "status": TicketStatus.IN_PROGRESS,
        "user": "michael.chen@company.com",
        "assigned_to": "david.rodriguez@company.com",
    },
    {
        "title": "Keyboard keys not working",
        "description": "Several keys on my keyboard (Q, W, E, R) are not working properly. Sometimes they dont "
        "register presses, other times they repeat multiple times.",
        "priority": TicketPriority.MEDIUM,
        "category": "Hardware",
        "status": TicketStatus.RESOLVED,
        "user": "emma.williams@company.com",
        "assigned_to": "james.wilson@company.com",
    },
]

# name, type, serial, status, purchased, assigned to
SEED_ASSETS = [
    ("MacBook Pro 16-inch", "Computer", "MBP16-2023-001", AssetStatus.ASSIGNED, date(2023, 1, 15),
     "sarah.johnson@company.com"),
    ("Dell OptiPlex 7090", "Computer", "DOT7090-2022-045", AssetStatus.ASSIGNED, date(2022, 11, 20),
     "michael.chen@company.com"),
    ("iPad Pro 12.9-inch", "Computer", "IPD129-2023-012", AssetStatus.AVAILABLE, date(2023, 3, 10), None),
    ("HP LaserJet Pro M404n", "Printer", "HPLJ404-2022-003", AssetStatus.ASSIGNED, date(2022, 8, 5),
     "emma.williams@company.com"),
    ("Dell UltraSharp U2722DE", "Monitor", "DUS2722-2023-089", AssetStatus.ASSIGNED, date(2023, 2, 18),
     "lisa.thompson@company.com"),
    ("Logitech MX Master 3", "Mouse", "LMX3-2023-156", AssetStatus.AVAILABLE, date(2023, 4, 22), None),
    ("Cisco Meraki MR46", "Network Equipment", "CMR46-2022-008", AssetStatus.ASSIGNED, date(2022, 9, 12), None),
    ("Surface Pro 9", "Computer", "SP9-2023-034", AssetStatus.UNDER_MAINTENANCE, date(2023, 1, 30),
     "anna.garcia@company.com"),
    ("iPhone 14 Pro", "Other", "IP14P-2023-067", AssetStatus.ASSIGNED, date(2023, 5, 15),
     "robert.brown@company.com"),
    ("ThinkPad X1 Carbon", "Computer", "TPX1C-2022-091", AssetStatus.RETIRED, date(2022, 6, 10), None),
    ("BenQ PD3200U", "Monitor", "BQPD32-2023-045", AssetStatus.AVAILABLE, date(2023, 3, 25), None),
    ("Mechanical Keyboard", "Keyboard", "MK-2023-178", AssetStatus.ASSIGNED, date(2023, 6, 1),
     "user@company.com"),
]

# name, vendor, key, expires, assigned to
SEED_LICENSES = [
    ("Microsoft Office 365", "Microsoft", "XXXXX-XXXXX-XXXXX-XXXXX-XXXXX", date(2024, 12, 31),
     "sarah.johnson@company.com"),
    ("Adobe Creative Suite", "Adobe", "ACS-XXXXX-XXXXX-XXXXX", date(2024, 6, 30), "lisa.thompson@company.com"),
    ("Slack Pro", "Slack", "SLACK-PRO-XXXXX-XXXXX", date(2024, 11, 15), None),
    ("Zoom Pro", "Zoom", "ZOOM-PRO-XXXXX-XXXXX", date(2024, 8, 20), "michael.chen@company.com"),
    ("Visual Studio Professional", "Microsoft", "VS-PRO-XXXXX-XXXXX-XXXXX", date(2024, 10, 10),
     "emma.williams@company.com"),
]


def reset_database(db: Session) -> None:
    # children first, foreign keys are enforced
    for model in (SoftwareLicense, Asset, Ticket, User):
        deleted = db.query(model).delete(synchronize_session=False)
        logger.info("Deleted %d rows from %s", deleted, model.__tablename__)
    db.flush()


def seed_database(db: Session) -> dict[str, int]:
    reset_database(db)

    users = [User(name=name, email=email, role=role) for name, email, role in SEED_USERS]
    db.add_all(users)
    db.flush()
    ids = {user.email: user.id for user in users}

    tickets = [
        Ticket(
            title=item["title"],
            description=item["description"],
            priority=item["priority"],
            category=item["category"],
            status=item["status"],
            user_id=ids[item["user"]],
            assigned_to=ids.get(item.get("assigned_to")),
        )
        for item in SEED_TICKETS
    ]
    assets = [
        Asset(
            name=name,
            type=asset_type,
            serial_number=serial,
            status=status,
            purchase_date=purchased,
            assigned_user_id=ids.get(owner),
        )
        for name, asset_type, serial, status, purchased, owner in SEED_ASSETS
    ]
    licenses = [
        SoftwareLicense(
            name=name,
            vendor=vendor,
            license_key=key,
            expiry_date=expires,
            assigned_user_id=ids.get(owner),
        )
        for name, vendor, key, expires, owner in SEED_LICENSES
    ]
    db.add_all(tickets + assets + licenses)
    db.flush()

    counts = {
        "users": len(users),
        "tickets": len(tickets),
        "assets": len(assets),
        "licenses": len(licenses),
    }
    logger.info("Seeded %s", counts)
    return counts


def seed_minimal_data(db: Session) -> int:
    """Create the demo login users that are missing; returns how many were added."""
    existing = {
        email
        for (email,) in db.query(User.email).filter(User.email.in_(list(DEMO_ACCOUNTS))).all()
    }
    missing = [account for email, account in DEMO_ACCOUNTS.items() if email not in existing]
    db.add_all(User(name=account.name, email=account.email, role=account.role) for account in missing)
    db.flush()
    logger.info("Created %d demo login users", len(missing))
    return len(missing)


COMMANDS = ("seed", "reset", "minimal")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m servicedesk.seed", description="Load demo data.")
    parser.add_argument(
        "command",
        nargs="?",
        default="seed",
        help="seed (full demo data, default), reset (clear all data) or minimal (demo login users only)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command not in COMMANDS:
        parser.print_help(sys.stderr)
        return 1

    setup_logging()
    init_db()
    try:
        with session_scope() as db:
            if args.command == "seed":
                counts = seed_database(db)
                print(
                    f"Created: {counts['users']} users, {counts['tickets']} tickets, "
                    f"{counts['assets']} assets, {counts['licenses']} licenses"
                )
            elif args.command == "reset":
                reset_database(db)
                print("Database reset completed")
            else:
                created = seed_minimal_data(db)
                print("Created basic auth users" if created else "Basic auth users already exist")
    except Exception:
        logger.exception("Seeding failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
