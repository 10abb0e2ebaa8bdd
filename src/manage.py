"""Storefront management CLI.

Creates and drops database schemas for both domains and bootstraps the
first administrator account.

Usage:
    python src/manage.py setup-db               # Create all tables
    python src/manage.py drop-db                # Drop all tables
    python src/manage.py create-admin --email admin@example.com --password ... --first-name Ada
"""

import argparse
import sys

DOMAIN_NAMES = ["commerce", "content"]


def _domains(names=None):
    from commerce.domain import commerce
    from content.domain import content

    all_domains = {"commerce": commerce, "content": content}
    return {name: all_domains[name] for name in (names or DOMAIN_NAMES)}


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.db import setup_db

    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.db import drop_db

    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def create_admin(email, password, first_name, last_name=None):
    """Register an administrator account in the commerce domain."""
    from commerce.account.registration import RegisterUser
    from commerce.domain import commerce
    from shared.auth import Role, hash_password
    from shared.errors import DomainError

    if len(password) < 8:
        print("Password must be at least 8 characters.")
        sys.exit(1)

    commerce.init()
    with commerce.domain_context():
        command = RegisterUser(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            role=Role.ADMIN.value,
        )
        try:
            user_id = commerce.process(command, asynchronous=False)
        except DomainError as exc:
            print(f"Could not create admin: {exc.message}")
            sys.exit(1)

    print(f"Admin {email} created ({user_id}).")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    admin_parser = subparsers.add_parser("create-admin", help="Create an administrator account")
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)
    admin_parser.add_argument("--first-name", required=True)
    admin_parser.add_argument("--last-name")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "create-admin":
        create_admin(args.email, args.password, args.first_name, args.last_name)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
