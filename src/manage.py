"""AgroStore management CLI.

Creates and drops database schemas for all domains, and bootstraps the
first administrator account.

Usage:
    python src/manage.py setup-db                # Create all tables
    python src/manage.py drop-db                 # Drop all tables
    python src/manage.py create-admin --name "Ops" --email ops@example.com --password secret123
"""

import argparse
import sys

DOMAIN_NAMES = ["identity", "catalogue", "ordering"]


def _domains():
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    return {"identity": identity, "catalogue": catalogue, "ordering": ordering}


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.db import setup_db

    all_domains = _domains()
    targets = {d: all_domains[d] for d in domains} if domains else all_domains

    for name, domain in targets.items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.db import drop_db

    all_domains = _domains()
    targets = {d: all_domains[d] for d in domains} if domains else all_domains

    for name, domain in targets.items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def create_admin(name, email, password):
    """Register an account with the Admin role. Returns the public user id."""
    from identity.auth.passwords import MIN_PASSWORD_LENGTH, hash_password
    from identity.domain import identity
    from identity.user.registration import RegisterUser
    from identity.user.user import User, UserRole

    if len(password) < MIN_PASSWORD_LENGTH:
        raise SystemExit(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    identity.init()
    with identity.domain_context():
        account_id = identity.process(
            RegisterUser(
                name=name,
                email=email,
                password_hash=hash_password(password),
                role=UserRole.ADMIN.value,
            ),
            asynchronous=False,
        )
        user = identity.repository_for(User).get(account_id)

    print(f"Admin {user.email} created ({user.user_id}).")
    return user.user_id


def main(argv=None):
    parser = argparse.ArgumentParser(description="AgroStore management")
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
    admin_parser.add_argument("--name", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "create-admin":
        create_admin(args.name, args.email, args.password)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
