#!/usr/bin/env python
"""Script to create database tables and seed the default domains."""

import sys
from pathlib import Path

# Add project root and backend app to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "apps" / "backend"))

from dotenv import load_dotenv

load_dotenv()

from sqlalchemy import select, text

from app.db.base import Base
from app.db.session import sync_engine, sync_session_factory

# Import ALL models so their tables are registered with Base.metadata
from app.models import (  # noqa: F401
    Domain,
    DomainMembership,
    DomainTask,
    User,
)

VISITOR_ROLE = {
    "id": "visitor",
    "name": "Visitor",
    "description": "Browse the domain and follow its activity",
    "monthlyFee": 10,
    "benefits": ["30-day access", "Identity verification"],
}

DEFAULT_DOMAINS = [
    {
        "domain_id": "maven-hub",
        "slug": "maven-hub",
        "name": "Maven Hub",
        "tagline": "Invest in ventures alongside other Mavens",
        "description": "A community of investors funding and guiding early stage ventures.",
        "icon": "💎",
        "color": "purple",
        "region": "Global",
        "available_roles": [
            VISITOR_ROLE,
            {
                "id": "maven",
                "name": "Maven",
                "description": "Investor member with voting rights",
                "monthlyFee": 1000,
                "benefits": ["Deal flow access", "Voting rights"],
            },
        ],
    },
    {
        "domain_id": "wealth-on-wheels",
        "slug": "wealth-on-wheels",
        "name": "Wealth on Wheels",
        "tagline": "Turning taxi routes into wealth",
        "description": "Taxi owners and associations pooling resources and running shared services.",
        "icon": "🚕",
        "color": "yellow",
        "region": "South Africa",
        "available_roles": [
            VISITOR_ROLE,
            {
                "id": "taxi_owner",
                "name": "Taxi Owner",
                "description": "Registered owner of one or more taxis",
                "monthlyFee": 50,
                "benefits": ["Fleet services", "Group purchasing"],
            },
            {
                "id": "taxi_association",
                "name": "Taxi Association",
                "description": "Association represented by its leaders",
                "monthlyFee": 500,
                "benefits": ["Member management", "Route coordination"],
            },
        ],
    },
    {
        "domain_id": "bemnet",
        "slug": "bemnet",
        "name": "Bemnet",
        "tagline": "Micro lending for local businesses",
        "description": "Micro lenders and borrowers meeting under shared compliance rules.",
        "icon": "🏦",
        "color": "green",
        "region": "Ethiopia",
        "available_roles": [
            VISITOR_ROLE,
            {
                "id": "micro_lender",
                "name": "Micro Lender",
                "description": "Registered lender offering small loans",
                "monthlyFee": 100,
                "benefits": ["Borrower pipeline", "Compliance checks"],
            },
        ],
    },
    {
        "domain_id": "pacci",
        "slug": "pacci",
        "name": "PACCI",
        "tagline": "Pan African Chamber of Commerce and Industry",
        "description": "Chamber members trading and partnering across the continent.",
        "icon": "🌍",
        "color": "blue",
        "region": "Africa",
        "available_roles": [
            VISITOR_ROLE,
            {
                "id": "chamber_member",
                "name": "Chamber Member",
                "description": "Business registered with the chamber",
                "monthlyFee": 250,
                "benefits": ["Trade network", "Member directory"],
            },
        ],
    },
]


def seed_domains() -> int:
    """Insert the default domains that do not exist yet."""
    created = 0
    with sync_session_factory() as session:
        existing = set(session.scalars(select(Domain.domain_id)))
        for values in DEFAULT_DOMAINS:
            if values["domain_id"] in existing:
                continue
            session.add(Domain(**values))
            created += 1
        session.commit()
    return created


def create_tables(drop_existing: bool = False, seed: bool = True):
    """Create all database tables."""
    if drop_existing:
        print("Dropping existing tables...")
        Base.metadata.drop_all(sync_engine)
        print("✓ Existing tables dropped")

    Base.metadata.create_all(sync_engine)
    print("✓ All tables created successfully")

    if seed:
        created = seed_domains()
        print(f"✓ {created} default domains created")

    # Print created tables
    with sync_engine.connect() as conn:
        result = conn.execute(
            text(
                "SELECT tablename FROM pg_tables "
                "WHERE schemaname = 'public' ORDER BY tablename"
            )
        )
        tables = [row[0] for row in result]
        print(f"\nTables in database: {', '.join(tables)}")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Create NetBuild database tables")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop existing tables before creating",
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Skip inserting the default domains",
    )
    args = parser.parse_args()

    create_tables(drop_existing=args.drop, seed=not args.no_seed)
