#!/usr/bin/env python3
"""
Seed the users table with demo leads for the dashboard.

Leads go through the same profile validation as the funnel, but no plan is
generated and nothing is sent.

Usage:
    python scripts/seed_demo_leads.py [--count 12] [--dry-run]
"""

import argparse
import random
import sys

sys.path.insert(0, "src")

from dotenv import load_dotenv

load_dotenv()

from intake.questions import FITNESS_GOALS, FITNESS_LEVELS
from fitlead.db import get_lead_store
from fitlead.errors import FitleadError
from fitlead.models import parse_profile

NAMES = [
    "Aarav", "Priya", "Rohan", "Sneha", "Vikram", "Ananya",
    "Karan", "Meera", "Arjun", "Isha", "Dev", "Nisha",
]
RESTRICTIONS = ["None", "Vegetarian", "Vegan", "Gluten-free", "Lactose intolerant"]
INJURIES = ["None", "None", "None", "Lower back pain", "Knee injury", "Asthma"]


def make_lead(index: int) -> dict:
    """Build one plausible questionnaire payload."""
    rng = random.Random(index)
    return {
        "name": NAMES[index % len(NAMES)],
        "age": rng.randint(18, 55),
        "weight": round(rng.uniform(50, 110), 1),
        "height": rng.randint(150, 195),
        "injuries": rng.choice(INJURIES),
        "fitness_level": rng.choice(FITNESS_LEVELS),
        "fitness_goal": rng.choice(FITNESS_GOALS),
        "workout_days": rng.randint(2, 6),
        "dietary_restrictions": rng.choice(RESTRICTIONS),
        "phone_number": f"+9198{rng.randint(10000000, 99999999)}",
    }


def main():
    parser = argparse.ArgumentParser(description="Seed demo leads")
    parser.add_argument("--count", type=int, default=12, help="Number of leads to create")
    parser.add_argument("--dry-run", action="store_true", help="Print leads without inserting")
    args = parser.parse_args()

    store = None if args.dry_run else get_lead_store()
    created = 0

    for i in range(args.count):
        profile = parse_profile(make_lead(i))
        if store is None:
            print(f"  [DRY RUN] {profile.name} ({profile.fitness_goal}, {profile.phone_number})")
            continue
        try:
            row = store.create_profile(profile.to_record())
        except FitleadError as e:
            print(f"[ERROR] {profile.name}: {e.message}")
            continue
        created += 1
        print(f"  Created {row['id']} - {profile.name}")

    if store is not None:
        print(f"\nSeeded {created}/{args.count} leads")


if __name__ == "__main__":
    main()
