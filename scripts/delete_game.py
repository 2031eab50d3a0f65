#!/usr/bin/env python3
"""
Delete a saved game (index entry and state) by slug, or list saved games with no argument.
Usage: python scripts/delete_game.py [<slug>]
From repo root with PYTHONPATH=. or after pip install -e .
"""
import sys
import os

# Allow running from repo root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from blokcity.api.database import SessionLocal, init_db
from blokcity.api.storage import delete_game, get_game_summary, list_game_summaries


def main() -> None:
    init_db()
    db = SessionLocal()
    try:
        if len(sys.argv) < 2:
            games = list_game_summaries(db)
            if not games:
                print("No saved games.")
            for game in games:
                print(f"{game['slug']}\t{game['game_name']}")
            return
        slug = sys.argv[1].strip()
        if not slug:
            print("Error: provide a slug.", file=sys.stderr)
            sys.exit(1)
        summary = get_game_summary(db, slug)
        if summary is None:
            print(f"No game found with slug: {slug!r}")
            return
        delete_game(db, slug)
        print(f"Deleted game {summary['game_name']!r} ({slug}).")
    finally:
        db.close()


if __name__ == "__main__":
    main()
