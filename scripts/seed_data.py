"""Seed the configured DATABASE_URL with the sample catalog.

python scripts/seed_data.py
"""
from moviebook.database.seed import main


if __name__ == "__main__":
    main()
