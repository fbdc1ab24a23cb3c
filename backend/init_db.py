"""
Create the tables and seed default data
Run from backend/: python init_db.py
"""
import logging

from salon.seed import seed_defaults

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_defaults()
    print("Database initialized!")
    print("Start the server with: python -m uvicorn salon.main:app --reload")
