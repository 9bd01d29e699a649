"""
Database initialization script.
"""
from budgetwise.core.config import get_settings
from budgetwise.db.session import create_db_engine, init_db

if __name__ == "__main__":
    print("Initializing database...")
    engine = create_db_engine(get_settings())
    init_db(engine)
    engine.dispose()
    print("Database initialized successfully!")
