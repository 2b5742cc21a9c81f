from self_olympics.core.config import settings
from self_olympics.database.database import Database


def create_all_tables():
    print("🛠️ Creating tables in the database...")
    database = Database(settings.DATABASE_URL)
    try:
        database.create_all()
    finally:
        database.dispose()

    print("✅ SUCCESS: All tables created!")


if __name__ == "__main__":
    create_all_tables()
