import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from fundtheworld.core.database import Base, engine, SessionLocal
from fundtheworld.models import chat, organization, reservation, user  # noqa: F401
from fundtheworld.schemas.organization import OrganizationCreate
from fundtheworld.services.organization_service import NicknameTakenError, organization_service

SAMPLE_ORGANIZATIONS = [
    {
        "nickname": "tbhf",
        "title": "The Black History Foundation",
        "mission": "Preserving and teaching Black history through archives, scholarships and community programs.",
        "fullContext": "TBHF digitizes community archives, funds student scholarships and runs free history workshops.",
        "tags": ["Education", "Culture", "History"],
        "email": "contact@tbhf.org",
        "bitcoinAddress": "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa",
        "location": "Atlanta, USA",
    },
    {
        "nickname": "clean-water-now",
        "title": "Clean Water Now",
        "mission": "Building wells and filtration systems for rural communities.",
        "tags": ["Health", "Water", "Environment"],
        "email": "hello@cleanwaternow.org",
        "bitcoinAddress": "bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq",
        "location": "Nairobi, Kenya",
    },
]

def init_database(seed: bool = False):
    try:
        Base.metadata.create_all(bind=engine)
        print("✅ Database initialized successfully!")

        from sqlalchemy import inspect
        inspector = inspect(engine)
        print(f"📋 Tables: {inspector.get_table_names()}")

        if seed:
            db = SessionLocal()
            try:
                for data in SAMPLE_ORGANIZATIONS:
                    try:
                        org = organization_service.create_organization(db, OrganizationCreate(**data))
                        print(f"🌱 Seeded {org.nickname}")
                    except NicknameTakenError:
                        print(f"↪️  {data['nickname']} already present")
            finally:
                db.close()

    except Exception as e:
        print(f"❌ Error initializing database: {e}")

if __name__ == "__main__":
    init_database(seed="--seed" in sys.argv)
