"""Seed the database with demo authors, categories and tags."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from blog_history.database import SessionLocal, engine, Base
import blog_history.models  # noqa: F401

from blog_history.models.user import User
from blog_history.models.blog import Category, Tag


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        users = [
            User(email="author1@example.com", name="작성자 김하늘"),
            User(email="author2@example.com", name="작성자 이바다"),
        ]
        db.add_all(users)

        categories = [
            Category(name="개발", slug="dev"),
            Category(name="일상", slug="daily"),
        ]
        db.add_all(categories)

        tags = [
            Tag(name="Python", slug="python"),
            Tag(name="FastAPI", slug="fastapi"),
            Tag(name="SQLAlchemy", slug="sqlalchemy"),
        ]
        db.add_all(tags)
        db.commit()
        print(f"Seeded {len(users)} users, {len(categories)} categories, {len(tags)} tags.")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
