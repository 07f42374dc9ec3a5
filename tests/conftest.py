import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from blog_history.database import Base, enable_sqlite_foreign_keys, get_db
from blog_history.main import app
from blog_history.models.user import User
from blog_history.models.blog import Blog, Category, Tag

TEST_DB_URL = "sqlite:///./test_blog_history.db"

engine = enable_sqlite_foreign_keys(create_engine(TEST_DB_URL, connect_args={"check_same_thread": False}))
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "author": User(email="author@example.com", name="Author"),
        "other": User(email="other@example.com", name="Other"),
        "inactive": User(email="inactive@example.com", name="Inactive", is_active=False),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_tags(db):
    tags = [
        Tag(name="Tag 1", slug="tag-1"),
        Tag(name="Tag 2", slug="tag-2"),
        Tag(name="Tag 3", slug="tag-3"),
    ]
    for t in tags:
        db.add(t)
    db.commit()
    for t in tags:
        db.refresh(t)
    return tags


@pytest.fixture
def seed_category(db):
    category = Category(name="개발", slug="dev")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def blog(db, seed_users):
    """버전 없이 게시글만 직접 저장한다. 캡처는 각 테스트에서 호출한다."""
    row = Blog(
        author_id=seed_users["author"].user_id,
        title="Initial",
        slug="initial",
        content="Initial content",
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def get_token(client, email: str) -> str:
    resp = client.post("/api/auth/login", json={"email": email})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, email: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, email)}"}
