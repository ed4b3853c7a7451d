import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app


@pytest.fixture
def client(tmp_path):
    # Each test gets its own database file
    db_file = tmp_path / "library_test.db"
    app = create_app(Settings(database_url=f"sqlite+aiosqlite:///{db_file}"))
    with TestClient(app) as test_client:
        yield test_client


def _created_id(response) -> int:
    assert response.status_code == 303, response.text
    return int(response.headers["location"].rstrip("/").rsplit("/", 1)[1])


class Seeder:
    """Creates catalog records through the create forms."""

    def __init__(self, client):
        self.client = client

    def author(self, first_name="Patrick", family_name="Rothfuss", **extra):
        data = {"first_name": first_name, "family_name": family_name, **extra}
        return _created_id(self.client.post("/catalog/author/create", data=data, follow_redirects=False))

    def genre(self, name):
        return _created_id(self.client.post("/catalog/genre/create", data={"name": name}, follow_redirects=False))

    def book(self, title, author, genres=(), summary="A summary", isbn="9780756404741"):
        data = {"title": title, "author": str(author), "summary": summary, "isbn": isbn}
        if genres:
            data["genre"] = [str(g) for g in genres]
        return _created_id(self.client.post("/catalog/book/create", data=data, follow_redirects=False))

    def instance(self, book, imprint="Gollancz, 2011.", status="Maintenance", due_back=""):
        data = {"book": str(book), "imprint": imprint, "status": status, "due_back": due_back}
        return _created_id(self.client.post("/catalog/bookinstance/create", data=data, follow_redirects=False))


@pytest.fixture
def seed(client):
    return Seeder(client)
