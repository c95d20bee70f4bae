import asyncio
import unittest

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from restlist.db.session import get_db
from restlist.main import create_app
from restlist.services.resource import Resource
from tests.base import Author, Post, SqliteDatabase, published_posts


class ListApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.database = SqliteDatabase()
        cls.database.create()
        cls.engine = create_async_engine(cls.database.async_url, poolclass=NullPool)
        cls.SessionLocal = async_sessionmaker(bind=cls.engine, expire_on_commit=False)
        cls.app = create_app(
            [
                (
                    "/authors",
                    Resource.build(
                        Author,
                        search={"param": "q"},
                        sort={"default": "id", "attributes": ["id", "name", "age"]},
                    ),
                ),
                (
                    "/posts",
                    Resource.build(
                        Post,
                        include=["author"],
                        association_options={"remove_foreign_keys": True},
                        scopes={"published": published_posts},
                        sort={"default": "id"},
                    ),
                ),
                ("/everything", Resource.build(Author, pagination=False)),
            ]
        )

    @classmethod
    def tearDownClass(cls):
        asyncio.run(cls.engine.dispose())
        cls.database.drop()

    def setUp(self):
        async def override_get_db():
            async with self.SessionLocal() as db:
                yield db

        self.app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(self.app)

    def tearDown(self):
        self.client.close()
        self.app.dependency_overrides.clear()

    def test_lists_rows_with_content_range(self):
        response = self.client.get("/authors")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([row["id"] for row in response.json()], [1, 2, 3, 4])
        self.assertEqual(response.headers.get("content-range"), "items 0-3/4")
        self.assertEqual(response.json()[0]["joined_at"], "2020-01-01T00:00:00")

    def test_search_sort_and_paging(self):
        response = self.client.get("/authors", params={"q": "er", "sort": "-name", "count": "2", "page": "1"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual([row["name"] for row in response.json()], ["Ada", "1984"])
        self.assertEqual(response.headers.get("content-range"), "items 2-3/4")

    def test_attribute_filter(self):
        response = self.client.get("/authors", params={"age": "54"})
        self.assertEqual([row["name"] for row in response.json()], ["Linus"])
        self.assertEqual(response.headers.get("content-range"), "items 0-0/1")

    def test_disallowed_sort_returns_400(self):
        response = self.client.get("/authors", params={"sort": "age,bio"})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["detail"]["errors"], ["bio"])
        self.assertEqual(body["detail"]["message"], "Sorting not allowed on given attributes")

    def test_unknown_scope_returns_400(self):
        response = self.client.get("/posts", params={"scope": "archived"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"]["errors"], ["archived"])

    def test_included_association_without_foreign_key(self):
        response = self.client.get("/posts", params={"scope": "published"})
        self.assertEqual(response.status_code, 200)
        rows = response.json()
        self.assertEqual([row["title"] for row in rows], ["Notes", "COBOL"])
        self.assertTrue(all("author_id" not in row for row in rows))
        self.assertEqual(rows[1]["author"]["name"], "Grace")
        self.assertEqual(response.headers.get("content-range"), "items 0-1/2")

    def test_unpaginated_resource_has_no_content_range(self):
        response = self.client.get("/everything", params={"count": "1"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 4)
        self.assertIsNone(response.headers.get("content-range"))

    def test_request_id_is_echoed(self):
        response = self.client.get("/authors", headers={"X-Request-ID": "list-check-1"})
        self.assertEqual(response.headers.get("x-request-id"), "list-check-1")
        generated = self.client.get("/authors", headers={"X-Request-ID": "bad id"}).headers.get("x-request-id")
        self.assertRegex(str(generated), r"^[0-9a-f]{32}$")


if __name__ == "__main__":
    unittest.main()
