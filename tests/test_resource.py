import unittest

from pydantic import ValidationError

from restlist.schemas.resource import ResourceConfig, SearchConfig
from restlist.services.coercion import AttributeKind
from restlist.services.resource import Resource
from tests.base import Author, Post


class ResourceBuildTests(unittest.TestCase):
    def test_kinds_are_resolved_from_columns(self):
        resource = Resource.build(Author)
        self.assertEqual(
            dict(resource.kinds),
            {
                "id": AttributeKind.INTEGER,
                "name": AttributeKind.TEXT,
                "bio": AttributeKind.TEXT,
                "age": AttributeKind.INTEGER,
                "joined_at": AttributeKind.DATETIME,
            },
        )

    def test_configured_attributes_limit_the_projection(self):
        resource = Resource.build(Author, attributes=["id", "name"])
        self.assertEqual(resource.attributes, ("id", "name"))
        self.assertEqual(resource.declared_attributes, ("id", "name", "bio", "age", "joined_at"))

    def test_single_search_block_is_normalized(self):
        config = ResourceConfig(search=SearchConfig(param="q"))
        self.assertEqual([search.param for search in config.search], ["q"])
        self.assertEqual(ResourceConfig(search=None).search, [])

    def test_foreign_keys_are_derived_for_many_to_one_includes(self):
        posts = Resource.build(Post, include=["author"], association_options={"remove_foreign_keys": True})
        self.assertEqual(posts.include_attributes, ("author_id",))
        authors = Resource.build(Author, include=["posts"], association_options={"remove_foreign_keys": True})
        self.assertEqual(authors.include_attributes, ())

    def test_unknown_names_are_configuration_errors(self):
        with self.assertRaises(ValueError):
            Resource.build(Author, attributes=["nickname"])
        with self.assertRaises(ValueError):
            Resource.build(Author, sort={"attributes": ["height"]})
        with self.assertRaises(ValueError):
            Resource.build(Author, include=["comments"])
        with self.assertRaises(ValidationError):
            Resource.build(Author, search={"operator": "between"})

    def test_config_and_options_are_exclusive(self):
        with self.assertRaises(TypeError):
            Resource.build(Author, ResourceConfig(), pagination=False)


if __name__ == "__main__":
    unittest.main()
