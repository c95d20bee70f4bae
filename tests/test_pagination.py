import unittest

from restlist.services.pagination import DEFAULT_COUNT, PageWindow, content_range, resolve_window


class ResolveWindowTests(unittest.TestCase):
    def test_defaults(self):
        self.assertEqual(resolve_window({}), PageWindow(offset=0, count=DEFAULT_COUNT, limit=DEFAULT_COUNT))

    def test_offset_and_page_are_additive(self):
        window = resolve_window({}, offset=5, page=2, count=10)
        self.assertEqual(window.offset, 25)
        self.assertEqual(window.limit, 10)

    def test_query_string_values(self):
        window = resolve_window({"offset": "5", "page": "2", "count": "10"})
        self.assertEqual((window.offset, window.limit), (25, 10))

    def test_overrides_win_over_query(self):
        window = resolve_window({"count": "10", "offset": "3"}, count=20, offset=4)
        self.assertEqual((window.offset, window.count), (4, 20))

    def test_non_positive_or_invalid_count_resets_to_default(self):
        for raw in ("0", "-3", "abc", ""):
            self.assertEqual(resolve_window({"count": raw}).count, DEFAULT_COUNT, raw)
        self.assertEqual(resolve_window({}, count=-1).count, DEFAULT_COUNT)

    def test_page_uses_resolved_count(self):
        self.assertEqual(resolve_window({"page": "3"}).offset, 3 * DEFAULT_COUNT)
        self.assertEqual(resolve_window({"page": "1", "count": "2"}).offset, 2)

    def test_without_pagination_there_is_no_limit(self):
        for query in ({}, {"count": "5"}, {"offset": "2", "page": "4"}):
            window = resolve_window(query, paginate=False)
            self.assertIsNone(window.limit)


class ContentRangeTests(unittest.TestCase):
    def test_range_is_inclusive(self):
        self.assertEqual(content_range(0, 3, 10), "items 0-2/10")
        self.assertEqual(content_range(20, 5, 25), "items 20-24/25")

    def test_empty_page_reports_zero_end(self):
        self.assertEqual(content_range(7, 0, 0), "items 7-0/0")
        self.assertEqual(content_range(0, 0, 0), "items 0-0/0")


if __name__ == "__main__":
    unittest.main()
