import unittest
from datetime import datetime

from news_fakes import FakeElement, FakeRenderer, LIST_URL, CONTENT_CLASS, ITEM_CLASS, item, list_page

from midnews.ingestion.extractor import (
    ExtractionError,
    extract_candidates,
    load_announcements,
    parse_element,
)


class TestParseElement(unittest.TestCase):
    def test_parses_timestamp_title_and_link(self):
        rec = parse_element(item("01.03.2024 10:00\nTitle A", "https://x/a"))
        self.assertEqual(rec.published_at, datetime(2024, 3, 1, 10, 0))
        self.assertEqual(rec.title, "Title A")
        self.assertEqual(rec.url, "https://x/a")
        self.assertIsNone(rec.content)

    def test_title_is_trimmed_and_keeps_later_lines(self):
        rec = parse_element(item("01.03.2024 10:00 \n  Заявление\nпродолжение  ", "https://x/b"))
        self.assertEqual(rec.title, "Заявление\nпродолжение")

    def test_only_first_sixteen_characters_are_the_timestamp(self):
        rec = parse_element(item("15.12.2023 23:59 Москва\nTitle", "https://x/c"))
        self.assertEqual(rec.published_at, datetime(2023, 12, 15, 23, 59))

    def test_element_without_line_break_is_skipped(self):
        self.assertIsNone(parse_element(item("Все новости", "https://x/all")))

    def test_malformed_timestamp_is_fatal(self):
        with self.assertRaises(ExtractionError):
            parse_element(item("вчера 10:00\nTitle", "https://x/d"))

    def test_missing_link_is_fatal(self):
        with self.assertRaises(ExtractionError):
            parse_element(FakeElement(text="01.03.2024 10:00\nTitle"))

    def test_unpadded_timestamp_is_fatal(self):
        with self.assertRaises(ExtractionError):
            parse_element(item("1.3.2024 10:00\nTitle", "https://x/f"))

    def test_empty_title_is_skipped(self):
        with self.assertLogs("midnews.ingestion.extractor", level="WARNING"):
            self.assertIsNone(parse_element(item("01.03.2024 10:00\n   ", "https://x/e")))


class TestExtractCandidates(unittest.TestCase):
    def test_keeps_page_order_and_skips_non_items(self):
        elements = [
            item("02.03.2024 09:00\nSecond", "https://x/2"),
            item("Архив", "https://x/archive"),
            item("01.03.2024 18:30\nFirst", "https://x/1"),
        ]
        out = extract_candidates(elements)
        self.assertEqual([r.title for r in out], ["Second", "First"])

    def test_item_with_empty_title_does_not_stop_others(self):
        elements = [
            item("02.03.2024 09:00\n  ", "https://x/2"),
            item("01.03.2024 18:30\nFirst", "https://x/1"),
        ]
        self.assertEqual([r.title for r in extract_candidates(elements)], ["First"])

    def test_one_bad_item_aborts_extraction(self):
        elements = [
            item("02.03.2024 09:00\nSecond", "https://x/2"),
            item("02.03.2024\nBroken", "https://x/3"),
        ]
        with self.assertRaises(ExtractionError):
            extract_candidates(elements)


class TestLoadAnnouncements(unittest.TestCase):
    def test_returns_items_of_content_container(self):
        items = [item("01.03.2024 10:00\nA", "https://x/a")]
        renderer = FakeRenderer({LIST_URL: list_page(items)})
        out = load_announcements(renderer, url=LIST_URL, content_class=CONTENT_CLASS, item_class=ITEM_CLASS, timeout=1)
        self.assertEqual(len(out), 1)
        self.assertEqual(renderer.visited, [LIST_URL])

    def test_unloadable_list_page_is_fatal(self):
        renderer = FakeRenderer({})
        with self.assertRaises(ExtractionError):
            load_announcements(renderer, url=LIST_URL, content_class=CONTENT_CLASS, item_class=ITEM_CLASS, timeout=1)


if __name__ == "__main__":
    unittest.main()
