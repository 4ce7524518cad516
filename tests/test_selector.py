from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from shroom_schema_check.selector import item_pattern, select_files


def _touch(root: Path, rel: str, content: str = "{}") -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class TestItemPattern(unittest.TestCase):
    def test_matches_numeric_item_dump(self) -> None:
        pattern = item_pattern("Pet")
        self.assertIsNotNone(pattern.fullmatch("items/Pet/5000000.img/img.json"))

    def test_rejects_near_misses(self) -> None:
        pattern = item_pattern("Pet")
        for rel in [
            "items/Pet/abc.img/img.json",
            "items/Pet/1ximg/img.json",
            "items/Pet/1.img/img.jsonx",
            "items/Pet/1.img/other.json",
            "items/Dog/1.img/img.json",
            "out2/items/Pet/1.img/img.json",
            "items/Pet/.img/img.json",
        ]:
            with self.subTest(rel=rel):
                self.assertIsNone(pattern.fullmatch(rel))

    def test_rejects_category_with_separator(self) -> None:
        with self.assertRaises(ValueError):
            item_pattern("Pet/../Dog")

    def test_rejects_category_with_regex_characters(self) -> None:
        with self.assertRaises(ValueError):
            item_pattern("P.t")


class TestSelectFiles(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_selects_only_matching_category(self) -> None:
        _touch(self.root, "items/Pet/1.img/img.json")
        _touch(self.root, "items/Pet/2.img/img.json")
        _touch(self.root, "items/Dog/1.img/img.json")

        self.assertEqual(
            select_files(self.root, "Pet"),
            ["items/Pet/1.img/img.json", "items/Pet/2.img/img.json"],
        )

    def test_excludes_every_non_matching_file(self) -> None:
        matching = [
            "items/Pet/5000000.img/img.json",
            "items/Pet/5000001.img/img.json",
            "items/Pet/5000002.img/img.json",
        ]
        non_matching = [
            "items/Pet/5000003.img/canvas.json",
            "items/Pet/name.img/img.json",
            "items/Pet/5000004.img/nested/img.json",
            "items/Pet/img.json",
            "items/Pets/1.img/img.json",
            "items/Cash/1.img/img.json",
            "other/Pet/1.img/img.json",
        ]
        for rel in matching + non_matching:
            _touch(self.root, rel)

        self.assertEqual(select_files(self.root, "Pet"), matching)

    def test_skips_directories_named_like_files(self) -> None:
        (self.root / "items" / "Pet" / "1.img" / "img.json").mkdir(parents=True)
        self.assertEqual(select_files(self.root, "Pet"), [])

    def test_missing_root_selects_nothing(self) -> None:
        self.assertEqual(select_files(self.root / "absent", "Pet"), [])

    def test_empty_tree_selects_nothing(self) -> None:
        self.assertEqual(select_files(self.root, "Pet"), [])

    def test_order_is_sorted(self) -> None:
        for rel in ["items/Pet/3.img/img.json", "items/Pet/1.img/img.json", "items/Pet/2.img/img.json"]:
            _touch(self.root, rel)
        selected = select_files(self.root, "Pet")
        self.assertEqual(selected, sorted(selected))


if __name__ == "__main__":
    unittest.main()
