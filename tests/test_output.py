import csv
import json
import threading
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from bbref.output import IdGenerator, IdMapper, write_gamelog_csv


class TestIdGenerator(unittest.TestCase):
    def test_sequence_starts_at_one(self):
        ids = IdGenerator()
        self.assertEqual([ids.next_id() for _ in range(3)], [1, 2, 3])

    def test_unique_across_threads(self):
        ids = IdGenerator()
        seen = []
        lock = threading.Lock()

        def worker():
            for _ in range(200):
                i = ids.next_id()
                with lock:
                    seen.append(i)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(sorted(seen), list(range(1, 1601)))


class TestIdMapper(unittest.TestCase):
    def test_set_and_get(self):
        names = IdMapper()
        names.set_name(2, "Trae Young")
        self.assertEqual(names.get(2), "Trae Young")
        self.assertIsNone(names.get(3))
        self.assertEqual(len(names), 1)

    def test_dump_writes_sorted_json_object(self):
        names = IdMapper()
        names.set_name(10, "Luka Dončić")
        names.set_name(2, "Trae Young")
        with TemporaryDirectory() as tmp:
            path = names.dump(Path(tmp) / "nested" / "index.json")
            text = path.read_text(encoding="utf-8")

        data = json.loads(text)
        self.assertEqual(data, {"2": "Trae Young", "10": "Luka Dončić"})
        self.assertEqual(list(data), ["2", "10"])


class TestWriteGamelogCsv(unittest.TestCase):
    def test_stat_line_first_then_rows(self):
        stats = ["date_game", "age", "pts"]
        rows = [
            ["2021-10-21", "23-038", "32"],
            ["2021-10-23", "Inactive", "Inactive", "Inactive"],
        ]
        with TemporaryDirectory() as tmp:
            path = write_gamelog_csv(Path(tmp) / "out" / "1.csv", stats, rows)
            with open(path, newline="", encoding="utf-8") as f:
                lines = list(csv.reader(f))

        self.assertEqual(lines[0], stats)
        self.assertEqual(lines[1:], rows)

    def test_quotes_values_with_commas(self):
        with TemporaryDirectory() as tmp:
            path = write_gamelog_csv(Path(tmp) / "1.csv", ["opp"], [["Atlanta, GA"]])
            raw = path.read_text(encoding="utf-8")
        self.assertIn('"Atlanta, GA"', raw)


if __name__ == "__main__":
    unittest.main()
