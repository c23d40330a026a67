import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path
from unittest.mock import MagicMock, patch

from main import main


WORDS = ["HOUSE", "SEA", "EAR", "HUT"]


class MainCliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_build_writes_request_and_report(self) -> None:
        output = self.tmp / "tower.json"
        code = main(["--words", "HOUSE", "SEA", "EAR", "HUT", "--output", str(output)])
        self.assertEqual(code, 0)
        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertTrue(payload["request"]["done"])
        self.assertEqual(
            payload["request"]["words"][0], {"id": 0, "dir": 2, "pos": [5, 5, 0]}
        )
        self.assertEqual(len(payload["request"]["words"]), 4)
        self.assertFalse(payload["report"]["is_valid"])

    def test_failed_build_exits_non_zero(self) -> None:
        output = self.tmp / "tower.json"
        code = main(["--words", "CAT", "DOG", "--output", str(output)])
        self.assertEqual(code, 1)
        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(payload["request"]["words"], [])

    def test_evaluate_scores_existing_request(self) -> None:
        request = {
            "done": True,
            "words": [
                {"id": 0, "dir": 2, "pos": [0, 0, 0]},
                {"id": 1, "dir": 2, "pos": [0, 0, -1]},
                {"id": 2, "dir": 1, "pos": [0, 0, 0]},
            ],
        }
        source = self.tmp / "request.json"
        source.write_text(json.dumps(request), encoding="utf-8")
        output = self.tmp / "report.json"
        code = main(
            ["--words", "BASE", "LEG", "BL", "--evaluate", str(source), "--output", str(output)]
        )
        self.assertEqual(code, 1)
        report = json.loads(output.read_text(encoding="utf-8"))["report"]
        self.assertIn('Vertical word "BL"', report["invalid_reason"])

    def test_evaluate_with_unknown_word_id_exits_non_zero(self) -> None:
        source = self.tmp / "request.json"
        source.write_text(
            json.dumps({"done": True, "words": [{"id": 5, "dir": 2, "pos": [0, 0, 0]}]}),
            encoding="utf-8",
        )
        output = self.tmp / "report.json"
        code = main(["--words", "BASE", "--evaluate", str(source), "--output", str(output)])
        self.assertEqual(code, 1)
        report = json.loads(output.read_text(encoding="utf-8"))["report"]
        self.assertFalse(report["is_valid"])
        self.assertIn("Unknown word id 5", report["invalid_reason"])

    def test_evaluate_with_malformed_command_exits_non_zero(self) -> None:
        source = self.tmp / "request.json"
        source.write_text(json.dumps({"words": [{"id": 0, "dir": 9}]}), encoding="utf-8")
        output = self.tmp / "report.json"
        code = main(["--words", "BASE", "--evaluate", str(source), "--output", str(output)])
        self.assertEqual(code, 1)
        report = json.loads(output.read_text(encoding="utf-8"))["report"]
        self.assertIn("Malformed placement command", report["invalid_reason"])

    def test_vocabulary_source_is_required(self) -> None:
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main([])

    def test_shuffle_requires_api(self) -> None:
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main(["--words", "HOUSE", "--shuffle"])


@patch("main.GameClient")
class MainGameServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.output = Path(self._tmp.name) / "out.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _client(self, client_cls: MagicMock, used=None) -> MagicMock:
        client = client_cls.return_value
        client.get_words.return_value = {
            "words": WORDS,
            "mapSize": [30, 30, 100],
            "usedIndexes": used or [],
            "turn": 3,
        }
        return client

    def _payload(self):
        return json.loads(self.output.read_text(encoding="utf-8"))

    def test_used_words_from_service_are_skipped(self, client_cls: MagicMock) -> None:
        self._client(client_cls, used=[1])
        code = main(["--from-api", "--output", str(self.output)])
        self.assertEqual(code, 0)
        ids = [item["id"] for item in self._payload()["request"]["words"]]
        self.assertEqual(ids, [0, 2, 3])

    def test_shuffle_runs_before_fetching_words(self, client_cls: MagicMock) -> None:
        client = self._client(client_cls)
        calls = []
        client.shuffle.side_effect = lambda: calls.append("shuffle") or {}
        words_payload = client.get_words.return_value
        client.get_words.side_effect = lambda: calls.append("words") or words_payload
        main(["--from-api", "--shuffle", "--output", str(self.output)])
        self.assertEqual(calls, ["shuffle", "words"])

    def test_invalid_tower_is_not_submitted(self, client_cls: MagicMock) -> None:
        client = self._client(client_cls)
        code = main(["--from-api", "--submit", "--output", str(self.output)])
        self.assertEqual(code, 1)
        client.build.assert_not_called()
        self.assertNotIn("response", self._payload())

    def test_list_towers(self, client_cls: MagicMock) -> None:
        client = client_cls.return_value
        client.towers.return_value = {"towers": [{"score": 12.5}]}
        code = main(["--list-towers", "--output", str(self.output)])
        self.assertEqual(code, 0)
        self.assertEqual(self._payload(), {"towers": {"towers": [{"score": 12.5}]}})
        client.get_words.assert_not_called()


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
