import json
import tempfile
import unittest
from pathlib import Path

from typer.testing import CliRunner

from stranded.cli import app
from stranded.game.loader import default_world_path


WIN_ROUTE = [
    "north", "take Engine Part", "east", "take Control Chip", "west",
    "south", "east", "take Fuel Cell", "west",
]


class CliTests(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.audit_path = Path(self.tmp.name) / "audit.jsonl"
        self.config = Path(self.tmp.name) / "stranded.yaml"
        self.config.write_text(
            f"audit:\n  enabled: true\n  path: {self.audit_path.name}\ndisplay:\n  show_timer: true\n",
            encoding="utf-8",
        )

    def test_run_to_victory(self):
        result = self.runner.invoke(app, ["run", *WIN_ROUTE, "--config", str(self.config)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("YOU WIN", result.output)
        self.assertIn("Time:", result.output)

        events = [json.loads(line) for line in self.audit_path.read_text(encoding="utf-8").splitlines()]
        self.assertEqual(len([e for e in events if e["event"] == "command"]), len(WIN_ROUTE))
        self.assertEqual(events[-1]["event"], "game_over")
        self.assertEqual(events[-1]["status"], "won")

    def test_run_to_loss_exits_nonzero(self):
        result = self.runner.invoke(app, ["run", "east", "north", "west", "--config", str(self.config)])
        self.assertEqual(result.exit_code, 5, result.output)
        self.assertIn("GAME OVER", result.output)
        self.assertIn("The game is over", result.output)

    def test_invalid_direction_is_reported(self):
        result = self.runner.invoke(app, ["run", "south", "--config", str(self.config)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("You can't go that way!", result.output)

    def test_play_reads_commands_until_quit(self):
        result = self.runner.invoke(
            app, ["play", "--config", str(self.config)], input="north\ninventory\nquit\n"
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Crash Site", result.output)
        self.assertIn("You have nothing.", result.output)

    def test_map(self):
        result = self.runner.invoke(app, ["map", "--config", str(self.config)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Laboratory", result.output)
        self.assertIn("Required parts", result.output)

    def test_validate_flags_one_way_exits(self):
        data = json.loads(default_world_path().read_text(encoding="utf-8"))
        data["rooms"][2]["exits"] = {}
        path = Path(self.tmp.name) / "one_way.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        result = self.runner.invoke(app, ["validate", str(path)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("one-way exit: Forest --east--> Cave", result.output)

    def test_validate_rejects_bad_world(self):
        data = json.loads(default_world_path().read_text(encoding="utf-8"))
        data["win_room"] = "Moon"
        path = Path(self.tmp.name) / "bad.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        result = self.runner.invoke(app, ["validate", str(path)])
        self.assertEqual(result.exit_code, 2, result.output)
        self.assertIn("Invalid world", result.output)

    def test_validate_rejects_malformed_rooms(self):
        data = json.loads(default_world_path().read_text(encoding="utf-8"))
        data["rooms"] = ["Crash Site"]
        path = Path(self.tmp.name) / "malformed.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        result = self.runner.invoke(app, ["validate", str(path)])
        self.assertEqual(result.exit_code, 2, result.output)
        self.assertIn("Invalid world", result.output)

    def test_missing_config(self):
        result = self.runner.invoke(app, ["run", "look", "--config", str(Path(self.tmp.name) / "nope.yaml")])
        self.assertEqual(result.exit_code, 1)


if __name__ == "__main__":
    unittest.main()
