import json

import cv2
import numpy as np
from typer.testing import CliRunner

from string_art.cli import app

runner = CliRunner()


class TestFrameCommand:
    def test_default_frame(self, tmp_path):
        result = runner.invoke(app, ["frame", "--settings", str(tmp_path / "none.json")])
        assert result.exit_code == 0, result.output
        assert "40cm x 40cm" in result.output
        assert "160" in result.output
        assert "Optimal" in result.output

    def test_options_override(self, tmp_path):
        result = runner.invoke(
            app,
            ["frame", "--width", "10", "--height", "10", "--unit", "in",
             "--settings", str(tmp_path / "none.json")],
        )
        assert result.exit_code == 0, result.output
        assert "101" in result.output

    def test_settings_file(self, tmp_path):
        p = tmp_path / "s.json"
        p.write_text(json.dumps({"width": 20, "height": 20}))
        result = runner.invoke(app, ["frame", "--settings", str(p)])
        assert result.exit_code == 0, result.output
        assert "20cm x 20cm" in result.output

    def test_malformed_settings_file(self, tmp_path):
        p = tmp_path / "s.json"
        p.write_text("{not json")
        result = runner.invoke(app, ["frame", "--settings", str(p)])
        assert result.exit_code == 2
        assert not isinstance(result.exception, json.JSONDecodeError)

    def test_invalid_spacing(self, tmp_path):
        result = runner.invoke(
            app, ["frame", "--pin-spacing", "2", "--settings", str(tmp_path / "none.json")]
        )
        assert result.exit_code != 0


class TestPinsCommand:
    def test_lists_every_pin(self, tmp_path):
        result = runner.invoke(
            app,
            ["pins", "--width", "10", "--height", "10", "--pin-spacing", "20",
             "--settings", str(tmp_path / "none.json")],
        )
        assert result.exit_code == 0, result.output
        assert "20 pins on a 400x400 canvas" in result.output


class TestGenerateCommand:
    def test_writes_outputs(self, tmp_path):
        image = tmp_path / "in.png"
        cv2.imwrite(str(image), np.zeros((60, 60, 3), dtype=np.uint8))
        out = tmp_path / "out"
        result = runner.invoke(
            app,
            ["generate", str(image), "--width", "10", "--height", "10",
             "--pin-spacing", "10", "--strings", "15", "--output", str(out),
             "--settings", str(tmp_path / "none.json")],
        )
        assert result.exit_code == 0, result.output
        assert "Built 15/15 connections (completed)" in result.output
        text = (out / "string-art-instructions.txt").read_text(encoding="utf-8")
        assert "String Connections: 15" in text
        assert cv2.imread(str(out / "nail-overlay.png")) is not None
        assert cv2.imread(str(out / "preview.png")).shape == (400, 400, 3)

    def test_skip_overlay_and_preview(self, tmp_path):
        image = tmp_path / "in.png"
        cv2.imwrite(str(image), np.zeros((60, 60, 3), dtype=np.uint8))
        out = tmp_path / "out"
        result = runner.invoke(
            app,
            ["generate", str(image), "--width", "10", "--height", "10",
             "--strings", "3", "--no-overlay", "--no-preview", "--output", str(out),
             "--settings", str(tmp_path / "none.json")],
        )
        assert result.exit_code == 0, result.output
        assert not (out / "nail-overlay.png").exists()
        assert not (out / "preview.png").exists()

    def test_missing_image(self, tmp_path):
        result = runner.invoke(
            app, ["generate", str(tmp_path / "nope.png"), "--settings", str(tmp_path / "none.json")]
        )
        assert result.exit_code != 0

    def test_invalid_string_count(self, tmp_path):
        image = tmp_path / "in.png"
        cv2.imwrite(str(image), np.zeros((20, 20, 3), dtype=np.uint8))
        result = runner.invoke(
            app,
            ["generate", str(image), "--strings", "0", "--output", str(tmp_path / "o"),
             "--settings", str(tmp_path / "none.json")],
        )
        assert result.exit_code != 0

    def test_no_candidate_still_writes_instructions(self, tmp_path):
        image = tmp_path / "in.png"
        cv2.imwrite(str(image), np.zeros((60, 60, 3), dtype=np.uint8))
        out = tmp_path / "out"
        result = runner.invoke(
            app,
            ["generate", str(image), "--width", "10", "--height", "10",
             "--strings", "5", "--min-gap-fraction", "1.5", "--no-overlay", "--no-preview",
             "--output", str(out), "--settings", str(tmp_path / "none.json")],
        )
        assert result.exit_code == 0, result.output
        assert "Built 0/5 connections (no_candidate)" in result.output
        text = (out / "string-art-instructions.txt").read_text(encoding="utf-8")
        assert "String Connections: 0" in text
