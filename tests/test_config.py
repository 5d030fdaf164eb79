import json

from string_art.config import DEFAULTS, load_defaults, save_defaults


class TestLoadDefaults:
    def test_builtin_when_no_file(self, tmp_path):
        assert load_defaults(tmp_path / "missing.json") == DEFAULTS

    def test_builtin_is_a_copy(self, tmp_path):
        d = load_defaults(tmp_path / "missing.json")
        d["strings"] = 1
        assert DEFAULTS["strings"] != 1

    def test_file_overrides(self, tmp_path):
        p = tmp_path / "settings.json"
        p.write_text(json.dumps({"strings": 500, "stroke_darkness": 40}))
        d = load_defaults(p)
        assert d["strings"] == 500 and d["stroke_darkness"] == 40
        assert d["min_gap_fraction"] == DEFAULTS["min_gap_fraction"]

    def test_unknown_keys_dropped(self, tmp_path):
        p = tmp_path / "settings.json"
        p.write_text(json.dumps({"nails": 12}))
        assert "nails" not in load_defaults(p)

    def test_module_path_used_by_default(self, monkeypatch, tmp_path):
        p = tmp_path / "string_art.json"
        p.write_text(json.dumps({"unit": "in"}))
        monkeypatch.setattr("string_art.config.SETTINGS_PATH", p)
        assert load_defaults()["unit"] == "in"


class TestSaveDefaults:
    def test_round_trip(self, tmp_path):
        p = tmp_path / "nested" / "settings.json"
        save_defaults({**DEFAULTS, "strings": 750}, p)
        assert load_defaults(p)["strings"] == 750
