import json
import logging

import numpy as np
import pytest
from PIL import Image

from alphafix import cli


def _no_prompt(prompt=""):
    raise AssertionError(f"unexpected prompt: {prompt}")


def test_writes_to_directory_without_prompt(tmp_path, sprite_png, monkeypatch):
    monkeypatch.setattr("builtins.input", _no_prompt)
    out_dir = tmp_path / "out"

    code = cli.main([str(sprite_png), "--dir", str(out_dir), "--append", "_fix"])

    assert code == 0
    arr = np.array(Image.open(out_dir / "sprite_fix.png"))
    assert arr[1, 1].tolist() == [255, 0, 0, 0]


def test_opaque_adds_suffix(tmp_path, sprite_png, monkeypatch):
    monkeypatch.setattr("builtins.input", _no_prompt)

    assert cli.main([str(sprite_png), "--opaque"]) == 0

    out = tmp_path / "sprite_opaque.png"
    assert (np.array(Image.open(out))[..., 3] == 255).all()


def test_in_place_with_yes(sprite_png, monkeypatch):
    monkeypatch.setattr("builtins.input", _no_prompt)

    assert cli.main([str(sprite_png), "-y"]) == 0

    assert np.array(Image.open(sprite_png))[0, 2].tolist() == [0, 0, 255, 0]


def test_in_place_declined(sprite_png, sprite_array, monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prompt="": "n")

    assert cli.main([str(sprite_png)]) == 1

    np.testing.assert_array_equal(np.array(Image.open(sprite_png)), sprite_array)


def test_in_place_confirmed(sprite_png, monkeypatch):
    prompts = []

    def answer(prompt=""):
        prompts.append(prompt)
        return "y"

    monkeypatch.setattr("builtins.input", answer)

    assert cli.main([str(sprite_png)]) == 0
    assert len(prompts) == 1
    assert "1 image(s)" in prompts[0]


def test_closed_stdin_declines(sprite_png, monkeypatch):
    def eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", eof)

    assert cli.main([str(sprite_png)]) == 1


def test_failed_file_does_not_stop_batch(tmp_path, sprite_png, caplog):
    caplog.set_level(logging.INFO)
    missing = tmp_path / "missing.png"
    out_dir = tmp_path / "out"

    code = cli.main([str(missing), str(sprite_png), "--dir", str(out_dir)])

    assert code == 1
    assert (out_dir / "sprite.png").exists()
    assert "missing.png" in caplog.text
    assert "Finished." in caplog.text


def test_legacy_seeding_and_log(tmp_path, sprite_png):
    log = tmp_path / "run.jsonl"

    code = cli.main([
        str(sprite_png), "--dir", str(tmp_path / "out"), "--legacy-seeding", "--log", str(log),
    ])

    assert code == 0
    record = json.loads(log.read_text(encoding="utf-8"))
    assert record["ok"] is True
    assert record["seeded"] == 6
    assert record["unreachable"] == 0


def test_requires_paths(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 2
