import json

import pyperclip
import pytest
from helpers import make_page_boxes

from fontprint.cli import load_boxes_file, main
from fontprint.exceptions import FontPrintError


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.ini"


@pytest.fixture
def boxes_file(tmp_path):
    path = tmp_path / "page.json"
    records = [
        {"x0": b.x0, "y0": b.y0, "x1": b.x1, "y1": b.y1, "text": b.text}
        for b in make_page_boxes()
    ]
    path.write_text(json.dumps({"boxes": records, "surface": {"width": 200, "height": 300}}))
    return path


def test_load_boxes_file_surface_override(boxes_file):
    boxes, surface = load_boxes_file(boxes_file, 400, None)

    assert len(boxes) == 6
    assert (surface.width, surface.height) == (400, 300)


def test_load_boxes_file_requires_surface(tmp_path):
    path = tmp_path / "bare.json"
    path.write_text("[]")

    with pytest.raises(FontPrintError):
        load_boxes_file(path, None, None)


def test_analyze_save_list_and_compare(tmp_path, config_path, boxes_file, capsys):
    out = tmp_path / "fp.json"
    assert main(["--config", str(config_path), "analyze", "boxes", str(boxes_file), "--save", "-o", str(out)]) == 0

    exported = json.loads(out.read_text())
    assert exported["vector"] == [14.0, 40.0, 20.0, 30.0, 30.0, 176.0]

    assert main(["--config", str(config_path), "corpus", "list"]) == 0
    listing = capsys.readouterr().out
    assert exported["id"] in listing
    assert "font 14.0px / gap 40.0px" in listing

    assert main(["--config", str(config_path), "compare", str(out), str(out)]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["similarity"] == pytest.approx(1.0)
    assert report["fontSizeDelta"] == 0.0


def test_analyze_structured_and_text(tmp_path, config_path, capsys):
    assert main([
        "--config", str(config_path), "analyze", "structured",
        "--top", "1440", "--bottom", "1440", "--left", "1800", "--right", "1800", "--font-size", "21",
    ]) == 0
    structured = json.loads(capsys.readouterr().out)
    assert structured["source"] == "Structured"
    assert structured["vector"] == [10.5, 72.0, 72.0, 90.0, 90.0]

    text_file = tmp_path / "notes.txt"
    text_file.write_text("plain words", encoding="utf-8")
    assert main(["--config", str(config_path), "analyze", "text", str(text_file)]) == 0
    virtual = json.loads(capsys.readouterr().out)
    assert virtual["vector"] == [17.0, 1.6, 72.0]


def test_corpus_match_remove_and_errors(tmp_path, config_path, boxes_file, capsys):
    out = tmp_path / "fp.json"
    main(["--config", str(config_path), "analyze", "boxes", str(boxes_file), "--save"])
    main(["--config", str(config_path), "analyze", "boxes", str(boxes_file), "--save", "-o", str(out)])
    capsys.readouterr()

    assert main(["--config", str(config_path), "corpus", "match", str(out), "--top", "1"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("100.0%")

    assert main(["--config", str(config_path), "corpus", "remove", "0"]) == 0
    assert main(["--config", str(config_path), "corpus", "remove", "5"]) == 1
    assert main(["--config", str(config_path), "corpus", "remove", "-1"]) == 1
    capsys.readouterr()
    assert main(["--config", str(config_path), "corpus", "list"]) == 0
    assert len(capsys.readouterr().out.strip().splitlines()) == 1


def test_copy_to_clipboard(config_path, boxes_file, monkeypatch, capsys):
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)

    assert main(["--config", str(config_path), "analyze", "boxes", str(boxes_file), "--copy"]) == 0
    assert json.loads(copied[0]) == json.loads(capsys.readouterr().out)


def test_copy_failure_is_reported(config_path, boxes_file, monkeypatch):
    def unavailable(text):
        raise pyperclip.PyperclipException("no clipboard")

    monkeypatch.setattr(pyperclip, "copy", unavailable)

    assert main(["--config", str(config_path), "analyze", "boxes", str(boxes_file), "--copy"]) == 1
