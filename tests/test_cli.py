import json

import pytest

from ansify import cli


def test_text_output_to_file(png_path, tmp_path):
    out = tmp_path / "out.txt"
    rc = cli.main([str(png_path()), "--format", "text", "--shading", "-o", str(out)])
    assert rc == 0
    assert out.read_text(encoding="utf-8") == "▓▓\n▓▓\n"


def test_html_output(png_path, tmp_path):
    out = tmp_path / "out.html"
    rc = cli.main([str(png_path()), "--format", "html", "-o", str(out)])
    assert rc == 0
    text = out.read_text(encoding="utf-8")
    assert text.count("<span style='color: #ff0000'>█</span>") == 4


def test_ignore_whitespaces_flag(png_path, tmp_path):
    out = tmp_path / "out.txt"
    src = png_path(color=(255, 255, 255))
    assert cli.main([str(src), "--format", "text", "--ignore-whitespaces", "--legacy-style", "-o", str(out)]) == 0
    assert out.read_text(encoding="utf-8") == "  \n  \n"


def test_cell_size_and_config_file(png_path, tmp_path):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"art": {"legacy_style": True}, "render": {"format": "text"}}))
    out = tmp_path / "out.txt"
    rc = cli.main([str(png_path()), "--config", str(cfg), "--cell-size", "14x52", "-o", str(out)])
    assert rc == 0
    assert out.read_text(encoding="utf-8") == "▓▓\n"


def test_terminal_output(png_path, monkeypatch):
    captured = []
    monkeypatch.setattr(cli, "print_formatted_text", lambda text, **kw: captured.append(list(text)))
    assert cli.main([str(png_path())]) == 0
    assert captured == [[("fg:#ff0000", "██"), ("", "\n"), ("fg:#ff0000", "██"), ("", "\n")]]


def test_missing_image_exit_code(tmp_path, capsys):
    rc = cli.main([str(tmp_path / "absent.png"), "--format", "text"])
    assert rc == 1
    assert "Error loading image" in capsys.readouterr().err


def test_bad_cell_size_is_usage_error(png_path, capsys):
    with pytest.raises(SystemExit) as ei:
        cli.main([str(png_path()), "--cell-size", "abc"])
    assert ei.value.code == 2


def test_oversized_image_exit_code(png_path, monkeypatch, capsys):
    from PIL import Image

    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    assert cli.main([str(png_path()), "--format", "text"]) == 1
    assert "Error loading image" in capsys.readouterr().err


def test_unwritable_output_exit_code(png_path, tmp_path, capsys):
    rc = cli.main([str(png_path()), "--format", "text", "-o", str(tmp_path / "nodir" / "o.txt")])
    assert rc == 1
    assert "Cannot write" in capsys.readouterr().err
