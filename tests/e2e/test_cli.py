"""End-to-end tests for the ascii-sketch command line."""

from __future__ import annotations

from click.testing import CliRunner

from ascii_sketch.__main__ import main

BOX = "┌──┐\n│  │\n└──┘\n"


def run(args: list[str], input: bytes | str = b""):
    return CliRunner().invoke(main, args, input=input)


class TestDrawing:
    def test_box_from_stdin(self):
        result = run(["-b", "0,0,3,2"])
        assert result.exit_code == 0
        assert result.output == BOX

    def test_ascii_box(self):
        result = run(["--ascii", "--box", "0,0,3,2"])
        assert result.output == "+--+\n|  |\n+--+\n"

    def test_straight_line(self):
        result = run(["-m", "straight", "-l", "0,0,4,0"])
        assert result.exit_code == 0
        assert result.output == "+---+\n"

    def test_ascii_straight_line(self):
        result = run(["-a", "-m", "straight", "-l", "0,0,4,0"])
        assert result.output == "+---+\n"

    def test_arrow(self):
        result = run(["-m", "routed", "-A", "0,0,4,0"])
        assert result.output == "+---▶\n"

    def test_text(self):
        result = run(["-t", "1,0,hi\\nyo"])
        assert result.output == " hi\n yo\n"

    def test_erase_input_file(self, tmp_path):
        path = tmp_path / "d.txt"
        path.write_text("abc\n", encoding="utf-8")
        result = run(["-e", "0,0,1,0", str(path)])
        assert result.exit_code == 0
        assert result.output == "  c\n"
        assert path.read_text(encoding="utf-8") == "abc\n"

    def test_stdin_diagram(self):
        result = run(["-s"], input="\n   x  \n\n")
        assert result.output == "x\n"


class TestOutput:
    def test_writes_output_file(self, tmp_path):
        out = tmp_path / "out" / "d.txt"
        result = run(["-b", "0,0,3,2", "-o", str(out)])
        assert result.exit_code == 0
        assert result.output == ""
        assert out.read_text(encoding="utf-8") == BOX

    def test_config_file(self, tmp_path):
        cfg = tmp_path / "sketch.toml"
        cfg.write_text('[editor]\ncharset = "ascii"\n', encoding="utf-8")
        result = run(["-c", str(cfg), "-b", "0,0,3,2"])
        assert result.output == "+--+\n|  |\n+--+\n"


class TestErrors:
    def test_bad_coordinates(self):
        result = run(["-b", "0,0,x,2"])
        assert result.exit_code == 2

    def test_negative_coordinates(self):
        result = run(["-l", "0,-1,2,2"])
        assert result.exit_code == 2

    def test_invalid_utf8_input(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_bytes(b"\xff\xfe\n")
        result = run([str(path)])
        assert result.exit_code == 1
        assert "error" in result.output

    def test_bad_config(self, tmp_path):
        cfg = tmp_path / "sketch.toml"
        cfg.write_text('[editor]\npath_mode = "curvy"\n', encoding="utf-8")
        result = run(["-c", str(cfg)])
        assert result.exit_code == 1
