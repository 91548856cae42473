"""Tests for parser.py — the text format, read and written."""

from io import StringIO

from pylayeredini import Destination, LayeredIni, read_stream, write_stream
from pylayeredini.ini.parser import readstream, writestream


def _dump(layer) -> str:
    buf = StringIO()
    writestream(layer, buf)
    return buf.getvalue()


class TestReadStream:
    def test_basic_document(self):
        ini = read_stream(StringIO("[a]\nk = 1\n\n[b]\nk2 = \n"))
        assert dict(ini["a"]) == {"k": "1"}
        assert "b" in ini
        assert len(ini.at("b")) == 0

    def test_whitespace_trimmed(self):
        layer = readstream(StringIO("  [ net ]  \n\t host \t=\t  example.org \r\n"))
        assert dict(layer["net"]) == {"host": "example.org"}

    def test_split_at_first_equal(self):
        layer = readstream(StringIO("[s]\nurl = a=b=c\n"))
        assert layer["s"]["url"] == "a=b=c"

    def test_malformed_lines_ignored(self):
        layer = readstream(StringIO("[s]\ngarbage\n[unclosed\nk = v\n; not a comment\n"))
        assert dict(layer["s"]) == {"k": "v"}
        assert list(layer) == ["s"]

    def test_empty_value_dropped(self):
        layer = readstream(StringIO("[s]\nk =   \n"))
        assert "k" not in layer["s"]

    def test_sections_reused(self):
        layer = readstream(StringIO("[a]\nx = 1\n[b]\ny = 2\n[a]\nz = 3\n"))
        assert dict(layer["a"]) == {"x": "1", "z": "3"}

    def test_later_value_wins(self):
        layer = readstream(StringIO("[a]\nx = 1\nx = 2\n"))
        assert layer["a"]["x"] == "2"

    def test_header_pairs(self):
        ini = read_stream(StringIO("top = 1\n[s]\nk = v\n"))
        assert ini.header["top"] == "1"
        assert "top" not in ini["s"]
        assert ini.names() == ["s"]

    def test_existing_layer_is_updated(self):
        layer = readstream(StringIO("[a]\nx = 1\n"))
        readstream(StringIO("[a]\ny = 2\n"), layer)
        assert dict(layer["a"]) == {"x": "1", "y": "2"}

    def test_empty_stream(self):
        ini = read_stream(StringIO(""))
        assert not ini
        assert len(ini.header) == 0

    def test_two_layers_parsed_independently(self):
        ini = read_stream(StringIO("[s]\nk = L\n"), StringIO("[s]\nk = G\nonly = g\n"))
        local = ini.layer(Destination.LOCAL)["s"]
        glob = ini.layer(Destination.GLOBAL)["s"]
        assert local is not glob
        assert dict(local) == {"k": "L"}
        assert dict(glob) == {"k": "G", "only": "g"}
        assert ini.get("s", "only") == "g"

    def test_list_value(self):
        ini = read_stream(StringIO("[s]\nl = a,b\\,c , d\n"))
        assert ini.get_list("s", "l") == ["a", "b,c", "d"]


class TestWriteStream:
    def test_scenario(self):
        ini = read_stream(StringIO("[a]\nk = 1\n\n[b]\nk2 = \n"))
        buf = StringIO()
        write_stream(ini, buf)
        assert buf.getvalue() == "[a]\nk = 1\n\n\n"

    def test_sorted_sections_and_keys(self):
        ini = LayeredIni()
        ini.set("z", "b", "2")
        ini.set("z", "a", "1")
        ini.set("m", "k", "v")
        assert _dump(ini.layer(Destination.LOCAL)) == "[m]\nk = v\n\n[z]\na = 1\nb = 2\n\n"

    def test_empty_values_skipped(self):
        ini = LayeredIni()
        ini.set("s", "gone", "")
        ini.set("s", "kept", "x")
        assert _dump(ini.layer(Destination.LOCAL)) == "[s]\nkept = x\n\n"

    def test_fully_empty_section_leaves_blank_line(self):
        ini = LayeredIni()
        ini["empty"]
        assert _dump(ini.layer(Destination.LOCAL)) == "\n"

    def test_header_not_written(self):
        ini = read_stream(StringIO("top = 1\n"))
        buf = StringIO()
        write_stream(ini, buf)
        assert buf.getvalue() == ""

    def test_two_layers(self):
        ini = LayeredIni()
        ini.set("s", "k", "L")
        ini.set("s", "k", "G", Destination.GLOBAL)
        local, glob = StringIO(), StringIO()
        write_stream(ini, local, glob)
        assert local.getvalue() == "[s]\nk = L\n\n"
        assert glob.getvalue() == "[s]\nk = G\n\n"


class TestRoundTrip:
    def test_write_then_read(self):
        ini = LayeredIni()
        for s in range(4):
            for k in range(5):
                ini.set(f"section{s}", f"key{k}", f"value {s}.{k}")
        ini.set_list("section0", "list", ["a", "b,c", "d\\e"])
        ini.set("section1", "hex", 255, base=16)
        ini.set("section2", "void", "")

        buf = StringIO()
        write_stream(ini, buf)
        buf.seek(0)
        back = read_stream(buf)

        assert back.names() == ini.names()
        for name in ini.names():
            expected = {k: v for k, v in ini[name].items() if v}
            assert dict(back[name]) == expected
        assert back.get_list("section0", "list") == ["a", "b,c", "d\\e"]
        assert back.get_number("section1", "hex", 0, 16) == 255
