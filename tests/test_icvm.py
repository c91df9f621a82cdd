"""
icvm CLI Tests

Drives icvm.main() with argument lists and checks exit codes and stdout.
Program files are written to pytest's tmp_path.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import io
import logging

import pytest
import icvm


@pytest.fixture
def program_file(tmp_path):
    def _write(text: str):
        path = tmp_path / "program.txt"
        path.write_text(text + "\n", encoding="utf-8")
        return str(path)
    return _write


# ─── run ─────────────────────

class TestRun:
    def test_echo(self, program_file, capsys):
        rc = icvm.main(["run", program_file("3,0,4,0,99"), "-i", "42"])
        assert rc == icvm.EXIT_OK
        assert capsys.readouterr().out == "42\n"

    def test_negative_input(self, program_file, capsys):
        rc = icvm.main(["run", program_file("3,0,4,0,99"), "-i", "-7"])
        assert rc == icvm.EXIT_OK
        assert capsys.readouterr().out == "-7\n"

    def test_dump(self, program_file, capsys):
        path = program_file("1,9,10,3,2,3,11,0,99,30,40,50")
        rc = icvm.main(["run", path, "--dump", "0", "--dump", "3"])
        assert rc == icvm.EXIT_OK
        assert capsys.readouterr().out == "0: 3500\n3: 70\n"

    def test_noun_verb(self, program_file, capsys):
        path = program_file("1,0,0,0,99,10,20")
        rc = icvm.main(["run", path, "--noun", "5", "--verb", "6", "--dump", "0"])
        assert rc == icvm.EXIT_OK
        assert capsys.readouterr().out == "0: 30\n"

    def test_patch(self, program_file, capsys):
        rc = icvm.main(["run", program_file("4,50,99"), "--patch", "50=-3"])
        assert rc == icvm.EXIT_OK
        assert capsys.readouterr().out == "-3\n"

    def test_bad_patch_argument(self, program_file):
        assert icvm.main(["run", program_file("99"), "--patch", "oops"]) == icvm.EXIT_USAGE

    def test_ascii_output(self, program_file, capsys):
        rc = icvm.main(["run", program_file("104,72,104,105,104,10,104,1000,99"), "--ascii"])
        assert rc == icvm.EXIT_OK
        assert capsys.readouterr().out == "Hi\n1000\n"


class TestInteractive:
    def test_numeric_lines(self, program_file, capsys, monkeypatch):
        monkeypatch.setattr(sys, "stdin", io.StringIO("5\n"))
        rc = icvm.main(["run", program_file("3,0,4,0,99"), "--interactive"])
        assert rc == icvm.EXIT_OK
        assert capsys.readouterr().out == "5\n"

    def test_ascii_lines(self, program_file, capsys, monkeypatch):
        monkeypatch.setattr(sys, "stdin", io.StringIO("A\n"))
        rc = icvm.main(["run", program_file("3,100,3,101,4,100,4,101,99"),
                        "--interactive", "--ascii"])
        assert rc == icvm.EXIT_OK
        assert capsys.readouterr().out == "A\n"

    def test_end_of_input(self, program_file, monkeypatch):
        monkeypatch.setattr(sys, "stdin", io.StringIO(""))
        rc = icvm.main(["run", program_file("3,0,99"), "--interactive"])
        assert rc == icvm.EXIT_STARVED

    def test_non_integer_line(self, program_file, monkeypatch):
        monkeypatch.setattr(sys, "stdin", io.StringIO("abc\n"))
        rc = icvm.main(["run", program_file("3,0,99"), "--interactive"])
        assert rc == icvm.EXIT_USAGE

    def test_line_rejected_whole(self, program_file, capsys, monkeypatch):
        """A bad token anywhere on the line rejects the line before any value is queued."""
        monkeypatch.setattr(sys, "stdin", io.StringIO("1 9223372036854775808\n"))
        rc = icvm.main(["run", program_file("3,0,4,0,99"), "--interactive"])
        assert rc == icvm.EXIT_USAGE
        assert capsys.readouterr().out == ""

    def test_program_from_stdin_rejected(self):
        assert icvm.main(["run", "-", "--interactive"]) == icvm.EXIT_USAGE


class TestRunFailures:
    def test_starved(self, program_file, capsys):
        rc = icvm.main(["run", program_file("104,1,3,0,99")])
        assert rc == icvm.EXIT_STARVED
        assert capsys.readouterr().out == "1\n"

    def test_vm_error_keeps_earlier_output(self, program_file, capsys):
        rc = icvm.main(["run", program_file("104,7,42")])
        assert rc == icvm.EXIT_VM_ERROR
        assert capsys.readouterr().out == "7\n"

    def test_malformed_program(self, program_file):
        assert icvm.main(["run", program_file("1,x,99")]) == icvm.EXIT_USAGE

    def test_missing_file(self, tmp_path):
        assert icvm.main(["run", str(tmp_path / "nope.txt")]) == icvm.EXIT_USAGE

    def test_input_outside_cell_range(self, program_file):
        rc = icvm.main(["run", program_file("3,0,99"), "-i", "9223372036854775808"])
        assert rc == icvm.EXIT_USAGE

    def test_negative_dump_address(self, program_file):
        rc = icvm.main(["run", program_file("99"), "--dump", "-1"])
        assert rc == icvm.EXIT_USAGE

    def test_patch_value_outside_cell_range(self, program_file):
        rc = icvm.main(["run", program_file("99"), "--patch", "0=-9223372036854775809"])
        assert rc == icvm.EXIT_USAGE

    def test_noun_outside_cell_range(self, program_file):
        rc = icvm.main(["run", program_file("1,0,0,0,99"), "--noun", "99999999999999999999"])
        assert rc == icvm.EXIT_USAGE

    def test_missing_command(self):
        assert icvm.main([]) == icvm.EXIT_USAGE


class TestLogging:
    def test_second_main_call_applies_new_level(self, program_file):
        path = program_file("99")
        logger = logging.getLogger("intcode")
        assert icvm.main(["run", path]) == icvm.EXIT_OK
        assert [h.level for h in logger.handlers] == [logging.WARNING]
        assert icvm.main(["-v", "run", path]) == icvm.EXIT_OK
        assert [h.level for h in logger.handlers] == [logging.DEBUG]


# ─── search ─────────────────────

class TestSearch:
    def test_finds_first_match(self, program_file, capsys):
        path = program_file("1,0,0,0,99,10,20,30")
        rc = icvm.main(["search", path, "--target", "50", "--max", "7"])
        assert rc == icvm.EXIT_OK
        assert capsys.readouterr().out == "607\n"

    def test_no_match(self, program_file, capsys):
        path = program_file("1,0,0,0,99,10,20,30")
        rc = icvm.main(["search", path, "--target", "12345", "--max", "7"])
        assert rc == icvm.EXIT_NOT_FOUND
        assert capsys.readouterr().out == ""


class TestHelpers:
    def test_parse_patch(self):
        assert icvm.parse_patch("12=-4") == (12, -4)
        assert icvm.parse_patch(" 0 = 7 ") == (0, 7)

    def test_parse_patch_rejects_wide_value(self):
        with pytest.raises(argparse.ArgumentTypeError):
            icvm.parse_patch("3=9223372036854775808")

    def test_cell_value(self):
        assert icvm.cell_value("-9223372036854775808") == -2 ** 63
        with pytest.raises(argparse.ArgumentTypeError):
            icvm.cell_value("9223372036854775808")
        with pytest.raises(argparse.ArgumentTypeError):
            icvm.cell_value("x")

    def test_address_value(self):
        assert icvm.address_value("12") == 12
        with pytest.raises(argparse.ArgumentTypeError):
            icvm.address_value("-1")

    def test_encode_text(self):
        assert icvm.encode_text("NOT A J") == [78, 79, 84, 32, 65, 32, 74, 10]

    def test_render_numeric(self):
        assert icvm.render_output([1, -2], ascii_mode=False) == "1\n-2\n"
