import subprocess
import sys
from pathlib import Path

import pytest

from churn import ChurnProgram

PROGRAM_DIR = Path(__file__).resolve().parent.parent / "Python"


def run(program, *args, cwd):
    return subprocess.run([sys.executable, str(PROGRAM_DIR / program), *map(str, args)],
                          capture_output=True, text=True, cwd=cwd)


def write_words(tmp_path):
    word_file = tmp_path / "words.txt"
    word_file.write_bytes(b"3 the\n4 the \n3 and\n2 of\n")
    return word_file


def test_compress_then_expand(tmp_path):
    write_words(tmp_path)
    text = b"the start of the story and the end\n" * 50
    (tmp_path / "input.txt").write_bytes(text)

    result = run("main-c.py", "input.txt", "packed.raw", cwd=tmp_path)
    assert result.returncode == 0, result.stderr
    assert "Compressing input.txt to packed.raw" in result.stdout
    assert "Compression ratio:" in result.stdout
    assert (tmp_path / "packed.raw").stat().st_size < len(text)

    result = run("main-e.py", "packed.raw", "output.txt", cwd=tmp_path)
    assert result.returncode == 0, result.stderr
    assert (tmp_path / "output.txt").read_bytes() == text


def test_explicit_word_file(tmp_path):
    word_file = write_words(tmp_path)
    (tmp_path / "input.txt").write_bytes(b"and the\r\n")

    assert run("main-c.py", "input.txt", "packed.raw", word_file, cwd=tmp_path).returncode == 0
    assert run("main-e.py", "packed.raw", "output.txt", word_file, cwd=tmp_path).returncode == 0
    assert (tmp_path / "output.txt").read_bytes() == b"and the\r\n"


def test_invalid_input_leaves_no_output(tmp_path):
    write_words(tmp_path)
    (tmp_path / "input.txt").write_bytes(b"bad \x7f byte")

    result = run("main-c.py", "input.txt", "packed.raw", cwd=tmp_path)
    assert result.returncode == 1
    assert "Invalid character code: 7F" in result.stderr
    assert not (tmp_path / "packed.raw").exists()


def test_invalid_word_file(tmp_path):
    (tmp_path / "words.txt").write_bytes(b"1 a\n")
    (tmp_path / "input.txt").write_bytes(b"text")

    result = run("main-c.py", "input.txt", "packed.raw", cwd=tmp_path)
    assert result.returncode == 1
    assert "Invalid word file" in result.stderr
    assert not (tmp_path / "packed.raw").exists()


def test_expand_with_invalid_word_file_leaves_no_output(tmp_path):
    write_words(tmp_path)
    (tmp_path / "input.txt").write_bytes(b"the end\n")
    assert run("main-c.py", "input.txt", "packed.raw", cwd=tmp_path).returncode == 0
    (tmp_path / "words.txt").write_bytes(b"1 a\n")

    result = run("main-e.py", "packed.raw", "output.txt", cwd=tmp_path)
    assert result.returncode == 1
    assert "Invalid word file" in result.stderr
    assert not (tmp_path / "output.txt").exists()


def test_expand_with_code_outside_word_list_leaves_no_output(tmp_path):
    write_words(tmp_path)
    (tmp_path / "input.txt").write_bytes(b"the end ~\n")
    assert run("main-c.py", "input.txt", "packed.raw", cwd=tmp_path).returncode == 0
    # with four extra words "~" packs as 101, past the 98 single characters
    (tmp_path / "words.txt").write_bytes(b"")

    result = run("main-e.py", "packed.raw", "output.txt", cwd=tmp_path)
    assert result.returncode == 1
    assert "Corrupt packed file" in result.stderr
    assert not (tmp_path / "output.txt").exists()


def test_missing_input(tmp_path):
    result = run("main-c.py", "nope.txt", "packed.raw", cwd=tmp_path)
    assert result.returncode == 1
    assert "Can't open file: nope.txt" in result.stderr


def test_usage(tmp_path):
    result = run("main-e.py", cwd=tmp_path)
    assert result.returncode == 0
    assert "Usage:  main-e in-file out-file" in result.stdout


def test_churn(tmp_path, monkeypatch):
    word_file = write_words(tmp_path)
    samples = tmp_path / "samples"
    (samples / "nested").mkdir(parents=True)
    (samples / "a.txt").write_bytes(b"the cat and the hat\n")
    (samples / "nested" / "b.txt").write_bytes(b"")
    (samples / "binary.bin").write_bytes(bytes(range(256)))
    (samples / "old.raw").write_bytes(b"\x00")
    monkeypatch.chdir(tmp_path)

    churn = ChurnProgram()
    churn.main([str(samples), str(word_file)])

    assert churn.total_files == 2
    assert churn.total_passed == 2
    assert churn.total_failed == 0
    assert churn.total_skipped == 1
    log = (tmp_path / "CHURN.LOG").read_text(encoding="utf-8")
    assert "Passed" in log
    assert "Skipped: Invalid character code: 0" in log


def test_churn_with_invalid_word_file(tmp_path, monkeypatch, capsys):
    word_file = tmp_path / "words.txt"
    word_file.write_bytes(b"2 a\x01\n")
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as info:
        ChurnProgram().main([str(tmp_path), str(word_file)])
    assert info.value.code == 1
    assert "Invalid word file" in capsys.readouterr().err
    assert not (tmp_path / "CHURN.LOG").exists()
