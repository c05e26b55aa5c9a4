import json

from nilsimsa_lsh.cli import EXIT_BAD_DIGEST, EXIT_IO_ERROR, run

TEST_STRING = "42c82c184080082040001004000000084e1043b0c0925829003e84c860410010"
BEST_STRONG = "00480cba20810802408000000400000a481091b088b21e21003e840a20011016"


def test_digest_text(capsys):
    assert run(["digest", "--text", "test string"]) == 0
    assert capsys.readouterr().out == TEST_STRING + "\n"


def test_digest_files(tmp_path, capsys):
    a = tmp_path / "a.txt"
    b = tmp_path / "b.txt"
    a.write_bytes(b"test string")
    b.write_bytes(b"")
    assert run(["digest", str(a), str(b)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [f"{TEST_STRING}  {a}", f"{'0' * 64}  {b}"]


def test_digest_missing_file_keeps_going(tmp_path, capsys):
    a = tmp_path / "a.txt"
    a.write_bytes(b"test string")
    rc = run(["digest", str(tmp_path / "missing"), str(a)])
    assert rc == EXIT_IO_ERROR
    assert capsys.readouterr().out == f"{TEST_STRING}  {a}\n"


def test_digest_json(capsys):
    assert run(["digest", "--json", "--text", "test string"]) == 0
    obj = json.loads(capsys.readouterr().out)
    assert obj == {"digest": TEST_STRING, "text": "test string"}


def test_compare(capsys):
    assert run(["compare", TEST_STRING, BEST_STRONG]) == 0
    assert capsys.readouterr().out.strip() == "90"


def test_compare_cutoff_json(capsys):
    assert run(["compare", "--json", "--cutoff", "0", TEST_STRING, BEST_STRONG]) == 0
    obj = json.loads(capsys.readouterr().out)
    assert obj["score"] == 126
    assert obj["cutoff"] == 0


def test_compare_bad_digest(capsys):
    assert run(["compare", TEST_STRING, BEST_STRONG[:-2]]) == EXIT_BAD_DIGEST
    assert run(["compare", TEST_STRING, "x" * 64]) == EXIT_BAD_DIGEST
    assert capsys.readouterr().out == ""


def test_compare_files(tmp_path, capsys):
    a = tmp_path / "a.txt"
    b = tmp_path / "b.txt"
    a.write_bytes(b"test string")
    b.write_bytes(b"test string")
    assert run(["compare-files", str(a), str(b)]) == 0
    assert capsys.readouterr().out.strip() == "128"


def test_compare_files_missing(tmp_path):
    a = tmp_path / "a.txt"
    a.write_bytes(b"x")
    assert run(["compare-files", str(a), str(tmp_path / "missing")]) == EXIT_IO_ERROR
