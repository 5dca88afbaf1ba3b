import pytest

from ormkit.stubs import Stub, load_stub


def test_load_stub_reads_content(tmp_path):
    text = "package %PACKAGE%\n\nimport (\n%IMPORT%\n)\n"
    (tmp_path / "model.stub").write_text(text, encoding="utf-8")
    assert load_stub("model.stub", tmp_path) == text


def test_stub_context_matches_load(tmp_path):
    text = "%UPPER_PROPERTY% %PROPERTY_TYPE%\r\n"
    (tmp_path / "row.stub").write_bytes(text.encode("utf-8"))
    stub = Stub("row.stub", str(tmp_path))
    assert stub.context() == text
    assert stub.context() == load_stub("row.stub", tmp_path)
    assert stub.filename == "row.stub"


def test_stub_read_at_creation(tmp_path):
    path = tmp_path / "dao.stub"
    path.write_text("first", encoding="utf-8")
    stub = Stub("dao.stub", tmp_path)
    path.write_text("second", encoding="utf-8")
    assert stub.context() == "first"


def test_missing_stub_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Stub("absent.stub", tmp_path)
    with pytest.raises(FileNotFoundError):
        load_stub("absent.stub", tmp_path)