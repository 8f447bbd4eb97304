import pytest

from funcgen.codegen.writer import BufferSink, FileSink, output_path


def test_output_path_default(tmp_path):
    assert output_path(tmp_path) == tmp_path / "GeneratedFunctions.kt"


def test_output_path_with_package(tmp_path):
    assert output_path(tmp_path, "com.example", "Functions", "txt") == tmp_path / "com" / "example" / "Functions.txt"


def test_file_sink_writes_utf8(tmp_path):
    sink = FileSink.open(tmp_path, "com.example")
    sink.write("\nfun grüße() {\n")
    sink.write("}\n")
    sink.close()

    path = tmp_path / "com" / "example" / "GeneratedFunctions.kt"
    assert sink.path == path
    assert path.read_bytes() == "\nfun grüße() {\n}\n".encode("utf-8")


def test_file_sink_close_is_idempotent(tmp_path):
    sink = FileSink.open(tmp_path)
    sink.close()
    sink.close()
    assert sink.closed


def test_file_sink_rejects_writes_after_close(tmp_path):
    sink = FileSink.open(tmp_path)
    sink.close()
    with pytest.raises(ValueError):
        sink.write("fun late() {}\n")


def test_buffer_sink():
    sink = BufferSink()
    sink.write("a")
    sink.write("b")
    sink.close()

    assert sink.getvalue() == "ab"
    assert sink.close_count == 1
    with pytest.raises(ValueError):
        sink.write("c")
