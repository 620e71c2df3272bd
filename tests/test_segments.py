import pytest

from app.segments import (
    adjust_file_name,
    extract_file_name,
    get_extension,
    normalize_special_chars,
    remove_url_params,
)
from app.trace import ProcessingContext


def test_remove_url_params():
    assert remove_url_params("/a/b.pdf?download=1&x=2") == "/a/b.pdf"
    assert remove_url_params("/a/b.pdf") == "/a/b.pdf"
    assert remove_url_params("?only") == ""


def test_extract_file_name_scans_from_the_end():
    assert extract_file_name("/documents/37101/0/ata.pdf/5f1c-uuid") == "ata.pdf"
    assert extract_file_name("/wp-content/uploads/2023/img.final.png") == "img.final.png"


def test_extract_file_name_fallback():
    assert extract_file_name("/documents/d/saude/foo-bar-pdf") == ""
    assert extract_file_name("/a/b.pdf?x=1") == ""
    assert extract_file_name("") == ""


def test_get_extension():
    assert get_extension("report.PDF") == "-PDF"
    assert get_extension("archive.tar.gz") == "-gz"
    assert get_extension("noext") == ""


def test_adjust_file_name_only_touches_trailing_two():
    assert adjust_file_name("anexo2") == "anexo282-29"
    assert adjust_file_name("anexo22") == "anexo2282-29"
    assert adjust_file_name("2anexo") == "2anexo"
    assert adjust_file_name("") == ""


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Relat%C3%B3rio%20Anual", "relatorio-anual"),
        ("Institui%C3%A7%C3%A3o", "instituicao"),
        ("529%C2%AA+RE", "529-re"),
        ("N%C2%BA+10", "n-10"),
        ("Reuni%C3%A3o+%E2%80%93+Ata", "reuniao-ata"),
        ("%C3%8Axito", "Exito"),
        ("", ""),
    ],
)
def test_normalize_special_chars(raw, expected):
    assert normalize_special_chars(raw) == expected


@pytest.mark.parametrize("run", ["--", "---", "----", "-----"])
def test_normalize_special_chars_collapses_hyphen_runs(run):
    assert normalize_special_chars(f"a{run}b") == "a-b"


def test_helpers_write_trace_lines():
    ctx = ProcessingContext()
    get_extension("ata.pdf", ctx)
    get_extension("ata", ctx)
    adjust_file_name("x", ctx)

    assert ctx.trace == [
        "getExtension: -pdf",
        "getExtension-noext: ",
        "adjustFileName: x",
    ]
    assert ctx.debug_output == "getExtension: -pdf\ngetExtension-noext: \nadjustFileName: x\n"
