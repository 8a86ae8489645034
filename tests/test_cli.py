"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from showdocs.cli import _build_parser, main
from tests._fixtures.docs_builder import DocsTreeBuilder, package_page, type_page


def test_cli_mode_defaults_to_none() -> None:
    args = _build_parser().parse_args(["docs", "-d", "out"])
    assert args.input == "docs"
    assert args.output_dir == "out"
    assert args.mode is None
    assert args.verbose is False


@pytest.mark.parametrize(
    ("flags", "mode"),
    [
        (["-h"], "html"),
        (["--html"], "html"),
        (["-t"], "text"),
        (["--text"], "text"),
        (["--mixed"], "mixed"),
        (["--html", "--text"], "text"),
        (["-t", "--mixed"], "mixed"),
    ],
)
def test_cli_last_mode_flag_wins(flags: list[str], mode: str) -> None:
    args = _build_parser().parse_args(["docs", "-d", "out", *flags])
    assert args.mode == mode


def test_cli_accepts_verbose() -> None:
    args = _build_parser().parse_args(["-v", "docs", "-d", "out"])
    assert args.verbose is True


def test_cli_rejects_unknown_option() -> None:
    with pytest.raises(SystemExit) as excinfo:
        _build_parser().parse_args(["docs", "-d", "out", "--bogus"])
    assert excinfo.value.code != 0


def test_cli_rejects_extra_positional() -> None:
    with pytest.raises(SystemExit) as excinfo:
        _build_parser().parse_args(["docs", "more", "-d", "out"])
    assert excinfo.value.code != 0


def test_cli_requires_input() -> None:
    with pytest.raises(SystemExit) as excinfo:
        _build_parser().parse_args(["-d", "out"])
    assert excinfo.value.code != 0


def test_main_requires_output_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path)])

    assert excinfo.value.code != 0
    assert "no output directory specified" in capsys.readouterr().err


def test_main_converts_tree(
    docs_builder: DocsTreeBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(docs_builder.path().parent)
    docs_builder.write(
        {
            "pkg/package-summary.html": package_page("pkg", "Pkg overview"),
            "pkg/Foo.html": type_page(class_name="Foo", package="pkg", description="Foo class"),
            "pkg/Broken.html": "<html>nothing here</html>",
        }
    )

    main([str(docs_builder.path()), "-d", str(docs_builder.output), "--text", "--verbose"])

    captured = capsys.readouterr()
    assert "Wrote 2 pages to out (1 failed)" in captured.out
    assert "Broken.html" in captured.err
    assert "file: " in captured.err
    assert '<pre class="text">Foo class</pre>' in docs_builder.read_output("pkg/Foo.html")


def test_main_uses_output_dir_from_config(
    docs_builder: DocsTreeBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    workdir = docs_builder.path().parent
    monkeypatch.chdir(workdir)
    (workdir / ".showdocs.yml").write_text("output_dir: out\nmode: html\n", encoding="utf-8")
    docs_builder.write({"Foo.html": type_page(class_name="Foo", description="Foo class")})

    main([str(docs_builder.path())])

    assert '<div class="html">Foo class</div>' in docs_builder.read_output("Foo.html")
    assert "Wrote 1 pages to out" in capsys.readouterr().out


def test_main_exits_when_serialized_form_index_fails(
    docs_builder: DocsTreeBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(docs_builder.path().parent)
    docs_builder.write({"Foo.html": type_page(class_name="Foo", description="Foo class")})
    (docs_builder.path() / "serialized-form.html").write_bytes(b"\xff\xfe\x81")

    with pytest.raises(SystemExit) as excinfo:
        main([str(docs_builder.path()), "-d", str(docs_builder.output)])

    assert excinfo.value.code == 1
    assert "showdocs failed" in capsys.readouterr().err
    assert not (docs_builder.output / "Foo.html").exists()


def test_main_is_quiet_on_stderr_without_verbose(
    docs_builder: DocsTreeBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(docs_builder.path().parent)
    docs_builder.write(
        {
            "pkg/package-summary.html": package_page("pkg", "Pkg overview"),
            "pkg/Foo.html": type_page(class_name="Foo", package="pkg", description="Foo class"),
        }
    )

    main([str(docs_builder.path()), "-d", str(docs_builder.output)])

    captured = capsys.readouterr()
    assert captured.err == ""
    assert "Wrote 2 pages to out" in captured.out


def test_main_exits_when_parser_refuses_serialized_form_index(
    docs_builder: DocsTreeBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(docs_builder.path().parent)
    docs_builder.write(
        {
            "Foo.html": type_page(class_name="Foo", description="Foo class"),
            "serialized-form.html": "<html><body><![foo]></body></html>",
        }
    )

    with pytest.raises(SystemExit) as excinfo:
        main([str(docs_builder.path()), "-d", str(docs_builder.output)])

    assert excinfo.value.code == 1
    assert "showdocs failed" in capsys.readouterr().err
