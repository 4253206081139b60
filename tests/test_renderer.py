"""Tests for clusterenv.render.renderer."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from clusterenv.config.models import RenderOptions
from clusterenv.env.values import Multi, Scalar
from clusterenv.render.errors import (
    OutputOpenError,
    RenderError,
    TemplateExecuteError,
    TemplateParseError,
)
from clusterenv.render.renderer import (
    iter_templates,
    output_path_for,
    render_all,
)


# ── fixtures ─────────────────────────────────────────────────────────

ENV = {
    "DATADISK": Scalar("/data"),
    "PORT": Scalar("6443"),
    "IPS": Multi(("10.0.0.1", "10.0.0.2")),
}

MINI_TEMPLATE = (
    "datadisk: {{ DATADISK }}\n"
    "port: {{ PORT }}\n"
)


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# ── TestOutputPath ───────────────────────────────────────────────────


class TestOutputPath:
    def test_suffix_stripped(self):
        assert output_path_for("/etc/app/conf.yaml.tmpl", ".tmpl") == Path(
            "/etc/app/conf.yaml"
        )

    def test_custom_suffix(self):
        assert output_path_for("a/b.j2", ".j2") == Path("a/b")


# ── TestIterTemplates ────────────────────────────────────────────────


class TestIterTemplates:
    def test_recursive_lexical_order(self, tmp_path: Path):
        _write(tmp_path / "b.tmpl", "")
        _write(tmp_path / "a.tmpl", "")
        _write(tmp_path / "sub" / "c.tmpl", "")
        _write(tmp_path / "notes.txt", "")
        found = list(iter_templates(tmp_path, ".tmpl"))
        assert found == [
            tmp_path / "a.tmpl",
            tmp_path / "b.tmpl",
            tmp_path / "sub" / "c.tmpl",
        ]

    def test_directory_named_like_template_is_walked(self, tmp_path: Path):
        _write(tmp_path / "dir.tmpl" / "x.tmpl", "")
        assert list(iter_templates(tmp_path, ".tmpl")) == [
            tmp_path / "dir.tmpl" / "x.tmpl"
        ]

    def test_bare_suffix_name_skipped(self, tmp_path: Path):
        _write(tmp_path / ".tmpl", "")
        assert list(iter_templates(tmp_path, ".tmpl")) == []

    def test_single_file_root(self, tmp_path: Path):
        tpl = _write(tmp_path / "one.tmpl", "")
        assert list(iter_templates(tpl, ".tmpl")) == [tpl]

    def test_single_non_template_root(self, tmp_path: Path):
        f = _write(tmp_path / "plain.txt", "")
        assert list(iter_templates(f, ".tmpl")) == []

    def test_missing_root_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            list(iter_templates(tmp_path / "nope", ".tmpl"))


# ── TestRenderAll ────────────────────────────────────────────────────


class TestRenderAll:
    def test_basic_substitution(self, tmp_path: Path):
        tpl = _write(tmp_path / "file.tmpl", MINI_TEMPLATE)
        written = render_all(ENV, tmp_path)
        out = tmp_path / "file"
        assert written == [out]
        assert out.read_text() == "datadisk: /data\nport: 6443\n"

    def test_template_left_untouched(self, tmp_path: Path):
        tpl = _write(tmp_path / "file.tmpl", MINI_TEMPLATE)
        render_all(ENV, tmp_path)
        assert tpl.read_text() == MINI_TEMPLATE

    def test_non_templates_ignored(self, tmp_path: Path):
        _write(tmp_path / "README", "{{ DATADISK }}")
        assert render_all(ENV, tmp_path) == []
        assert (tmp_path / "README").read_text() == "{{ DATADISK }}"

    def test_nested_directories(self, tmp_path: Path):
        _write(tmp_path / "etc" / "kubelet" / "config.yaml.tmpl", "{{ PORT }}")
        render_all(ENV, tmp_path)
        assert (tmp_path / "etc" / "kubelet" / "config.yaml").read_text() == "6443"

    def test_multi_value_loop(self, tmp_path: Path):
        _write(
            tmp_path / "hosts.tmpl",
            "{% for ip in IPS %}{{ ip }}\n{% endfor %}",
        )
        render_all(ENV, tmp_path)
        assert (tmp_path / "hosts").read_text() == "10.0.0.1\n10.0.0.2\n"

    def test_branch_on_arity(self, tmp_path: Path):
        text = (
            "{% if IPS is string %}one{% else %}{{ IPS | join(',') }}{% endif %}|"
            "{% if PORT is string %}{{ PORT }}{% else %}many{% endif %}"
        )
        _write(tmp_path / "arity.tmpl", text)
        render_all(ENV, tmp_path)
        assert (tmp_path / "arity").read_text() == "10.0.0.1,10.0.0.2|6443"

    def test_undefined_renders_empty_by_default(self, tmp_path: Path):
        _write(tmp_path / "f.tmpl", "x={{ MISSING }}")
        render_all(ENV, tmp_path)
        assert (tmp_path / "f").read_text() == "x="

    def test_no_html_escaping(self, tmp_path: Path):
        _write(tmp_path / "f.tmpl", "{{ V }}")
        render_all({"V": Scalar("<a & b>")}, tmp_path)
        assert (tmp_path / "f").read_text() == "<a & b>"

    def test_include_relative_to_root(self, tmp_path: Path):
        _write(tmp_path / "common" / "header.txt", "# disk {{ DATADISK }}\n")
        _write(tmp_path / "app" / "conf.tmpl", '{% include "common/header.txt" %}ok\n')
        render_all(ENV, tmp_path)
        assert (tmp_path / "app" / "conf").read_text() == "# disk /data\nok\n"

    def test_single_file_root(self, tmp_path: Path):
        tpl = _write(tmp_path / "only.tmpl", "{{ PORT }}")
        _write(tmp_path / "other.tmpl", "{{ PORT }}")
        assert render_all(ENV, tpl) == [tmp_path / "only"]
        assert not (tmp_path / "other").exists()

    def test_existing_output_truncated(self, tmp_path: Path):
        _write(tmp_path / "f", "a much longer stale content\n")
        _write(tmp_path / "f.tmpl", "{{ PORT }}\n")
        render_all(ENV, tmp_path)
        assert (tmp_path / "f").read_text() == "6443\n"

    def test_custom_suffix(self, tmp_path: Path):
        _write(tmp_path / "f.j2", "{{ PORT }}")
        _write(tmp_path / "g.tmpl", "{{ PORT }}")
        written = render_all(ENV, tmp_path, RenderOptions(suffix=".j2"))
        assert written == [tmp_path / "f"]
        assert not (tmp_path / "g").exists()

    def test_empty_directory(self, tmp_path: Path):
        assert render_all(ENV, tmp_path) == []

    def test_missing_root_propagates(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            render_all(ENV, tmp_path / "absent")


# ── TestRenderErrors ─────────────────────────────────────────────────


class TestRenderErrors:
    def test_parse_error_names_path(self, tmp_path: Path):
        bad = _write(tmp_path / "bad.tmpl", "value: {{ DATADISK \n")
        with pytest.raises(TemplateParseError) as info:
            render_all(ENV, tmp_path)
        assert info.value.path == bad
        assert str(bad) in str(info.value)

    def test_parse_error_writes_no_output(self, tmp_path: Path):
        _write(tmp_path / "bad.tmpl", "{% if %}")
        with pytest.raises(TemplateParseError):
            render_all(ENV, tmp_path)
        assert not (tmp_path / "bad").exists()

    def test_execute_error(self, tmp_path: Path):
        bad = _write(tmp_path / "exec.tmpl", "{{ MISSING.attr }}")
        with pytest.raises(TemplateExecuteError) as info:
            render_all(ENV, tmp_path)
        assert info.value.path == bad
        assert not (tmp_path / "exec").exists()

    def test_strict_undefined(self, tmp_path: Path):
        _write(tmp_path / "f.tmpl", "{{ MISSING }}")
        with pytest.raises(TemplateExecuteError):
            render_all(ENV, tmp_path, RenderOptions(strict_undefined=True))
        assert not (tmp_path / "f").exists()

    def test_output_open_error(self, tmp_path: Path):
        # The output path is an existing directory.
        (tmp_path / "out").mkdir()
        tpl = _write(tmp_path / "out.tmpl", "{{ PORT }}")
        with pytest.raises(OutputOpenError) as info:
            render_all(ENV, tmp_path)
        assert info.value.path == tpl
        assert isinstance(info.value.cause, OSError)

    def test_first_error_aborts_walk(self, tmp_path: Path):
        _write(tmp_path / "a.tmpl", "{{ broken ")
        _write(tmp_path / "b.tmpl", "{{ PORT }}")
        with pytest.raises(RenderError):
            render_all(ENV, tmp_path)
        assert not (tmp_path / "b").exists()

    def test_earlier_outputs_kept(self, tmp_path: Path):
        _write(tmp_path / "a.tmpl", "{{ PORT }}")
        _write(tmp_path / "b.tmpl", "{{ broken ")
        with pytest.raises(TemplateParseError):
            render_all(ENV, tmp_path)
        assert (tmp_path / "a").read_text() == "6443"

    def test_errors_are_chained(self, tmp_path: Path):
        _write(tmp_path / "bad.tmpl", "{{ x ")
        with pytest.raises(TemplateParseError) as info:
            render_all(ENV, tmp_path)
        assert info.value.__cause__ is info.value.cause


# ── TestByteStability ────────────────────────────────────────────────


class TestByteStability:
    def test_rerender_identical(self, tmp_path: Path):
        _write(tmp_path / "a.tmpl", MINI_TEMPLATE)
        _write(tmp_path / "sub" / "b.tmpl", "{% for ip in IPS %}{{ ip }} {% endfor %}\n")
        render_all(ENV, tmp_path)
        first = {p: p.read_bytes() for p in (tmp_path / "a", tmp_path / "sub" / "b")}
        render_all(ENV, tmp_path)
        second = {p: p.read_bytes() for p in first}
        assert first == second

    def test_trailing_newline_preserved(self, tmp_path: Path):
        _write(tmp_path / "f.tmpl", "{{ PORT }}\n\n")
        render_all(ENV, tmp_path)
        assert (tmp_path / "f").read_bytes() == b"6443\n\n"

    def test_crlf_template_keeps_crlf(self, tmp_path: Path):
        (tmp_path / "win.tmpl").write_bytes(b"port={{ PORT }}\r\nb\r\n")
        render_all(ENV, tmp_path)
        assert (tmp_path / "win").read_bytes() == b"port=6443\r\nb\r\n"

    def test_crlf_and_lf_templates_side_by_side(self, tmp_path: Path):
        (tmp_path / "common.txt").write_bytes(b"inc\n")
        (tmp_path / "a.tmpl").write_bytes(b'{% include "common.txt" %}x\n')
        (tmp_path / "b.tmpl").write_bytes(b'{% include "common.txt" %}y\r\n')
        render_all(ENV, tmp_path)
        assert (tmp_path / "a").read_bytes() == b"inc\nx\n"
        assert (tmp_path / "b").read_bytes() == b"inc\r\ny\r\n"


# ── TestWalkErrors ───────────────────────────────────────────────────

_IS_ROOT = hasattr(os, "geteuid") and os.geteuid() == 0


@pytest.mark.skipif(
    _IS_ROOT or not hasattr(os, "geteuid"),
    reason="directory permissions are not enforced for root / on this platform",
)
class TestWalkErrors:
    def test_unreadable_subdirectory_raises_permission_error(self, tmp_path: Path):
        _write(tmp_path / "a.tmpl", "{{ PORT }}")
        locked = tmp_path / "locked"
        _write(locked / "inner.tmpl", "{{ PORT }}")
        locked.chmod(0)
        try:
            with pytest.raises(PermissionError):
                render_all(ENV, tmp_path)
        finally:
            locked.chmod(0o755)
        assert (tmp_path / "a").read_text() == "6443"
        assert not (locked / "inner").exists()
