"""Tests for template resolution precedence and name validation."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from faas_cli.scaffold import (
    Bundle,
    InvalidTemplateName,
    SourceAccessError,
    TemplateNotFound,
    TemplateRef,
    TemplateSource,
    is_builtin,
    list_templates,
    resolve,
)
from tests.utils import write_file


# ---------------------------------------------------------------------------
# TemplateRef parsing
# ---------------------------------------------------------------------------

class TestTemplateRef:
    def test_empty_template_defaults_to_http(self) -> None:
        assert TemplateRef.parse("go", "").template == "http"
        assert TemplateRef.parse("go", None).template == "http"

    def test_bare_name(self) -> None:
        ref = TemplateRef.parse("go", "events")
        assert not ref.is_composite
        assert ref.repo is None
        assert ref.name == "events"
        assert ref.embedded_path == "/templates/go/events"

    def test_composite_name(self) -> None:
        ref = TemplateRef.parse("go", "boson/json")
        assert ref.is_composite
        assert ref.repo == "boson"
        assert ref.name == "json"
        assert str(ref) == "go/boson/json"

    @pytest.mark.parametrize(
        "name",
        [
            "nogoodname/with/extra/slash",
            "a/b/c",
            "/json",
            "boson/",
            "/",
            "../json",
            "boson/..",
            "boson\\json",
            "..",
        ],
    )
    def test_invalid_names(self, name: str) -> None:
        with pytest.raises(InvalidTemplateName) as exc_info:
            TemplateRef.parse("go", name)
        assert exc_info.value.name == name


# ---------------------------------------------------------------------------
# Resolution precedence
# ---------------------------------------------------------------------------

class TestResolve:
    def test_bare_name_resolves_embedded(self, sample_bundle: Bundle) -> None:
        result = resolve(TemplateRef.parse("go", "http"), bundle=sample_bundle)

        assert result.source == TemplateSource.EMBEDDED
        assert result.location == "/templates/go/http"
        assert result.accessor.stat("/go.mod").size == len(b"module function\n")

    def test_embedded_wins_over_local(self, sample_bundle: Bundle, templates_root: Path) -> None:
        """A local repository with the same literal name never shadows a built-in."""
        assert (templates_root / "http" / "go" / "http").is_dir()

        result = resolve(TemplateRef.parse("go", "http"), templates_root, sample_bundle)

        assert result.source == TemplateSource.EMBEDDED
        with result.accessor.open("/handle.go") as stream:
            assert stream.read() == b"package function\n"

    def test_composite_name_resolves_local(self, sample_bundle: Bundle, templates_root: Path) -> None:
        result = resolve(TemplateRef.parse("go", "boson/json"), templates_root, sample_bundle)

        assert result.source == TemplateSource.LOCAL
        assert Path(result.location) == templates_root / "boson" / "go" / "json"
        assert [p for p, _ in result.accessor.walk("/")] == [
            "/",
            "/bin",
            "/bin/run.sh",
            "/go.mod",
            "/handle.go",
        ]

    def test_unknown_bare_name(self, sample_bundle: Bundle) -> None:
        with pytest.raises(TemplateNotFound) as exc_info:
            resolve(TemplateRef.parse("go", "doesnotexist"), bundle=sample_bundle)
        message = str(exc_info.value)
        assert "go" in message
        assert "doesnotexist" in message

    def test_unknown_bare_name_with_local_root(self, sample_bundle: Bundle, templates_root: Path) -> None:
        """A bare name that is not built in must be written as REPO/NAME."""
        with pytest.raises(InvalidTemplateName, match="REPO/NAME") as exc_info:
            resolve(TemplateRef.parse("go", "json"), templates_root, sample_bundle)
        assert exc_info.value.name == "json"

    def test_composite_without_local_root(self, sample_bundle: Bundle) -> None:
        with pytest.raises(TemplateNotFound) as exc_info:
            resolve(TemplateRef.parse("go", "boson/json"), None, sample_bundle)
        assert exc_info.value.runtime == "go"
        assert exc_info.value.template == "boson/json"

    def test_composite_missing_locally(self, sample_bundle: Bundle, templates_root: Path) -> None:
        with pytest.raises(TemplateNotFound, match="repository 'boson'"):
            resolve(TemplateRef.parse("rust", "boson/json"), templates_root, sample_bundle)

    def test_composite_pointing_at_file(self, sample_bundle: Bundle, templates_root: Path) -> None:
        write_file(templates_root / "boson" / "go" / "plain", "not a directory")
        with pytest.raises(TemplateNotFound):
            resolve(TemplateRef.parse("go", "boson/plain"), templates_root, sample_bundle)

    @pytest.mark.parametrize("runtime", ["", "go/http", ".."])
    def test_bad_runtime_never_matches(self, sample_bundle: Bundle, runtime: str) -> None:
        with pytest.raises(TemplateNotFound):
            resolve(TemplateRef.parse(runtime, "http"), bundle=sample_bundle)

    def test_local_stat_failure_is_source_access_error(
        self, sample_bundle: Bundle, templates_root: Path
    ) -> None:
        with patch(
            "faas_cli.scaffold.resolver.LocalDirectoryAccessor.stat",
            side_effect=PermissionError(13, "Permission denied"),
        ):
            with pytest.raises(SourceAccessError) as exc_info:
                resolve(TemplateRef.parse("go", "boson/json"), templates_root, sample_bundle)
        assert isinstance(exc_info.value.cause, PermissionError)
        assert isinstance(exc_info.value.__cause__, PermissionError)


# ---------------------------------------------------------------------------
# is_builtin / list_templates
# ---------------------------------------------------------------------------

class TestIsBuiltin:
    def test_embedded(self, sample_bundle: Bundle) -> None:
        assert is_builtin("go", "http", sample_bundle)
        assert is_builtin("go", "", sample_bundle)
        assert is_builtin("node", "http", sample_bundle)

    def test_not_embedded(self, sample_bundle: Bundle) -> None:
        assert not is_builtin("node", "events", sample_bundle)
        assert not is_builtin("go", "boson/json", sample_bundle)

    def test_malformed_name_is_false(self, sample_bundle: Bundle) -> None:
        assert not is_builtin("go", "a/b/c", sample_bundle)

    def test_file_is_not_a_template(self, sample_bundle: Bundle) -> None:
        assert not is_builtin("http", "go.mod", Bundle.from_mapping({"/templates/http/go.mod": "x"}))

    def test_packaged_templates(self) -> None:
        assert is_builtin("go", "http")
        assert is_builtin("python", "events")
        assert not is_builtin("go", "doesnotexist")


class TestListTemplates:
    def test_embedded_only(self, sample_bundle: Bundle) -> None:
        refs = list_templates(bundle=sample_bundle)
        assert [str(r) for r in refs] == ["go/events", "go/http", "node/http"]

    def test_embedded_then_local(self, sample_bundle: Bundle, templates_root: Path) -> None:
        refs = list_templates(templates_root, bundle=sample_bundle)
        assert [str(r) for r in refs] == [
            "go/events",
            "go/http",
            "node/http",
            "go/boson/json",
            "node/boson/json",
            "go/http/http",
        ]

    def test_filter_by_runtime(self, sample_bundle: Bundle, templates_root: Path) -> None:
        refs = list_templates(templates_root, runtime="node", bundle=sample_bundle)
        assert refs == [TemplateRef("node", "http"), TemplateRef("node", "boson/json")]

    def test_missing_local_root(self, sample_bundle: Bundle, tmp_path: Path) -> None:
        refs = list_templates(tmp_path / "nope", bundle=sample_bundle)
        assert len(refs) == 3

    def test_listing_failure(self, sample_bundle: Bundle, templates_root: Path) -> None:
        with patch.object(Path, "iterdir", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(SourceAccessError):
                list_templates(templates_root, bundle=sample_bundle)
