"""Tests for the per-root resource hint pipeline."""

from pathlib import Path

import pytest
from loguru import logger

from chunkhint.core.config.hint_config import HintConfig
from chunkhint.core.exceptions import HeaderWriteError
from chunkhint.core.models import Chunk, Compilation, HtmlRoot
from chunkhint.services.hint_pipeline import HintPipelineService, flatten_chunk_files


@pytest.fixture
def compilation() -> Compilation:
    main = Chunk(hash="m", name="main", files=["main.js", "main.css"], is_initial=True)
    vendor = Chunk(
        hash="v",
        name="vendor",
        files=["vendor.js", "vendor.js.map"],
        parents=[main],
        is_initial=False,
    )
    fonts = Chunk(
        hash="f", name="fonts", files=["icons.woff2"], parents=[vendor], is_initial=False
    )
    admin = Chunk(hash="a", name="admin", files=["admin.js"], is_initial=True)
    admin_lazy = Chunk(
        hash="al", name="admin-lazy", files=["admin-lazy.js"], parents=[admin],
        is_initial=False,
    )
    return Compilation(
        chunks=[main, vendor, fonts, admin, admin_lazy],
        assets=["main.js", "main.css", "vendor.js", "vendor.js.map", "index.html"],
        public_path="/static/",
    )


@pytest.fixture
def index_root() -> HtmlRoot:
    return HtmlRoot(hash="r1", output_name="index.html", chunk_hashes=("m",))


def _paths(result) -> list[str]:
    return [entry.path for entry in result.entries]


class TestComputeHints:
    def test_async_chunks_reachable_from_root(self, compilation, index_root):
        service = HintPipelineService(HintConfig(write_header=False))
        result = service.compute_hints(compilation, index_root)

        assert _paths(result) == ["/static/vendor.js", "/static/icons.woff2"]
        assert [e.as_value for e in result.entries] == ["script", "font"]
        assert [e.crossorigin for e in result.entries] == [False, True]

    def test_default_denylist_drops_source_maps(self, compilation, index_root):
        result = HintPipelineService().compute_hints(compilation, index_root)
        assert "/static/vendor.js.map" not in _paths(result)

    def test_other_root_gets_its_own_chunks(self, compilation):
        root = HtmlRoot(hash="r2", output_name="admin.html", chunk_hashes=("a",))
        result = HintPipelineService().compute_hints(compilation, root)
        assert _paths(result) == ["/static/admin-lazy.js"]

    def test_all_chunks_keeps_traversal_order(self, compilation, index_root):
        service = HintPipelineService(HintConfig(include="all-chunks"))
        result = service.compute_hints(compilation, index_root)
        assert _paths(result) == [
            "/static/main.js",
            "/static/main.css",
            "/static/vendor.js",
            "/static/icons.woff2",
        ]
        assert result.entries[1].as_value == "style"

    def test_all_assets_skips_reachability(self, compilation, index_root):
        service = HintPipelineService(HintConfig(include="all-assets"))
        result = service.compute_hints(compilation, index_root)
        assert _paths(result) == [
            "/static/main.js",
            "/static/main.css",
            "/static/vendor.js",
            "/static/index.html",
        ]

    def test_allowlist_then_denylist(self, compilation, index_root):
        config = HintConfig(
            include="all-chunks",
            file_allowlist=[r"\.js"],
            file_denylist=[r"^main"],
        )
        result = HintPipelineService(config).compute_hints(compilation, index_root)
        assert _paths(result) == ["/static/vendor.js", "/static/vendor.js.map"]

    def test_explicit_chunk_names(self, compilation, index_root):
        config = HintConfig(include=["fonts", "admin-lazy"])
        result = HintPipelineService(config).compute_hints(compilation, index_root)
        # admin-lazy is named but not reachable from index.html
        assert _paths(result) == ["/static/icons.woff2"]

    def test_prefetch_entries_are_minimal(self, compilation, index_root):
        config = HintConfig(rel="prefetch")
        result = HintPipelineService(config).compute_hints(compilation, index_root)
        assert all(e.as_value is None for e in result.entries)
        assert result.link_values[0] == "</static/vendor.js>; rel=prefetch"

    def test_duplicate_files_are_not_deduplicated(self, index_root):
        main = Chunk(hash="m", files=["shared.js"], is_initial=True)
        a = Chunk(hash="x", files=["shared.js"], parents=[main], is_initial=False)
        b = Chunk(hash="y", files=["shared.js"], parents=[main], is_initial=False)
        result = HintPipelineService().compute_hints(
            Compilation(chunks=[main, a, b]), index_root
        )
        assert _paths(result) == ["shared.js", "shared.js"]

    def test_excluded_root_yields_no_entries(self, compilation, index_root):
        config = HintConfig(excluded_roots=["index.html"])
        result = HintPipelineService(config).compute_hints(compilation, index_root)
        assert result.skipped is True
        assert result.entries == []

    def test_unknown_include_selects_nothing(self, compilation, index_root):
        config = HintConfig(include="everything")
        result = HintPipelineService(config).compute_hints(compilation, index_root)
        assert result.entries == []

    def test_cyclic_graph_is_handled(self, index_root):
        main = Chunk(hash="m", files=["main.js"], is_initial=True)
        x = Chunk(hash="x", files=["x.js"], is_initial=False)
        y = Chunk(hash="y", files=["y.js"], parents=[x], is_initial=False)
        x.parents = [y]
        z = Chunk(hash="z", files=["z.js"], parents=[y, main], is_initial=False)
        result = HintPipelineService().compute_hints(
            Compilation(chunks=[main, x, y, z]), index_root
        )
        assert _paths(result) == ["z.js"]

    def test_repeated_runs_are_identical(self, compilation, index_root):
        service = HintPipelineService(HintConfig(include="all-chunks"))
        first = service.compute_hints(compilation, index_root)
        second = service.compute_hints(compilation, index_root)
        assert first.link_values == second.link_values
        assert first.entries == second.entries


class TestDeprecatedIncludeWarning:
    def test_warns_once_per_service(self, compilation, index_root):
        messages: list[str] = []
        sink_id = logger.add(lambda m: messages.append(m.record["message"]))
        try:
            service = HintPipelineService(HintConfig(include="all"))
            first = service.compute_hints(compilation, index_root)
            service.compute_hints(compilation, index_root)
        finally:
            logger.remove(sink_id)

        assert len(first.entries) == 4
        assert sum("deprecated" in message for message in messages) == 1

    def test_unknown_include_warns_once_per_service(self, compilation, index_root):
        messages: list[str] = []
        sink_id = logger.add(lambda m: messages.append(m.record["message"]))
        try:
            service = HintPipelineService(HintConfig(include="everything"))
            service.compute_hints(compilation, index_root)
            service.compute_hints(compilation, index_root)
        finally:
            logger.remove(sink_id)

        assert sum("Unrecognized include" in message for message in messages) == 1


class TestProcessRoot:
    def test_writes_header_file(self, compilation, index_root, tmp_path: Path):
        config = HintConfig(header_dir=tmp_path)
        result = HintPipelineService(config).process_root(compilation, index_root)

        assert result.header_path == tmp_path / "index.html.header"
        assert result.header_path.read_text(encoding="utf-8") == (
            'add_header Link "</static/vendor.js>; as=script; rel=preload, '
            '</static/icons.woff2>; as=font; rel=preload; crossorigin=crossorigin";'
        )

    def test_no_header_when_disabled(self, compilation, index_root, tmp_path: Path):
        config = HintConfig(header_dir=tmp_path, write_header=False)
        result = HintPipelineService(config).process_root(compilation, index_root)
        assert result.header_path is None
        assert list(tmp_path.iterdir()) == []

    def test_no_header_without_entries(self, compilation, tmp_path: Path):
        root = HtmlRoot(hash="r", output_name="blank.html")
        config = HintConfig(header_dir=tmp_path)
        result = HintPipelineService(config).process_root(compilation, root)
        assert result.entries == []
        assert not (tmp_path / "blank.html.header").exists()

    def test_write_failure_carries_computed_result(
        self, compilation, index_root, tmp_path: Path
    ):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")
        config = HintConfig(header_dir=blocker)

        with pytest.raises(HeaderWriteError) as excinfo:
            HintPipelineService(config).process_root(compilation, index_root)

        assert excinfo.value.result is not None
        assert len(excinfo.value.result.entries) == 2

    def test_process_roots_keeps_order(self, compilation, index_root, tmp_path):
        admin = HtmlRoot(hash="r2", output_name="admin.html", chunk_hashes=("a",))
        service = HintPipelineService(HintConfig(header_dir=tmp_path))
        results = service.process_roots(compilation, [admin, index_root])
        assert [r.root.output_name for r in results] == ["admin.html", "index.html"]


def test_flatten_chunk_files():
    chunks = [Chunk(hash="a", files=["1", "2"]), Chunk(hash="b", files=["3"])]
    assert flatten_chunk_files(chunks) == ["1", "2", "3"]
