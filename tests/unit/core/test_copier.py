from __future__ import annotations

"""
Unit tests for the Randomized Copy Engine.

Verifies the stop condition, pattern and existence skips, flattening,
dry-run behavior, echo output and failure accounting.
"""

import dataclasses
import io
import os
import random
from unittest.mock import MagicMock

import pytest

from randcp.core.copier import copy_random
from randcp.core.filters import PatternMatcher
from randcp.core.progress import ProgressState
from randcp.core.shuffler import shuffle_leaves
from randcp.core.tree_builder import build_tree


@pytest.fixture
def flat_source(make_tree):
    return make_tree({
        "a.txt": "alpha",
        "b.log": "beta",
        "c.txt": "gamma",
        "d.md": "delta",
        "sub/e.txt": "epsilon",
    })


def _names(path):
    return sorted(os.listdir(str(path)))


def test_limit_bounds_created_files(flat_source, dest_dir, run_config_factory):
    """Never more than limit destination files per run."""
    cfg = run_config_factory(flat_source, limit=2)
    build = build_tree(cfg.source)
    shuffle_leaves(build.leaves, random.Random(3))

    report = copy_random(build, cfg, PatternMatcher(), echo_stream=io.StringIO())

    assert report.copied == 2
    assert report.attempted == 2
    assert len(_names(dest_dir)) == 2


def test_flat_scenario_skips_subdirectories(make_tree, dest_dir, run_config_factory):
    """{a.txt, b.log, sub/c.txt}, flat, limit 2 -> a.txt and b.log, no sub/."""
    source = make_tree({"a.txt": "a", "b.log": "b", "sub/c.txt": "c"})
    cfg = run_config_factory(source, limit=2)
    build = build_tree(cfg.source, recursive=False)
    shuffle_leaves(build.leaves)

    report = copy_random(build, cfg, PatternMatcher(), echo_stream=io.StringIO())

    assert report.copied == 2
    assert _names(dest_dir) == ["a.txt", "b.log"]


def test_pattern_filter_does_not_count(make_tree, dest_dir, run_config_factory):
    """Pattern \\.txt$ over {a.txt, b.log} with limit 5 copies only a.txt."""
    source = make_tree({"a.txt": "a", "b.log": "b"})
    cfg = run_config_factory(source, limit=5, pattern=r"\.txt$")
    build = build_tree(cfg.source)

    report = copy_random(build, cfg, PatternMatcher(cfg.pattern), echo_stream=io.StringIO())

    assert report.copied == 1
    assert report.skipped_pattern == 1
    assert _names(dest_dir) == ["a.txt"]


def test_existing_destination_is_skipped(make_tree, dest_dir, run_config_factory):
    """A candidate whose name exists at the destination is skipped, not overwritten."""
    source = make_tree({"a.txt": "new", "b.txt": "b"})
    (dest_dir / "a.txt").write_text("old", encoding="utf-8")
    cfg = run_config_factory(source, limit=5)
    build = build_tree(cfg.source)

    report = copy_random(build, cfg, PatternMatcher(), echo_stream=io.StringIO())

    assert report.skipped_existing == 1
    assert report.copied == 1
    assert (dest_dir / "a.txt").read_text(encoding="utf-8") == "old"
    assert (dest_dir / "b.txt").read_text(encoding="utf-8") == "b"


def test_recursive_copies_are_flattened(make_tree, dest_dir, run_config_factory):
    source = make_tree({"x/one.txt": "1", "y/z/two.txt": "2"})
    cfg = run_config_factory(source, limit=10, recursive=True)
    build = build_tree(cfg.source, recursive=True)

    report = copy_random(build, cfg, PatternMatcher(), echo_stream=io.StringIO())

    assert report.copied == 2
    assert _names(dest_dir) == ["one.txt", "two.txt"]
    assert (dest_dir / "two.txt").read_text(encoding="utf-8") == "2"


def test_duplicate_base_names_counted_once(make_tree, dest_dir, run_config_factory):
    """Two sources sharing a base name yield a single destination file."""
    source = make_tree({"x/same.txt": "x", "y/same.txt": "y"})
    cfg = run_config_factory(source, limit=5, recursive=True)
    build = build_tree(cfg.source, recursive=True)

    report = copy_random(build, cfg, PatternMatcher(), echo_stream=io.StringIO())

    assert report.copied == 1
    assert report.skipped_existing == 1
    assert _names(dest_dir) == ["same.txt"]


def test_dry_run_matches_real_selection(flat_source, tmp_path, run_config_factory):
    """Dry-run echoes the same selection as a real run and creates nothing."""
    dry_out = io.StringIO()
    real_out = io.StringIO()

    dry_cfg = run_config_factory(flat_source, limit=3, echo=True, dry_run=True)
    dry_build = build_tree(dry_cfg.source, recursive=True)
    shuffle_leaves(dry_build.leaves, random.Random(11))
    dry_report = copy_random(dry_build, dry_cfg, PatternMatcher(), echo_stream=dry_out)

    assert dry_report.copied == 3
    assert os.listdir(dry_cfg.dest) == []

    real_dest = tmp_path / "real_dest"
    real_dest.mkdir()
    real_cfg = run_config_factory(flat_source, limit=3, echo=True)
    real_cfg = dataclasses.replace(real_cfg, dest=str(real_dest))
    real_build = build_tree(real_cfg.source, recursive=True)
    shuffle_leaves(real_build.leaves, random.Random(11))
    real_report = copy_random(real_build, real_cfg, PatternMatcher(), echo_stream=real_out)

    assert real_report.copied == 3
    assert dry_out.getvalue() == real_out.getvalue()
    assert len(os.listdir(str(real_dest))) == 3


def test_echo_prints_display_paths(make_tree, run_config_factory):
    source = make_tree({"sub/c.txt": "c"})
    cfg = run_config_factory(source, limit=1, recursive=True, echo=True, dry_run=True)
    build = build_tree(cfg.source, recursive=True)
    out = io.StringIO()

    copy_random(build, cfg, PatternMatcher(), echo_stream=out)

    assert out.getvalue() == os.path.join("src", "sub", "c.txt") + "\n"


def test_no_echo_writes_nothing(flat_source, run_config_factory):
    cfg = run_config_factory(flat_source, limit=2, dry_run=True)
    out = io.StringIO()

    copy_random(build_tree(cfg.source), cfg, PatternMatcher(), echo_stream=out)

    assert out.getvalue() == ""


def test_copy_failures_count_as_attempts(flat_source, run_config_factory, caplog):
    """Failed copies are logged, consume the limit and are not counted as copied."""
    copy_func = MagicMock(side_effect=[(False, "boom"), (True, None)])
    cfg = run_config_factory(flat_source, limit=2)
    build = build_tree(cfg.source)

    report = copy_random(build, cfg, PatternMatcher(), copy_func=copy_func, echo_stream=io.StringIO())

    assert copy_func.call_count == 2
    assert report.attempted == 2
    assert report.failed == 1
    assert report.copied == 1
    assert any("boom" in r.getMessage() for r in caplog.records)


def test_copy_func_receives_full_paths(make_tree, dest_dir, run_config_factory):
    source = make_tree({"sub/c.txt": "c"})
    copy_func = MagicMock(return_value=(True, None))
    cfg = run_config_factory(source, recursive=True)
    build = build_tree(cfg.source, recursive=True)

    copy_random(build, cfg, PatternMatcher(), copy_func=copy_func, echo_stream=io.StringIO())

    copy_func.assert_called_once_with(
        os.path.join(build.root_path, "sub", "c.txt"),
        os.path.join(str(dest_dir), "c.txt"),
    )


def test_progress_is_incremented_per_attempt(flat_source, run_config_factory):
    cfg = run_config_factory(flat_source, limit=3, dry_run=True)
    progress = ProgressState(target=3)

    copy_random(build_tree(cfg.source), cfg, PatternMatcher(), progress=progress, echo_stream=io.StringIO())

    assert progress.copied == 3


def test_exhausted_source_stops_early(make_tree, run_config_factory):
    """limit 3 with one matching file copies one."""
    source = make_tree({"only.txt": "o", "skip.log": "s"})
    cfg = run_config_factory(source, limit=3, pattern=r"\.txt$")
    progress = ProgressState(target=3)

    report = copy_random(
        build_tree(cfg.source), cfg, PatternMatcher(cfg.pattern),
        progress=progress, echo_stream=io.StringIO(),
    )

    assert report.copied == 1
    assert report.candidates == 2
    assert progress.copied == 1
