"""Tests for ``TraceabilityEngine.certify``.

Validates that certify accepts on-disk content as the new baseline, keeps
``initialized_at`` fixed and ``customized_at`` monotonic, restores or drops
missing artifacts according to the current Artifact Set definition, and
writes nothing when a tracked or defined file cannot be read.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta, timezone

import pytest

from ratel.artifacts import Artifact, artifact_set_for
from ratel.core.engine import TraceabilityEngine
from ratel.core.fingerprint import fingerprint
from ratel.core.manifest import ManifestStore
from ratel.exceptions import NotInitializedError, ReadError
from ratel.profile import ProjectProfile


# ===========================================================================
# Baseline replacement and timestamps
# ===========================================================================


class TestCertify:
    """Validate re-certification of customized artifacts."""

    def test_accepts_modified_content(
        self, engine: TraceabilityEngine, node_project: ProjectProfile
    ) -> None:
        """The edited file's digest becomes the certified digest."""
        initial = engine.init(node_project)
        target = node_project.root / "tests" / "ratel" / "security.ratel"
        target.write_text("SCENARIO \"customized\"\n")

        certified = engine.certify(node_project)

        assert certified.expert_hashes["tests/ratel/security.ratel"] == fingerprint(
            target.read_bytes()
        )
        assert certified.customized_at is not None
        assert certified.initialized_at == initial.initialized_at
        assert certified.context == initial.context
        assert ManifestStore(node_project.root).load() == certified
        assert engine.check(node_project).is_clean

    def test_customized_at_non_decreasing(
        self, engine: TraceabilityEngine, generic_project: ProjectProfile
    ) -> None:
        """Repeated certify never moves customized_at backwards."""
        engine.init(generic_project)
        first = engine.certify(generic_project)
        second = engine.certify(generic_project)
        assert second.customized_at >= first.customized_at
        assert second.initialized_at == first.initialized_at

    def test_clock_skew_keeps_stored_timestamp(
        self, engine: TraceabilityEngine, generic_project: ProjectProfile
    ) -> None:
        """A stored customized_at ahead of the wall clock is kept."""
        manifest = engine.init(generic_project)
        future = datetime.now(timezone.utc) + timedelta(days=365)
        ManifestStore(generic_project.root).save(manifest.recertified(manifest.expert_hashes, at=future))

        assert engine.certify(generic_project).customized_at == future

    def test_not_initialized(
        self, engine: TraceabilityEngine, generic_project: ProjectProfile
    ) -> None:
        """certify without a manifest raises NotInitializedError."""
        with pytest.raises(NotInitializedError):
            engine.certify(generic_project)


# ===========================================================================
# Artifact Set reconciliation
# ===========================================================================


class TestCertifyArtifactSet:
    """Validate how certify reconciles the baseline with the catalog."""

    def test_missing_canonical_artifact_is_restored(
        self, engine: TraceabilityEngine, generic_project: ProjectProfile
    ) -> None:
        """A deleted catalog artifact is re-injected at canonical content."""
        engine.init(generic_project)
        target = generic_project.root / "security.ratel"
        target.unlink()

        certified = engine.certify(generic_project)

        canonical = artifact_set_for(generic_project)[0]
        assert target.read_bytes() == canonical.data
        assert certified.expert_hashes == {"security.ratel": fingerprint(canonical.data)}

    def test_vanished_non_catalog_file_is_dropped(
        self,
        generic_project: ProjectProfile,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A missing file no longer in the catalog leaves the baseline with a warning."""
        artifacts = [Artifact("a.ratel", "A"), Artifact("b.ratel", "B")]
        engine = TraceabilityEngine(catalog=lambda profile, context: tuple(artifacts))
        engine.init(generic_project)
        (generic_project.root / "b.ratel").unlink()
        artifacts.pop()

        with caplog.at_level(logging.WARNING, logger="ratel"):
            certified = engine.certify(generic_project)

        assert list(certified.expert_hashes) == ["a.ratel"]
        assert "b.ratel" in caplog.text

    def test_new_catalog_entries_are_added(
        self, generic_project: ProjectProfile
    ) -> None:
        """New catalog paths are tracked; existing files keep their content."""
        artifacts = [Artifact("a.ratel", "A")]
        engine = TraceabilityEngine(catalog=lambda profile, context: tuple(artifacts))
        engine.init(generic_project)
        (generic_project.root / "local.ratel").write_text("already here")
        artifacts += [Artifact("new.ratel", "NEW"), Artifact("local.ratel", "canonical")]

        certified = engine.certify(generic_project)

        assert certified.expert_hashes == {
            "a.ratel": fingerprint("A"),
            "local.ratel": fingerprint("already here"),
            "new.ratel": fingerprint("NEW"),
        }
        assert (generic_project.root / "new.ratel").read_text() == "NEW"
        assert (generic_project.root / "local.ratel").read_text() == "already here"


# ===========================================================================
# Failures leave the project untouched
# ===========================================================================


class TestCertifyReadFailures:
    """Validate that a ReadError aborts certify before anything is written."""

    def test_unreadable_tracked_file_writes_nothing(
        self, engine: TraceabilityEngine, node_project: ProjectProfile
    ) -> None:
        """An unreadable tracked file raises ReadError and keeps the manifest."""
        engine.init(node_project, context="banking")
        manifest_path = node_project.root / "ratel.yaml"
        before = manifest_path.read_bytes()
        target = node_project.root / "tests" / "ratel" / "security.ratel"
        target.unlink()
        target.mkdir()

        with pytest.raises(ReadError):
            engine.certify(node_project)
        assert manifest_path.read_bytes() == before

    def test_unreadable_new_catalog_file_injects_nothing(
        self, generic_project: ProjectProfile
    ) -> None:
        """An unreadable untracked catalog path aborts before missing artifacts are injected."""
        artifacts = [Artifact("a.ratel", "A")]
        engine = TraceabilityEngine(catalog=lambda profile, context: tuple(artifacts))
        engine.init(generic_project)
        (generic_project.root / "local.ratel").mkdir()
        artifacts += [Artifact("local.ratel", "L"), Artifact("new.ratel", "NEW")]

        with pytest.raises(ReadError):
            engine.certify(generic_project)
        assert not (generic_project.root / "new.ratel").exists()

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission bits are not enforced for root",
    )
    def test_unsearchable_parent_directory(
        self, engine: TraceabilityEngine, node_project: ProjectProfile
    ) -> None:
        """A tracked file behind an unsearchable directory raises ReadError, not MISSING."""
        engine.init(node_project)
        manifest_path = node_project.root / "ratel.yaml"
        before = manifest_path.read_bytes()
        ratel_dir = node_project.root / "tests" / "ratel"
        ratel_dir.chmod(0o600)
        try:
            with pytest.raises(ReadError):
                engine.certify(node_project)
        finally:
            ratel_dir.chmod(0o755)
        assert manifest_path.read_bytes() == before
