"""Traceability engine --- the certification state machine.

The engine owns every lifecycle transition of a project's manifest:

- **init**: inject the expert Artifact Set, fingerprint it, create the
  manifest. ``UNINITIALIZED -> CERTIFIED_CLEAN``.
- **check**: compare live digests with the manifest. Read-only; reports
  ``CLEAN`` or ``DRIFTED`` with a per-path classification.
- **certify**: accept what is on disk as the new baseline and stamp
  ``customized_at``. ``DRIFTED -> RECERTIFIED``.

States are never stored. They are recomputed from the manifest and the
live files on every call, so the only persistent state is ``ratel.yaml``
and the artifact files themselves.

The project root travels inside the ``ProjectProfile`` argument of every
call; one engine instance can serve any number of projects.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ratel.artifacts.catalog import DEFAULT_CONTEXT, Artifact, ArtifactSet, artifact_set_for
from ratel.artifacts.injector import ArtifactInjector
from ratel.core.engine.models import CheckReport, DriftEntry, DriftStatus, ProjectState
from ratel.core.fingerprint import file_present, fingerprint_file
from ratel.core.manifest import Manifest, ManifestStore
from ratel.exceptions import AlreadyInitializedError, NotInitializedError
from ratel.profile.models import ProjectProfile

logger = logging.getLogger(__name__)

Catalog = Callable[[ProjectProfile, str], ArtifactSet]


class TraceabilityEngine:
    """Runs ``init``, ``check`` and ``certify`` against a project.

    Args:
        injector: Collaborator that materializes artifacts. Defaults to
            ``ArtifactInjector``.
        catalog: Resolves the Artifact Set for a profile and context.
            Defaults to ``artifact_set_for``.
        store_factory: Builds the ``ManifestStore`` for a project root.

    Example::

        engine = TraceabilityEngine()
        profile = detect_project(Path("."))
        engine.init(profile, context="banking")
        report = engine.check(profile)
        if not report.is_clean:
            engine.certify(profile)
    """

    def __init__(
        self,
        injector: ArtifactInjector | None = None,
        catalog: Catalog = artifact_set_for,
        store_factory: Callable[..., ManifestStore] = ManifestStore,
    ) -> None:
        self.injector = injector if injector is not None else ArtifactInjector()
        self.catalog = catalog
        self.store_factory = store_factory

    def store(self, profile: ProjectProfile) -> ManifestStore:
        """Manifest store for the profile's project root."""
        return self.store_factory(profile.root)

    # -- init ---------------------------------------------------------------

    def init(
        self,
        profile: ProjectProfile,
        context: str = DEFAULT_CONTEXT,
        force: bool = False,
    ) -> Manifest:
        """Inject the expert baseline and create the manifest.

        Args:
            profile: Target project.
            context: Context label selecting the Artifact Set variant.
            force: Overwrite an existing manifest (and re-inject the
                canonical artifacts) instead of failing.

        Returns:
            The manifest that was saved.

        Raises:
            AlreadyInitializedError: If a manifest exists and ``force`` is
                false.
            InjectionFailedError: If an artifact cannot be written.
            ReadError: If an injected artifact cannot be read back.
            WriteError: If the manifest cannot be saved.
        """
        store = self.store(profile)
        if store.exists():
            if not force:
                raise AlreadyInitializedError(
                    f"{store.path.name} already exists in {profile.root}. "
                    "Use --force to overwrite it.",
                    store.path,
                )
            logger.warning("Overwriting existing manifest %s", store.path)

        artifacts = self.catalog(profile, context)
        self.injector.inject(profile, artifacts)

        hashes = {
            artifact.relative_path: fingerprint_file(profile.resolve(artifact.relative_path))
            for artifact in artifacts
        }
        manifest = Manifest.create(profile.project_type, context, hashes)
        store.save(manifest)
        logger.info(
            "Initialized %s project with %d expert artifact(s)",
            profile.project_type.value,
            len(hashes),
        )
        return manifest

    # -- check --------------------------------------------------------------

    def check(self, profile: ProjectProfile) -> CheckReport:
        """Compare every tracked artifact with its certified digest.

        Never writes anything. Files present in the tree but not tracked by
        the manifest are ignored.

        Returns:
            A ``CheckReport``; drift is reported there, not raised.

        Raises:
            NotInitializedError: If the project has no manifest.
            ManifestError: If the manifest is malformed.
            ReadError: If a tracked file exists but cannot be read.
        """
        manifest = self.store(profile).load()
        entries: list[DriftEntry] = []
        for rel_path, expected in manifest.expert_hashes.items():
            target = profile.resolve(rel_path)
            if not file_present(target):
                entries.append(DriftEntry(rel_path, DriftStatus.MISSING, expected))
                continue
            actual = fingerprint_file(target)
            status = DriftStatus.UNCHANGED if actual == expected else DriftStatus.MODIFIED
            entries.append(DriftEntry(rel_path, status, expected, actual))

        report = CheckReport(
            entries=tuple(entries),
            context=manifest.context,
            initialized_at=manifest.initialized_at,
            customized_at=manifest.customized_at,
        )
        logger.debug(
            "Check of %s: %s (%d tracked, %d modified, %d missing)",
            profile.root,
            report.verdict.value,
            len(entries),
            len(report.modified),
            len(report.missing),
        )
        return report

    # -- certify ------------------------------------------------------------

    def certify(self, profile: ProjectProfile) -> Manifest:
        """Accept the current on-disk artifacts as the new baseline.

        Tracked files are rehashed as they are. Paths in the current
        Artifact Set definition that are absent from disk are injected at
        their canonical content first. Tracked files that vanished and are
        no longer part of the definition are dropped.

        Returns:
            The re-certified manifest that was saved.

        Raises:
            NotInitializedError: If the project has no manifest.
            ReadError: If a tracked file exists but cannot be read.
            InjectionFailedError: If a canonical artifact cannot be written.
            WriteError: If the manifest cannot be saved.
        """
        store = self.store(profile)
        manifest = store.load()
        definition = self.catalog(profile, manifest.context)
        defined_paths = {artifact.relative_path for artifact in definition}

        baseline: dict[str, str] = {}
        for rel_path in manifest.expert_hashes:
            target = profile.resolve(rel_path)
            if file_present(target):
                baseline[rel_path] = fingerprint_file(target)
            elif rel_path not in defined_paths:
                logger.warning("Dropping %s from the baseline: file is missing", rel_path)

        # Everything already on disk is hashed before the first write.
        to_inject: list[Artifact] = []
        for artifact in definition:
            if artifact.relative_path in baseline:
                continue
            target = profile.resolve(artifact.relative_path)
            if file_present(target):
                baseline[artifact.relative_path] = fingerprint_file(target)
            else:
                to_inject.append(artifact)

        if to_inject:
            logger.info("Materializing %d canonical artifact(s)", len(to_inject))
            self.injector.inject(profile, tuple(to_inject))
            for artifact in to_inject:
                baseline[artifact.relative_path] = fingerprint_file(
                    profile.resolve(artifact.relative_path)
                )

        changed = sorted(
            path for path, digest in baseline.items()
            if manifest.expert_hashes.get(path) != digest
        )
        for rel_path in changed:
            logger.info("Re-certified %s", rel_path)

        certified = manifest.recertified(baseline)
        store.save(certified)
        return certified

    # -- state --------------------------------------------------------------

    def state(self, profile: ProjectProfile) -> ProjectState:
        """Compute the lifecycle state of a project."""
        try:
            report = self.check(profile)
        except NotInitializedError:
            return ProjectState.UNINITIALIZED
        return report.state
