"""Catalog of canonical expert scenarios.

Every project receives the base access-audit scenario. A known ``context``
label adds one domain scenario next to it. Unknown labels are accepted and
recorded in the manifest, they just do not add anything.

The content here is the certified baseline: ``init`` writes these exact
bytes and fingerprints what it wrote.
"""

from __future__ import annotations

from dataclasses import dataclass

from ratel.profile.models import ProjectProfile

DEFAULT_CONTEXT = "generic"

BASE_SCENARIO_FILENAME = "security.ratel"


@dataclass(frozen=True)
class Artifact:
    """One expert test file.

    Attributes:
        relative_path: POSIX path relative to the project root. This is
            the manifest key.
        content: Canonical file content.
    """

    relative_path: str
    content: str

    @property
    def data(self) -> bytes:
        """Exact bytes written to disk."""
        return self.content.encode("utf-8")


ArtifactSet = tuple[Artifact, ...]


_BASE_SCENARIO = '''SCENARIO "Access audit"
TARGET "http://localhost:8080"
WITH_SCOPE KERNEL

STEP "Secure transport verification"
    ATTACK secure_headers
    CHECK header "Strict-Transport-Security" EXISTS
    CHECK response.status BE 200
'''

_BANKING_SCENARIO = '''SCENARIO "Transaction integrity"
TARGET "http://localhost:8080"
WITH_SCOPE BANKING

STEP "Session hardening"
    ATTACK session_fixation
    CHECK header "Set-Cookie" CONTAINS "Secure"
    CHECK header "Set-Cookie" CONTAINS "HttpOnly"

STEP "Transfer tampering"
    ATTACK parameter_tampering
    CHECK response.status BE 403
'''

_HEALTHCARE_SCENARIO = '''SCENARIO "Patient record confidentiality"
TARGET "http://localhost:8080"
WITH_SCOPE HEALTHCARE

STEP "Record access control"
    ATTACK idor
    CHECK response.status BE 403

STEP "Sensitive data caching"
    ATTACK cache_poisoning
    CHECK header "Cache-Control" CONTAINS "no-store"
'''

_ECOMMERCE_SCENARIO = '''SCENARIO "Checkout abuse"
TARGET "http://localhost:8080"
WITH_SCOPE ECOMMERCE

STEP "Price manipulation"
    ATTACK parameter_tampering
    CHECK response.status BE 400

STEP "Cross-site request forgery"
    ATTACK csrf
    CHECK response.status BE 403
'''

# context label -> (filename, content)
CONTEXT_SCENARIOS: dict[str, tuple[str, str]] = {
    "banking": ("banking.ratel", _BANKING_SCENARIO),
    "healthcare": ("healthcare.ratel", _HEALTHCARE_SCENARIO),
    "ecommerce": ("ecommerce.ratel", _ECOMMERCE_SCENARIO),
}


def artifact_set_for(profile: ProjectProfile, context: str = DEFAULT_CONTEXT) -> ArtifactSet:
    """Resolve the Artifact Set for a project and context.

    Args:
        profile: Target project. Its ``test_dir`` decides where files go.
        context: Free-form context label, matched case-insensitively
            against ``CONTEXT_SCENARIOS``.

    Returns:
        Ordered tuple of artifacts, base scenario first.
    """
    artifacts = [
        Artifact(profile.artifact_path(BASE_SCENARIO_FILENAME), _BASE_SCENARIO),
    ]
    extra = CONTEXT_SCENARIOS.get(context.strip().lower())
    if extra is not None:
        filename, content = extra
        artifacts.append(Artifact(profile.artifact_path(filename), content))
    return tuple(artifacts)
