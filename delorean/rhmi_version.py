"""Release versions of the integreatly operators and the names derived from them."""

from dataclasses import dataclass
from enum import Enum

_RELEASE_BRANCH_NAME_TEMPLATE = "prepare-for-release-{}"
_RHOAM_MANIFEST_NAME_TEMPLATE = "rhoam-manifest-for-release-{}"
_RHMI_MANIFEST_NAME_TEMPLATE = "rhmi-manifest-for-release-{}"
_RHOAM_RELEASE_JIRA = "MGDAPI-3209"
_MULTITENANT_RHOAM_RELEASE_JIRA = "MGDAPI-4533"


class OlmType(str, Enum):
    """The operator flavours a version can belong to."""

    RHMI = "integreatly-operator"
    RHOAM = "managed-api-service"
    MULTITENANT_RHOAM = "multitenant-managed-api-service"


class VersionError(ValueError):
    """Raised when a version string or OLM type cannot be accepted."""


@dataclass(frozen=True)
class RHMIVersion:
    """A version made of a base (2.0.0) and an optional build part (ER1, RC2)."""

    base: str
    build: str
    major: str
    minor: str
    patch: str
    olm_type: OlmType = OlmType.RHMI

    def __str__(self) -> str:
        return f"{self.base}-{self.build}" if self.build else self.base

    @property
    def _is_rhoam(self) -> bool:
        return self.olm_type in (OlmType.RHOAM, OlmType.MULTITENANT_RHOAM)

    def is_pre_release(self) -> bool:
        """True when the version carries a build part such as -ER1 or -RC1."""
        return self.build != ""

    def release_branch_name(self) -> str:
        prefix = "rhoam-release-v" if self._is_rhoam else "release-v"
        return prefix + self.major_minor()

    def tag_name(self) -> str:
        prefix = "rhoam-v" if self._is_rhoam else "v"
        return prefix + str(self)

    def rc_tag_ref(self) -> str:
        """A git ref prefix matching every RC tag of this version."""
        prefix = "rhoam-v" if self._is_rhoam else "v"
        return f"{prefix}{self.major_minor_patch()}-"

    def initial_point_release_tag(self) -> str:
        return f"v{self.major_minor()}.0"

    def major_minor(self) -> str:
        return f"{self.major}.{self.minor}"

    def major_minor_patch(self) -> str:
        return f"{self.major_minor()}.{self.patch}"

    def polarion_release_id(self) -> str:
        return f"v{self.major}_{self.minor}_{self.patch}"

    def polarion_milestone_id(self) -> str:
        return f"{self.polarion_release_id()}_{self.build}"

    def prepare_release_branch_name(self) -> str:
        name = _RELEASE_BRANCH_NAME_TEMPLATE.format(self.tag_name())
        if self.olm_type is OlmType.MULTITENANT_RHOAM:
            name += "-MT"
        return name

    def prepare_release_commit_message(self) -> str:
        if self.olm_type is OlmType.MULTITENANT_RHOAM:
            return (
                f"{_MULTITENANT_RHOAM_RELEASE_JIRA} prepare for multitenant "
                f"release {self.tag_name()}"
            )
        return f"{_RHOAM_RELEASE_JIRA} prepare for release {self.tag_name()}"

    def prepare_release_pr_title(self) -> str:
        if self.olm_type is OlmType.MULTITENANT_RHOAM:
            return f"release PR for MT version {self.tag_name()}"
        return f"release PR for version {self.tag_name()}"

    def prepare_prodsec_manifest_branch_name(self) -> str:
        template = (
            _RHOAM_MANIFEST_NAME_TEMPLATE
            if self._is_rhoam
            else _RHMI_MANIFEST_NAME_TEMPLATE
        )
        return template.format(self.tag_name())

    def is_patch_release(self) -> bool:
        return self.patch != "0"

    def release_branch_image_tag(self) -> str:
        """The CI image tag: "master" for minor releases, "Major.Minor" for patches."""
        return self.major_minor() if self.is_patch_release() else "master"

    def name_by_olm_type(self) -> str:
        return "rhoam" if self._is_rhoam else "rhmi"


def parse_rhmi_version(version: str) -> RHMIVersion:
    """Parse ``version`` as an RHMI version."""
    if not version:
        raise VersionError("the version can not be empty")

    pieces = version.split("-")
    if len(pieces) > 2:
        raise VersionError(f"the version {version} is invalid")
    base = pieces[0]
    build = pieces[1] if len(pieces) == 2 else ""
    if len(pieces) == 2 and not build:
        raise VersionError(f"the build part of the version {version} is empty")

    numbers = base.split(".")
    if len(numbers) < 3:
        raise VersionError(f"the version {version} is invalid")
    major, minor, patch = numbers[:3]
    return RHMIVersion(base, build, major, minor, patch, OlmType.RHMI)


def parse_version(version: str, olm_type: str) -> RHMIVersion:
    """Parse ``version`` as a version of the operator named by ``olm_type``."""
    try:
        kind = OlmType(olm_type)
    except ValueError:
        raise VersionError(f"the olmType {olm_type} is invalid") from None
    parsed = parse_rhmi_version(version)
    return RHMIVersion(
        parsed.base, parsed.build, parsed.major, parsed.minor, parsed.patch, kind
    )