import pytest

from delorean.rhmi_version import (
    OlmType,
    VersionError,
    parse_rhmi_version,
    parse_version,
)


@pytest.mark.parametrize(
    "version, branch, tag, pre, patch, image_tag",
    [
        ("2.0.0", "release-v2.0", "v2.0.0", False, False, "master"),
        ("2.0.0-ER1", "release-v2.0", "v2.0.0-ER1", True, False, "master"),
        ("2.0.1", "release-v2.0", "v2.0.1", False, True, "2.0"),
    ],
)
def test_release_version(version, branch, tag, pre, patch, image_tag):
    v = parse_rhmi_version(version)
    assert v.is_pre_release() is pre
    assert str(v) == version
    assert v.release_branch_name() == branch
    assert v.tag_name() == tag
    assert v.is_patch_release() is patch
    assert v.release_branch_image_tag() == image_tag


@pytest.mark.parametrize("version", ["", "2.0.0-er1-two", "2.0.0-", "2.0"])
def test_invalid_versions(version):
    with pytest.raises(VersionError):
        parse_rhmi_version(version)


@pytest.mark.parametrize("version", ["2.1.0", "2.1.0-er1", "2.1.1-er1", "2.1.1"])
def test_initial_point_release_tag(version):
    assert parse_rhmi_version(version).initial_point_release_tag() == "v2.1.0"


@pytest.mark.parametrize("version", ["2.1.0", "2.1.0-er1", "2.1.1-er1", "2.1.1"])
def test_major_minor(version):
    assert parse_rhmi_version(version).major_minor() == "2.1"


@pytest.mark.parametrize(
    "olm_type, version, expected",
    [
        ("managed-api-service", "1.1.0", "rhoam"),
        ("multitenant-managed-api-service", "1.1.0", "rhoam"),
        ("integreatly-operator", "2.7.0", "rhmi"),
    ],
)
def test_name_by_olm_type(olm_type, version, expected):
    assert parse_version(version, olm_type).name_by_olm_type() == expected


@pytest.mark.parametrize(
    "olm_type, version, expected",
    [
        ("managed-api-service", "1.1.0", "rhoam-manifest-for-release-rhoam-v1.1.0"),
        ("integreatly-operator", "2.7.0", "rhmi-manifest-for-release-v2.7.0"),
    ],
)
def test_prepare_prodsec_manifest_branch_name(olm_type, version, expected):
    assert parse_version(version, olm_type).prepare_prodsec_manifest_branch_name() == expected


def test_parse_version_rejects_unknown_olm_type():
    with pytest.raises(VersionError):
        parse_version("1.0.0", "unknown-operator")


def test_parse_rhmi_version_defaults_to_rhmi():
    assert parse_rhmi_version("2.0.0").olm_type is OlmType.RHMI


def test_rhoam_names():
    v = parse_version("1.2.3-rc1", "managed-api-service")
    assert v.tag_name() == "rhoam-v1.2.3-rc1"
    assert v.release_branch_name() == "rhoam-release-v1.2"
    assert v.rc_tag_ref() == "rhoam-v1.2.3-"
    assert v.prepare_release_branch_name() == "prepare-for-release-rhoam-v1.2.3-rc1"
    assert v.prepare_release_commit_message() == "MGDAPI-3209 prepare for release rhoam-v1.2.3-rc1"
    assert v.prepare_release_pr_title() == "release PR for version rhoam-v1.2.3-rc1"


def test_multitenant_names():
    v = parse_version("1.2.0", "multitenant-managed-api-service")
    assert v.prepare_release_branch_name() == "prepare-for-release-rhoam-v1.2.0-MT"
    assert (
        v.prepare_release_commit_message()
        == "MGDAPI-4533 prepare for multitenant release rhoam-v1.2.0"
    )
    assert v.prepare_release_pr_title() == "release PR for MT version rhoam-v1.2.0"


def test_polarion_ids():
    v = parse_rhmi_version("2.3.1-ER2")
    assert v.polarion_release_id() == "v2_3_1"
    assert v.polarion_milestone_id() == "v2_3_1_ER2"
    assert v.major_minor_patch() == "2.3.1"
    assert v.rc_tag_ref() == "v2.3.1-"
    assert v.base == "2.3.1"
    assert v.build == "ER2"