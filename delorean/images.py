"""Rewriting container image references for the delorean and OSBS registries."""

import re

OSBS_REGISTRY = "registry-proxy.engineering.redhat.com/rh-osbs"
DELOREAN_REGISTRY = "quay.io/integreatly/delorean"

_SHA_DIGEST = re.compile(r"@sha256:.*")


def _strip_sha_or_tag(image: str) -> str:
    """Fold a digest or tag into the image tag, defaulting to ``_latest``."""
    if not _SHA_DIGEST.search(image):
        parts = image.split(":")
        if len(parts) == 2:
            return f"{parts[0]}:{parts[1]}_latest"
        return f"{parts[0]}:{parts[1]}_{parts[2]}"
    name, digest = image.split("@sha256:")[:2]
    return f"{name}_{digest}"


def build_delorean_image(image: str) -> str:
    """Return the delorean mirror reference for ``image``."""
    segments = image.split("/")
    if segments[0] == "quay.io" and segments[1] == "integreatly":
        return DELOREAN_REGISTRY + image.split(":")[1]
    return _strip_sha_or_tag(f"{DELOREAN_REGISTRY}:{segments[1]}-{segments[2]}")


def build_osbs_image(image: str) -> str:
    """Return the OSBS registry reference for ``image``."""
    segments = image.split("/")

    name_and_digest = segments[2].split("@")
    if name_and_digest[0] == "crw-2-rhel8-operator":
        return f"{OSBS_REGISTRY}/{segments[1]}-operator@{name_and_digest[1]}"
    if name_and_digest[0] == "ose-cli":
        return f"{OSBS_REGISTRY}/openshift-ose-cli@{name_and_digest[1]}"

    name_and_tag = image.split(":")
    image_name = name_and_tag[0].split("/")
    if image_name[2] == "amq-broker":
        version_parts = name_and_tag[1].split(".")
        major = version_parts[0]
        minor = version_parts[1].split("-")[0]
        product = image_name[2]
        return (
            f"{OSBS_REGISTRY}/{product}-{major}-{product}-{major}{minor}"
            f"-openshift:{major}.{minor}"
        )

    return f"{OSBS_REGISTRY}/{segments[1]}-{segments[2]}"