"""Finding and replacing the product images referenced by the operator sources."""

import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Pattern

import requests
import semver
import yaml

from delorean.fileio import MAPPING_FILE, write_to_file

logger = logging.getLogger(__name__)

ENVOY_PROXY = "envoyProxy"
RATE_LIMITING = "rateLimiting"
RHSSO = "rhsso"

VALID_IMAGES = (ENVOY_PROXY, RATE_LIMITING, RHSSO)

_RATE_LIMITING_TAGS_URL = "https://index.docker.io/v1/repositories/envoyproxy/ratelimit/tags/"
_ASSIGNED_STRING = re.compile(r'= ".*"')


class ImageReplaceError(Exception):
    """Raised when an image or its version cannot be found or understood."""


@dataclass(frozen=True)
class ImageDetails:
    """How to locate, read and replace one kind of product image."""

    file_location: Callable[[str], str]
    line_regex: Pattern[str]
    get_current_version: Callable[[str, str, Pattern[str]], semver.Version]
    replace_image: Callable[[str, str, Pattern[str], str], None]
    mirror_repo: str
    origin_repo: str = ""
    get_origin_image: Optional[Callable[[str, str], str]] = None


def get_rate_limiting_origin_image(repo: str, image_tag: str) -> str:
    """Return ``repo:image_tag`` after checking that the tag exists upstream."""
    url = _RATE_LIMITING_TAGS_URL + image_tag
    response = requests.get(url, timeout=60)
    if response.status_code != 200:
        raise ImageReplaceError(
            f"Image tag does not exist: {url} http Status "
            f"{response.status_code} {response.reason}"
        )
    return f"{repo}:{image_tag}"


def _parse_tolerant(text: str) -> semver.Version:
    text = text.strip()
    if text.startswith("v"):
        text = text[1:]
    parts = text.split(".", 2)
    if len(parts) < 3:
        if any(c in parts[-1] for c in "+-"):
            raise ValueError("Short version cannot contain PreRelease/Build meta data")
        parts += ["0"] * (3 - len(parts))
        text = ".".join(parts)
    return semver.Version.parse(text)


def _version_from_image_parts(parts: list[str], image: str) -> semver.Version:
    if len(parts) != 2:
        raise ImageReplaceError(f"Unexpected image string structure {image}")
    pieces = parts[1].split("-")
    try:
        version = _parse_tolerant(pieces[0])
    except ValueError as err:
        raise ImageReplaceError(
            f"Unexpected image version structure {parts[1]}, Error: {err}"
        ) from err
    if len(pieces) == 1:
        return version
    try:
        return semver.Version.parse(f"{version}-{pieces[1]}")
    except ValueError as err:
        raise ImageReplaceError(
            f"Unexpected image version structure {pieces[1]}, Error: {err}"
        ) from err


def get_new_version(new_image: str) -> semver.Version:
    """Return the version carried in the tag of ``new_image``."""
    return _version_from_image_parts(new_image.split(":"), new_image)


def _read_text(path: str) -> str:
    with open(path, encoding="utf-8") as handle:
        return handle.read()


def _write_text(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)


def _image_line_from_file(op_dir: str, file_location: str, line_regex: Pattern[str]) -> tuple[str, str]:
    content = _read_text(op_dir + file_location)
    match = line_regex.search(content)
    return (match.group(0) if match else ""), content


def is_valid_type(image_type: str) -> bool:
    """True when ``image_type`` names a known image kind."""
    return image_type in VALID_IMAGES


def _envoy_proxy_file_location(op_dir: str) -> str:
    return "/pkg/products/threescale/reconciler.go"


def _current_envoy_proxy_version(op_dir: str, file_location: str, line_regex: Pattern[str]) -> semver.Version:
    image, _ = _image_line_from_file(op_dir, file_location, line_regex)
    image = image.replace('marin3r.3scale.net/envoy-image"] = ', "").replace('"', "")
    return _version_from_image_parts(image.split(":"), image)


def get_current_envoy_proxy_image(op_dir: str, file_location: str, line_regex: Pattern[str]) -> tuple[str, str]:
    """Return the envoy proxy image and the text of the file that holds it."""
    line, content = _image_line_from_file(op_dir, file_location, line_regex)
    match = _ASSIGNED_STRING.search(line)
    image = match.group(0) if match else ""
    image = image.replace('= "', "", 1).replace('"', "", 1).strip()
    if not image:
        raise ImageReplaceError("Failed to find current image to replace")
    return image, content


def _replace_envoy_proxy_image(op_dir: str, file_location: str, line_regex: Pattern[str], new_image: str) -> None:
    current, content = get_current_envoy_proxy_image(op_dir, file_location, line_regex)
    logger.info("Found envoy proxy image to replace: %s", current)
    _write_text(op_dir + file_location, content.replace(current, new_image, 1))


def _rate_limiting_file_location(op_dir: str) -> str:
    return "/pkg/products/marin3r/rateLimitService.go"


def _current_rate_limiting_version(op_dir: str, file_location: str, line_regex: Pattern[str]) -> semver.Version:
    image, _ = _image_line_from_file(op_dir, file_location, line_regex)
    image = image.replace('"', "").replace(",", "")
    return _version_from_image_parts(image.split(":"), image)


def get_current_rate_limiting_image(op_dir: str, file_location: str, line_regex: Pattern[str]) -> tuple[str, str]:
    """Return the rate limiting image and the text of the file that holds it."""
    line, content = _image_line_from_file(op_dir, file_location, line_regex)
    image = line.replace('",', "", 1).strip()
    if not image:
        raise ImageReplaceError("Failed to find current image to replace")
    return image, content


def _replace_rate_limiting_image(op_dir: str, file_location: str, line_regex: Pattern[str], new_image: str) -> None:
    current, content = get_current_rate_limiting_image(op_dir, file_location, line_regex)
    logger.info("Found rate limiting image to replace: %s", current)
    _write_text(op_dir + file_location, content.replace(current, new_image, 1))


def create_mirror_map(directory: str, image_type: str, origin_image: str) -> None:
    """Write the mirror mapping from ``origin_image`` to its mirror repository."""
    if image_type not in IMAGE_SUBS:
        raise ImageReplaceError(f"Unknown image type {image_type}")
    new_version = get_new_version(origin_image)
    dest = f"{IMAGE_SUBS[image_type].mirror_repo}:{new_version}"
    write_to_file(os.path.join(directory, MAPPING_FILE), [f"{origin_image} {dest}"])


def _load_yaml_file(path: str, what: str) -> Any:
    try:
        text = _read_text(path)
    except OSError as err:
        raise ImageReplaceError(f"Unable to locate {what}: {path}") from err
    try:
        return yaml.safe_load(text), text
    except yaml.YAMLError as err:
        raise ImageReplaceError(f"Unable to parse configuration file: {err}") from err


def _rhsso_version_from_package(root: str) -> str:
    package, _ = _load_yaml_file(root + "rhsso.package.yaml", "rhsso.package.yaml file")
    for channel in (package or {}).get("channels") or []:
        if channel.get("name") == "rhmi":
            current_csv = str(channel.get("currentCSV", "")).split(".v")
            if len(current_csv) == 2:
                return current_csv[1]
    raise ImageReplaceError("Failed to find version currentCSV with valid string")


def _rhsso_file_location(op_dir: str) -> str:
    root = op_dir + "/manifests/integreatly-rhsso/"
    try:
        version = _rhsso_version_from_package(root)
    except ImageReplaceError as err:
        if isinstance(err.__cause__, OSError):
            raise
        return ""
    return f"{root}{version}/keycloak-operator.v{version}.clusterserviceversion.yaml"


def get_rhsso_product_image_from_csv(location: str) -> tuple[str, str]:
    """Return the RHSSO OpenJDK image named in a CSV and the CSV's text."""
    manifest, content = _load_yaml_file(location, "manifest file")
    spec = ((manifest or {}).get("spec") or {}).get("install") or {}
    deployments = (spec.get("spec") or {}).get("deployments") or []
    for deployment in deployments:
        if deployment.get("name") != "keycloak-operator":
            continue
        template = ((deployment.get("spec") or {}).get("template") or {}).get("spec") or {}
        containers = template.get("containers") or []
        if not containers:
            continue
        for env in containers[0].get("env") or []:
            if env.get("name") == "RELATED_IMAGE_RHSSO_OPENJDK":
                return str(env.get("value", "")), content
    raise ImageReplaceError("No image was found")


def _current_rhsso_version(op_dir: str, file_location: str, line_regex: Pattern[str]) -> semver.Version:
    image, _ = get_rhsso_product_image_from_csv(file_location)
    image = image.replace('"', "").replace(",", "")
    return _version_from_image_parts(image.split(":"), image)


def _replace_rhsso_image(op_dir: str, file_location: str, line_regex: Pattern[str], new_image: str) -> None:
    current, content = get_rhsso_product_image_from_csv(file_location)
    logger.info("Found RHSSO image to replace: %s", current)
    _write_text(file_location, content.replace(current, new_image, 1))


IMAGE_SUBS: dict[str, ImageDetails] = {
    ENVOY_PROXY: ImageDetails(
        file_location=_envoy_proxy_file_location,
        line_regex=re.compile(r"marin3r.3scale.net/envoy-image.*"),
        get_current_version=_current_envoy_proxy_version,
        replace_image=_replace_envoy_proxy_image,
        mirror_repo="quay.io/integreatly/ews-envoyproxy",
    ),
    RATE_LIMITING: ImageDetails(
        file_location=_rate_limiting_file_location,
        line_regex=re.compile(r"quay.io/integreatly/.*ratelimit.*"),
        get_current_version=_current_rate_limiting_version,
        replace_image=_replace_rate_limiting_image,
        mirror_repo="quay.io/integreatly/ews-ratelimiting",
        origin_repo="docker.io/envoyproxy/ratelimit",
        get_origin_image=get_rate_limiting_origin_image,
    ),
    RHSSO: ImageDetails(
        file_location=_rhsso_file_location,
        line_regex=re.compile(""),
        get_current_version=_current_rhsso_version,
        replace_image=_replace_rhsso_image,
        mirror_repo="quay.io/integreatly/ews-rhsso",
    ),
}