# delorean

Library helpers for preparing and reporting on operator releases.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## What is inside

- `delorean.rhmi_version`: `parse_rhmi_version(version)` and
  `parse_version(version, olm_type)` return an `RHMIVersion`, from which
  branch names, tag names, RC tag refs, commit messages and PR titles are
  derived (`tag_name()`, `release_branch_name()`, `rc_tag_ref()`,
  `prepare_release_branch_name()`, `name_by_olm_type()` and more).
  The accepted OLM types are `integreatly-operator`, `managed-api-service`
  and `multitenant-managed-api-service`. Invalid input raises `VersionError`.
- `delorean.images`: `build_delorean_image` and `build_osbs_image` map image
  references to their mirror locations.
- `delorean.image_replace`: read and replace the envoy proxy, rate limiting
  and RHSSO image references in an operator source tree (`IMAGE_SUBS`,
  `get_current_envoy_proxy_image`, `get_current_rate_limiting_image`,
  `get_rhsso_product_image_from_csv`), compute a `semver.Version` from an
  image tag with `get_new_version`, and write an image mirror mapping file
  with `create_mirror_map`. Failures raise `ImageReplaceError`.
  `get_rate_limiting_origin_image` checks over HTTP that a tag exists upstream.
- `delorean.jenkins`: `PipelineRun.from_dict` reads a pipeline run status
  document; `to_junit_suites(filter_text)` turns it into `JUnitTestSuites`,
  which `to_xml()` renders and `write_xml(stream)` writes.
- `delorean.unstruct_yaml`: `load_unstruct_yaml(file)` loads a YAML mapping;
  `set("path.0.key", value)` changes a single int, bool or str value
  (other types raise `TypeError`, missing keys or indexes `ValueError`), and
  `write(file)` saves it without reordering keys.
- `delorean.fileio`: `read_yaml`, `read_json`, `write_object_to_yaml`,
  `write_k8s_object_to_yaml` (drops `status` and `creationTimestamp`),
  `write_object_to_json`, `file_exists`, `write_to_file`, `file_as_bytes`.
- `delorean.fileops`: `copy_file` and `copy_directory`, raising `CopyError`.
- `delorean.ziputil`: `zip_folder` and `read_file_from_zip`.
- `delorean.concurrency`: `parallel_limit(tasks, limit)` runs callables on at
  most `limit` threads, returns results in task order and re-raises the first
  exception a task raises.
- `delorean.env`: `add_or_update_env_var` and
  `add_or_update_env_var_with_source` for container environment lists given
  as dictionaries.
- `delorean.aws`: `download_s3_object_to_temp_dir` and `upload_file_to_s3`
  work through any object offering `download(bucket=, key=, fileobj=)` or
  `upload(bucket=, key=, body=, content_type=)`; no S3 library is bundled.
- `delorean.reportportal.client`: `Client(session=None, base_url=BASE_URL)`
  with `new_request` and `do`, raising `ReportPortalError` on bad paths or
  non-2xx replies. Its `launches` attribute is a
  `delorean.reportportal.launch.LaunchService` with `import_launch`, `update`
  and `get`.

## Example

```python
from delorean.rhmi_version import parse_version

version = parse_version("1.1.0", "managed-api-service")
print(version.tag_name())                   # rhoam-v1.1.0
print(version.release_branch_name())        # rhoam-release-v1.1
```

## What it does not do

The package is a library only: it has no command-line tool. It does not talk
to Kubernetes clusters, Git hosting services or container registries beyond
the single tag check in `get_rate_limiting_origin_image`, and it does not
read or edit ClusterServiceVersion bundles beyond finding the RHSSO image.