"""Launch operations of the ReportPortal API and the types they exchange."""

import os
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from delorean.reportportal.client import Client

IMPORT_FILE_FIELD_NAME = "file"

# Messages look like "Launch with id = <uuid> is successfully imported." and
# the uuid may be wrapped in single quotes.
_LAUNCH_UUID = re.compile(r".*?=\s?'?([a-zA-Z0-9-]*?)'?\s")


@dataclass
class LaunchResponse:
    """The reply to an import or update of a launch."""

    message: str = ""

    def launch_uuid(self) -> str:
        """Return the launch uuid named in the message, or "" if there is none."""
        match = _LAUNCH_UUID.search(self.message)
        return match.group(1) if match else ""


@dataclass
class LaunchDetailsResponse:
    """The details of a launch looked up by its uuid."""

    id: int = 0


@dataclass
class LaunchUpdateInput:
    """The fields of a launch that an update changes."""

    description: str = ""
    tags: list[str] = field(default_factory=list)


def _as_mapping(payload: Any) -> dict:
    return payload if isinstance(payload, dict) else {}


class LaunchService:
    """Imports, updates and looks up launches through a :class:`Client`."""

    def __init__(self, client: "Client") -> None:
        self._client = client

    def import_launch(
        self, project_name: str, import_file: str, launch_name: Optional[str] = ""
    ) -> LaunchResponse:
        """Upload the archive ``import_file`` as a new launch of ``project_name``.

        The uploaded file is named ``launch_name + ".zip"`` when a launch name
        is given, and keeps its own name otherwise.
        """
        with open(import_file, "rb") as handle:
            content = handle.read()
        file_name = f"{launch_name}.zip" if launch_name else os.path.basename(import_file)

        request = self._client.new_request("POST", f"{project_name}/launch/import", None)
        request.files = {IMPORT_FILE_FIELD_NAME: (file_name, content)}
        request.data = {"projectName": project_name}
        payload = _as_mapping(self._client.do(request))
        return LaunchResponse(message=payload.get("message", ""))

    def update(
        self, project_name: str, launch_id: int, launch_input: LaunchUpdateInput
    ) -> LaunchResponse:
        """Change the description and tags of the launch ``launch_id``."""
        request = self._client.new_request(
            "PUT", f"{project_name}/launch/{launch_id}/update", launch_input
        )
        request.headers["Content-Type"] = "application/json"
        payload = _as_mapping(self._client.do(request))
        return LaunchResponse(message=payload.get("message", ""))

    def get(self, project_name: str, launch_uuid: str) -> LaunchDetailsResponse:
        """Look up the launch with the given uuid."""
        request = self._client.new_request(
            "GET", f"{project_name}/launch/uuid/{launch_uuid}", None
        )
        payload = _as_mapping(self._client.do(request))
        return LaunchDetailsResponse(id=int(payload.get("id", 0)))