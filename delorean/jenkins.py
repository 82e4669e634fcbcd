"""Jenkins pipeline run status and its conversion into JUnit reports."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, TextIO

TEST_SUITE_NAME = "pipeline-status"
PIPELINE_RUN_STATUS_FAILED = "FAILED"
PIPELINE_RUN_STATUS_ABORTED = "ABORTED"

_XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'


@dataclass
class JUnitSkipMessage:
    """Why a test case was skipped."""

    message: str = ""


@dataclass
class JUnitProperty:
    """A name/value property of a test suite."""

    name: str
    value: str


@dataclass
class JUnitFailure:
    """Details of a failed test case."""

    message: str = ""
    type: str = ""
    contents: str = ""


@dataclass
class JUnitTestCase:
    """A single test case with its result."""

    name: str
    time: str
    classname: str = ""
    skip_message: Optional[JUnitSkipMessage] = None
    failure: Optional[JUnitFailure] = None


@dataclass
class JUnitTestSuite:
    """A JUnit test suite holding test cases."""

    name: str
    tests: int = 0
    failures: int = 0
    time: str = ""
    properties: list[JUnitProperty] = field(default_factory=list)
    test_cases: list[JUnitTestCase] = field(default_factory=list)


@dataclass
class JUnitTestSuites:
    """A collection of JUnit test suites."""

    suites: list[JUnitTestSuite] = field(default_factory=list)

    def to_xml(self) -> str:
        """Render the suites as a JUnit XML document, tab indented."""
        root = ET.Element("testsuites")
        for suite in self.suites:
            suite_el = ET.SubElement(
                root,
                "testsuite",
                {
                    "tests": str(suite.tests),
                    "failures": str(suite.failures),
                    "time": suite.time,
                    "name": suite.name,
                },
            )
            if suite.properties:
                props = ET.SubElement(suite_el, "properties")
                for prop in suite.properties:
                    ET.SubElement(props, "property", {"name": prop.name, "value": prop.value})
            for case in suite.test_cases:
                case_el = ET.SubElement(
                    suite_el,
                    "testcase",
                    {"classname": case.classname, "name": case.name, "time": case.time},
                )
                if case.skip_message is not None:
                    ET.SubElement(case_el, "skipped", {"message": case.skip_message.message})
                if case.failure is not None:
                    failure_el = ET.SubElement(
                        case_el,
                        "failure",
                        {"message": case.failure.message, "type": case.failure.type},
                    )
                    if case.failure.contents:
                        failure_el.text = case.failure.contents
        ET.indent(root, space="\t")
        body = ET.tostring(root, encoding="unicode", short_empty_elements=False)
        return _XML_HEADER + body + "\n"

    def write_xml(self, stream: TextIO) -> None:
        """Write the XML document to a text stream."""
        stream.write(self.to_xml())


@dataclass
class PipelineRunStageError:
    type: str = ""
    message: str = ""


@dataclass
class PipelineRunStage:
    name: str = ""
    start_time_millis: int = 0
    duration_millis: int = 0
    status: str = ""
    error: PipelineRunStageError = field(default_factory=PipelineRunStageError)


def _stage_from_dict(data: Mapping[str, Any]) -> PipelineRunStage:
    error = data.get("error") or {}
    return PipelineRunStage(
        name=data.get("name", ""),
        start_time_millis=int(data.get("startTimeMillis", 0)),
        duration_millis=int(data.get("durationMillis", 0)),
        status=data.get("status", ""),
        error=PipelineRunStageError(
            type=error.get("type", ""), message=error.get("message", "")
        ),
    )


def _format_millis(millis: int) -> str:
    return f"{millis / 1000:.3f}"


@dataclass
class PipelineRun:
    """The status of a Jenkins pipeline run as reported by its JSON API."""

    name: str = ""
    status: str = ""
    start_time_millis: int = 0
    end_time_millis: int = 0
    duration_millis: int = 0
    stages: list[PipelineRunStage] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PipelineRun":
        """Build a run from the decoded JSON status document."""
        return cls(
            name=data.get("name", ""),
            status=data.get("status", ""),
            start_time_millis=int(data.get("startTimeMillis", 0)),
            end_time_millis=int(data.get("endTimeMillis", 0)),
            duration_millis=int(data.get("durationMillis", 0)),
            stages=[_stage_from_dict(s) for s in data.get("stages") or []],
        )

    def to_junit_suites(self, filter_text: str = "") -> JUnitTestSuites:
        """Convert the run into JUnit suites.

        The first failed and the first aborted stage are reported as failures,
        later ones as skipped. When ``filter_text`` is given, only stages whose
        name contains it appear as test cases.
        """
        suite = JUnitTestSuite(
            name=TEST_SUITE_NAME,
            tests=len(self.stages),
            time=_format_millis(self.duration_millis),
        )
        seen = set()
        for stage in self.stages:
            case = JUnitTestCase(name=stage.name, time=_format_millis(stage.duration_millis))
            if stage.status in (PIPELINE_RUN_STATUS_FAILED, PIPELINE_RUN_STATUS_ABORTED):
                if stage.status not in seen:
                    suite.failures += 1
                    case.failure = JUnitFailure(
                        message=stage.error.message, type=stage.error.type
                    )
                    seen.add(stage.status)
                else:
                    case.skip_message = JUnitSkipMessage(message=stage.error.message)

            if filter_text and filter_text not in stage.name:
                continue
            suite.test_cases.append(case)

        return JUnitTestSuites(suites=[suite])