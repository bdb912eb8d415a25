"""Test helpers: a recording ProcessExecutor and si XML report builders."""

from typing import Callable, Union
from xml.sax.saxutils import escape

from mks_sync.execution.process_executor import ProcessResult
from mks_sync.models.config import MksConfig

Response = Union[ProcessResult, list[ProcessResult], Callable[[list[str]], ProcessResult]]


class RecordingExecutor:
    """ProcessExecutor stub that records calls and replays canned output.

    Responses are keyed by si sub-command (the first argument). A response may
    be a single ProcessResult, a list consumed in order, or a callable taking
    the argument list.
    """

    def __init__(self, responses: dict[str, Response] | None = None):
        self.responses: dict[str, Response] = dict(responses or {})
        self.calls: list[tuple[str, list[str], float]] = []

    def execute(self, executable: str, args: list[str], timeout: float) -> ProcessResult:
        self.calls.append((executable, list(args), timeout))
        response = self.responses.get(args[0], ProcessResult())
        if callable(response):
            return response(list(args))
        if isinstance(response, list):
            return response.pop(0)
        return response

    @property
    def subcommands(self) -> list[str]:
        return [args[0] for _, args, _ in self.calls]

    def calls_for(self, subcommand: str) -> list[list[str]]:
        return [args for _, args, _ in self.calls if args[0] == subcommand]


def _field(name: str, value: str | None) -> str:
    if value is None:
        return ""
    return f'<Field name="{name}"><Value dataType="string">{escape(value)}</Value></Field>'


def sandbox_changes_xml(entries: list[dict]) -> str:
    """Build ``si viewsandbox --xmlapi`` output.

    Each entry holds ``name``, ``delta`` and optionally ``date`` and ``model_type``.
    """
    items = []
    for entry in entries:
        model_type = entry.get("model_type", "si.Member")
        items.append(
            f'<WorkItem id="{escape(entry["name"])}" modelType="{model_type}">'
            + _field("name", entry["name"])
            + _field("deltaType", entry.get("delta"))
            + _field("memberrevdate", entry.get("date"))
            + "</WorkItem>"
        )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<Response command="viewsandbox" app="si" version="4.10">'
        f'<WorkItems selectionType="ISandboxSelection">{"".join(items)}</WorkItems>'
        "</Response>"
    )


def member_info_xml(
    revision: str | None = "1.2",
    author: str | None = "jdoe",
    date: str | None = "2024-01-01T12:00:00",
    description: str | None = "Fixed the build",
) -> str:
    """Build ``si memberinfo --xmlapi`` output for a single member."""
    revision_field = (
        f'<Field name="memberrev"><Item id="{revision}" modelType="si.Revision"/></Field>'
        if revision is not None
        else ""
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<Response command="memberinfo" app="si" version="4.10">'
        '<WorkItems selectionType="IMemberSelection">'
        '<WorkItem id="member" modelType="si.Member">'
        + _field("description", description)
        + _field("date", date)
        + _field("author", author)
        + revision_field
        + "</WorkItem></WorkItems></Response>"
    )


def make_config(**overrides) -> MksConfig:
    values = {
        "executable": "si",
        "user": "builder",
        "password": "s3cret",
        "hostname": "mks.example.com",
        "sandbox_root": "/sandbox",
        "sandbox_file": "project.pj",
    }
    values.update(overrides)
    return MksConfig(**values)
