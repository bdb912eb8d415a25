"""Parsing of si ``--xmlapi`` output into Modification records.

Two report shapes are understood:

* the ``viewsandbox`` change listing, one ``WorkItem`` per changed member
* the ``memberinfo`` detail record for a single member

Both are ``Response/WorkItems/WorkItem`` documents whose data lives in
``Field`` elements looked up by their ``name`` attribute, so field order may
vary between si versions.
"""

import xml.etree.ElementTree as ET
from datetime import datetime

import structlog

from mks_sync.errors import ParseError
from mks_sync.models.modification import Modification, ModificationType

log = structlog.stdlib.get_logger()

FIELD_NAME = "name"
FIELD_DELTA_TYPE = "deltaType"
FIELD_MEMBER_REV_DATE = "memberrevdate"
FIELD_REVISION = "memberrev"
FIELD_AUTHOR = "author"
FIELD_DATE = "date"
FIELD_DESCRIPTION = "description"

DELTA_TYPES: dict[str, ModificationType] = {
    "newmem": ModificationType.ADDED,
    "added": ModificationType.ADDED,
    "add": ModificationType.ADDED,
    "newrev": ModificationType.MODIFIED,
    "modified": ModificationType.MODIFIED,
    "changed": ModificationType.MODIFIED,
    "working": ModificationType.MODIFIED,
    "dropped": ModificationType.DELETED,
    "deleted": ModificationType.DELETED,
    "missing": ModificationType.DELETED,
}

# Work items describing containers rather than members.
_CONTAINER_MODEL_TYPES = frozenset({"si.project", "si.subproject", "si.sandbox", "si.subsandbox"})

_TIMESTAMP_FORMATS = (
    "%b %d, %Y %I:%M:%S %p",
    "%b %d, %Y %H:%M:%S",
    "%m/%d/%Y %I:%M:%S %p",
    "%Y-%m-%d %H:%M:%S",
)


def parse_timestamp(value: str) -> datetime:
    """
    Parse a timestamp as written by si.

    Args:
        value: ISO 8601 text (``Z`` suffix allowed) or the ``Jan 15, 2009 11:50:36 AM`` form

    Returns:
        Parsed datetime, timezone-aware when the text carries an offset

    Raises:
        ParseError: If the text matches no known format
    """
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass

    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    raise ParseError(f"Unrecognized timestamp: {value!r}")


class MksHistoryParser:
    """Turns si XML reports into Modification records."""

    def __init__(self, sandbox_root: str | None = None):
        """
        Initialize the parser.

        Args:
            sandbox_root: Optional sandbox root; absolute member names under it
                          are reported relative to it
        """
        self._sandbox_root = _normalize(sandbox_root).rstrip("/") if sandbox_root else None

    def parse_sandbox_changes(self, output: str) -> list[Modification]:
        """
        Parse the ``viewsandbox`` change listing.

        Empty or unreadable output means si reported nothing and yields an
        empty list.

        Args:
            output: Standard output of ``si viewsandbox --xmlapi``

        Returns:
            Modifications in report order

        Raises:
            ParseError: If a recognized listing contains an unusable member entry
        """
        if not output or not output.strip():
            log.info("no_sandbox_changes_reported")
            return []

        try:
            root = _load_document(output)
        except ParseError as e:
            log.warning("sandbox_changes_unreadable", error=str(e))
            return []

        # si reports failures as an Exception element inside the Response
        _raise_on_tool_exception(root)

        work_items = root.find("WorkItems") if root.tag == "Response" else None
        if work_items is None:
            log.warning("sandbox_changes_without_work_items", root_tag=root.tag)
            return []

        # Project and sandbox entries are skipped
        modifications = []
        for work_item in work_items.findall("WorkItem"):
            model_type = (work_item.get("modelType") or "").lower()
            if model_type in _CONTAINER_MODEL_TYPES:
                continue
            modifications.append(self._parse_change(work_item))

        log.info("sandbox_changes_parsed", count=len(modifications))
        return modifications

    def parse_member_info(self, modification: Modification, output: str) -> Modification:
        """
        Parse a ``memberinfo`` record and merge it into ``modification``.

        Args:
            modification: Record to update in place
            output: Standard output of ``si memberinfo --xmlapi``

        Returns:
            The same, updated, modification

        Raises:
            ParseError: If the output is not a single-member record with a date
        """
        if not output or not output.strip():
            raise ParseError(f"Empty member info for {modification.file_name}")

        root = _load_document(output)
        # Surface si errors before reading fields
        _raise_on_tool_exception(root)

        # Exactly one member per record
        work_items = root.findall("WorkItems/WorkItem")
        if len(work_items) != 1:
            raise ParseError(
                f"Expected one member in member info for {modification.file_name}, "
                f"found {len(work_items)}"
            )
        work_item = work_items[0]

        date_text = _field_text(work_item, FIELD_DATE)
        if not date_text:
            raise ParseError(f"Member info for {modification.file_name} has no {FIELD_DATE} field")

        modification.modified_time = parse_timestamp(date_text)

        # Optional fields keep their listing values when absent
        author = _field_text(work_item, FIELD_AUTHOR)
        if author is not None:
            modification.user_name = author

        description = _field_text(work_item, FIELD_DESCRIPTION)
        if description is not None:
            modification.comment = description

        revision = _field_text(work_item, FIELD_REVISION)
        if revision is not None:
            modification.version = revision

        log.debug(
            "member_info_parsed",
            file_name=modification.file_name,
            folder_name=modification.folder_name,
            version=modification.version,
            user_name=modification.user_name,
        )
        return modification

    def _parse_change(self, work_item: ET.Element) -> Modification:
        name = _field_text(work_item, FIELD_NAME) or work_item.get("id")
        if not name:
            raise ParseError("Sandbox change entry has no member name")

        delta = _field_text(work_item, FIELD_DELTA_TYPE)
        if not delta:
            raise ParseError(f"Sandbox change entry {name!r} has no {FIELD_DELTA_TYPE} field")

        # Map delta type to change type
        change_type = DELTA_TYPES.get(delta.strip().lower())
        if change_type is None:
            raise ParseError(f"Unknown change type {delta!r} for {name!r}")

        # Split into folder and file name relative to the sandbox
        folder_name, file_name = self._split_member_name(name)
        if not file_name:
            raise ParseError(f"Sandbox change entry {name!r} does not name a file")

        # Listing date, overwritten later by member info for non-deleted members
        modified_time = None
        rev_date = _field_text(work_item, FIELD_MEMBER_REV_DATE)
        if rev_date:
            modified_time = parse_timestamp(rev_date)

        return Modification(
            type=change_type,
            file_name=file_name,
            folder_name=folder_name,
            modified_time=modified_time,
        )

    def _split_member_name(self, name: str) -> tuple[str | None, str]:
        path = _normalize(name)
        if self._sandbox_root and path.lower().startswith(self._sandbox_root.lower() + "/"):
            path = path[len(self._sandbox_root) + 1 :]

        folder, _, file_name = path.strip("/").rpartition("/")
        return (folder or None), file_name


def _normalize(path: str) -> str:
    return path.strip().replace("\\", "/")


def _load_document(output: str) -> ET.Element:
    # si may print warnings ahead of the XML document.
    start = output.find("<")
    if start < 0:
        raise ParseError("Output contains no XML document")

    try:
        return ET.fromstring(output[start:])
    except ET.ParseError as e:
        raise ParseError(f"Malformed XML output: {e}") from e


def _raise_on_tool_exception(root: ET.Element) -> None:
    for child in root:
        if child.tag.endswith("Exception"):
            message = child.findtext("Message") or (child.text or "").strip() or child.get("class")
            log.error("si_reported_exception", tag=child.tag, message=message)
            raise ParseError(f"si reported an error: {message}")


def _find_field(work_item: ET.Element, name: str) -> ET.Element | None:
    field = work_item.find(f"Field[@name='{name}']")
    if field is None:
        field = work_item.find(f".//Field[@name='{name}']")
    return field


def _field_text(work_item: ET.Element, name: str) -> str | None:
    """Value text of a field, or the id of the item it references."""
    field = _find_field(work_item, name)
    if field is None:
        return None

    value = field.find("Value")
    if value is not None:
        return (value.text or "").strip()

    item = field.find("Item")
    if item is not None:
        return item.get("id")

    return (field.text or "").strip() or None
