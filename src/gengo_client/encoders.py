from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from gengo_client.coerce import bool_to_wire
from gengo_client.http_client import FilePart
from gengo_client.json_utils import JSONObject, JSONValue
from gengo_client.models import Job, JobAction, JobStatus, JobType
from gengo_client.request import QueryValue


def wire_key(index: int) -> str:
    """Wire key for the job at a 0-based list position."""
    return f"job_{index + 1}"


def _put(obj: JSONObject, key: str, value: str | int | bool | None) -> None:
    if value is None:
        return
    obj[key] = bool_to_wire(value) if isinstance(value, bool) else value


def encode_new_job(job: Job) -> JSONObject | None:
    """Body entry for a job submission, or None when the job cannot be submitted."""
    pair = job.language_pair
    if job.type is None or pair is None:
        return None
    out: JSONObject = {}
    _put(out, "type", job.type.value)
    _put(out, "slug", job.slug)
    _put(out, "body_src", job.source_text)
    _put(out, "lc_src", pair.source.code)
    _put(out, "lc_tgt", pair.target.code)
    _put(out, "tier", pair.tier.value)
    _put(out, "identifier", job.identifier)
    _put(out, "auto_approve", job.auto_approve)
    _put(out, "comment", job.comment)
    _put(out, "custom_data", job.custom_data)
    _put(out, "force", job.force)
    _put(out, "use_preferred", job.use_preferred)
    _put(out, "position", job.position)
    _put(out, "purpose", job.purpose)
    _put(out, "tone", job.tone)
    _put(out, "callback_url", job.callback_url)
    _put(out, "max_chars", job.max_chars)
    _put(out, "as_group", job.as_group)
    return out


def encode_new_jobs(jobs: Sequence[Job]) -> JSONObject:
    entries: JSONObject = {}
    for index, job in enumerate(jobs):
        entry = encode_new_job(job)
        if entry is not None:
            entries[wire_key(index)] = entry
    return {"jobs": entries}


def encode_quote_jobs(jobs: Sequence[Job]) -> tuple[JSONObject, dict[str, FilePart]]:
    """Body and file parts for a quote request.

    File jobs reference their upload through ``file_key``; text jobs carry
    their source inline.
    """
    entries: JSONObject = {}
    files: dict[str, FilePart] = {}
    for index, job in enumerate(jobs):
        pair = job.language_pair
        if pair is None or job.type is None:
            continue
        entry: JSONObject = {
            "lc_src": pair.source.code,
            "lc_tgt": pair.target.code,
            "tier": pair.tier.value,
            "type": job.type.value,
        }
        if job.type is JobType.FILE:
            file_key = f"file_{index + 1}"
            entry["file_key"] = file_key
            source_file = job.source_file
            if source_file is not None:
                files[file_key] = (source_file.name, source_file.data, source_file.mime_type)
        elif job.source_text is not None:
            entry["body_src"] = job.source_text
        entries[wire_key(index)] = entry
    return {"jobs": entries}, files


def encode_action(action: JobAction) -> JSONObject:
    if action["action"] == "revise":
        return {"action": "revise", "comment": action["comment"]}
    if action["action"] == "approve":
        body: JSONObject = {"action": "approve"}
        feedback = action["feedback"]
        _put(body, "rating", feedback.get("rating"))
        _put(body, "for_translator", feedback.get("comment_for_translator"))
        _put(body, "for_mygengo", feedback.get("comment_for_gengo"))
        _put(body, "public", feedback.get("is_public"))
        return body
    return {
        "action": "reject",
        "reason": action["reason"].value,
        "comment": action["comment"],
        "captcha": action["captcha"],
        "follow_up": action["follow_up"].value,
    }


def encode_jobs_query(
    *,
    status: JobStatus | None = None,
    after: datetime | int | None = None,
    count: int | None = None,
) -> dict[str, QueryValue]:
    query: dict[str, QueryValue] = {}
    if status is not None:
        query["status"] = status.value
    if isinstance(after, datetime):
        query["timestamp_after"] = int(after.timestamp())
    elif after is not None:
        query["timestamp_after"] = int(after)
    if count is not None:
        query["count"] = count
    return query


def encode_comment(body: str) -> dict[str, JSONValue]:
    return {"body": body}


__all__ = [
    "encode_action",
    "encode_comment",
    "encode_jobs_query",
    "encode_new_job",
    "encode_new_jobs",
    "encode_quote_jobs",
    "wire_key",
]
