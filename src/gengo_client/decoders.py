"""Map decoded response payloads onto domain objects.

Every field is read defensively: a missing key or a value of the wrong shape
leaves the field absent instead of failing the whole response. The one hard
failure is a malformed ``job_<n>`` key in a quote response, because matching
it to the wrong input job would silently corrupt the caller's data.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from gengo_client.coerce import coerce_bool, coerce_date, coerce_float, coerce_int
from gengo_client.json_utils import JSONObject, JSONValue, as_object, as_object_list, optional_str
from gengo_client.models import (
    Account,
    Comment,
    CommentAuthor,
    Currency,
    Feedback,
    Glossary,
    Job,
    JobStatus,
    Language,
    LanguagePair,
    Money,
    Order,
    Revision,
    Tier,
    Translator,
    UnitType,
    empty_order,
    parse_enum,
)

# Amount keys in lookup order; the first one present wins.
_MONEY_KEYS: tuple[str, ...] = ("credits", "credits_used", "total_credits")
_JOB_KEY = re.compile(r"job_([0-9]+)")


class DecoderError(ValueError):
    """Raised when a response cannot be matched back to the request that produced it."""


def decode_money(obj: JSONObject) -> Money | None:
    amount: float | None = None
    for key in _MONEY_KEYS:
        amount = coerce_float(obj.get(key))
        if amount is not None:
            break
    if amount is None or amount < 0:
        return None
    currency = parse_enum(Currency, obj.get("currency"))
    if currency is None:
        return None
    return Money(amount, currency)


def decode_language_pair(obj: JSONObject) -> LanguagePair | None:
    """Build a pair from ``lc_src``/``lc_tgt``/``tier``.

    An unknown tier drops the pair without error.
    """
    src = optional_str(obj, "lc_src")
    tgt = optional_str(obj, "lc_tgt")
    tier = parse_enum(Tier, obj.get("tier"))
    if src is None or tgt is None or tier is None:
        return None
    return LanguagePair(Language(src), Language(tgt), tier, decode_money(obj))


def decode_language(obj: JSONObject) -> Language | None:
    code = optional_str(obj, "lc")
    unit_type = optional_str(obj, "unit_type")
    if code is None or unit_type is None:
        return None
    return Language(
        code,
        name=optional_str(obj, "language"),
        localized_name=optional_str(obj, "localized_name"),
        unit_type=parse_enum(UnitType, unit_type),
    )


def decode_languages(payload: JSONValue) -> list[Language]:
    languages: list[Language] = []
    for obj in as_object_list(payload):
        language = decode_language(obj)
        if language is not None:
            languages.append(language)
    return languages


def decode_language_pairs(payload: JSONValue) -> list[LanguagePair]:
    pairs: list[LanguagePair] = []
    for obj in as_object_list(payload):
        pair = decode_language_pair(obj)
        if pair is not None:
            pairs.append(pair)
    return pairs


def decode_order(obj: JSONObject) -> Order:
    job_count = coerce_int(obj.get("job_count"))
    if job_count is None:
        job_count = coerce_int(obj.get("total_jobs"))
    return {
        "id": coerce_int(obj.get("order_id")),
        "credit": decode_money(obj),
        "job_count": job_count,
        "as_group": coerce_bool(obj.get("as_group")),
        "units": coerce_int(obj.get("total_units")),
    }


def decode_job(obj: JSONObject) -> Job:
    job = Job(
        language_pair=decode_language_pair(obj),
        auto_approve=coerce_bool(obj.get("auto_approve")),
    )
    job.source_text = optional_str(obj, "body_src")
    # The API's slug wins over one derived from the source text, even when absent.
    job.slug = optional_str(obj, "slug")
    job.target_text = optional_str(obj, "body_tgt")
    job.credit = decode_money(obj)
    job.eta = coerce_int(obj.get("eta"))
    job.id = coerce_int(obj.get("job_id"))
    job.order = empty_order(coerce_int(obj.get("order_id")))
    job.status = parse_enum(JobStatus, obj.get("status"))
    job.unit_count = coerce_int(obj.get("unit_count"))
    job.created_time = coerce_date(obj.get("ctime"))
    return job


def decode_jobs(payload: JSONValue) -> list[Job]:
    return [decode_job(obj) for obj in as_object_list(payload)]


def job_index(key: str) -> int:
    """Turn a 1-based wire key such as ``job_3`` into a list index (2)."""
    match = _JOB_KEY.fullmatch(key)
    if match is None:
        raise DecoderError(f"malformed job key: {key!r}")
    number = int(match.group(1))
    if number < 1:
        raise DecoderError(f"malformed job key: {key!r}")
    return number - 1


def fill_quoted_jobs(jobs: Sequence[Job], payload: JSONValue) -> list[Job]:
    """Copy each quoted input job and fill in the price, eta and unit count.

    The result is ordered by the caller's original list position, which the
    response may not preserve.
    """
    obj = as_object(payload)
    if obj is None:
        return []
    quoted = as_object(obj.get("jobs"))
    if quoted is None:
        return []

    filled: dict[int, Job] = {}
    for key, raw in quoted.items():
        index = job_index(key)
        if index >= len(jobs):
            raise DecoderError(f"job key {key!r} does not match any submitted job")
        quote = as_object(raw)
        if quote is None:
            continue
        job = jobs[index].copy()
        job.credit = decode_money(quote)
        job.eta = coerce_int(quote.get("eta"))
        job.unit_count = coerce_int(quote.get("unit_count"))
        job.identifier = optional_str(quote, "identifier")
        if job.slug is None:
            job.slug = optional_str(quote, "title")
        filled[index] = job
    return [filled[i] for i in sorted(filled)]


def decode_created_order(payload: JSONValue) -> Order | None:
    """Order for a job submission; None when the API created nothing (all duplicates)."""
    obj = as_object(payload)
    if obj is None or "order_id" not in obj:
        return None
    return decode_order(obj)


def decode_account(payload: JSONValue) -> Account:
    obj = as_object(payload) or {}
    return {
        "credit_spent": coerce_float(obj.get("credits_spent")),
        "credit_present": coerce_float(obj.get("credits")),
        "currency": parse_enum(Currency, obj.get("currency")),
        "since": coerce_date(obj.get("user_since")),
    }


def decode_translators(payload: JSONValue) -> list[Translator]:
    """Flatten language-pair groups into one entry per translator."""
    translators: list[Translator] = []
    for group in as_object_list(payload):
        pair = decode_language_pair(group)
        for obj in as_object_list(group.get("translators")):
            translators.append(
                {
                    "id": coerce_int(obj.get("id")),
                    "job_count": coerce_int(obj.get("number_of_jobs")),
                    "language_pair": pair,
                }
            )
    return translators


def decode_revision(obj: JSONObject) -> Revision:
    return {
        "id": coerce_int(obj.get("rev_id")),
        "body": optional_str(obj, "body_tgt"),
        "created_time": coerce_date(obj.get("ctime")),
    }


def decode_revisions(payload: JSONValue) -> list[Revision]:
    obj = as_object(payload) or {}
    return [decode_revision(item) for item in as_object_list(obj.get("revisions"))]


def decode_feedback(obj: JSONObject) -> Feedback:
    return {
        "rating": coerce_int(obj.get("rating")),
        "comment_for_translator": optional_str(obj, "for_translator"),
    }


def decode_comment(obj: JSONObject) -> Comment:
    return {
        "body": optional_str(obj, "body"),
        "author": parse_enum(CommentAuthor, obj.get("author")),
        "created_time": coerce_date(obj.get("ctime")),
    }


def decode_comments(payload: JSONValue) -> list[Comment]:
    obj = as_object(payload) or {}
    return [decode_comment(item) for item in as_object_list(obj.get("thread"))]


def _target_languages(value: JSONValue) -> list[Language]:
    # Entries are [id, code] pairs.
    targets: list[Language] = []
    if not isinstance(value, list):
        return targets
    for entry in value:
        if isinstance(entry, list) and len(entry) >= 2 and isinstance(entry[1], str):
            targets.append(Language(entry[1]))
    return targets


def decode_glossary(obj: JSONObject) -> Glossary:
    source = optional_str(obj, "source_language_code")
    return {
        "id": coerce_int(obj.get("id")),
        "source_language": Language(source) if source is not None else None,
        "target_languages": _target_languages(obj.get("target_languages")),
        "is_public": coerce_bool(obj.get("is_public")),
        "unit_count": coerce_int(obj.get("unit_count")),
        "description": optional_str(obj, "description"),
        "title": optional_str(obj, "title"),
        "status": coerce_int(obj.get("status")),
        "created_time": coerce_date(obj.get("ctime")),
    }


def decode_glossaries(payload: JSONValue) -> list[Glossary]:
    return [decode_glossary(obj) for obj in as_object_list(payload)]


def member_object(payload: JSONValue, key: str) -> JSONObject | None:
    """Return ``payload[key]`` when both levels are JSON objects."""
    obj = as_object(payload)
    if obj is None:
        return None
    return as_object(obj.get(key))


__all__ = [
    "DecoderError",
    "decode_account",
    "decode_comment",
    "decode_comments",
    "decode_created_order",
    "decode_feedback",
    "decode_glossaries",
    "decode_glossary",
    "decode_job",
    "decode_jobs",
    "decode_language",
    "decode_language_pair",
    "decode_language_pairs",
    "decode_languages",
    "decode_money",
    "decode_order",
    "decode_revision",
    "decode_revisions",
    "decode_translators",
    "fill_quoted_jobs",
    "job_index",
    "member_object",
]
