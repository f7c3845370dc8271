from __future__ import annotations

import httpx
import pytest

from gengo_client import (
    Currency,
    GengoApplicationError,
    GengoClient,
    GengoHttpError,
    GengoInvalidDataError,
    GengoSystemError,
    Job,
    JobFile,
    JobStatus,
    Language,
    LanguagePair,
    Money,
    RejectFollowUp,
    RejectReason,
    Tier,
    client_from_settings,
)
from gengo_client.config import GengoSettings
from gengo_client.request import PRODUCTION_HOST, SANDBOX_HOST
from gengo_client.testing import FakeGengoServer, form_data, freeze_time, query_fields


@pytest.fixture
def server() -> FakeGengoServer:
    return FakeGengoServer()


@pytest.fixture
def client(server: FakeGengoServer) -> GengoClient:
    freeze_time(1700000000)
    return GengoClient(
        public_key="pub",
        private_key="priv",
        sandbox=True,
        transport=server.transport(),
    )


def _pair() -> LanguagePair:
    return LanguagePair(Language("en"), Language("ja"), Tier.STANDARD)


def test_host_selection() -> None:
    assert GengoClient(public_key="a", private_key="b").host == PRODUCTION_HOST
    assert GengoClient(public_key="a", private_key="b", sandbox=True).host == SANDBOX_HOST


def test_client_from_settings(server: FakeGengoServer) -> None:
    settings: GengoSettings = {
        "public_key": "pub",
        "private_key": "priv",
        "sandbox": True,
        "timeout_seconds": 5.0,
        "log_level": "INFO",
        "log_format": "text",
    }
    gengo = client_from_settings(settings, transport=server.transport())
    assert gengo.host == SANDBOX_HOST


# Account


@pytest.mark.asyncio
async def test_get_balance(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply("GET", "account/balance", {"credits": "25.32", "currency": "USD"})

    account = await client.get_balance()

    assert account["credit_present"] == 25.32
    assert account["currency"] is Currency.USD
    assert account["credit_spent"] is None
    assert query_fields(server.last)["ts"] == "1700000000"


@pytest.mark.asyncio
async def test_get_stats(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply(
        "GET",
        "account/stats",
        {"credits_spent": "1023.31", "user_since": 1234567890, "currency": "USD"},
    )

    account = await client.get_stats()

    assert account["credit_spent"] == 1023.31
    assert account["since"] is not None
    assert account["since"].year == 2009


@pytest.mark.asyncio
async def test_get_preferred_translators(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply(
        "GET",
        "account/preferred_translators",
        [
            {
                "lc_src": "en",
                "lc_tgt": "ja",
                "tier": "standard",
                "translators": [{"id": 8596, "number_of_jobs": 5}],
            }
        ],
    )

    translators = await client.get_preferred_translators()

    assert translators == [{"id": 8596, "job_count": 5, "language_pair": _pair()}]


# Service


@pytest.mark.asyncio
async def test_get_languages(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply(
        "GET",
        "translate/service/languages",
        [{"lc": "en", "language": "English", "localized_name": "English", "unit_type": "word"}],
    )

    languages = await client.get_languages()

    assert [language.code for language in languages] == ["en"]


@pytest.mark.asyncio
async def test_get_language_pairs_filters_by_source(
    client: GengoClient, server: FakeGengoServer
) -> None:
    server.reply(
        "GET",
        "translate/service/language_pairs",
        [
            {"lc_src": "en", "lc_tgt": "ja", "tier": "standard", "unit_price": "0.05"},
            {"lc_src": "en", "lc_tgt": "ja", "tier": "machine", "unit_price": "0.00"},
        ],
    )

    pairs = await client.get_language_pairs(Language("en"))

    assert pairs == [_pair()]
    assert query_fields(server.last)["lc_src"] == "en"


@pytest.mark.asyncio
async def test_get_language_pairs_without_source(
    client: GengoClient, server: FakeGengoServer
) -> None:
    server.reply("GET", "translate/service/language_pairs", [])

    assert await client.get_language_pairs() == []
    assert "lc_src" not in query_fields(server.last)


@pytest.mark.asyncio
async def test_get_quote_text(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply(
        "POST",
        "translate/service/quote",
        {
            "jobs": {
                "job_2": {"credits": 0.2, "currency": "USD", "eta": 200, "unit_count": 4},
                "job_1": {"credits": 0.1, "currency": "USD", "eta": 100, "unit_count": 2},
            }
        },
    )
    jobs = [
        Job(language_pair=_pair(), source_text="first"),
        Job(language_pair=_pair(), source_text="second"),
    ]

    quoted = await client.get_quote_text(jobs)

    assert [job.source_text for job in quoted] == ["first", "second"]
    assert quoted[0].credit == Money(0.1, Currency.USD)
    assert quoted[1].unit_count == 4
    sent = form_data(server.last)
    assert isinstance(sent, dict)
    entries = sent["jobs"]
    assert isinstance(entries, dict)
    assert entries["job_1"] == {
        "lc_src": "en",
        "lc_tgt": "ja",
        "tier": "standard",
        "type": "text",
        "body_src": "first",
    }
    assert isinstance(entries["job_2"], dict)
    assert entries["job_2"]["body_src"] == "second"


@pytest.mark.asyncio
async def test_get_quote_file(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply(
        "POST",
        "translate/service/quote/file",
        {
            "jobs": {
                "job_1": {
                    "credits": 3,
                    "currency": "EUR",
                    "title": "doc.txt",
                    "identifier": "id1",
                }
            }
        },
    )
    job = Job(language_pair=_pair(), source_file=JobFile(b"file body", "doc.txt"))

    quoted = await client.get_quote_file([job])

    assert quoted[0].slug == "doc.txt"
    assert quoted[0].identifier == "id1"
    assert quoted[0].credit == Money(3.0, Currency.EUR)
    assert server.last.headers["content-type"].startswith("multipart/form-data")
    assert b"file body" in server.last.content


# Jobs


@pytest.mark.asyncio
async def test_create_jobs_returns_order(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply_raw(
        "POST",
        "translate/jobs",
        b'{"opstat":"ok","jobs":{"job_1":{"job_id":1},"job_2":{"job_id":2}},'
        b'"order_id":5,"total_jobs":2}',
    )
    jobs = [
        Job(language_pair=_pair(), source_text="a"),
        Job(language_pair=_pair(), source_text="b"),
    ]

    order = await client.create_jobs(jobs)

    assert order is not None
    assert order["id"] == 5
    assert order["job_count"] == 2
    sent = form_data(server.last)
    assert isinstance(sent, dict)
    assert isinstance(sent["jobs"], dict)
    assert sorted(sent["jobs"]) == ["job_1", "job_2"]


@pytest.mark.asyncio
async def test_create_jobs_all_duplicates(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply("POST", "translate/jobs", {"jobs": [{"job_1": {"duplicate": True}}]})

    order = await client.create_jobs([Job(language_pair=_pair(), source_text="a")])

    assert order is None


@pytest.mark.asyncio
async def test_create_jobs_not_enough_credits(
    client: GengoClient, server: FakeGengoServer
) -> None:
    server.reply_raw(
        "POST",
        "translate/jobs",
        b'{"opstat":"error","err":{"code":2700,"msg":"not enough credits"}}',
    )

    with pytest.raises(GengoApplicationError) as exc_info:
        await client.create_jobs([Job(language_pair=_pair(), source_text="a")])
    assert exc_info.value.code == 2700


@pytest.mark.asyncio
async def test_get_jobs(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply(
        "GET",
        "translate/jobs",
        [{"job_id": "11", "ctime": 1700000000}, {"job_id": 12, "ctime": "1700000001"}],
    )

    jobs = await client.get_jobs(status=JobStatus.AVAILABLE, after=1600000000, count=2)

    assert [job.id for job in jobs] == [11, 12]
    fields = query_fields(server.last)
    assert fields["status"] == "available"
    assert fields["timestamp_after"] == "1600000000"
    assert fields["count"] == "2"


@pytest.mark.asyncio
async def test_get_jobs_by_ids(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply(
        "GET",
        "translate/jobs/1,2",
        {"jobs": [{"job_id": 1, "status": "approved"}, {"job_id": 2, "status": "pending"}]},
    )

    jobs = await client.get_jobs_by_ids([1, 2])

    assert [job.status for job in jobs] == [JobStatus.APPROVED, JobStatus.PENDING]


# Job


@pytest.mark.asyncio
async def test_get_job(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply(
        "GET",
        "translate/job/42",
        {
            "job": {
                "job_id": 42,
                "order_id": 5,
                "body_src": "source",
                "body_tgt": "target",
                "lc_src": "en",
                "lc_tgt": "ja",
                "tier": "standard",
                "status": "approved",
            }
        },
    )

    job = await client.get_job(42, pre_mt=True)

    assert job.id == 42
    assert job.target_text == "target"
    assert job.language_pair == _pair()
    assert query_fields(server.last)["pre_mt"] == "1"


@pytest.mark.asyncio
async def test_get_job_without_job_object(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply("GET", "translate/job/42", {"nope": 1})

    with pytest.raises(GengoInvalidDataError):
        await client.get_job(42)


@pytest.mark.asyncio
async def test_put_job_revise(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply("PUT", "translate/job/42", None)

    result = await client.put_job(42, {"action": "revise", "comment": "please fix"})

    assert result is None
    sent = form_data(server.last)
    assert isinstance(sent, dict)
    assert sent["action"] == "revise"
    assert sent["comment"] == "please fix"
    assert sent["api_key"] == "pub"


@pytest.mark.asyncio
async def test_put_job_reject(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply("PUT", "translate/job/42", None)

    await client.put_job(
        42,
        {
            "action": "reject",
            "reason": RejectReason.INCOMPLETE,
            "comment": "half done",
            "captcha": "xyz",
            "follow_up": RejectFollowUp.CANCEL,
        },
    )

    sent = form_data(server.last)
    assert isinstance(sent, dict)
    assert sent["reason"] == "incomplete"
    assert sent["follow_up"] == "cancel"


@pytest.mark.asyncio
async def test_delete_job(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply("DELETE", "translate/job/42", None)

    await client.delete_job(42)

    assert server.last.method == "DELETE"
    assert query_fields(server.last)["api_key"] == "pub"


@pytest.mark.asyncio
async def test_get_revisions(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply(
        "GET",
        "translate/job/42/revisions",
        {"job_id": 42, "revisions": [{"rev_id": 1, "ctime": 1}, {"rev_id": 2, "ctime": 2}]},
    )

    revisions = await client.get_revisions(42)

    assert [revision["id"] for revision in revisions] == [1, 2]


@pytest.mark.asyncio
async def test_get_revision(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply(
        "GET", "translate/job/42/revision/2", {"revision": {"body_tgt": "v2", "ctime": 5}}
    )

    revision = await client.get_revision(42, 2)

    assert revision["body"] == "v2"


@pytest.mark.asyncio
async def test_get_feedback(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply(
        "GET", "translate/job/42/feedback", {"feedback": {"rating": "4", "for_translator": "ok"}}
    )

    feedback = await client.get_feedback(42)

    assert feedback == {"rating": 4, "comment_for_translator": "ok"}


@pytest.mark.asyncio
async def test_get_comments(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply(
        "GET",
        "translate/job/42/comments",
        {"thread": [{"body": "question?", "author": "worker", "ctime": 10}]},
    )

    comments = await client.get_comments(42)

    assert len(comments) == 1
    assert comments[0]["body"] == "question?"


@pytest.mark.asyncio
async def test_post_comment(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply("POST", "translate/job/42/comment", None)

    await client.post_comment(42, "answer")

    sent = form_data(server.last)
    assert isinstance(sent, dict)
    assert sent["body"] == "answer"
    assert sent["ts"] == "1700000000"


# Order


@pytest.mark.asyncio
async def test_get_order(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply(
        "GET",
        "translate/order/5",
        {
            "order": {
                "order_id": "5",
                "total_credits": "0.30",
                "currency": "USD",
                "total_units": 6,
                "as_group": 0,
                "jobs_available": ["1", "2"],
            }
        },
    )

    order = await client.get_order(5)

    assert order["id"] == 5
    assert order["credit"] == Money(0.3, Currency.USD)
    assert order["units"] == 6
    assert order["as_group"] is False


@pytest.mark.asyncio
async def test_get_order_without_order_object(
    client: GengoClient, server: FakeGengoServer
) -> None:
    server.reply("GET", "translate/order/5", [])

    with pytest.raises(GengoInvalidDataError):
        await client.get_order(5)


@pytest.mark.asyncio
async def test_delete_order(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply("DELETE", "translate/order/5", None)

    await client.delete_order(5)

    assert server.last.url.path.endswith("/v2/translate/order/5")


# Glossary


@pytest.mark.asyncio
async def test_get_glossaries(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply(
        "GET",
        "translate/glossary",
        [{"id": 1, "title": "a.csv"}, {"id": 2, "title": "b.csv", "target_languages": [[3, "ja"]]}],
    )

    glossaries = await client.get_glossaries()

    assert [glossary["title"] for glossary in glossaries] == ["a.csv", "b.csv"]
    assert glossaries[1]["target_languages"] == [Language("ja")]


@pytest.mark.asyncio
async def test_get_glossary(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply("GET", "translate/glossary/1", {"id": 1, "source_language_code": "en"})

    glossary = await client.get_glossary(1)

    assert glossary["id"] == 1
    assert glossary["source_language"] == Language("en")


@pytest.mark.asyncio
async def test_get_glossary_without_id(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply("GET", "translate/glossary/1", {"id": "1"})

    with pytest.raises(GengoInvalidDataError):
        await client.get_glossary(1)


# Failures


@pytest.mark.asyncio
async def test_transport_failure(client: GengoClient, server: FakeGengoServer) -> None:
    server.fail("GET", "account/balance", httpx.ConnectError("boom"))

    with pytest.raises(GengoSystemError):
        await client.get_balance()


@pytest.mark.asyncio
async def test_server_error_status(client: GengoClient, server: FakeGengoServer) -> None:
    server.reply("GET", "account/balance", {"credits": 1}, status=500)

    with pytest.raises(GengoHttpError) as exc_info:
        await client.get_balance()
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_each_operation_sends_one_request(
    client: GengoClient, server: FakeGengoServer
) -> None:
    server.reply_raw("GET", "account/balance", b"oops")

    with pytest.raises(GengoInvalidDataError):
        await client.get_balance()
    assert len(server.requests) == 1
