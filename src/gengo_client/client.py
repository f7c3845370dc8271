from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from gengo_client.coerce import bool_to_wire
from gengo_client.config import DEFAULT_TIMEOUT_SECONDS, GengoSettings
from gengo_client.decoders import (
    decode_account,
    decode_comments,
    decode_created_order,
    decode_feedback,
    decode_glossaries,
    decode_glossary,
    decode_job,
    decode_jobs,
    decode_language_pairs,
    decode_languages,
    decode_order,
    decode_revision,
    decode_revisions,
    decode_translators,
    fill_quoted_jobs,
    member_object,
)
from gengo_client.encoders import (
    encode_action,
    encode_comment,
    encode_jobs_query,
    encode_new_jobs,
    encode_quote_jobs,
)
from gengo_client.errors import GengoInvalidDataError
from gengo_client.http_client import AsyncTransport, HttpxAsyncClient, build_async_client
from gengo_client.json_utils import as_object
from gengo_client.models import (
    Account,
    Comment,
    Feedback,
    Glossary,
    Job,
    JobAction,
    JobStatus,
    Language,
    LanguagePair,
    Order,
    Revision,
    Translator,
)
from gengo_client.request import ApiRequest, Envelope, GengoTransport, QueryValue, host_for


class GengoClient:
    """Asynchronous client for the Gengo translation API.

    Each operation sends exactly one request. It either returns the mapped
    result or raises a single ``GengoError``; nothing is retried.

    Example:
        >>> client = GengoClient(public_key="pub", private_key="priv", sandbox=True)
        >>> account = await client.get_balance()
        >>> await client.aclose()
    """

    def __init__(
        self,
        *,
        public_key: str,
        private_key: str,
        sandbox: bool = False,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        client: HttpxAsyncClient | None = None,
        transport: AsyncTransport | None = None,
    ) -> None:
        http: HttpxAsyncClient = (
            build_async_client(float(timeout_seconds), transport) if client is None else client
        )
        self._transport = GengoTransport(
            host=host_for(sandbox=sandbox),
            public_key=public_key,
            private_key=private_key,
            client=http,
        )

    @property
    def host(self) -> str:
        return self._transport.host

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def _get(self, endpoint: str, query: dict[str, QueryValue] | None = None) -> Envelope:
        return await self._transport.send(ApiRequest("GET", endpoint, query=query))

    # Account

    async def get_stats(self) -> Account:
        envelope = await self._get("account/stats")
        return decode_account(envelope.payload)

    async def get_balance(self) -> Account:
        envelope = await self._get("account/balance")
        return decode_account(envelope.payload)

    async def get_preferred_translators(self) -> list[Translator]:
        envelope = await self._get("account/preferred_translators")
        return decode_translators(envelope.payload)

    # Service

    async def get_languages(self) -> list[Language]:
        envelope = await self._get("translate/service/languages")
        return decode_languages(envelope.payload)

    async def get_language_pairs(self, source: Language | None = None) -> list[LanguagePair]:
        query: dict[str, QueryValue] = {}
        if source is not None:
            query["lc_src"] = source.code
        envelope = await self._get("translate/service/language_pairs", query)
        return decode_language_pairs(envelope.payload)

    async def get_quote_text(self, jobs: Sequence[Job]) -> list[Job]:
        return await self._quote("translate/service/quote", jobs)

    async def get_quote_file(self, jobs: Sequence[Job]) -> list[Job]:
        return await self._quote("translate/service/quote/file", jobs)

    async def _quote(self, endpoint: str, jobs: Sequence[Job]) -> list[Job]:
        body, files = encode_quote_jobs(jobs)
        envelope = await self._transport.send(ApiRequest("POST", endpoint, body=body, files=files))
        return fill_quoted_jobs(jobs, envelope.payload)

    # Jobs

    async def create_jobs(self, jobs: Sequence[Job]) -> Order | None:
        """Submit jobs as one order.

        Returns None without raising when the API created no order because
        every submitted job duplicates an existing one.
        """
        request = ApiRequest("POST", "translate/jobs", body=encode_new_jobs(jobs))
        envelope = await self._transport.send(request)
        return decode_created_order(envelope.payload)

    async def get_jobs(
        self,
        *,
        status: JobStatus | None = None,
        after: datetime | int | None = None,
        count: int | None = None,
    ) -> list[Job]:
        query = encode_jobs_query(status=status, after=after, count=count)
        envelope = await self._get("translate/jobs", query)
        return decode_jobs(envelope.payload)

    async def get_jobs_by_ids(self, ids: Sequence[int]) -> list[Job]:
        joined = ",".join(str(job_id) for job_id in ids)
        envelope = await self._get(f"translate/jobs/{joined}")
        obj = as_object(envelope.payload) or {}
        return decode_jobs(obj.get("jobs"))

    # Job

    async def get_job(self, job_id: int, *, pre_mt: bool = False) -> Job:
        envelope = await self._get(f"translate/job/{job_id}", {"pre_mt": bool_to_wire(pre_mt)})
        obj = member_object(envelope.payload, "job")
        if obj is None:
            raise GengoInvalidDataError(envelope.raw)
        return decode_job(obj)

    async def put_job(self, job_id: int, action: JobAction) -> None:
        request = ApiRequest("PUT", f"translate/job/{job_id}", body=encode_action(action))
        await self._transport.send(request)

    async def delete_job(self, job_id: int) -> None:
        await self._transport.send(ApiRequest("DELETE", f"translate/job/{job_id}"))

    async def get_revisions(self, job_id: int) -> list[Revision]:
        envelope = await self._get(f"translate/job/{job_id}/revisions")
        return decode_revisions(envelope.payload)

    async def get_revision(self, job_id: int, revision_id: int) -> Revision:
        envelope = await self._get(f"translate/job/{job_id}/revision/{revision_id}")
        obj = member_object(envelope.payload, "revision")
        if obj is None:
            raise GengoInvalidDataError(envelope.raw)
        return decode_revision(obj)

    async def get_feedback(self, job_id: int) -> Feedback:
        envelope = await self._get(f"translate/job/{job_id}/feedback")
        obj = member_object(envelope.payload, "feedback")
        if obj is None:
            raise GengoInvalidDataError(envelope.raw)
        return decode_feedback(obj)

    async def get_comments(self, job_id: int) -> list[Comment]:
        envelope = await self._get(f"translate/job/{job_id}/comments")
        return decode_comments(envelope.payload)

    async def post_comment(self, job_id: int, comment: str) -> None:
        request = ApiRequest("POST", f"translate/job/{job_id}/comment", body=encode_comment(comment))
        await self._transport.send(request)

    # Order

    async def get_order(self, order_id: int) -> Order:
        envelope = await self._get(f"translate/order/{order_id}")
        obj = member_object(envelope.payload, "order")
        if obj is None:
            raise GengoInvalidDataError(envelope.raw)
        return decode_order(obj)

    async def delete_order(self, order_id: int) -> None:
        await self._transport.send(ApiRequest("DELETE", f"translate/order/{order_id}"))

    # Glossary

    async def get_glossaries(self) -> list[Glossary]:
        envelope = await self._get("translate/glossary")
        return decode_glossaries(envelope.payload)

    async def get_glossary(self, glossary_id: int) -> Glossary:
        envelope = await self._get(f"translate/glossary/{glossary_id}")
        obj = as_object(envelope.payload)
        raw_id = obj.get("id") if obj is not None else None
        if obj is None or isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise GengoInvalidDataError(envelope.raw)
        return decode_glossary(obj)


def client_from_settings(
    settings: GengoSettings, *, transport: AsyncTransport | None = None
) -> GengoClient:
    return GengoClient(
        public_key=settings["public_key"],
        private_key=settings["private_key"],
        sandbox=settings["sandbox"],
        timeout_seconds=settings["timeout_seconds"],
        transport=transport,
    )


__all__ = ["GengoClient", "client_from_settings"]
