from __future__ import annotations

import copy
import mimetypes
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Final, Literal, TypedDict, TypeVar

DEFAULT_MIME_TYPE: Final[str] = "application/octet-stream"
SLUG_LENGTH: Final[int] = 15


class UnitType(str, Enum):
    WORD = "word"
    CHARACTER = "character"


class Tier(str, Enum):
    STANDARD = "standard"
    PRO = "pro"
    ULTRA = "ultra"


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    JPY = "JPY"
    GBP = "GBP"


class JobType(str, Enum):
    TEXT = "text"
    FILE = "file"


class JobStatus(str, Enum):
    QUEUED = "queued"
    AVAILABLE = "available"
    PENDING = "pending"
    REVIEWABLE = "reviewable"
    APPROVED = "approved"
    REVISING = "revising"
    REJECTED = "rejected"
    CANCELED = "canceled"


class CommentAuthor(str, Enum):
    CUSTOMER = "customer"
    WORKER = "worker"


class RejectReason(str, Enum):
    QUALITY = "quality"
    INCOMPLETE = "incomplete"
    OTHER = "other"


class RejectFollowUp(str, Enum):
    REQUEUE = "requeue"
    CANCEL = "cancel"


_E = TypeVar("_E", bound=Enum)


def parse_enum(enum_type: type[_E], raw: object) -> _E | None:
    """Map a wire string onto an enum member, or None for anything unrecognized."""
    if not isinstance(raw, str):
        return None
    for member in enum_type:
        if member.value == raw:
            return member
    return None


class Language:
    __slots__ = ("code", "localized_name", "name", "unit_type")

    def __init__(
        self,
        code: str,
        *,
        name: str | None = None,
        localized_name: str | None = None,
        unit_type: UnitType | None = None,
    ) -> None:
        self.code = code
        self.name = name
        self.localized_name = localized_name
        self.unit_type = unit_type

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Language):
            return NotImplemented
        return (
            self.code == other.code
            and self.name == other.name
            and self.localized_name == other.localized_name
            and self.unit_type == other.unit_type
        )

    def __hash__(self) -> int:
        return hash((self.code, self.name, self.localized_name, self.unit_type))

    def __repr__(self) -> str:
        return f"Language({self.code!r})"

    def __str__(self) -> str:
        return self.name if self.name is not None else self.code


class Money:
    __slots__ = ("amount", "currency")

    def __init__(self, amount: float, currency: Currency) -> None:
        if amount < 0:
            raise ValueError("amount must be non-negative")
        self.amount = float(amount)
        self.currency = currency

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount == other.amount and self.currency == other.currency

    def __hash__(self) -> int:
        return hash((self.amount, self.currency))

    def __repr__(self) -> str:
        return f"Money({self.amount!r}, {self.currency.value})"

    def __str__(self) -> str:
        return f"{self.currency.value}{self.amount}"


class LanguagePair:
    __slots__ = ("price", "source", "target", "tier")

    def __init__(
        self,
        source: Language,
        target: Language,
        tier: Tier,
        price: Money | None = None,
    ) -> None:
        self.source = source
        self.target = target
        self.tier = tier
        self.price = price

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LanguagePair):
            return NotImplemented
        return (
            self.source == other.source
            and self.target == other.target
            and self.tier == other.tier
            and self.price == other.price
        )

    def __hash__(self) -> int:
        return hash((self.source, self.target, self.tier, self.price))

    def __repr__(self) -> str:
        return f"LanguagePair({self})"

    def __str__(self) -> str:
        return f"{self.tier.value}: {self.source} -> {self.target}"


def mime_type_for(name: str) -> str:
    """Guess a MIME type from a file name's extension."""
    guessed, _ = mimetypes.guess_type(name, strict=False)
    return guessed if guessed is not None else DEFAULT_MIME_TYPE


class JobFile:
    """Binary source document for a file job."""

    __slots__ = ("data", "mime_type", "name")

    def __init__(self, data: bytes, name: str) -> None:
        self.data = data
        self.name = name
        self.mime_type = mime_type_for(name)

    @classmethod
    def from_path(cls, path: str | Path) -> JobFile:
        p = Path(path)
        return cls(p.read_bytes(), p.name)

    def __repr__(self) -> str:
        return f"JobFile({self.name!r}, {len(self.data)} bytes, {self.mime_type})"


class Order(TypedDict):
    id: int | None
    credit: Money | None
    job_count: int | None
    as_group: bool
    units: int | None


def empty_order(order_id: int | None = None) -> Order:
    return {"id": order_id, "credit": None, "job_count": None, "as_group": False, "units": None}


class Job:
    """A translation job.

    Setting ``source_text`` derives ``slug`` when none was given. Attaching a
    ``source_file`` makes the job a file job; detaching it clears ``type``,
    so a text job must set it again.
    """

    __slots__ = (
        "_source_file",
        "_source_text",
        "as_group",
        "auto_approve",
        "callback_url",
        "comment",
        "created_time",
        "credit",
        "custom_data",
        "eta",
        "force",
        "id",
        "identifier",
        "language_pair",
        "max_chars",
        "order",
        "position",
        "purpose",
        "slug",
        "status",
        "target_text",
        "tone",
        "type",
        "unit_count",
        "use_preferred",
    )

    def __init__(
        self,
        *,
        language_pair: LanguagePair | None = None,
        source_text: str | None = None,
        source_file: JobFile | None = None,
        slug: str | None = None,
        identifier: str | None = None,
        auto_approve: bool | None = None,
        comment: str | None = None,
        custom_data: str | None = None,
        force: bool | None = None,
        use_preferred: bool | None = None,
        position: str | None = None,
        purpose: str | None = None,
        tone: str | None = None,
        callback_url: str | None = None,
        max_chars: int | None = None,
        as_group: bool | None = None,
    ) -> None:
        self.language_pair = language_pair
        self.type: JobType | None = JobType.TEXT
        self.slug = slug
        self._source_text: str | None = None
        self._source_file: JobFile | None = None
        if source_text is not None:
            self.source_text = source_text
        if source_file is not None:
            self.source_file = source_file

        self.identifier = identifier
        self.auto_approve = auto_approve
        self.comment = comment
        self.custom_data = custom_data
        self.force = force
        self.use_preferred = use_preferred
        self.position = position
        self.purpose = purpose
        self.tone = tone
        self.callback_url = callback_url
        self.max_chars = max_chars
        self.as_group = as_group

        self.id: int | None = None
        self.order: Order | None = None
        self.target_text: str | None = None
        self.credit: Money | None = None
        self.eta: int | None = None
        self.unit_count: int | None = None
        self.status: JobStatus | None = None
        self.created_time: datetime | None = None

    @property
    def source_text(self) -> str | None:
        return self._source_text

    @source_text.setter
    def source_text(self, text: str | None) -> None:
        self._source_text = text
        if text is not None and self.slug is None:
            self.slug = text if len(text) <= SLUG_LENGTH else text[:SLUG_LENGTH] + "..."

    @property
    def source_file(self) -> JobFile | None:
        return self._source_file

    @source_file.setter
    def source_file(self, source_file: JobFile | None) -> None:
        self._source_file = source_file
        self.type = JobType.FILE if source_file is not None else None

    def copy(self) -> Job:
        return copy.copy(self)

    def __repr__(self) -> str:
        if self.language_pair is None:
            return "Job()"
        return f"Job({self.language_pair})"


class Account(TypedDict):
    credit_spent: float | None
    credit_present: float | None
    currency: Currency | None
    since: datetime | None


class Translator(TypedDict):
    id: int | None
    job_count: int | None
    language_pair: LanguagePair | None


class Glossary(TypedDict):
    id: int | None
    source_language: Language | None
    target_languages: list[Language]
    is_public: bool
    unit_count: int | None
    description: str | None
    title: str | None
    status: int | None
    created_time: datetime | None


class Revision(TypedDict):
    id: int | None
    body: str | None
    created_time: datetime | None


class Comment(TypedDict):
    body: str | None
    author: CommentAuthor | None
    created_time: datetime | None


class Feedback(TypedDict, total=False):
    """Translator feedback; read back by job id, or sent along with an approval."""

    rating: int | None
    comment_for_translator: str | None
    comment_for_gengo: str | None
    is_public: bool | None


class ReviseAction(TypedDict):
    action: Literal["revise"]
    comment: str


class ApproveAction(TypedDict):
    action: Literal["approve"]
    feedback: Feedback


class RejectAction(TypedDict):
    action: Literal["reject"]
    reason: RejectReason
    comment: str
    captcha: str
    follow_up: RejectFollowUp


JobAction = ReviseAction | ApproveAction | RejectAction


__all__ = [
    "DEFAULT_MIME_TYPE",
    "SLUG_LENGTH",
    "Account",
    "ApproveAction",
    "Comment",
    "CommentAuthor",
    "Currency",
    "Feedback",
    "Glossary",
    "Job",
    "JobAction",
    "JobFile",
    "JobStatus",
    "JobType",
    "Language",
    "LanguagePair",
    "Money",
    "Order",
    "RejectAction",
    "RejectFollowUp",
    "RejectReason",
    "Revision",
    "ReviseAction",
    "Tier",
    "Translator",
    "UnitType",
    "empty_order",
    "mime_type_for",
    "parse_enum",
]
