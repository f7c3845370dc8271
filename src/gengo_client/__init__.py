from gengo_client.client import GengoClient, client_from_settings
from gengo_client.coerce import coerce_bool, coerce_date, coerce_float, coerce_int
from gengo_client.config import GengoSettings, load_gengo_settings
from gengo_client.decoders import DecoderError
from gengo_client.errors import (
    GengoApplicationError,
    GengoError,
    GengoErrorCode,
    GengoHttpError,
    GengoInvalidDataError,
    GengoNilDataError,
    GengoSystemError,
    check_response,
    classify_response,
)
from gengo_client.models import (
    Account,
    ApproveAction,
    Comment,
    CommentAuthor,
    Currency,
    Feedback,
    Glossary,
    Job,
    JobAction,
    JobFile,
    JobStatus,
    JobType,
    Language,
    LanguagePair,
    Money,
    Order,
    RejectAction,
    RejectFollowUp,
    RejectReason,
    Revision,
    ReviseAction,
    Tier,
    Translator,
    UnitType,
)

__all__ = [
    "Account",
    "ApproveAction",
    "Comment",
    "CommentAuthor",
    "Currency",
    "DecoderError",
    "Feedback",
    "GengoApplicationError",
    "GengoClient",
    "GengoError",
    "GengoErrorCode",
    "GengoHttpError",
    "GengoInvalidDataError",
    "GengoNilDataError",
    "GengoSettings",
    "GengoSystemError",
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
    "check_response",
    "classify_response",
    "client_from_settings",
    "coerce_bool",
    "coerce_date",
    "coerce_float",
    "coerce_int",
    "load_gengo_settings",
]
