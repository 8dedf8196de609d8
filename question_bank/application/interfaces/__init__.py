"""Application ports: repository, storage and auth provider protocols.

No runtime imports from question_bank.infrastructure or question_bank.api.
"""

from question_bank.application.interfaces.repositories import (
    IContactRepository,
    IDownloadLogRepository,
    IProfileRepository,
    IQuestionRepository,
)
from question_bank.application.interfaces.services import IAuthProvider
from question_bank.application.interfaces.storage import IStorageService, StoredObject

__all__ = [
    "IAuthProvider",
    "IContactRepository",
    "IDownloadLogRepository",
    "IProfileRepository",
    "IQuestionRepository",
    "IStorageService",
    "StoredObject",
]
