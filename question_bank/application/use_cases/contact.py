"""Contact form: store a message for the site owners."""

import logging

from question_bank.application.dtos.contact import ContactMessageCreate
from question_bank.application.interfaces.repositories import IContactRepository

logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, contact_repo: IContactRepository) -> None:
        self.contact_repo = contact_repo

    async def submit(self, data: ContactMessageCreate) -> None:
        await self.contact_repo.create(data)
        logger.info("Contact message stored from %s", data.email)
