import logging

from sqlalchemy.ext.asyncio import AsyncSession

import config
from db import session_commit
from enums.message_entity import MessageEntity
from models.privacy import PrivacyWarningDTO
from repositories.client_preference import ClientPreferenceRepository
from utils.localizator import Localizator

logger = logging.getLogger(__name__)

PRIVACY_WARNING_SEEN_KEY = "oracle-privacy-warning-seen"


class PrivacyService:

    @staticmethod
    def is_tor_browser(user_agent: str | None) -> bool:
        """
        Heuristic Tor Browser detection from the User-Agent header.

        Tor Browser reports a Firefox ESR agent, so any Firefox ("rv:" token)
        that is not Chrome counts as Tor. This cannot tell Tor Browser from
        plain Firefox.
        """
        if not user_agent:
            return False
        if "Tor" in user_agent:
            return True
        return "Firefox" in user_agent and "rv:" in user_agent and "Chrome" not in user_agent

    @staticmethod
    async def is_acknowledged(client_id: str, session: AsyncSession) -> bool:
        return await ClientPreferenceRepository.get(client_id, PRIVACY_WARNING_SEEN_KEY, session) == "true"

    @staticmethod
    async def evaluate(client_id: str, user_agent: str | None, session: AsyncSession,
                       lang: str | None = None) -> PrivacyWarningDTO:
        is_tor = PrivacyService.is_tor_browser(user_agent)
        show = not await PrivacyService.is_acknowledged(client_id, session)
        return PrivacyWarningDTO(
            show=show,
            is_tor_browser=is_tor,
            title=Localizator.get_text(MessageEntity.USER, "privacy_warning_title", lang),
            warning=Localizator.get_text(MessageEntity.USER,
                                         "privacy_tor_detected" if is_tor else "privacy_not_tor", lang),
            recommendations_title=Localizator.get_text(MessageEntity.USER, "privacy_recommendations_title", lang),
            recommendations=[
                Localizator.get_text(MessageEntity.USER, key, lang)
                for key in ("privacy_recommendation_tor_vpn",
                            "privacy_recommendation_username",
                            "privacy_recommendation_delete_account")
            ],
            guide_url=config.PRIVACY_GUIDE_URL,
            guide_button=Localizator.get_text(MessageEntity.USER, "privacy_guide_button", lang),
            accept_button=Localizator.get_text(MessageEntity.USER, "privacy_accept_button", lang),
        )

    @staticmethod
    async def acknowledge(client_id: str, session: AsyncSession) -> None:
        await ClientPreferenceRepository.set(client_id, PRIVACY_WARNING_SEEN_KEY, "true", session)
        await session_commit(session)
        logger.debug(f"Privacy warning acknowledged by client {client_id[:8]}")
