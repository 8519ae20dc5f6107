# Nombre de archivo: line_gateway.py
# Ubicación de archivo: faq_bot/app/line_gateway.py
# Descripción: Verificación de firma, parseo de eventos y respuestas vía LINE Messaging API

from __future__ import annotations

import logging

from linebot.v3 import WebhookParser
from linebot.v3.exceptions import InvalidSignatureError
from linebot.v3.messaging import (
    ApiClient,
    ApiException,
    Configuration,
    MessagingApi,
    ReplyMessageRequest,
    TextMessage,
)
from linebot.v3.webhooks import MessageEvent, TextMessageContent
from urllib3.exceptions import HTTPError

from .schemas import InboundText

logger = logging.getLogger(__name__)


class LineGateway:
    """Adaptador fino sobre el SDK de LINE (webhook entrante y reply API)."""

    def __init__(self, channel_secret: str, access_token: str, api: MessagingApi | None = None) -> None:
        self._parser = WebhookParser(channel_secret)
        if api is None:
            api = MessagingApi(ApiClient(Configuration(access_token=access_token)))
        self._api = api

    def parse_text_messages(self, body: str, signature: str) -> list[InboundText]:
        """Valida la firma y devuelve solo los mensajes de texto.

        Eleva ``InvalidSignatureError`` si la firma no corresponde al cuerpo.
        """
        events = self._parser.parse(body, signature)
        messages: list[InboundText] = []
        for event in events:
            if not isinstance(event, MessageEvent) or not isinstance(event.message, TextMessageContent):
                logger.debug("action=webhook_event ignored type=%s", getattr(event, "type", "?"))
                continue
            user_id = getattr(event.source, "user_id", None) if event.source else None
            messages.append(InboundText(reply_token=event.reply_token, text=event.message.text, user_id=user_id))
        return messages

    def reply(self, reply_token: str, text: str) -> bool:
        """Envía una única respuesta de texto; los fallos se registran sin reintentos."""
        request = ReplyMessageRequest(reply_token=reply_token, messages=[TextMessage(text=text)])
        try:
            self._api.reply_message(request)
        except (ApiException, HTTPError, OSError) as exc:
            logger.error("action=reply status=failed error=%s", exc)
            return False
        logger.info("action=reply status=sent chars=%d", len(text))
        return True


__all__ = ["LineGateway", "InvalidSignatureError"]
