"""Chat resolver: continue an existing conversation or create a new one.

Resolution runs as a fixed sequence per call:

    probe  -> POST /chat/history/continue/
              200/404 with a "no history" sentinel body -> create
              200/404 with any other body              -> normalize
              any other status                          -> ResolutionError
    create -> POST /chat/history/create/
              200 -> handle wrapping the JSON body
              else -> ResolutionError
    normalize -> one JSON decode attempt, raw text kept on failure

The service reports a missing history either with a 404 or with a 200
whose body is a sentinel string, so both statuses are read the same way.
Sentinels are compared by exact equality.
"""

import httpx

from charlink.chat.models import ConversationHandle, ConversationReference, JsonBody, parse_body
from charlink.exceptions import ResolutionError, ValidationError
from charlink.observability.logging import get_logger
from charlink.session.context import SessionContext
from charlink.transport import send

logger = get_logger(__name__)

CONTINUE_HISTORY_PATH = "/chat/history/continue/"
CREATE_HISTORY_PATH = "/chat/history/create/"

NO_HISTORY_SENTINELS: frozenset[str] = frozenset({
    "No Such History",
    "there is no history between user and character",
})


class ChatResolver:
    """Resolves conversation references into conversation handles.

    Holds no per-call state, so independent resolutions may run concurrently.
    """

    def __init__(self, session: SessionContext, http: httpx.AsyncClient) -> None:
        self._session = session
        self._http = http

    async def create_or_continue(
        self,
        character_id: str,
        external_id: str | None = None,
    ) -> ConversationHandle:
        """Resume a conversation with a character, creating one if none exists.

        Raises:
            PreconditionError: If the session is not authenticated
            ValidationError: If the ids are malformed
            ResolutionError: If the service answers with an unexpected status
        """
        self._session.require_authenticated("chat resolution")
        _validate_ids(character_id, external_id)
        reference = ConversationReference(
            character_id=character_id,
            external_conversation_id=external_id,
        )
        return await self.resolve(reference)

    async def resolve(self, reference: ConversationReference) -> ConversationHandle:
        """Resolve a reference to a live conversation."""
        self._session.require_authenticated("chat resolution")
        _validate_ids(reference.character_id, reference.external_conversation_id)

        response = await send(
            self._http,
            "POST",
            CONTINUE_HISTORY_PATH,
            headers=self._session.headers(),
            json={
                "character_external_id": reference.character_id,
                "history_external_id": reference.external_conversation_id,
            },
        )

        if response.status_code not in (200, 404):
            raise ResolutionError(
                "Could not create or resume a chat.",
                status_code=response.status_code,
                details=response.text,
            )

        text = response.text
        if text in NO_HISTORY_SENTINELS:
            logger.debug(
                "chat_history_missing",
                character_id=reference.character_id,
                status_code=response.status_code,
            )
            return await self._create(reference)

        logger.debug("chat_history_resumed", character_id=reference.character_id)
        return ConversationHandle(
            character_id=reference.character_id,
            external_conversation_id=reference.external_conversation_id,
            body=parse_body(text),
        )

    async def _create(self, reference: ConversationReference) -> ConversationHandle:
        response = await send(
            self._http,
            "POST",
            CREATE_HISTORY_PATH,
            headers=self._session.headers(),
            json={
                "character_external_id": reference.character_id,
                "history_external_id": None,
            },
        )

        if response.status_code != 200:
            raise ResolutionError(
                "Could not create a new chat.",
                status_code=response.status_code,
                details=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ResolutionError(
                "Chat creation returned a body that is not JSON.",
                status_code=response.status_code,
                details=response.text,
            ) from e

        logger.debug("chat_history_created", character_id=reference.character_id)
        return ConversationHandle(
            character_id=reference.character_id,
            external_conversation_id=reference.external_conversation_id,
            body=JsonBody(data=data),
        )


def _validate_ids(character_id: object, external_id: object) -> None:
    if not isinstance(character_id, str) or not character_id:
        raise ValidationError("character_id must be a non-empty string.")
    if external_id is not None and not isinstance(external_id, str):
        raise ValidationError("external_id must be a string or None.")
