"""CharLink API client.

Usage:
    from charlink.client import CharLinkClient

    async with CharLinkClient() as client:
        await client.authenticate_with_token("<access token>")
        chat = await client.create_or_continue_chat("character-external-id")
        print(chat.history_external_id)

    # Restoring a session persisted elsewhere
    from charlink.session import AuthMode

    async with CharLinkClient.from_settings() as client:
        client.session.force_state(AuthMode.REGISTERED, saved_token)
"""

from charlink.client.client import CharLinkClient

__all__ = ["CharLinkClient"]
