"""
Invitation emails sent through the Resend HTTP API.
"""
import html
import logging
from urllib.parse import urlencode
import httpx
from budgetwise.core.config import Settings
from budgetwise.core.exceptions import ConfigurationError, ExternalServiceError

logger = logging.getLogger(__name__)


def build_invitation_url(settings: Settings, book_id: int, email: str) -> str:
    query = urlencode({"bookId": book_id, "email": email})
    return f"{settings.APP_URL.rstrip('/')}/invite?{query}"


def render_invitation(book_name: str, owner_name: str, invitation_url: str) -> str:
    book_name = html.escape(book_name)
    owner_name = html.escape(owner_name)
    invitation_url = html.escape(invitation_url, quote=True)
    return f"""
        <h1>You're Invited!</h1>
        <p><strong>{owner_name}</strong> has invited you to collaborate on the cash book: <strong>{book_name}</strong>.</p>
        <p>Click the link below to accept the invitation and join the cash book.</p>
        <a href="{invitation_url}" style="background-color: #4f46e5; color: white; padding: 10px 20px; text-decoration: none; border-radius: 5px; display: inline-block;">
          Accept Invitation
        </a>
        <p>If you were not expecting this invitation, you can safely ignore this email.</p>
    """


async def send_invitation(
    settings: Settings,
    email: str,
    book_id: int,
    book_name: str,
    owner_name: str
) -> dict:
    """
    Send the collaboration invitation email.

    Raises:
        ConfigurationError: RESEND_API_KEY is not set
        ExternalServiceError: Resend rejected the request or was unreachable
    """
    if not settings.RESEND_API_KEY:
        logger.warning("RESEND_API_KEY is not set. Email sending is disabled.")
        raise ConfigurationError("Email service is not configured.")

    invitation_url = build_invitation_url(settings, book_id, email)
    payload = {
        "from": settings.EMAIL_FROM,
        "to": [email],
        "subject": f'Invitation to collaborate on "{book_name}"',
        "html": render_invitation(book_name, owner_name, invitation_url),
    }

    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.post(
                settings.RESEND_API_URL,
                headers={
                    "Authorization": f"Bearer {settings.RESEND_API_KEY}",
                    "Content-Type": "application/json"
                },
                json=payload
            )
    except httpx.HTTPError as e:
        logger.error(f"Resend request failed: {e}")
        raise ExternalServiceError("Could not send invitation email.")

    if response.status_code >= 400:
        logger.error(f"Resend error {response.status_code}: {response.text}")
        raise ExternalServiceError("Could not send invitation email.")

    logger.info(f"Sent invitation for book {book_id} to {email}")
    try:
        return response.json()
    except ValueError:
        logger.warning(f"Resend returned a non-JSON body for {email}")
        return {}
