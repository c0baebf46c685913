"""Password reset mail. Sent over SMTP when configured, otherwise only logged."""
import logging
import smtplib
from email.message import EmailMessage

from utils.config import (
    FRONTEND_BASE_URL,
    PASSWORD_RESET_EXPIRE_MINUTES,
    SMTP_EMAIL,
    SMTP_HOST,
    SMTP_PASSWORD,
    SMTP_PORT,
)

LOG = logging.getLogger(__name__)


def reset_url(token: str) -> str:
    return f"{FRONTEND_BASE_URL.rstrip('/')}/reset-password?token={token}"


def send_reset_email(to_email: str, token: str) -> None:
    """Deliver the reset link. SMTP failures are logged and not raised, so the
    reset endpoint never reveals whether an account exists."""
    url = reset_url(token)
    if not SMTP_HOST:
        LOG.info("PASSWORD_RESET_EMAIL_SENT to=%s (smtp disabled) url=%s", to_email, url)
        return

    msg = EmailMessage()
    msg["Subject"] = "Reset your EV ChargeHub password"
    msg["From"] = SMTP_EMAIL
    msg["To"] = to_email
    msg.set_content(
        f"Hi,\n\nClick this link to reset your password:\n{url}\n\n"
        f"This link will expire in {int(PASSWORD_RESET_EXPIRE_MINUTES)} minutes.\n\n"
        "If you didn't request it, you can ignore this email."
    )
    try:
        with smtplib.SMTP(SMTP_HOST, SMTP_PORT) as smtp:
            smtp.starttls()
            if SMTP_EMAIL:
                smtp.login(SMTP_EMAIL, SMTP_PASSWORD)
            smtp.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        LOG.error("PASSWORD_RESET_EMAIL_FAILED to=%s error=%s", to_email, e)
        return
    LOG.info("PASSWORD_RESET_EMAIL_SENT to=%s", to_email)
