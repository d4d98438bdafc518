from email.message import EmailMessage
import smtplib
from typing import Optional

from campus_market.core.config import settings


def send_email(to_email: str, subject: str, body: str, reply_to: Optional[str] = None) -> Optional[str]:
	if not settings.SMTP_HOST or not settings.SMTP_FROM:
		return "SMTP not configured"

	msg = EmailMessage()
	msg["Subject"] = subject
	msg["From"] = settings.SMTP_FROM
	msg["To"] = to_email
	if reply_to:
		msg["Reply-To"] = reply_to
	msg.set_content(body)

	try:
		server = smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=10)
		if settings.SMTP_USE_TLS:
			server.starttls()
		if settings.SMTP_USER or settings.SMTP_PASSWORD:
			server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
		server.send_message(msg)
		server.quit()
		return None
	except (smtplib.SMTPException, OSError) as exc:
		return str(exc)
