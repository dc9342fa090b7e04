import logging
import os
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

logger = logging.getLogger(__name__)


def send_mail(email, subject, message):
    """Send a plain-text mail. Errors propagate to the caller."""
    sender = os.getenv("EMAIL_SENDER", "noreply@marketplace.com")

    msg = MIMEMultipart()
    msg["From"] = sender
    msg["To"] = email
    msg["Subject"] = subject
    msg.attach(MIMEText(message, "plain"))

    smtp_host = os.getenv("SMTP_HOST", "localhost")
    smtp_port = int(os.getenv("SMTP_PORT", 1025))
    smtp_user = os.getenv("SMTP_USER")
    smtp_pass = os.getenv("SMTP_PASS")

    with smtplib.SMTP(smtp_host, smtp_port) as smtp:
        if smtp_user and smtp_pass:
            smtp.starttls()
            smtp.login(smtp_user, smtp_pass)
        smtp.sendmail(sender, email, msg.as_string())

    logger.info(f"📤 Mail '{subject}' sent to {email} via {smtp_host}:{smtp_port}")
