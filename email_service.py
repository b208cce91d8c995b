"""SMTP email service for Mindful Champion transactional email.

Works with any SMTP provider (Gmail relay, SendGrid, SES, Mailgun, etc.)
configured through environment variables. Each email type is sent from its
own sender identity. If SMTP is not configured the send is skipped and a
failed result is returned, which is what local development wants.
"""

from __future__ import annotations

import enum
import logging
import os
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import Optional

from analysis_email import build_subject, render_analysis_email, render_analysis_text
from email_models import AnalysisEmailInput

SMTP_HOST = os.environ.get("SMTP_HOST", "")
SMTP_PORT = int(os.environ.get("SMTP_PORT", "587"))
SMTP_USER = os.environ.get("SMTP_USER", "")
SMTP_PASSWORD = os.environ.get("SMTP_PASSWORD", "")
EMAIL_REPLY_TO = os.environ.get("EMAIL_REPLY_TO", "support@mindfulchampion.com")


class EmailType(enum.Enum):
  WELCOME = "WELCOME"
  COACH_KAI = "COACH_KAI"
  SUPPORT = "SUPPORT"
  PARTNERSHIP = "PARTNERSHIP"
  SPONSORSHIP = "SPONSORSHIP"
  ADMIN = "ADMIN"


@dataclass(frozen=True)
class Sender:
  email: str
  name: str
  emoji: str

  @property
  def header(self) -> str:
    return formataddr((self.name, self.email))


SENDERS = {
    EmailType.WELCOME: Sender(
        os.environ.get("EMAIL_FROM_WELCOME", "welcomefrommc@mindfulchampion.com"),
        "Coach Kai - Mindful Champion", "\U0001F3D3"),
    EmailType.COACH_KAI: Sender(
        os.environ.get("EMAIL_FROM_COACH_KAI", "coachkai@mindfulchampion.com"),
        "Coach Kai", "\U0001F3D3"),
    EmailType.SUPPORT: Sender(
        os.environ.get("EMAIL_FROM_SUPPORT", "support@mindfulchampion.com"),
        "Mindful Champion Support", "\U0001F4AC"),
    EmailType.PARTNERSHIP: Sender(
        os.environ.get("EMAIL_FROM_PARTNERS", "partners@mindfulchampion.com"),
        "Mindful Champion Partnerships", "\U0001F91D"),
    EmailType.SPONSORSHIP: Sender(
        os.environ.get("EMAIL_FROM_SPONSORS", "sponsors@mindfulchampion.com"),
        "Mindful Champion Sponsors", "\U0001F3AF"),
    EmailType.ADMIN: Sender(
        os.environ.get("EMAIL_FROM_ADMIN", "admin@mindfulchampion.com"),
        "Mindful Champion Admin", "\U0001F6E1️"),
}

_COACH_NOTIFICATIONS = {"VIDEO_ANALYSIS_COMPLETE", "GOAL_REMINDER", "TRAINING_UPDATE"}
_SUPPORT_NOTIFICATIONS = {"SUPPORT", "HELP"}


@dataclass(frozen=True)
class SendResult:
  success: bool
  message_id: Optional[str] = None
  error: Optional[str] = None


def is_configured() -> bool:
  """Return True if SMTP credentials are set."""
  return bool(SMTP_HOST and SMTP_USER and SMTP_PASSWORD)


def email_type_for_notification(notification: str) -> EmailType:
  """Pick the sender identity for a notification name."""
  name = (notification or "").upper()
  if name in _COACH_NOTIFICATIONS:
    return EmailType.COACH_KAI
  if name in _SUPPORT_NOTIFICATIONS:
    return EmailType.SUPPORT
  if name.startswith("PARTNER"):
    return EmailType.PARTNERSHIP
  if name.startswith("SPONSOR"):
    return EmailType.SPONSORSHIP
  return EmailType.WELCOME


def build_message(
    to: str,
    subject: str,
    html: str,
    text: Optional[str] = None,
    email_type: EmailType = EmailType.WELCOME,
    reply_to: Optional[str] = None,
) -> MIMEMultipart:
  """Build the multipart/alternative message; the text part goes first."""
  sender = SENDERS[email_type]
  msg = MIMEMultipart("alternative")
  msg["From"] = sender.header
  msg["To"] = to
  msg["Subject"] = subject
  msg["Reply-To"] = reply_to or EMAIL_REPLY_TO
  msg["Message-ID"] = make_msgid(domain=sender.email.rpartition("@")[2] or None)
  if text:
    msg.attach(MIMEText(text, "plain", "utf-8"))
  msg.attach(MIMEText(html, "html", "utf-8"))
  return msg


def send_email(
    to: str,
    subject: str,
    html: str,
    text: Optional[str] = None,
    email_type: EmailType = EmailType.WELCOME,
    reply_to: Optional[str] = None,
) -> SendResult:
  """Send one email from the sender identity of ``email_type``.

  Never raises on transport problems; failures come back as
  ``SendResult(success=False, error=...)``. No retries.
  """
  if not is_configured():
    logging.warning(
        "SMTP not configured, email not sent. Subject: %s | To: %s",
        subject, to,
    )
    return SendResult(success=False, error="SMTP not configured")

  sender = SENDERS[email_type]
  msg = build_message(to, subject, html, text, email_type, reply_to)

  try:
    with smtplib.SMTP(SMTP_HOST, SMTP_PORT, timeout=10) as server:
      server.ehlo()
      server.starttls()
      server.ehlo()
      server.login(SMTP_USER, SMTP_PASSWORD)
      server.sendmail(sender.email, to, msg.as_string())
    logging.info("Email sent to %s from %s (%s): %s", to, sender.email, email_type.value, subject)
    return SendResult(success=True, message_id=msg["Message-ID"])
  except (smtplib.SMTPException, OSError) as ex:
    logging.error("Failed to send email to %s: %s", to, ex)
    return SendResult(success=False, error=str(ex))


def send_video_analysis_email(
    to: str,
    data: AnalysisEmailInput,
    test: bool = False,
    **render_options,
) -> SendResult:
  """Render the analysis email for ``data`` and send it as Coach Kai.

  Args:
    to: Recipient address.
    data: The analysis record.
    test: Mark the subject as a test send.
    **render_options: Passed to the renderers (seed, message_index, year).
  Returns:
    The SendResult from send_email.
  """
  year = render_options.pop("year", None)
  html = render_analysis_email(data, year=year, **render_options)
  text = render_analysis_text(data, **render_options)
  return send_email(
      to,
      build_subject(data, test=test),
      html,
      text=text,
      email_type=EmailType.COACH_KAI,
  )
