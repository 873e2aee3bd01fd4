"""
Email Service - HR notification + applicant confirmation.

Uses plain SMTP (Gmail with an app password by default). Both messages go
out over one connection; any SMTP/socket error propagates to the caller.
"""

import logging
import mimetypes
import re
import smtplib
from datetime import datetime
from email.message import EmailMessage
from html import escape
from pathlib import Path
from typing import List, Optional

from app.core.config import Settings, get_settings

LOG = logging.getLogger(__name__)


class EmailNotConfigured(RuntimeError):
    pass


class EmailService:

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    @property
    def configured(self) -> bool:
        return self.settings.mail_configured

    def build_hr_message(
        self,
        full_name: str,
        email: str,
        phone: str,
        comments: str,
        job_id: Optional[str],
        job_title: Optional[str],
        resume_path: Path,
        resume_filename: str,
        submitted_at: datetime,
    ) -> EmailMessage:
        title = _header_text(job_title) or "Untitled Job"
        msg = EmailMessage()
        msg["Subject"] = f"New Job Application - {title} (ID: {_header_text(job_id) or 'N/A'})"
        msg["From"] = self.settings.sender_address
        msg["To"] = self.settings.hr_email
        if self.settings.admin_email:
            msg["Cc"] = self.settings.admin_email

        msg.set_content(
            f"New job application received\n\n"
            f"Job Title: {job_title or 'Not specified'}\n"
            f"Job ID: {job_id or 'N/A'}\n"
            f"Submitted On: {_format_time(submitted_at)}\n\n"
            f"Name: {full_name}\nEmail: {email}\nPhone: {phone}\n\n"
            f"Applicant Message:\n{comments}\n"
        )
        msg.add_alternative(
            f"""
            <h2>New Job Application Received</h2>
            <p><b>Job Title:</b> {escape(job_title or "Not specified")}</p>
            <p><b>Job ID:</b> {escape(job_id or "N/A")}</p>
            <p><b>Submitted On:</b> {_format_time(submitted_at)}</p>
            <hr/>
            <p><b>Applicant Details:</b></p>
            <ul>
              <li><b>Name:</b> {escape(full_name)}</li>
              <li><b>Email:</b> {escape(email)}</li>
              <li><b>Phone:</b> {escape(phone)}</li>
            </ul>
            <p><b>Applicant Message:</b></p>
            <blockquote style="border-left:4px solid #ccc;padding-left:10px;white-space:pre-wrap;">{escape(comments)}</blockquote>
            <p><b>Resume:</b> attached.</p>
            <p>Best regards,<br/><b>{escape(self.settings.company_name)} Careers Portal</b></p>
            """,
            subtype="html"
        )

        ctype, _ = mimetypes.guess_type(resume_filename)
        maintype, subtype = (ctype or "application/octet-stream").split("/", 1)
        msg.add_attachment(
            resume_path.read_bytes(),
            maintype=maintype,
            subtype=subtype,
            filename=resume_filename
        )
        return msg

    def build_applicant_message(
        self,
        full_name: str,
        email: str,
        job_title: Optional[str],
        submitted_at: datetime,
    ) -> EmailMessage:
        company = self.settings.company_name
        msg = EmailMessage()
        msg["Subject"] = (
            f"Application Received - {_header_text(job_title) or 'Untitled Job'} at {_header_text(company)}"
        )
        msg["From"] = self.settings.sender_address
        msg["To"] = email

        msg.set_content(
            f"Hi {full_name},\n\n"
            f"We have received your application for {job_title or 'the position'}.\n"
            f"Submitted On: {_format_time(submitted_at)}\n\n"
            f"Our HR team will review your application and contact you within 3-5 business days.\n\n"
            f"Best regards,\n{company} Careers Team\n"
        )
        msg.add_alternative(
            f"""
            <h2>Thank You for Your Application!</h2>
            <p>Hi {escape(full_name)},</p>
            <p>We have successfully received your application for the <b>{escape(job_title or "position")}</b>.</p>
            <ul>
              <li><b>Job Title:</b> {escape(job_title or "Not specified")}</li>
              <li><b>Submitted On:</b> {_format_time(submitted_at)}</li>
            </ul>
            <p>Our HR team will review your application and contact you within 3-5 business days.</p>
            <p>Best regards,<br/><b>{escape(company)} Careers Team</b></p>
            <hr/>
            <p style="font-size:12px;color:#999;">This is an automated email. Please do not reply.</p>
            """,
            subtype="html"
        )
        return msg

    def send(self, messages: List[EmailMessage]) -> None:
        """Send messages over a single authenticated SMTP session."""
        if not self.configured:
            raise EmailNotConfigured("MAIL_USER and MAIL_PASSWORD must be set")

        s = self.settings
        if s.smtp_use_ssl:
            server = smtplib.SMTP_SSL(s.smtp_host, s.smtp_port, timeout=30)
        else:
            server = smtplib.SMTP(s.smtp_host, s.smtp_port, timeout=30)
        with server:
            if not s.smtp_use_ssl:
                server.starttls()
            server.login(s.mail_user, s.mail_password)
            for msg in messages:
                server.send_message(msg)
                LOG.info(f"Email sent to {msg['To']}: {msg['Subject']}")

    def send_application_emails(self, **application) -> None:
        """Build and send the HR notification and the applicant confirmation."""
        hr_msg = self.build_hr_message(**application)
        applicant_msg = self.build_applicant_message(
            full_name=application["full_name"],
            email=application["email"],
            job_title=application.get("job_title"),
            submitted_at=application["submitted_at"],
        )
        self.send([hr_msg, applicant_msg])

    def test_connection(self) -> bool:
        """Log in and out without sending anything."""
        if not self.configured:
            return False
        s = self.settings
        try:
            cls = smtplib.SMTP_SSL if s.smtp_use_ssl else smtplib.SMTP
            with cls(s.smtp_host, s.smtp_port, timeout=15) as server:
                if not s.smtp_use_ssl:
                    server.starttls()
                server.login(s.mail_user, s.mail_password)
            return True
        except (smtplib.SMTPException, OSError) as e:
            LOG.error(f"SMTP connection failed: {e}")
            return False


def _format_time(value: datetime) -> str:
    return value.strftime("%d %B %Y, %H:%M UTC")


_LINE_BREAKS_RE = re.compile(r"\s*[\r\n]+\s*")


def _header_text(value: Optional[str]) -> str:
    """Collapse line breaks so a value can go into a mail header."""
    return _LINE_BREAKS_RE.sub(" ", value or "").strip()
