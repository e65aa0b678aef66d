import logging

from flask import current_app
from markupsafe import escape
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Email, Mail

logger = logging.getLogger(__name__)


def send_email(subject, to_emails, body):
    """
    Send email via SendGrid
    :param subject: Email subject
    :param to_emails: list of recipient emails
    :param body: HTML email content
    :return: True when every message was accepted, False otherwise
    """
    api_key = current_app.config.get("SENDGRID_API_KEY")
    if not api_key:
        logger.debug("SENDGRID_API_KEY not set, skipping email %r", subject)
        return False

    if not isinstance(to_emails, list):
        to_emails = [to_emails]

    sender = Email(current_app.config["MAIL_FROM"], "BloodLink")
    try:
        sg = SendGridAPIClient(api_key)
        for email in to_emails:
            message = Mail(
                from_email=sender,
                to_emails=email,
                subject=subject,
                html_content=body,
            )
            response = sg.send(message)
            logger.info("Email sent to %s, status %s", email, response.status_code)
    except Exception as e:
        logger.error("Error while sending email: %s", e)
        return False
    return True


def send_request_confirmation(donation_request):
    """Tell the requester their donation request was recorded."""
    subject = "Blood Donation Request Confirmation"
    # request fields come from an unauthenticated body
    name = escape(donation_request.get("requesterName", "there"))
    blood_group = escape(donation_request.get("bloodGroup", ""))
    hospital = escape(donation_request.get("hospitalName", "the hospital"))
    status = escape(donation_request.get("donationStatus", ""))
    body = f"""
        <p>Hello {name},</p>
        <p>Your request for <b>{blood_group}</b> blood
        at {hospital} has been received.</p>
        <p>Current status: <b>{status}</b>.</p>
    """
    return send_email(subject, [donation_request["requesterEmail"]], body)
